"""Ingestion report schemas.

Reports are returned by the ingestion services, printed by the CLI and
serialized by the ``/ingest`` endpoints.
"""

from typing import Literal

from pydantic import Field

from civicos.schemas.common import CamelModel


class SourceReport(CamelModel):
    """Outcome of ingesting one source."""

    source: str
    kind: Literal["live", "fallback"] | None = Field(
        default=None, description="Whether live or curated records were written; None if the branch failed"
    )
    reason: str | None = Field(default=None, description="Why curated records were substituted")
    processed: int = 0
    success: bool = True
    error: str | None = None


class IngestionReport(CamelModel):
    """Outcome of one multi-source ingestion run."""

    inserted: int = Field(default=0, description="Net new rows created by the run")
    scored: int = Field(default=0, description="Politicians whose trust score was recomputed")
    sources: list[SourceReport] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return all(source.success for source in self.sources)


class ElectionScrapeSummary(CamelModel):
    """Outcome of a full election-data scrape (elections, candidates, districts)."""

    elections: int = 0
    candidates: int = 0
    districts: int = 0
    used_sample_data: bool = False
    errors: list[str] = Field(default_factory=list)


class PipelineReport(CamelModel):
    """Outcome of the full ingestion pipeline."""

    elections: IngestionReport
    election_data: ElectionScrapeSummary
    politicians: IngestionReport
    legal: SourceReport
