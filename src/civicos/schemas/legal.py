"""Legal reference Pydantic v2 schemas."""

from typing import Literal
from uuid import UUID

from pydantic import Field

from civicos.schemas.common import CamelModel


class LegalActResponse(CamelModel):
    """A statute."""

    id: UUID
    title: str
    jurisdiction: str
    act_number: str | None = None
    summary: str | None = None
    category: str | None = None
    year: int | None = None
    key_provisions: list[str] = Field(default_factory=list)
    source: str | None = None
    source_url: str | None = None


class LegalCaseResponse(CamelModel):
    """A court case."""

    id: UUID
    case_number: str
    title: str
    description: str | None = None
    jurisdiction: str
    status: str | None = None


class CriminalCodeSectionResponse(CamelModel):
    """A Criminal Code section."""

    id: UUID
    section_number: str
    title: str
    full_text: str | None = None
    summary: str | None = None
    penalties: str | None = None
    category: str | None = None


class LegalOverviewResponse(CamelModel):
    """Stored acts and cases."""

    acts: list[LegalActResponse]
    cases: list[LegalCaseResponse]


class LegalSearchHit(CamelModel):
    """One legal search result."""

    id: UUID
    title: str
    description: str | None = None
    type: Literal["legal_act", "legal_case"]


class LegalSearchResponse(CamelModel):
    """Legal search results."""

    query: str
    total_results: int
    results: list[LegalSearchHit]


class LegalStatsResponse(CamelModel):
    """Row counts of the legal reference tables."""

    acts: int
    cases: int
    criminal_code_sections: int
