"""Tests for the ingestion CLI commands."""

from collections.abc import Iterator
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from civicos.cli.app import app
from civicos.core.config import Settings
from civicos.schemas.ingestion import ElectionScrapeSummary, IngestionReport, PipelineReport, SourceReport

runner = CliRunner()


@pytest.fixture(autouse=True)
def _cli_settings(settings: Settings) -> Iterator[None]:
    with patch("civicos.cli.app.get_settings", return_value=settings), patch("civicos.cli.app.setup_logging"):
        yield


def _fake_run(result):
    async def run(stage):
        return result

    return patch("civicos.cli.ingest_cmd._run", side_effect=run)


def _report(*sources: SourceReport, inserted: int = 0, scored: int = 0) -> IngestionReport:
    return IngestionReport(inserted=inserted, scored=scored, sources=list(sources))


class TestIngestElections:
    def test_prints_each_source(self) -> None:
        report = _report(
            SourceReport(source="Elections Canada", kind="live", processed=2),
            SourceReport(source="Toronto Elections", kind="fallback", reason="no live source", processed=1),
            inserted=3,
        )
        with _fake_run(report):
            result = runner.invoke(app, ["ingest", "elections"])

        assert result.exit_code == 0
        assert "Elections: 3 new rows" in result.output
        assert "Elections Canada" in result.output
        assert "(no live source)" in result.output

    def test_failed_branch_exits_non_zero(self) -> None:
        report = _report(SourceReport(source="Elections Ontario", success=False, error="boom"))
        with _fake_run(report):
            result = runner.invoke(app, ["ingest", "elections"])

        assert result.exit_code == 1
        assert "FAILED" in result.output


class TestIngestOtherStages:
    def test_election_data(self) -> None:
        summary = ElectionScrapeSummary(elections=3, candidates=9, districts=3, used_sample_data=True)
        with _fake_run(summary):
            result = runner.invoke(app, ["ingest", "election-data"])

        assert result.exit_code == 0
        assert "sample data: 3 elections, 9 candidates, 3 districts" in result.output

    def test_politicians(self) -> None:
        report = _report(SourceReport(source="House of Commons", kind="fallback", processed=2), inserted=2, scored=2)
        with _fake_run(report):
            result = runner.invoke(app, ["ingest", "politicians"])

        assert result.exit_code == 0
        assert "Politicians: 2 new rows, 2 scored" in result.output

    def test_legal_failure(self) -> None:
        with _fake_run(SourceReport(source="Legal references", success=False, error="disk full")):
            result = runner.invoke(app, ["ingest", "legal"])

        assert result.exit_code == 1
        assert "disk full" in result.output

    def test_all(self) -> None:
        pipeline = PipelineReport(
            elections=_report(inserted=9),
            election_data=ElectionScrapeSummary(elections=3, candidates=9, districts=3, used_sample_data=True),
            politicians=_report(inserted=6, scored=6),
            legal=SourceReport(source="Legal references", kind="fallback", processed=9),
        )
        with _fake_run(pipeline):
            result = runner.invoke(app, ["ingest", "all"])

        assert result.exit_code == 0
        assert "Elections: 9 new rows" in result.output
        assert "Politicians: 6 new rows, 6 scored" in result.output
        assert "Legal references" in result.output
