"""CLI commands that run the ingestion pipeline stages from the shell."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import typer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from civicos.lib.scraper.fetcher import HtmlFetcher
from civicos.schemas.ingestion import IngestionReport, SourceReport

ingest_app = typer.Typer()

Stage = Callable[[async_sessionmaker[AsyncSession], HtmlFetcher], Awaitable[Any]]


def _echo_source(report: SourceReport) -> None:
    if not report.success:
        typer.echo(f"  {report.source:<32} FAILED   {report.error}")
        return
    detail = f" ({report.reason})" if report.reason else ""
    typer.echo(f"  {report.source:<32} {report.kind or '-':<8} {report.processed:>5} records{detail}")


def _echo_ingestion(title: str, report: IngestionReport) -> None:
    typer.echo(f"{title}: {report.inserted} new rows, {report.scored} scored")
    for source in report.sources:
        _echo_source(source)


async def _run(stage: Stage) -> Any:
    """Initialize the engine and a fetcher, run one stage and clean up."""
    from civicos.core.config import get_settings
    from civicos.core.database import dispose_engine, get_session_factory, init_engine
    from civicos.lib.scraper.fetcher import fetcher_from_settings

    settings = get_settings()
    init_engine(settings.database_url)
    try:
        async with fetcher_from_settings(settings) as fetcher:
            return await stage(get_session_factory(), fetcher)
    finally:
        await dispose_engine()


async def _election_data(session_factory: async_sessionmaker[AsyncSession], fetcher: HtmlFetcher) -> Any:
    from civicos.services.election_ingestion_service import scrape_all_election_data

    async with session_factory() as session:
        return await scrape_all_election_data(session, fetcher)


@ingest_app.command("elections")
def elections() -> None:
    """Ingest federal, provincial and municipal elections."""
    from civicos.services.election_ingestion_service import ingest_all_elections

    report = asyncio.run(_run(ingest_all_elections))
    _echo_ingestion("Elections", report)
    if not report.success:
        raise typer.Exit(code=1)


@ingest_app.command("election-data")
def election_data() -> None:
    """Scrape elections, candidates and districts, with sample-data fallback."""
    summary = asyncio.run(_run(_election_data))
    source = "sample data" if summary.used_sample_data else "live sources"
    typer.echo(
        f"Election data from {source}: {summary.elections} elections, "
        f"{summary.candidates} candidates, {summary.districts} districts"
    )
    for error in summary.errors:
        typer.echo(f"  error: {error}", err=True)


@ingest_app.command("politicians")
def politicians() -> None:
    """Ingest politicians from every level and recompute trust scores."""
    from civicos.services.politician_ingestion_service import ingest_all_politicians

    report = asyncio.run(_run(ingest_all_politicians))
    _echo_ingestion("Politicians", report)
    if not report.success:
        raise typer.Exit(code=1)


@ingest_app.command("legal")
def legal() -> None:
    """Ingest legal acts and seed Criminal Code sections and cases."""
    from civicos.services.pipeline_service import ingest_legal_references

    report = asyncio.run(_run(ingest_legal_references))
    typer.echo("Legal references:")
    _echo_source(report)
    if not report.success:
        raise typer.Exit(code=1)


@ingest_app.command("all")
def run_all() -> None:
    """Run the full pipeline: elections, election data, politicians, legal."""
    from civicos.services.pipeline_service import run_full_ingestion

    report = asyncio.run(_run(run_full_ingestion))
    _echo_ingestion("Elections", report.elections)
    typer.echo(
        f"Election data: {report.election_data.elections} elections, "
        f"{report.election_data.candidates} candidates (sample data: {report.election_data.used_sample_data})"
    )
    _echo_ingestion("Politicians", report.politicians)
    typer.echo("Legal references:")
    _echo_source(report.legal)
