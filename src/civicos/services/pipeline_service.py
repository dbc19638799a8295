"""Full ingestion pipeline and its scheduled runner."""

import asyncio

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from civicos.core.logging import log_ingestion_run
from civicos.lib.scraper.fetcher import HtmlFetcher
from civicos.schemas.ingestion import PipelineReport, SourceReport
from civicos.services.election_ingestion_service import ingest_all_elections, scrape_all_election_data
from civicos.services.legal_service import LEGAL_ACTS_SOURCE, ingest_legal_acts, seed_criminal_code, seed_legal_cases
from civicos.services.politician_ingestion_service import ingest_all_politicians


async def ingest_legal_references(
    session_factory: async_sessionmaker[AsyncSession],
    fetcher: HtmlFetcher,
) -> SourceReport:
    """Ingest acts and seed the curated Criminal Code sections and cases."""
    async with session_factory() as session:
        try:
            report = await ingest_legal_acts(session, fetcher)
            await seed_criminal_code(session)
            await seed_legal_cases(session)
        except Exception as e:
            logger.exception("Legal ingestion failed")
            await session.rollback()
            return SourceReport(source=LEGAL_ACTS_SOURCE, success=False, error=str(e))
    return report


async def run_full_ingestion(
    session_factory: async_sessionmaker[AsyncSession],
    fetcher: HtmlFetcher,
) -> PipelineReport:
    """Run elections, election data, politicians and legal acts, in that order.

    Args:
        session_factory: Factory for per-stage sessions.
        fetcher: Shared HTTP fetcher.

    Returns:
        One report per stage.
    """
    logger.info("Starting full ingestion pipeline")
    elections = await ingest_all_elections(session_factory, fetcher)

    async with session_factory() as session:
        election_data = await scrape_all_election_data(session, fetcher)

    politicians = await ingest_all_politicians(session_factory, fetcher)
    legal = await ingest_legal_references(session_factory, fetcher)

    report = PipelineReport(elections=elections, election_data=election_data, politicians=politicians, legal=legal)
    log_ingestion_run(
        report.model_dump(mode="json", by_alias=True),
        f"Full ingestion finished: {elections.inserted} elections, {politicians.inserted} politicians, "
        f"legal {'ok' if legal.success else 'failed'}",
    )
    return report


async def ingestion_refresh_loop(interval: int) -> None:
    """Background asyncio loop that reruns the full pipeline.

    Args:
        interval: Seconds between runs.
    """
    from civicos.core.config import get_settings
    from civicos.core.database import get_session_factory
    from civicos.lib.scraper.fetcher import fetcher_from_settings

    logger.info("Ingestion refresh loop started (interval={}s)", interval)

    while True:
        try:
            await asyncio.sleep(interval)
            async with fetcher_from_settings(get_settings()) as fetcher:
                await run_full_ingestion(get_session_factory(), fetcher)
        except asyncio.CancelledError:
            logger.info("Ingestion refresh loop cancelled")
            break
        except Exception:
            logger.exception("Ingestion refresh loop error")
