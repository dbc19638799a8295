"""Politician ingestion and trust-score service.

Federal MPs come from the House of Commons member feed, and each one
carrying a Commons member id also gets a ``parliament_members`` directory
row.  Provincial and municipal officials come from curated lists.  Every
run ends with a trust-score pass over all politicians.
"""

import uuid
from dataclasses import asdict
from datetime import date

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from civicos.lib.scraper import samples
from civicos.lib.scraper.fetcher import HtmlFetcher
from civicos.lib.scraper.records import PoliticianRecord
from civicos.lib.scraper.scrapers import load_federal_members
from civicos.lib.scraper.sources import DataSourceResult, collect, curated
from civicos.lib.trust_score import TrustInputs, compute_trust_score
from civicos.models.politician import ParliamentMember, Politician
from civicos.schemas.ingestion import IngestionReport, SourceReport
from civicos.services.election_ingestion_service import run_branches, source_report
from civicos.services.upsert import count_rows, upsert

FEDERAL_SOURCE = "House of Commons"
PROVINCIAL_SOURCE = "Provincial legislatures"
MUNICIPAL_SOURCE = "Municipal councils"

_POLITICIAN_KEY = ("name", "level", "jurisdiction")
_MEMBER_KEY = ("member_id",)


async def upsert_politician(session: AsyncSession, record: PoliticianRecord) -> uuid.UUID:
    """Insert or update a politician keyed on (name, level, jurisdiction).

    Every descriptive field is overwritten; ``trust_score`` is left to
    the scoring pass.

    Returns:
        The politician's id.
    """
    return await upsert(session, Politician, asdict(record), conflict_columns=_POLITICIAN_KEY)


async def upsert_parliament_member(session: AsyncSession, record: PoliticianRecord) -> uuid.UUID:
    """Insert or update the House of Commons directory entry behind a federal record.

    Returns:
        The directory row's id.
    """
    values = {
        "member_id": record.parliament_member_id,
        "name": record.name,
        "party": record.party,
        "constituency": record.riding,
        "image_url": record.image_url,
        "active": True,
    }
    return await upsert(session, ParliamentMember, values, conflict_columns=_MEMBER_KEY)


async def _write_politicians(session: AsyncSession, result: DataSourceResult[PoliticianRecord]) -> SourceReport:
    for record in result.records:
        # The directory row must exist before the politician references it.
        if record.parliament_member_id:
            await upsert_parliament_member(session, record)
        await upsert_politician(session, record)
    await session.commit()
    logger.info("{}: wrote {} {} politicians", result.source, len(result.records), result.kind)
    return source_report(result, len(result.records))


async def ingest_federal_politicians(session: AsyncSession, fetcher: HtmlFetcher) -> SourceReport:
    """Ingest sitting MPs, falling back to the curated federal list."""
    year = date.today().year
    result = await collect(
        FEDERAL_SOURCE,
        lambda: load_federal_members(fetcher),
        lambda: samples.federal_politicians(year),
    )
    return await _write_politicians(session, result)


async def ingest_provincial_politicians(session: AsyncSession, fetcher: HtmlFetcher) -> SourceReport:
    """Ingest the curated provincial premiers."""
    result = curated(PROVINCIAL_SOURCE, samples.provincial_politicians(date.today().year))
    logger.warning("{}: using curated records ({})", PROVINCIAL_SOURCE, result.reason)
    return await _write_politicians(session, result)


async def ingest_municipal_politicians(session: AsyncSession, fetcher: HtmlFetcher) -> SourceReport:
    """Ingest the curated municipal mayors."""
    result = curated(MUNICIPAL_SOURCE, samples.municipal_politicians(date.today().year))
    logger.warning("{}: using curated records ({})", MUNICIPAL_SOURCE, result.reason)
    return await _write_politicians(session, result)


async def calculate_trust_scores(session: AsyncSession) -> int:
    """Recompute and overwrite the trust score of every politician.

    Args:
        session: Database session.

    Returns:
        Number of politicians scored.
    """
    result = await session.execute(select(Politician))
    politicians = list(result.scalars().all())
    for politician in politicians:
        politician.trust_score = compute_trust_score(TrustInputs.from_politician(politician))
    await session.commit()
    logger.info("Calculated trust scores for {} politicians", len(politicians))
    return len(politicians)


async def ingest_all_politicians(
    session_factory: async_sessionmaker[AsyncSession],
    fetcher: HtmlFetcher,
) -> IngestionReport:
    """Ingest federal, provincial and municipal politicians, then rescore everyone.

    Args:
        session_factory: Factory for per-branch sessions.
        fetcher: Shared HTTP fetcher.

    Returns:
        Report with net new politicians, the number scored and one entry per source.
    """
    logger.info("Starting politician ingestion")
    async with session_factory() as session:
        before = await count_rows(session, Politician)

    reports = await run_branches(
        session_factory,
        fetcher,
        [
            (FEDERAL_SOURCE, ingest_federal_politicians),
            (PROVINCIAL_SOURCE, ingest_provincial_politicians),
            (MUNICIPAL_SOURCE, ingest_municipal_politicians),
        ],
    )

    async with session_factory() as session:
        scored = await calculate_trust_scores(session)
        after = await count_rows(session, Politician)

    report = IngestionReport(inserted=after - before, scored=scored, sources=reports)
    logger.info("Politician ingestion finished: {} new, {} scored", report.inserted, report.scored)
    return report
