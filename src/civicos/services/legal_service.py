"""Legal reference service: federal and provincial acts, court cases and Criminal Code sections."""

from collections.abc import Callable, Sequence
from dataclasses import asdict

from loguru import logger
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from civicos.lib.scraper import samples
from civicos.lib.scraper.fetcher import HtmlFetcher
from civicos.lib.scraper.records import LegalActRecord, LegalCaseRecord
from civicos.lib.scraper.scrapers import load_federal_acts
from civicos.lib.scraper.sources import collect
from civicos.models.legal import CriminalCodeSection, LegalAct, LegalCase
from civicos.schemas.ingestion import SourceReport
from civicos.services.election_ingestion_service import source_report
from civicos.services.upsert import count_rows, insert_ignore, upsert

LEGAL_ACTS_SOURCE = "Justice Laws Website"

LIST_LIMIT = 200
SEARCH_LIMIT = 50

_ACT_KEY = ("title", "jurisdiction")


def _curated_acts() -> list[LegalActRecord]:
    return [*samples.federal_acts(), *samples.provincial_acts()]


async def ingest_legal_acts(session: AsyncSession, fetcher: HtmlFetcher) -> SourceReport:
    """Ingest the federal act index, falling back to the curated acts.

    Acts are upserted on (title, jurisdiction).

    Args:
        session: Database session.
        fetcher: HTTP fetcher.

    Returns:
        Per-source report.
    """
    result = await collect(LEGAL_ACTS_SOURCE, lambda: load_federal_acts(fetcher), _curated_acts)
    for record in result.records:
        await upsert(session, LegalAct, asdict(record), conflict_columns=_ACT_KEY)
    await session.commit()
    logger.info("{}: wrote {} {} acts", result.source, len(result.records), result.kind)
    return source_report(result, len(result.records))


async def seed_criminal_code(session: AsyncSession) -> int:
    """Insert the curated Criminal Code sections that are not yet stored.

    Returns:
        Number of sections inserted.
    """
    inserted = 0
    for record in samples.criminal_code_sections():
        new_id = await insert_ignore(
            session, CriminalCodeSection, asdict(record), conflict_columns=("section_number",)
        )
        inserted += new_id is not None
    await session.commit()
    if inserted:
        logger.info("Seeded {} Criminal Code sections", inserted)
    return inserted


async def seed_legal_cases(session: AsyncSession, cases: Sequence[LegalCaseRecord] | None = None) -> int:
    """Insert legal cases that are not yet stored, keyed on case number.

    Args:
        session: Database session.
        cases: Cases to insert. Defaults to the curated Supreme Court decisions.

    Returns:
        Number of cases inserted.
    """
    inserted = 0
    for record in cases if cases is not None else samples.legal_cases():
        new_id = await insert_ignore(session, LegalCase, asdict(record), conflict_columns=("case_number",))
        inserted += new_id is not None
    await session.commit()
    if inserted:
        logger.info("Seeded {} legal cases", inserted)
    return inserted


async def list_acts_and_cases(
    session: AsyncSession,
    fetcher_factory: Callable[[], HtmlFetcher] | None = None,
) -> tuple[list[LegalAct], list[LegalCase]]:
    """Return stored acts and cases, ingesting acts on demand when none are stored.

    Args:
        session: Database session.
        fetcher_factory: Zero-argument callable returning an ``HtmlFetcher``
            for the on-demand ingestion. When None no ingestion is attempted.

    Returns:
        Tuple of (acts, cases), at most 200 of each.
    """
    acts = await _all_acts(session)
    if not acts and fetcher_factory is not None:
        logger.info("No legal acts stored; ingesting on demand")
        async with fetcher_factory() as fetcher:
            await ingest_legal_acts(session, fetcher)
        acts = await _all_acts(session)

    result = await session.execute(select(LegalCase).order_by(LegalCase.title).limit(LIST_LIMIT))
    return acts, list(result.scalars().all())


async def _all_acts(session: AsyncSession) -> list[LegalAct]:
    result = await session.execute(select(LegalAct).order_by(LegalAct.title).limit(LIST_LIMIT))
    return list(result.scalars().all())


async def search_legal(session: AsyncSession, query: str) -> list[dict]:
    """Case-insensitive search over act titles/summaries and case titles/descriptions.

    Returns:
        Result dicts with id, title, description and type (legal_act or legal_case).
        Empty for a blank query.
    """
    query = query.strip()
    if not query:
        return []
    pattern = f"%{query}%"

    acts = await session.execute(
        select(LegalAct)
        .where(or_(LegalAct.title.ilike(pattern), LegalAct.summary.ilike(pattern)))
        .order_by(LegalAct.title)
        .limit(SEARCH_LIMIT)
    )
    cases = await session.execute(
        select(LegalCase)
        .where(or_(LegalCase.title.ilike(pattern), LegalCase.description.ilike(pattern)))
        .order_by(LegalCase.title)
        .limit(SEARCH_LIMIT)
    )
    return [
        *({"id": a.id, "title": a.title, "description": a.summary, "type": "legal_act"} for a in acts.scalars()),
        *({"id": c.id, "title": c.title, "description": c.description, "type": "legal_case"} for c in cases.scalars()),
    ]


async def list_acts(session: AsyncSession, search: str | None = None, category: str | None = None) -> list[LegalAct]:
    """Stored acts filtered on title/summary and category (``all`` disables the category filter)."""
    query = select(LegalAct)
    if search and search.strip():
        pattern = f"%{search.strip()}%"
        query = query.where(or_(LegalAct.title.ilike(pattern), LegalAct.summary.ilike(pattern)))
    if category and category.lower() != "all":
        query = query.where(func.lower(LegalAct.category) == category.lower())
    result = await session.execute(query.order_by(LegalAct.title).limit(LIST_LIMIT))
    return list(result.scalars().all())


async def list_criminal_code(session: AsyncSession, search: str | None = None) -> list[CriminalCodeSection]:
    """Stored Criminal Code sections, seeding the curated sections when the table is empty."""
    if await count_rows(session, CriminalCodeSection) == 0:
        await seed_criminal_code(session)

    query = select(CriminalCodeSection)
    if search and search.strip():
        pattern = f"%{search.strip()}%"
        query = query.where(
            or_(
                CriminalCodeSection.title.ilike(pattern),
                CriminalCodeSection.summary.ilike(pattern),
                CriminalCodeSection.section_number.ilike(pattern),
            )
        )
    result = await session.execute(query.order_by(CriminalCodeSection.section_number))
    return list(result.scalars().all())


async def legal_stats(session: AsyncSession) -> dict[str, int]:
    """Row counts of the legal reference tables."""
    return {
        "acts": await count_rows(session, LegalAct),
        "cases": await count_rows(session, LegalCase),
        "criminal_code_sections": await count_rows(session, CriminalCodeSection),
    }
