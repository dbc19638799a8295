"""Election ingestion service.

Collects federal, provincial and municipal elections, writes them with
insert-on-conflict on (election_type, jurisdiction, title) and reports,
per source, whether live or curated records were used.
"""

import asyncio
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import asdict
from datetime import date

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from civicos.lib.scraper import samples
from civicos.lib.scraper.fetcher import FetchError, HtmlFetcher
from civicos.lib.scraper.records import CandidateRecord, DistrictRecord, ElectionRecord
from civicos.lib.scraper.scrapers import (
    load_federal_elections,
    load_provincial_elections,
    scrape_electoral_districts,
    scrape_federal_candidates,
    scrape_federal_elections,
    scrape_provincial_elections,
)
from civicos.lib.scraper.sources import PROVINCIAL_ELECTION_URLS, DataSourceResult, collect, curated
from civicos.models.election import Candidate, CandidatePolicy, Election, ElectoralDistrict
from civicos.schemas.ingestion import ElectionScrapeSummary, IngestionReport, SourceReport
from civicos.services.upsert import count_rows, find_id, insert_ignore, upsert

FEDERAL_SOURCE = "Elections Canada"
PROVINCIAL_SOURCE = "Provincial election agencies"
MUNICIPAL_SOURCE = "Municipal election offices"

_ELECTION_KEY = ("election_type", "jurisdiction", "title")
_CANDIDATE_KEY = ("election_id", "name", "constituency")
_POLICY_KEY = ("candidate_id", "policy_title")
_DISTRICT_KEY = ("district_name", "province")

IngestionBranch = Callable[[AsyncSession, HtmlFetcher], Awaitable[SourceReport]]


def source_report(result: DataSourceResult, processed: int) -> SourceReport:
    """Summarize a collected result for ingestion reports."""
    return SourceReport(
        source=result.source,
        kind=result.kind,
        reason=getattr(result, "reason", None),
        processed=processed,
    )


async def upsert_election(session: AsyncSession, record: ElectionRecord) -> uuid.UUID:
    """Insert or update an election keyed on (election_type, jurisdiction, title).

    Args:
        session: Database session.
        record: Election to write.

    Returns:
        The election's id.
    """
    return await upsert(session, Election, asdict(record), conflict_columns=_ELECTION_KEY)


async def _write_elections(session: AsyncSession, result: DataSourceResult[ElectionRecord]) -> SourceReport:
    for record in result.records:
        await upsert_election(session, record)
    await session.commit()
    logger.info("{}: wrote {} {} elections", result.source, len(result.records), result.kind)
    return source_report(result, len(result.records))


async def ingest_federal_elections(
    session: AsyncSession,
    fetcher: HtmlFetcher,
    today: date | None = None,
) -> SourceReport:
    """Ingest federal elections, falling back to the scheduled federal calendar.

    Args:
        session: Database session.
        fetcher: HTTP fetcher.
        today: Reference date for scheduled election dates.

    Returns:
        Per-source report.
    """
    today = today or date.today()
    result = await collect(
        FEDERAL_SOURCE,
        lambda: load_federal_elections(fetcher, today),
        lambda: samples.federal_elections(today),
    )
    return await _write_elections(session, result)


async def _load_all_provincial(fetcher: HtmlFetcher) -> list[ElectionRecord]:
    records: list[ElectionRecord] = []
    last_error: FetchError | None = None
    for province in PROVINCIAL_ELECTION_URLS:
        try:
            records.extend(await load_provincial_elections(fetcher, province))
        except FetchError as e:
            logger.warning("Provincial source {} unreachable: {}", province, e)
            last_error = e
    if not records and last_error is not None:
        raise last_error
    return records


async def ingest_provincial_elections(session: AsyncSession, fetcher: HtmlFetcher) -> SourceReport:
    """Ingest provincial elections, falling back to the provincial calendar."""
    result = await collect(PROVINCIAL_SOURCE, lambda: _load_all_provincial(fetcher), samples.provincial_elections)
    return await _write_elections(session, result)


async def ingest_municipal_elections(session: AsyncSession, fetcher: HtmlFetcher) -> SourceReport:
    """Ingest the curated municipal election calendar (there is no live municipal source)."""
    result = curated(MUNICIPAL_SOURCE, samples.municipal_elections())
    logger.warning("{}: using curated records ({})", MUNICIPAL_SOURCE, result.reason)
    return await _write_elections(session, result)


async def run_branches(
    session_factory: async_sessionmaker[AsyncSession],
    fetcher: HtmlFetcher,
    branches: list[tuple[str, IngestionBranch]],
) -> list[SourceReport]:
    """Run ingestion branches concurrently, each in its own session.

    A failing branch becomes a failed ``SourceReport``; the other branches
    run to completion.
    """

    async def run(branch: IngestionBranch) -> SourceReport:
        async with session_factory() as session:
            return await branch(session, fetcher)

    results = await asyncio.gather(*(run(branch) for _, branch in branches), return_exceptions=True)

    reports: list[SourceReport] = []
    for (name, _), result in zip(branches, results, strict=True):
        if isinstance(result, SourceReport):
            reports.append(result)
        elif isinstance(result, Exception):
            logger.opt(exception=result).error("Ingestion branch {} failed", name)
            reports.append(SourceReport(source=name, success=False, error=str(result)))
        else:
            raise result
    return reports


async def ingest_all_elections(
    session_factory: async_sessionmaker[AsyncSession],
    fetcher: HtmlFetcher,
) -> IngestionReport:
    """Ingest federal, provincial and municipal elections concurrently.

    Args:
        session_factory: Factory for per-branch sessions.
        fetcher: Shared HTTP fetcher.

    Returns:
        Report with the net number of new election rows and one entry per source.
    """
    logger.info("Starting election ingestion")
    async with session_factory() as session:
        before = await count_rows(session, Election)

    reports = await run_branches(
        session_factory,
        fetcher,
        [
            (FEDERAL_SOURCE, ingest_federal_elections),
            (PROVINCIAL_SOURCE, ingest_provincial_elections),
            (MUNICIPAL_SOURCE, ingest_municipal_elections),
        ],
    )

    async with session_factory() as session:
        after = await count_rows(session, Election)

    report = IngestionReport(inserted=after - before, sources=reports)
    logger.info("Election ingestion finished: {} new elections", report.inserted)
    return report


async def _add_candidate(session: AsyncSession, election_id: uuid.UUID, record: CandidateRecord) -> uuid.UUID:
    values = {"election_id": election_id, **asdict(record)}
    candidate_id = await insert_ignore(session, Candidate, values, conflict_columns=_CANDIDATE_KEY)
    if candidate_id is None:
        candidate_id = await find_id(
            session, Candidate, election_id=election_id, name=record.name, constituency=record.constituency
        )
    return candidate_id


async def _add_district(session: AsyncSession, record: DistrictRecord) -> None:
    await insert_ignore(session, ElectoralDistrict, asdict(record), conflict_columns=_DISTRICT_KEY)


async def populate_sample_election_data(session: AsyncSession) -> ElectionScrapeSummary:
    """Write the sample elections, candidates, policies and districts.

    Children are insert-or-ignore, so repeated calls leave the row counts
    unchanged.

    Args:
        session: Database session.

    Returns:
        Summary of the sample records written.
    """
    logger.info("Populating sample election data")
    elections = samples.sample_elections()
    candidates = samples.sample_candidates()
    policies = samples.sample_policies()
    districts = samples.sample_districts()

    for election in elections:
        election_id = await upsert_election(session, election)
        for candidate in candidates:
            candidate_id = await _add_candidate(session, election_id, candidate)
            for policy in policies:
                await insert_ignore(
                    session,
                    CandidatePolicy,
                    {"candidate_id": candidate_id, **asdict(policy)},
                    conflict_columns=_POLICY_KEY,
                )

    for district in districts:
        await _add_district(session, district)

    await session.commit()
    logger.info("Sample election data populated")
    return ElectionScrapeSummary(
        elections=len(elections),
        candidates=len(elections) * len(candidates),
        districts=len(districts),
        used_sample_data=True,
    )


async def scrape_all_election_data(
    session: AsyncSession,
    fetcher: HtmlFetcher,
    today: date | None = None,
) -> ElectionScrapeSummary:
    """Scrape elections, candidates and districts, falling back to sample data.

    The sample data is written exactly once when neither federal elections
    nor federal candidates could be scraped, or when persisting the
    scraped data fails.

    Args:
        session: Database session.
        fetcher: HTTP fetcher.
        today: Reference date for scheduled election dates.

    Returns:
        Summary of what was written.
    """
    today = today or date.today()
    logger.info("Starting comprehensive election data scraping")
    summary = ElectionScrapeSummary()
    use_sample = False

    try:
        federal = await scrape_federal_elections(fetcher, today)
        logger.info("Found {} federal elections", len(federal))
        candidates = await scrape_federal_candidates(fetcher)
        logger.info("Found {} federal candidates", len(candidates))
        provincial: list[ElectionRecord] = []
        for province in PROVINCIAL_ELECTION_URLS:
            found = await scrape_provincial_elections(fetcher, province)
            logger.info("Found {} elections in {}", len(found), province)
            provincial.extend(found)
        districts = await scrape_electoral_districts(fetcher)
        logger.info("Found {} electoral districts", len(districts))

        if not federal and not candidates:
            logger.warning("Limited data from scraping; populating sample data")
            use_sample = True
        else:
            for record in [*federal, *provincial]:
                await upsert_election(session, record)
            if candidates:
                anchor = federal[0] if federal else samples.federal_elections(today)[0]
                anchor_id = await upsert_election(session, anchor)
                for candidate in candidates:
                    await _add_candidate(session, anchor_id, candidate)
            for district in districts:
                await _add_district(session, district)
            await session.commit()
            summary = ElectionScrapeSummary(
                elections=len(federal) + len(provincial),
                candidates=len(candidates),
                districts=len(districts),
            )
    except Exception as e:
        logger.exception("Error in comprehensive election scraping")
        await session.rollback()
        summary.errors.append(str(e))
        use_sample = True

    if use_sample:
        sample = await populate_sample_election_data(session)
        sample.errors.extend(summary.errors)
        summary = sample

    logger.info("Election data scraping completed")
    return summary
