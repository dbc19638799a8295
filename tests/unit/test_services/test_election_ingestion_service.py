"""Unit tests for election ingestion."""

from collections.abc import Callable
from datetime import date
from unittest.mock import patch

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from civicos.lib.scraper.fetcher import HtmlFetcher
from civicos.lib.scraper.sources import FEDERAL_ELECTIONS_URL, FEDERAL_MEMBERS_JSON_URL, REASON_NO_LIVE_SOURCE
from civicos.models.election import Candidate, CandidatePolicy, Election, ElectoralDistrict
from civicos.schemas.ingestion import SourceReport
from civicos.services import election_ingestion_service
from civicos.services.election_ingestion_service import (
    FEDERAL_SOURCE,
    MUNICIPAL_SOURCE,
    PROVINCIAL_SOURCE,
    ingest_all_elections,
    ingest_federal_elections,
    populate_sample_election_data,
    run_branches,
    scrape_all_election_data,
)
from civicos.services.upsert import count_rows

TODAY = date(2026, 10, 18)

ELECTIONS_HTML = '<div class="election-info">45th General Election</div>'
MEMBER_JSON = {
    "Members": [
        {"Name": "Jagmeet Singh", "ConstituencyName": "Burnaby South", "Party": "NDP"},
        {"Name": "Elizabeth May", "ConstituencyName": "Saanich—Gulf Islands", "Party": "Green"},
    ]
}


class TestIngestFederalElections:
    async def test_live_page(self, async_session: AsyncSession, make_fetcher: Callable[..., HtmlFetcher]) -> None:
        routes = {FEDERAL_ELECTIONS_URL: httpx.Response(200, text=ELECTIONS_HTML)}
        async with make_fetcher(routes) as fetcher:
            report = await ingest_federal_elections(async_session, fetcher, TODAY)

        assert report.kind == "live"
        assert report.processed == 1
        election = (await async_session.execute(select(Election))).scalar_one()
        assert election.title == "45th General Election"
        assert election.election_date == date(2028, 10, 20)

    async def test_unreachable_falls_back(self, async_session: AsyncSession, offline_fetcher: HtmlFetcher) -> None:
        report = await ingest_federal_elections(async_session, offline_fetcher, TODAY)

        assert report.kind == "fallback"
        assert report.reason.startswith("source unreachable")
        assert report.processed == 2
        assert await count_rows(async_session, Election) == 2


class TestIngestAllElections:
    async def test_offline_run_uses_every_fallback(
        self, session_factory: async_sessionmaker[AsyncSession], offline_fetcher: HtmlFetcher
    ) -> None:
        report = await ingest_all_elections(session_factory, offline_fetcher)

        assert report.inserted == 9
        assert report.success
        by_source = {source.source: source for source in report.sources}
        assert set(by_source) == {FEDERAL_SOURCE, PROVINCIAL_SOURCE, MUNICIPAL_SOURCE}
        assert all(source.kind == "fallback" for source in report.sources)
        assert by_source[MUNICIPAL_SOURCE].reason == REASON_NO_LIVE_SOURCE
        assert by_source[PROVINCIAL_SOURCE].processed == 4

    async def test_second_run_inserts_nothing(
        self, session_factory: async_sessionmaker[AsyncSession], offline_fetcher: HtmlFetcher
    ) -> None:
        await ingest_all_elections(session_factory, offline_fetcher)
        second = await ingest_all_elections(session_factory, offline_fetcher)

        assert second.inserted == 0
        async with session_factory() as session:
            assert await count_rows(session, Election) == 9


class TestRunBranches:
    async def test_failed_branch_reported(
        self, session_factory: async_sessionmaker[AsyncSession], offline_fetcher: HtmlFetcher
    ) -> None:
        async def ok(session: AsyncSession, fetcher: HtmlFetcher) -> SourceReport:
            return SourceReport(source="ok", kind="live", processed=1)

        async def broken(session: AsyncSession, fetcher: HtmlFetcher) -> SourceReport:
            msg = "database went away"
            raise RuntimeError(msg)

        reports = await run_branches(session_factory, offline_fetcher, [("ok", ok), ("broken", broken)])

        assert [r.source for r in reports] == ["ok", "broken"]
        assert reports[0].success is True
        assert reports[1].success is False
        assert reports[1].error == "database went away"
        assert reports[1].kind is None


class TestPopulateSampleElectionData:
    async def test_counts(self, async_session: AsyncSession) -> None:
        summary = await populate_sample_election_data(async_session)

        assert (summary.elections, summary.candidates, summary.districts) == (3, 9, 3)
        assert summary.used_sample_data is True
        assert await count_rows(async_session, Candidate) == 9
        assert await count_rows(async_session, CandidatePolicy) == 27
        assert await count_rows(async_session, ElectoralDistrict) == 3

    async def test_repeat_leaves_counts_unchanged(self, async_session: AsyncSession) -> None:
        await populate_sample_election_data(async_session)
        await populate_sample_election_data(async_session)

        assert await count_rows(async_session, Election) == 3
        assert await count_rows(async_session, Candidate) == 9
        assert await count_rows(async_session, CandidatePolicy) == 27
        assert await count_rows(async_session, ElectoralDistrict) == 3


class TestScrapeAllElectionData:
    async def test_offline_populates_sample_once(
        self, async_session: AsyncSession, offline_fetcher: HtmlFetcher
    ) -> None:
        with patch.object(
            election_ingestion_service,
            "populate_sample_election_data",
            wraps=populate_sample_election_data,
        ) as populate:
            summary = await scrape_all_election_data(async_session, offline_fetcher, TODAY)

        assert populate.await_count == 1
        assert summary.used_sample_data is True
        assert (summary.elections, summary.candidates, summary.districts) == (3, 9, 3)

    async def test_unexpected_error_falls_back_once(
        self, async_session: AsyncSession, offline_fetcher: HtmlFetcher
    ) -> None:
        with (
            patch.object(
                election_ingestion_service, "scrape_federal_elections", side_effect=RuntimeError("parser exploded")
            ),
            patch.object(
                election_ingestion_service,
                "populate_sample_election_data",
                wraps=populate_sample_election_data,
            ) as populate,
        ):
            summary = await scrape_all_election_data(async_session, offline_fetcher, TODAY)

        assert populate.await_count == 1
        assert summary.used_sample_data is True
        assert summary.errors == ["parser exploded"]

    async def test_live_data_written_without_sample(
        self, async_session: AsyncSession, make_fetcher: Callable[..., HtmlFetcher]
    ) -> None:
        routes = {
            FEDERAL_ELECTIONS_URL: httpx.Response(200, text=ELECTIONS_HTML),
            FEDERAL_MEMBERS_JSON_URL: httpx.Response(200, json=MEMBER_JSON),
        }
        async with make_fetcher(routes) as fetcher:
            summary = await scrape_all_election_data(async_session, fetcher, TODAY)

        assert summary.used_sample_data is False
        assert (summary.elections, summary.candidates, summary.districts) == (1, 2, 0)
        candidates = (await async_session.execute(select(Candidate).order_by(Candidate.name))).scalars().all()
        assert [c.name for c in candidates] == ["Elizabeth May", "Jagmeet Singh"]
        election = (await async_session.execute(select(Election))).scalar_one()
        assert {c.election_id for c in candidates} == {election.id}

    async def test_repeat_offline_runs_stable(self, async_session: AsyncSession, offline_fetcher: HtmlFetcher) -> None:
        for _ in range(2):
            await scrape_all_election_data(async_session, offline_fetcher, TODAY)

        assert await count_rows(async_session, Election) == 3
        assert await count_rows(async_session, Candidate) == 9
