"""Unit tests for the election read service."""

import uuid
from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from civicos.lib.scraper.sources import ELECTION_SOURCES
from civicos.models.election import Candidate, CandidatePolicy, Election, ElectoralDistrict
from civicos.services.election_service import get_election, get_elections_by_location, list_districts, list_elections

TODAY = date(2026, 10, 18)


def _election(title: str, jurisdiction: str, election_date: date, **fields) -> Election:
    fields.setdefault("election_type", "provincial")
    fields.setdefault("status", "upcoming")
    return Election(title=title, jurisdiction=jurisdiction, election_date=election_date, **fields)


@pytest.fixture
async def elections(async_session: AsyncSession) -> list[Election]:
    rows = [
        _election("43rd Ontario General Election", "Ontario", date(2026, 6, 4), status="completed"),
        _election("2026 Toronto Municipal Election", "Toronto, Ontario", date(2026, 10, 26), election_type="municipal"),
        _election("31st Alberta General Election", "Alberta", date(2027, 5, 31)),
        _election("45th Canadian Federal Election", "Canada", date(2028, 10, 20), election_type="federal"),
        _election("Stale Upcoming Election", "Ontario", date(2025, 1, 1)),
    ]
    async_session.add_all(rows)
    await async_session.commit()
    return rows


class TestListElections:
    async def test_newest_first(self, async_session: AsyncSession, elections: list[Election]) -> None:
        rows, total = await list_elections(async_session)

        assert total == 5
        assert rows[0].title == "45th Canadian Federal Election"

    async def test_filters_and_pagination(self, async_session: AsyncSession, elections: list[Election]) -> None:
        rows, total = await list_elections(async_session, jurisdiction="ONTARIO", page=2, limit=2)
        assert total == 3
        assert [r.title for r in rows] == ["Stale Upcoming Election"]

        municipal, _ = await list_elections(async_session, election_type="municipal")
        assert [r.title for r in municipal] == ["2026 Toronto Municipal Election"]

        completed, _ = await list_elections(async_session, status="completed")
        assert [r.title for r in completed] == ["43rd Ontario General Election"]


class TestGetElection:
    async def test_loads_candidates_and_policies(self, async_session: AsyncSession, elections: list[Election]) -> None:
        alberta = elections[2]
        candidate = Candidate(election_id=alberta.id, name="Danielle Smith", constituency="Brooks-Medicine Hat")
        async_session.add(candidate)
        await async_session.flush()
        async_session.add(CandidatePolicy(candidate_id=candidate.id, policy_area="energy", policy_title="Pipelines"))
        await async_session.commit()
        async_session.expunge_all()

        election = await get_election(async_session, alberta.id)

        assert [c.name for c in election.candidates] == ["Danielle Smith"]
        assert [p.policy_title for p in election.candidates[0].policies] == ["Pipelines"]

    async def test_unknown_id(self, async_session: AsyncSession) -> None:
        assert await get_election(async_session, uuid.uuid4()) is None


class TestGetElectionsByLocation:
    async def test_splits_upcoming_and_recent(self, async_session: AsyncSession, elections: list[Election]) -> None:
        result = await get_elections_by_location(async_session, "ontario", today=TODAY)

        assert [e.title for e in result["upcoming"]] == ["2026 Toronto Municipal Election"]
        assert [e.title for e in result["recent"]] == ["Stale Upcoming Election", "43rd Ontario General Election"]
        assert result["sources"] == [source.name for source in ELECTION_SOURCES]
        assert result["last_updated"] is not None

    async def test_no_location_matches_everything(self, async_session: AsyncSession, elections: list[Election]) -> None:
        result = await get_elections_by_location(async_session, None, today=TODAY)
        assert len(result["upcoming"]) + len(result["recent"]) == 5
        assert [e.title for e in result["upcoming"]] == [
            "2026 Toronto Municipal Election",
            "31st Alberta General Election",
            "45th Canadian Federal Election",
        ]


class TestListDistricts:
    async def test_province_filter(self, async_session: AsyncSession) -> None:
        async_session.add_all(
            [
                ElectoralDistrict(district_name="Toronto Centre", province="Ontario"),
                ElectoralDistrict(district_name="Calgary Heritage", province="Alberta"),
                ElectoralDistrict(district_name="Ottawa Centre", province="Ontario"),
            ]
        )
        await async_session.commit()

        assert [d.district_name for d in await list_districts(async_session, "ontario")] == [
            "Ottawa Centre",
            "Toronto Centre",
        ]
        assert len(await list_districts(async_session)) == 3
