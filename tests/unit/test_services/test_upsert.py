"""Unit tests for the insert-on-conflict helpers."""

import asyncio
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from civicos.lib.scraper.records import ElectionRecord, PoliticianRecord
from civicos.models.election import Election
from civicos.models.legal import LegalCase
from civicos.models.politician import Politician
from civicos.services.election_ingestion_service import upsert_election
from civicos.services.politician_ingestion_service import upsert_politician
from civicos.services.upsert import count_rows, find_id, insert_ignore


def _election(**overrides) -> ElectionRecord:
    fields = {
        "election_type": "provincial",
        "jurisdiction": "Ontario",
        "title": "43rd Ontario General Election",
        "election_date": date(2026, 6, 4),
    }
    fields.update(overrides)
    return ElectionRecord(**fields)


class TestUpsert:
    """Tests for natural-key upserts."""

    async def test_same_key_updates_in_place(self, async_session: AsyncSession) -> None:
        first_id = await upsert_election(async_session, _election(description="first"))
        second_id = await upsert_election(async_session, _election(description="second", status="completed"))
        await async_session.commit()

        assert first_id == second_id
        assert await count_rows(async_session, Election) == 1
        election = (await async_session.execute(select(Election))).scalar_one()
        assert election.description == "second"
        assert election.status == "completed"

    async def test_different_key_inserts(self, async_session: AsyncSession) -> None:
        await upsert_election(async_session, _election())
        await upsert_election(async_session, _election(jurisdiction="Alberta"))
        await async_session.commit()

        assert await count_rows(async_session, Election) == 2

    async def test_idempotent(self, async_session: AsyncSession) -> None:
        for _ in range(3):
            await upsert_election(async_session, _election())
        await async_session.commit()

        assert await count_rows(async_session, Election) == 1

    async def test_trust_score_untouched_by_reingestion(self, async_session: AsyncSession) -> None:
        record = PoliticianRecord(name="Doug Ford", level="provincial", jurisdiction="Ontario", party="PC")
        politician_id = await upsert_politician(async_session, record)
        await async_session.commit()
        politician = await async_session.get(Politician, politician_id)
        politician.trust_score = 80
        await async_session.commit()

        record.party = "Progressive Conservative"
        await upsert_politician(async_session, record)
        await async_session.commit()
        await async_session.refresh(politician)

        assert politician.party == "Progressive Conservative"
        assert politician.trust_score == 80

    async def test_concurrent_writers_converge(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Two sessions writing the same key at once leave a single row."""

        async def write(description: str):
            async with session_factory() as session:
                election_id = await upsert_election(session, _election(description=description))
                await session.commit()
                return election_id

        ids = await asyncio.gather(write("a"), write("b"))

        assert ids[0] == ids[1]
        async with session_factory() as session:
            assert await count_rows(session, Election) == 1


class TestInsertIgnore:
    async def test_existing_key_returns_none(self, async_session: AsyncSession) -> None:
        values = {"case_number": "2016 SCC 27", "title": "R. v. Jordan"}
        first = await insert_ignore(async_session, LegalCase, values, conflict_columns=("case_number",))
        second = await insert_ignore(
            async_session, LegalCase, {**values, "title": "Renamed"}, conflict_columns=("case_number",)
        )
        await async_session.commit()

        assert first is not None
        assert second is None
        assert await find_id(async_session, LegalCase, case_number="2016 SCC 27") == first
        case = (await async_session.execute(select(LegalCase))).scalar_one()
        assert case.title == "R. v. Jordan"
