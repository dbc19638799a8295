"""Election read service — listing, detail, location lookup and districts."""

import uuid
from datetime import UTC, date, datetime

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from civicos.lib.scraper.sources import ELECTION_SOURCES
from civicos.models.election import Election, ElectoralDistrict


async def list_elections(
    session: AsyncSession,
    *,
    election_type: str | None = None,
    status: str | None = None,
    jurisdiction: str | None = None,
    page: int = 1,
    limit: int = 20,
) -> tuple[list[Election], int]:
    """List elections with optional filters, newest election date first.

    Args:
        session: Database session.
        election_type: Filter by type (federal, provincial, municipal, by-election).
        status: Filter by status.
        jurisdiction: Case-insensitive jurisdiction match.
        page: Page number.
        limit: Items per page.

    Returns:
        Tuple of (elections, total count).
    """
    conditions = []
    if election_type:
        conditions.append(Election.election_type == election_type)
    if status:
        conditions.append(Election.status == status)
    if jurisdiction and jurisdiction.strip():
        conditions.append(Election.jurisdiction.ilike(f"%{jurisdiction.strip()}%"))

    total = (await session.execute(select(func.count(Election.id)).where(*conditions))).scalar_one()
    offset = (page - 1) * limit
    result = await session.execute(
        select(Election)
        .where(*conditions)
        .order_by(Election.election_date.desc(), Election.title)
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all()), total


async def get_election(session: AsyncSession, election_id: uuid.UUID) -> Election | None:
    """Get an election by ID; candidates and their policies load eagerly."""
    result = await session.execute(select(Election).where(Election.id == election_id))
    return result.scalar_one_or_none()


async def get_elections_by_location(
    session: AsyncSession,
    location: str | None = None,
    today: date | None = None,
) -> dict:
    """Split elections matching a location into upcoming and recent.

    An election is upcoming when its date is after ``today`` and its status
    is ``upcoming``; every other match is recent.

    Args:
        session: Database session.
        location: Case-insensitive match on jurisdiction or title. None matches all.
        today: Reference date, defaults to the current date.

    Returns:
        Dict with ``upcoming``, ``recent``, ``last_updated`` and ``sources``.
    """
    today = today or date.today()
    query = select(Election)
    if location and location.strip():
        pattern = f"%{location.strip()}%"
        query = query.where(or_(Election.jurisdiction.ilike(pattern), Election.title.ilike(pattern)))
    result = await session.execute(query.order_by(Election.election_date))

    upcoming: list[Election] = []
    recent: list[Election] = []
    for election in result.scalars().all():
        if election.election_date > today and election.status == "upcoming":
            upcoming.append(election)
        else:
            recent.append(election)

    return {
        "upcoming": upcoming,
        "recent": recent,
        "last_updated": datetime.now(UTC),
        "sources": [source.name for source in ELECTION_SOURCES],
    }


async def list_districts(session: AsyncSession, province: str | None = None) -> list[ElectoralDistrict]:
    """Electoral districts ordered by name, optionally filtered by province."""
    query = select(ElectoralDistrict)
    if province and province.strip():
        query = query.where(ElectoralDistrict.province.ilike(province.strip()))
    result = await session.execute(query.order_by(ElectoralDistrict.district_name))
    return list(result.scalars().all())
