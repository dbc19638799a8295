"""Politician service — listing, search, stats, detail, updates and statements."""

import uuid

from loguru import logger
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from civicos.models.politician import (
    CampaignFinance,
    ParliamentMember,
    Politician,
    PoliticianPosition,
    PoliticianStatement,
    PoliticianTruthTracking,
)

# Fields that may be set via the update endpoint.  Anything outside this set
# is ignored, so ids, natural-key columns and the trust score stay internal.
_UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {
        "party",
        "position",
        "riding",
        "image_url",
        "civic_level",
        "recent_activity",
        "bio",
        "policy_positions",
        "voting_record",
        "contact_info",
        "key_achievements",
        "committees",
        "expenses",
        "is_incumbent",
    }
)


class PoliticianNotFoundError(LookupError):
    """Raised when a politician id does not exist."""


# ---------------------------------------------------------------------------
# Read operations (public)
# ---------------------------------------------------------------------------


async def list_politicians(
    session: AsyncSession,
    *,
    level: str | None = None,
    jurisdiction: str | None = None,
    party: str | None = None,
    search: str | None = None,
    location: str | None = None,
    page: int = 1,
    limit: int = 20,
) -> tuple[list[Politician], int]:
    """List politicians with optional filters, ordered by name.

    Args:
        session: Database session.
        level: Exact government level (federal, provincial, municipal).
        jurisdiction: Exact jurisdiction.
        party: Exact party.
        search: Case-insensitive match on name, position or riding.
        location: Case-insensitive match on jurisdiction, riding or name.
        page: Page number (1-based).
        limit: Items per page.

    Returns:
        Tuple of (politicians, total count of the filtered set).
    """
    conditions = []
    if level:
        conditions.append(Politician.level == level)
    if jurisdiction:
        conditions.append(Politician.jurisdiction == jurisdiction)
    if party:
        conditions.append(Politician.party == party)
    if search and search.strip():
        pattern = f"%{search.strip()}%"
        conditions.append(
            or_(Politician.name.ilike(pattern), Politician.position.ilike(pattern), Politician.riding.ilike(pattern))
        )
    if location and location.strip():
        pattern = f"%{location.strip()}%"
        conditions.append(
            or_(
                Politician.jurisdiction.ilike(pattern),
                Politician.riding.ilike(pattern),
                Politician.name.ilike(pattern),
            )
        )

    total = (await session.execute(select(func.count(Politician.id)).where(*conditions))).scalar_one()
    offset = (page - 1) * limit
    result = await session.execute(
        select(Politician).where(*conditions).order_by(Politician.name, Politician.id).offset(offset).limit(limit)
    )
    return list(result.scalars().all()), total


async def search_politicians(session: AsyncSession, query: str, limit: int = 20) -> list[Politician]:
    """Case-insensitive search on name, position, riding and party.

    Raises:
        ValueError: If the query is blank.
    """
    query = query.strip()
    if not query:
        msg = "Search query is required"
        raise ValueError(msg)
    pattern = f"%{query}%"
    result = await session.execute(
        select(Politician)
        .where(
            or_(
                Politician.name.ilike(pattern),
                Politician.position.ilike(pattern),
                Politician.riding.ilike(pattern),
                Politician.party.ilike(pattern),
            )
        )
        .order_by(Politician.name)
        .limit(limit)
    )
    return list(result.scalars().all())


async def get_politician_stats(session: AsyncSession) -> dict:
    """Totals, counts by level and party, and the average trust score."""
    total = (await session.execute(select(func.count(Politician.id)))).scalar_one()
    by_level = await session.execute(select(Politician.level, func.count(Politician.id)).group_by(Politician.level))
    by_party = await session.execute(
        select(Politician.party, func.count(Politician.id))
        .where(Politician.party.is_not(None))
        .group_by(Politician.party)
    )
    average = (await session.execute(select(func.avg(Politician.trust_score)))).scalar_one()
    return {
        "total": total,
        "by_level": {level: count for level, count in by_level.all()},
        "by_party": {party: count for party, count in by_party.all()},
        "average_trust_score": round(float(average), 1) if average is not None else None,
    }


async def get_politician(session: AsyncSession, politician_id: uuid.UUID) -> Politician | None:
    """Get a politician by ID."""
    result = await session.execute(select(Politician).where(Politician.id == politician_id))
    return result.scalar_one_or_none()


async def get_politician_detail(session: AsyncSession, politician_id: uuid.UUID) -> dict | None:
    """Get a politician with activity counts, finance, truth tracking and Commons directory entry.

    Returns:
        Detail dict, or None if the politician does not exist.
    """
    politician = await get_politician(session, politician_id)
    if politician is None:
        return None

    statements = (
        await session.execute(
            select(func.count(PoliticianStatement.id)).where(PoliticianStatement.politician_id == politician_id)
        )
    ).scalar_one()
    positions = (
        await session.execute(
            select(func.count(PoliticianPosition.id)).where(PoliticianPosition.politician_id == politician_id)
        )
    ).scalar_one()
    finance = await session.execute(
        select(CampaignFinance)
        .where(CampaignFinance.politician_id == politician_id)
        .order_by(CampaignFinance.reporting_period.desc())
    )
    truth = await session.execute(
        select(PoliticianTruthTracking).where(PoliticianTruthTracking.politician_id == politician_id)
    )
    member = None
    if politician.parliament_member_id:
        member = (
            await session.execute(
                select(ParliamentMember).where(ParliamentMember.member_id == politician.parliament_member_id)
            )
        ).scalar_one_or_none()

    return {
        "politician": politician,
        "stats": {"statements": statements, "positions": positions},
        "campaign_finance": list(finance.scalars().all()),
        "truth_tracking": truth.scalar_one_or_none(),
        "parliament_member": member,
    }


async def list_statements(
    session: AsyncSession,
    politician_id: uuid.UUID,
    *,
    limit: int = 20,
    offset: int = 0,
) -> list[PoliticianStatement]:
    """Statements attributed to a politician, newest first."""
    result = await session.execute(
        select(PoliticianStatement)
        .where(PoliticianStatement.politician_id == politician_id)
        .order_by(PoliticianStatement.created_at.desc(), PoliticianStatement.id)
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all())


# ---------------------------------------------------------------------------
# Write operations
# ---------------------------------------------------------------------------


async def update_politician(session: AsyncSession, politician: Politician, updates: dict) -> Politician:
    """Apply a partial update to a politician's descriptive fields.

    Args:
        session: Database session.
        politician: The politician to update.
        updates: Field names to new values; unknown fields are ignored.

    Returns:
        The updated politician.
    """
    for field, value in updates.items():
        if field in _UPDATABLE_FIELDS:
            setattr(politician, field, value)

    await session.commit()
    await session.refresh(politician)
    logger.info("Updated politician {}", politician.id)
    return politician


async def add_statement(
    session: AsyncSession,
    politician_id: uuid.UUID,
    *,
    statement: str,
    context: str | None = None,
    source: str | None = None,
    submitted_by_id: uuid.UUID | None = None,
) -> PoliticianStatement:
    """Record a public statement for a politician.

    Raises:
        ValueError: If the statement is blank.
        PoliticianNotFoundError: If the politician does not exist.
    """
    if not statement or not statement.strip():
        msg = "Statement is required"
        raise ValueError(msg)
    if await get_politician(session, politician_id) is None:
        msg = "Politician not found"
        raise PoliticianNotFoundError(msg)

    record = PoliticianStatement(
        politician_id=politician_id,
        statement=statement.strip(),
        context=context or "general",
        source=source or "user_submitted",
        submitted_by_id=submitted_by_id,
    )
    session.add(record)
    await session.commit()
    await session.refresh(record)
    return record
