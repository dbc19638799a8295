"""Database-native insert-on-conflict helpers.

Every ingested entity is written with a single ``INSERT ... ON CONFLICT``
statement targeting its natural-key unique constraint, so two concurrent
writers of the same key converge on one row.  The PostgreSQL and SQLite
dialects share the same ``on_conflict_*`` API.
"""

import uuid
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from civicos.models.base import Base

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _insert_for(session: AsyncSession, model: type[Base]):
    dialect = session.get_bind().dialect.name
    try:
        return _DIALECT_INSERTS[dialect](model)
    except KeyError:
        msg = f"Upsert is not supported on the '{dialect}' dialect"
        raise RuntimeError(msg) from None


async def upsert(
    session: AsyncSession,
    model: type[Base],
    values: Mapping[str, Any],
    *,
    conflict_columns: Iterable[str],
    update_columns: Iterable[str] | None = None,
) -> uuid.UUID:
    """Insert a row or update the existing row with the same natural key.

    ON CONFLICT (conflict_columns) DO UPDATE SET update_columns, updated_at = now().

    Args:
        session: Database session.
        model: ORM model class with a unique constraint on ``conflict_columns``.
        values: Column values for the row.
        conflict_columns: Columns of the natural-key unique constraint.
        update_columns: Columns overwritten on conflict. Defaults to every
            key in ``values`` outside the conflict target.

    Returns:
        The id of the inserted or updated row.
    """
    conflict = list(conflict_columns)
    if update_columns is None:
        update_columns = [key for key in values if key not in conflict and key != "id"]

    stmt = _insert_for(session, model).values(**values)
    set_ = {col: stmt.excluded[col] for col in update_columns}
    if "updated_at" in model.__table__.c:
        set_["updated_at"] = func.now()

    stmt = stmt.on_conflict_do_update(index_elements=conflict, set_=set_).returning(model.id)
    result = await session.execute(stmt)
    return result.scalar_one()


async def insert_ignore(
    session: AsyncSession,
    model: type[Base],
    values: Mapping[str, Any],
    *,
    conflict_columns: Iterable[str],
) -> uuid.UUID | None:
    """Insert a row unless one with the same natural key already exists.

    Returns:
        The new row's id, or None if the key was already present.
    """
    stmt = (
        _insert_for(session, model)
        .values(**values)
        .on_conflict_do_nothing(index_elements=list(conflict_columns))
        .returning(model.id)
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def find_id(session: AsyncSession, model: type[Base], **natural_key: Any) -> uuid.UUID | None:
    """Look up a row id by natural-key column values."""
    query = select(model.id)
    for column, value in natural_key.items():
        query = query.where(getattr(model, column) == value)
    result = await session.execute(query)
    return result.scalar_one_or_none()


async def count_rows(session: AsyncSession, model: type[Base]) -> int:
    """Count the rows in a model's table."""
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()
