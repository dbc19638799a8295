"""Friendship service — requests, acceptance, removal and user search.

One row per unordered user pair (``pair_key``).  The requester is
``user_id`` and the recipient ``friend_id``; a rejected pair can be
re-opened as a new pending request by either user.
"""

import uuid
from dataclasses import dataclass

from loguru import logger
from sqlalchemy import and_, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from civicos.models.social import Friendship, friendship_pair_key
from civicos.models.user import User


class FriendNotFoundError(LookupError):
    """Raised when a user, request or friendship does not exist for the caller."""


@dataclass
class FriendEntry:
    """A friend or counterpart user together with the friendship row."""

    user: User
    friendship: Friendship


@dataclass
class UserSearchHit:
    """A user search result annotated with the caller's friendship state."""

    user: User
    friend_status: str
    request_direction: str | None = None


async def _get_pair(session: AsyncSession, a: uuid.UUID, b: uuid.UUID) -> Friendship | None:
    result = await session.execute(select(Friendship).where(Friendship.pair_key == friendship_pair_key(a, b)))
    return result.scalar_one_or_none()


async def _get_user(session: AsyncSession, user_id: uuid.UUID) -> User | None:
    result = await session.execute(select(User).where(User.id == user_id, User.is_active.is_(True)))
    return result.scalar_one_or_none()


async def send_friend_request(session: AsyncSession, from_user_id: uuid.UUID, to_user_id: uuid.UUID) -> Friendship:
    """Send a friend request.

    Args:
        session: Database session.
        from_user_id: The requesting user.
        to_user_id: The recipient.

    Returns:
        The pending friendship row.

    Raises:
        ValueError: On a self-request, an existing friendship or an existing request.
        FriendNotFoundError: If the recipient does not exist.
    """
    if from_user_id == to_user_id:
        msg = "Cannot send friend request to yourself"
        raise ValueError(msg)
    if await _get_user(session, to_user_id) is None:
        msg = "User not found"
        raise FriendNotFoundError(msg)

    existing = await _get_pair(session, from_user_id, to_user_id)
    if existing is not None:
        if existing.status == "accepted":
            msg = "Users are already friends"
            raise ValueError(msg)
        if existing.status == "pending":
            msg = "Friend request already exists"
            raise ValueError(msg)
        existing.user_id = from_user_id
        existing.friend_id = to_user_id
        existing.status = "pending"
        await session.commit()
        await session.refresh(existing)
        logger.info("Friend request {} re-opened by {}", existing.id, from_user_id)
        return existing

    friendship = Friendship(
        user_id=from_user_id,
        friend_id=to_user_id,
        pair_key=friendship_pair_key(from_user_id, to_user_id),
        status="pending",
    )
    session.add(friendship)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        msg = "Friend request already exists"
        raise ValueError(msg) from e
    await session.refresh(friendship)
    logger.info("Friend request {} sent from {} to {}", friendship.id, from_user_id, to_user_id)
    return friendship


async def _pending_for_recipient(session: AsyncSession, user_id: uuid.UUID, request_id: uuid.UUID) -> Friendship:
    result = await session.execute(
        select(Friendship).where(
            Friendship.id == request_id,
            Friendship.friend_id == user_id,
            Friendship.status == "pending",
        )
    )
    friendship = result.scalar_one_or_none()
    if friendship is None:
        msg = "Friend request not found"
        raise FriendNotFoundError(msg)
    return friendship


async def respond_to_request(
    session: AsyncSession, user_id: uuid.UUID, request_id: uuid.UUID, *, accept: bool
) -> Friendship:
    """Accept or reject a pending request addressed to ``user_id``.

    Raises:
        FriendNotFoundError: If no pending request with that id is addressed to the caller.
    """
    friendship = await _pending_for_recipient(session, user_id, request_id)
    friendship.status = "accepted" if accept else "rejected"
    await session.commit()
    await session.refresh(friendship)
    logger.info("Friend request {} {}", friendship.id, friendship.status)
    return friendship


async def remove_friend(session: AsyncSession, user_id: uuid.UUID, friend_id: uuid.UUID) -> None:
    """Delete the friendship between two users regardless of direction.

    Raises:
        FriendNotFoundError: If the pair has no friendship row.
    """
    friendship = await _get_pair(session, user_id, friend_id)
    if friendship is None:
        msg = "Friendship not found"
        raise FriendNotFoundError(msg)
    await session.delete(friendship)
    await session.commit()


def _counterpart_join(user_id: uuid.UUID):
    """Join condition selecting the other user of a friendship row."""
    return or_(
        and_(Friendship.user_id == user_id, User.id == Friendship.friend_id),
        and_(Friendship.friend_id == user_id, User.id == Friendship.user_id),
    )


async def list_friends(session: AsyncSession, user_id: uuid.UUID) -> list[FriendEntry]:
    """Accepted friends of a user, in either direction."""
    result = await session.execute(
        select(User, Friendship)
        .join(Friendship, _counterpart_join(user_id))
        .where(Friendship.status == "accepted")
        .order_by(User.username)
    )
    return [FriendEntry(user=user, friendship=friendship) for user, friendship in result.all()]


async def list_friend_ids(session: AsyncSession, user_id: uuid.UUID) -> list[uuid.UUID]:
    """Ids of a user's accepted friends."""
    result = await session.execute(
        select(Friendship.user_id, Friendship.friend_id).where(
            Friendship.status == "accepted",
            or_(Friendship.user_id == user_id, Friendship.friend_id == user_id),
        )
    )
    return [friend if requester == user_id else requester for requester, friend in result.all()]


async def list_requests(session: AsyncSession, user_id: uuid.UUID) -> tuple[list[FriendEntry], list[FriendEntry]]:
    """Pending requests for a user.

    Returns:
        Tuple of (incoming, outgoing); each entry carries the counterpart user.
    """
    incoming = await session.execute(
        select(User, Friendship)
        .join(Friendship, User.id == Friendship.user_id)
        .where(Friendship.friend_id == user_id, Friendship.status == "pending")
        .order_by(Friendship.created_at.desc())
    )
    outgoing = await session.execute(
        select(User, Friendship)
        .join(Friendship, User.id == Friendship.friend_id)
        .where(Friendship.user_id == user_id, Friendship.status == "pending")
        .order_by(Friendship.created_at.desc())
    )
    return (
        [FriendEntry(user=u, friendship=f) for u, f in incoming.all()],
        [FriendEntry(user=u, friendship=f) for u, f in outgoing.all()],
    )


def _friend_status(friendship: Friendship | None, user_id: uuid.UUID) -> tuple[str, str | None]:
    if friendship is None:
        return "not_friends", None
    if friendship.status == "accepted":
        return "friends", None
    direction = "sent" if friendship.user_id == user_id else "received"
    return friendship.status, direction


async def search_users(
    session: AsyncSession,
    user_id: uuid.UUID,
    query: str | None = None,
    *,
    limit: int = 20,
    offset: int = 0,
) -> list[UserSearchHit]:
    """Search other active users by username or display name.

    Args:
        session: Database session.
        user_id: The caller, excluded from the results.
        query: Case-insensitive match; blank matches everyone.
        limit: Maximum results.
        offset: Results to skip.

    Returns:
        Matching users with ``friend_status`` (friends, pending, rejected,
        not_friends) and, for open or rejected requests, ``request_direction``.
    """
    stmt = select(User).where(User.id != user_id, User.is_active.is_(True))
    if query and query.strip():
        pattern = f"%{query.strip()}%"
        stmt = stmt.where(or_(User.username.ilike(pattern), User.display_name.ilike(pattern)))
    result = await session.execute(stmt.order_by(User.username).offset(offset).limit(limit))
    users = list(result.scalars().all())
    if not users:
        return []

    keys = {friendship_pair_key(user_id, u.id): u.id for u in users}
    rows = await session.execute(select(Friendship).where(Friendship.pair_key.in_(keys)))
    by_user = {keys[f.pair_key]: f for f in rows.scalars().all()}

    hits = []
    for user in users:
        status, direction = _friend_status(by_user.get(user.id), user_id)
        hits.append(UserSearchHit(user=user, friend_status=status, request_direction=direction))
    return hits
