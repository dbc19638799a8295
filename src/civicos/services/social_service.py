"""Social service — feed posts and direct messages."""

import uuid

from loguru import logger
from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from civicos.models.social import POST_VISIBILITIES, Message, SocialPost
from civicos.models.user import User
from civicos.services.friend_service import list_friend_ids


class SocialNotFoundError(LookupError):
    """Raised when a post, message or recipient does not exist for the caller."""


# ---------------------------------------------------------------------------
# Posts
# ---------------------------------------------------------------------------


async def list_feed(
    session: AsyncSession,
    user_id: uuid.UUID,
    *,
    limit: int = 20,
    offset: int = 0,
) -> list[tuple[SocialPost, User]]:
    """Posts visible to a user, newest first.

    Visible posts are public posts, the user's own posts and friends-only
    posts by accepted friends.

    Returns:
        List of (post, author) pairs.
    """
    friend_ids = await list_friend_ids(session, user_id)
    visible = [SocialPost.visibility == "public", SocialPost.user_id == user_id]
    if friend_ids:
        visible.append(and_(SocialPost.visibility == "friends", SocialPost.user_id.in_(friend_ids)))

    result = await session.execute(
        select(SocialPost, User)
        .join(User, User.id == SocialPost.user_id)
        .where(or_(*visible))
        .order_by(SocialPost.created_at.desc(), SocialPost.id)
        .offset(offset)
        .limit(limit)
    )
    return [(post, author) for post, author in result.all()]


async def create_post(
    session: AsyncSession,
    user_id: uuid.UUID,
    *,
    content: str,
    image_url: str | None = None,
    visibility: str | None = None,
) -> SocialPost:
    """Create a feed post.

    Raises:
        ValueError: If the content is blank or the visibility is unknown.
    """
    if not content or not content.strip():
        msg = "Post content is required"
        raise ValueError(msg)
    visibility = visibility or "public"
    if visibility not in POST_VISIBILITIES:
        msg = f"Visibility must be one of: {', '.join(POST_VISIBILITIES)}"
        raise ValueError(msg)

    post = SocialPost(user_id=user_id, content=content.strip(), image_url=image_url, visibility=visibility)
    session.add(post)
    await session.commit()
    await session.refresh(post)
    logger.info("User {} created post {}", user_id, post.id)
    return post


async def delete_post(session: AsyncSession, user_id: uuid.UUID, post_id: uuid.UUID) -> None:
    """Delete one of the user's own posts.

    Raises:
        SocialNotFoundError: If the post does not exist or belongs to someone else.
    """
    result = await session.execute(select(SocialPost).where(SocialPost.id == post_id, SocialPost.user_id == user_id))
    post = result.scalar_one_or_none()
    if post is None:
        msg = "Post not found"
        raise SocialNotFoundError(msg)
    await session.delete(post)
    await session.commit()


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


async def list_messages(session: AsyncSession, user_id: uuid.UUID, limit: int = 10) -> list[Message]:
    """Messages sent or received by a user, newest first."""
    result = await session.execute(
        select(Message)
        .where(or_(Message.sender_id == user_id, Message.recipient_id == user_id))
        .order_by(Message.created_at.desc(), Message.id)
        .limit(limit)
    )
    return list(result.scalars().all())


async def send_message(
    session: AsyncSession,
    sender_id: uuid.UUID,
    recipient_id: uuid.UUID,
    *,
    content: str,
    subject: str | None = None,
) -> Message:
    """Send a direct message.

    Raises:
        ValueError: If the content is blank.
        SocialNotFoundError: If the recipient does not exist.
    """
    if not content or not content.strip():
        msg = "Message content is required"
        raise ValueError(msg)
    recipient = await session.execute(select(User.id).where(User.id == recipient_id, User.is_active.is_(True)))
    if recipient.scalar_one_or_none() is None:
        msg = "Recipient not found"
        raise SocialNotFoundError(msg)

    message = Message(sender_id=sender_id, recipient_id=recipient_id, subject=subject, content=content.strip())
    session.add(message)
    await session.commit()
    await session.refresh(message)
    return message


async def mark_message_read(session: AsyncSession, user_id: uuid.UUID, message_id: uuid.UUID) -> Message:
    """Mark a message as read; only its recipient may do so.

    Raises:
        SocialNotFoundError: If no such message is addressed to the user.
    """
    result = await session.execute(
        select(Message).where(Message.id == message_id, Message.recipient_id == user_id)
    )
    message = result.scalar_one_or_none()
    if message is None:
        msg = "Message not found"
        raise SocialNotFoundError(msg)
    message.is_read = True
    await session.commit()
    await session.refresh(message)
    return message
