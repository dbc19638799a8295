"""Social-graph models: friendships, direct messages and posts.

A friendship row exists at most once per unordered user pair; the
``pair_key`` column holds the two user ids in sorted order and carries
the unique constraint.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, String, Text, false, func
from sqlalchemy.orm import Mapped, mapped_column

from civicos.models.base import Base, TimestampMixin, UUIDMixin

FRIENDSHIP_STATUSES = ("pending", "accepted", "rejected")
POST_VISIBILITIES = ("public", "friends", "private")


def friendship_pair_key(a: uuid.UUID, b: uuid.UUID) -> str:
    """Order-independent key for a pair of users."""
    first, second = sorted((str(a), str(b)))
    return f"{first}:{second}"


class Friendship(Base, UUIDMixin, TimestampMixin):
    """Friend request from ``user_id`` to ``friend_id`` and its current status."""

    __tablename__ = "user_friends"

    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    friend_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    pair_key: Mapped[str] = mapped_column(String(80), nullable=False, unique=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")

    __table_args__ = (
        CheckConstraint("user_id <> friend_id", name="ck_friendship_not_self"),
        CheckConstraint("status IN ('pending', 'accepted', 'rejected')", name="ck_friendship_status"),
    )


class Message(Base, UUIDMixin):
    """Direct message between two users."""

    __tablename__ = "user_messages"

    sender_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    recipient_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    subject: Mapped[str | None] = mapped_column(String(200), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_user_messages_sender", "sender_id", "created_at"),
        Index("ix_user_messages_recipient", "recipient_id", "created_at"),
    )


class SocialPost(Base, UUIDMixin, TimestampMixin):
    """A post on the social feed."""

    __tablename__ = "social_posts"

    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    visibility: Mapped[str] = mapped_column(String(20), nullable=False, default="public")

    __table_args__ = (
        CheckConstraint("visibility IN ('public', 'friends', 'private')", name="ck_social_post_visibility"),
        Index("ix_social_posts_created", "created_at"),
    )
