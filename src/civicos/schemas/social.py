"""Friends, posts and messages Pydantic v2 schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from civicos.schemas.auth import PublicUserResponse
from civicos.schemas.common import CamelModel


class FriendRequestCreate(CamelModel):
    """Send a friend request."""

    to_user_id: UUID


class FriendRequestAction(CamelModel):
    """Accept or reject a pending request."""

    request_id: UUID


class FriendshipResponse(CamelModel):
    """A friendship row."""

    id: UUID
    user_id: UUID
    friend_id: UUID
    status: str
    created_at: datetime
    updated_at: datetime


class FriendResponse(PublicUserResponse):
    """An accepted friend."""

    friendship_id: UUID
    friends_since: datetime


class FriendRequestEntry(CamelModel):
    """A pending request with the counterpart user."""

    id: UUID
    status: str
    created_at: datetime
    user: PublicUserResponse


class FriendRequestsResponse(CamelModel):
    """Incoming and outgoing pending requests."""

    incoming: list[FriendRequestEntry]
    outgoing: list[FriendRequestEntry]


class UserSearchResult(PublicUserResponse):
    """A user search hit annotated with the caller's friendship state."""

    friend_status: str
    request_direction: str | None = None


class PostCreateRequest(CamelModel):
    """Create a feed post."""

    content: str = Field(max_length=5000)
    image_url: str | None = None
    visibility: str | None = Field(default=None, pattern="^(public|friends|private)$")


class PostResponse(CamelModel):
    """A feed post with its author."""

    id: UUID
    user_id: UUID
    content: str
    image_url: str | None = None
    visibility: str
    created_at: datetime
    author: PublicUserResponse | None = None


class MessageCreateRequest(CamelModel):
    """Send a direct message."""

    recipient_id: UUID
    subject: str | None = Field(default=None, max_length=200)
    content: str = Field(max_length=10000)


class MessageResponse(CamelModel):
    """A direct message."""

    id: UUID
    sender_id: UUID
    recipient_id: UUID
    subject: str | None = None
    content: str
    is_read: bool
    created_at: datetime
