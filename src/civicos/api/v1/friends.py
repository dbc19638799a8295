"""Friend API endpoints (authentication required).

GET /friends, GET /friends/search, POST /friends/request,
GET /friends/requests, POST /friends/accept, POST /friends/reject,
DELETE /friends/{friend_id}.
"""

import time
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from civicos.core.dependencies import get_async_session, get_current_user
from civicos.models.user import User
from civicos.schemas.auth import PublicUserResponse
from civicos.schemas.common import ApiResponse, clamp_limit, respond
from civicos.schemas.social import (
    FriendRequestAction,
    FriendRequestCreate,
    FriendRequestEntry,
    FriendRequestsResponse,
    FriendResponse,
    FriendshipResponse,
    UserSearchResult,
)
from civicos.services import friend_service
from civicos.services.friend_service import FriendEntry

friends_router = APIRouter(prefix="/friends", tags=["friends"])


def _request_entry(entry: FriendEntry) -> FriendRequestEntry:
    return FriendRequestEntry(
        id=entry.friendship.id,
        status=entry.friendship.status,
        created_at=entry.friendship.created_at,
        user=PublicUserResponse.model_validate(entry.user),
    )


@friends_router.get("", response_model=ApiResponse[list[FriendResponse]])
async def list_friends(
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Accepted friends of the caller."""
    started = time.perf_counter()
    entries = await friend_service.list_friends(session, current_user.id)
    friends = [
        FriendResponse(
            **PublicUserResponse.model_validate(entry.user).model_dump(),
            friendship_id=entry.friendship.id,
            friends_since=entry.friendship.updated_at,
        )
        for entry in entries
    ]
    return respond(friends, started=started)


@friends_router.get("/search", response_model=ApiResponse[list[UserSearchResult]])
async def search_users(
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
    q: str | None = Query(default=None, description="Username or display name"),
    limit: int = Query(default=20, ge=1),
    offset: int = Query(default=0, ge=0),
) -> ApiResponse:
    """Find other users, annotated with the caller's friendship state."""
    started = time.perf_counter()
    hits = await friend_service.search_users(session, current_user.id, q, limit=clamp_limit(limit), offset=offset)
    results = [
        UserSearchResult(
            **PublicUserResponse.model_validate(hit.user).model_dump(),
            friend_status=hit.friend_status,
            request_direction=hit.request_direction,
        )
        for hit in hits
    ]
    return respond(results, started=started)


@friends_router.post("/request", response_model=ApiResponse[FriendshipResponse], status_code=201)
async def send_request(
    request: FriendRequestCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Send a friend request."""
    started = time.perf_counter()
    friendship = await friend_service.send_friend_request(session, current_user.id, request.to_user_id)
    return respond(FriendshipResponse.model_validate(friendship), started=started, message="Friend request sent")


@friends_router.get("/requests", response_model=ApiResponse[FriendRequestsResponse])
async def list_requests(
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Pending requests addressed to and sent by the caller."""
    started = time.perf_counter()
    incoming, outgoing = await friend_service.list_requests(session, current_user.id)
    data = FriendRequestsResponse(
        incoming=[_request_entry(e) for e in incoming],
        outgoing=[_request_entry(e) for e in outgoing],
    )
    return respond(data, started=started)


@friends_router.post("/accept", response_model=ApiResponse[FriendshipResponse])
async def accept_request(
    request: FriendRequestAction,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Accept a pending request addressed to the caller."""
    started = time.perf_counter()
    friendship = await friend_service.respond_to_request(session, current_user.id, request.request_id, accept=True)
    return respond(FriendshipResponse.model_validate(friendship), started=started, message="Friend request accepted")


@friends_router.post("/reject", response_model=ApiResponse[FriendshipResponse])
async def reject_request(
    request: FriendRequestAction,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Reject a pending request addressed to the caller."""
    started = time.perf_counter()
    friendship = await friend_service.respond_to_request(session, current_user.id, request.request_id, accept=False)
    return respond(FriendshipResponse.model_validate(friendship), started=started, message="Friend request rejected")


@friends_router.delete("/{friend_id}", response_model=ApiResponse[None])
async def remove_friend(
    friend_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Remove a friendship in either direction."""
    started = time.perf_counter()
    await friend_service.remove_friend(session, current_user.id, friend_id)
    return respond(started=started, message="Friend removed")
