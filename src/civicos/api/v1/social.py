"""Social API endpoints (authentication required).

GET/POST /social/posts, DELETE /social/posts/{id},
GET/POST /social/messages, POST /social/messages/{id}/read.
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
from civicos.schemas.social import MessageCreateRequest, MessageResponse, PostCreateRequest, PostResponse
from civicos.services import social_service

social_router = APIRouter(prefix="/social", tags=["social"])


@social_router.get("/posts", response_model=ApiResponse[list[PostResponse]])
async def list_feed(
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
    limit: int = Query(default=20, ge=1),
    offset: int = Query(default=0, ge=0),
) -> ApiResponse:
    """Posts visible to the caller, newest first."""
    started = time.perf_counter()
    rows = await social_service.list_feed(session, current_user.id, limit=clamp_limit(limit), offset=offset)
    posts = []
    for post, author in rows:
        item = PostResponse.model_validate(post)
        item.author = PublicUserResponse.model_validate(author)
        posts.append(item)
    return respond(posts, started=started)


@social_router.post("/posts", response_model=ApiResponse[PostResponse], status_code=201)
async def create_post(
    request: PostCreateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Publish a post."""
    started = time.perf_counter()
    post = await social_service.create_post(
        session,
        current_user.id,
        content=request.content,
        image_url=request.image_url,
        visibility=request.visibility,
    )
    item = PostResponse.model_validate(post)
    item.author = PublicUserResponse.model_validate(current_user)
    return respond(item, started=started, message="Post created")


@social_router.delete("/posts/{post_id}", response_model=ApiResponse[None])
async def delete_post(
    post_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Delete one of the caller's posts."""
    started = time.perf_counter()
    await social_service.delete_post(session, current_user.id, post_id)
    return respond(started=started, message="Post deleted")


@social_router.get("/messages", response_model=ApiResponse[list[MessageResponse]])
async def list_messages(
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
    limit: int = Query(default=10, ge=1),
) -> ApiResponse:
    """Messages sent or received by the caller, newest first."""
    started = time.perf_counter()
    messages = await social_service.list_messages(session, current_user.id, clamp_limit(limit))
    return respond([MessageResponse.model_validate(m) for m in messages], started=started)


@social_router.post("/messages", response_model=ApiResponse[MessageResponse], status_code=201)
async def send_message(
    request: MessageCreateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Send a direct message."""
    started = time.perf_counter()
    message = await social_service.send_message(
        session,
        current_user.id,
        request.recipient_id,
        content=request.content,
        subject=request.subject,
    )
    return respond(MessageResponse.model_validate(message), started=started, message="Message sent")


@social_router.post("/messages/{message_id}/read", response_model=ApiResponse[MessageResponse])
async def mark_read(
    message_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Mark a message addressed to the caller as read."""
    started = time.perf_counter()
    message = await social_service.mark_message_read(session, current_user.id, message_id)
    return respond(MessageResponse.model_validate(message), started=started)
