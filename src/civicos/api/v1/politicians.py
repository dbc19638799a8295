"""Politician API endpoints.

GET /politicians, GET /politicians/search, GET /politicians/stats,
POST /politicians/ingest, GET /politicians/{id}, PUT /politicians/{id},
GET /politicians/{id}/statements, POST /politicians/{id}/statements.
"""

import time
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from civicos.core.dependencies import (
    get_async_session,
    get_current_user,
    get_fetcher,
    get_ingestion_session_factory,
    require_permission,
)
from civicos.core.security import PERMISSION_DATA_MANAGE, TokenClaims
from civicos.lib.scraper.fetcher import HtmlFetcher
from civicos.models.user import User
from civicos.schemas.common import MAX_PAGE, ApiResponse, build_pagination, clamp_limit, respond
from civicos.schemas.ingestion import IngestionReport
from civicos.schemas.politician import (
    PoliticianDetailResponse,
    PoliticianResponse,
    PoliticianStatsResponse,
    PoliticianUpdateRequest,
    StatementCreateRequest,
    StatementResponse,
)
from civicos.services import politician_service
from civicos.services.politician_ingestion_service import ingest_all_politicians

politicians_router = APIRouter(prefix="/politicians", tags=["politicians"])


@politicians_router.get("", response_model=ApiResponse[list[PoliticianResponse]])
async def list_politicians(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    level: str | None = Query(default=None, description="federal, provincial or municipal"),
    jurisdiction: str | None = Query(default=None, description="Exact jurisdiction"),
    party: str | None = Query(default=None, description="Exact party"),
    search: str | None = Query(default=None, description="Match on name, position or riding"),
    location: str | None = Query(default=None, description="Match on jurisdiction, riding or name"),
    page: int = Query(default=1, ge=1, le=MAX_PAGE, description="Page number"),
    limit: int = Query(default=20, ge=1, description="Results per page (at most 100)"),
) -> ApiResponse:
    """List politicians with filters and pagination. Public endpoint."""
    started = time.perf_counter()
    limit = clamp_limit(limit)
    items, total = await politician_service.list_politicians(
        session,
        level=level,
        jurisdiction=jurisdiction,
        party=party,
        search=search,
        location=location,
        page=page,
        limit=limit,
    )
    return respond(
        [PoliticianResponse.model_validate(p) for p in items],
        started=started,
        pagination=build_pagination(page, limit, total),
    )


@politicians_router.get("/search", response_model=ApiResponse[list[PoliticianResponse]])
async def search_politicians(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    q: str | None = Query(default=None, description="Search text"),
    limit: int = Query(default=20, ge=1, description="Maximum results (at most 100)"),
) -> ApiResponse:
    """Search politicians by name, position, riding or party."""
    started = time.perf_counter()
    items = await politician_service.search_politicians(session, q or "", clamp_limit(limit))
    return respond([PoliticianResponse.model_validate(p) for p in items], started=started)


@politicians_router.get("/stats", response_model=ApiResponse[PoliticianStatsResponse])
async def politician_stats(
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Totals by level and party and the average trust score."""
    started = time.perf_counter()
    stats = await politician_service.get_politician_stats(session)
    return respond(PoliticianStatsResponse(**stats), started=started)


@politicians_router.post("/ingest", response_model=ApiResponse[IngestionReport])
async def ingest_politicians(
    _claims: Annotated[TokenClaims, Depends(require_permission(PERMISSION_DATA_MANAGE))],
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_ingestion_session_factory)],
    fetcher: Annotated[HtmlFetcher, Depends(get_fetcher)],
) -> ApiResponse:
    """Run politician ingestion and trust scoring synchronously (admin.data.manage)."""
    started = time.perf_counter()
    report = await ingest_all_politicians(session_factory, fetcher)
    return respond(report, started=started, message="Politician ingestion finished")


@politicians_router.get("/{politician_id}", response_model=ApiResponse[PoliticianDetailResponse])
async def get_politician(
    politician_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Politician detail with activity counts, finance, truth tracking and Commons directory entry."""
    started = time.perf_counter()
    detail = await politician_service.get_politician_detail(session, politician_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="Politician not found")

    base = PoliticianResponse.model_validate(detail["politician"]).model_dump()
    data = PoliticianDetailResponse.model_validate(
        {
            **base,
            "stats": detail["stats"],
            "campaign_finance": detail["campaign_finance"],
            "truth_tracking": detail["truth_tracking"],
            "parliament_member": detail["parliament_member"],
        }
    )
    return respond(data, started=started)


@politicians_router.put("/{politician_id}", response_model=ApiResponse[PoliticianResponse])
async def update_politician(
    politician_id: uuid.UUID,
    request: PoliticianUpdateRequest,
    _claims: Annotated[TokenClaims, Depends(require_permission(PERMISSION_DATA_MANAGE))],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Partially update a politician's descriptive fields (admin.data.manage)."""
    started = time.perf_counter()
    politician = await politician_service.get_politician(session, politician_id)
    if politician is None:
        raise HTTPException(status_code=404, detail="Politician not found")
    updated = await politician_service.update_politician(session, politician, request.model_dump(exclude_unset=True))
    return respond(PoliticianResponse.model_validate(updated), started=started, message="Politician updated")


@politicians_router.get("/{politician_id}/statements", response_model=ApiResponse[list[StatementResponse]])
async def list_statements(
    politician_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    limit: int = Query(default=20, ge=1),
    offset: int = Query(default=0, ge=0),
) -> ApiResponse:
    """Statements attributed to a politician, newest first."""
    started = time.perf_counter()
    items = await politician_service.list_statements(session, politician_id, limit=clamp_limit(limit), offset=offset)
    return respond([StatementResponse.model_validate(s) for s in items], started=started)


@politicians_router.post(
    "/{politician_id}/statements",
    response_model=ApiResponse[StatementResponse],
    status_code=201,
)
async def add_statement(
    politician_id: uuid.UUID,
    request: StatementCreateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Record a statement for a politician (any authenticated user)."""
    started = time.perf_counter()
    statement = await politician_service.add_statement(
        session,
        politician_id,
        statement=request.statement,
        context=request.context,
        source=request.source,
        submitted_by_id=current_user.id,
    )
    return respond(StatementResponse.model_validate(statement), started=started, message="Statement recorded")
