"""Election API endpoints.

GET /elections, GET /elections/by-location, POST /elections/ingest,
GET /elections/districts/list, GET /elections/{id}.
"""

import time
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from civicos.core.dependencies import (
    get_async_session,
    get_fetcher,
    get_ingestion_session_factory,
    require_permission,
)
from civicos.core.security import PERMISSION_DATA_MANAGE, TokenClaims
from civicos.lib.scraper.fetcher import HtmlFetcher
from civicos.schemas.common import MAX_PAGE, ApiResponse, build_pagination, clamp_limit, respond
from civicos.schemas.election import (
    DistrictResponse,
    ElectionDetailResponse,
    ElectionResponse,
    ElectionsByLocationResponse,
)
from civicos.schemas.ingestion import IngestionReport
from civicos.services import election_service
from civicos.services.election_ingestion_service import ingest_all_elections

elections_router = APIRouter(prefix="/elections", tags=["elections"])


@elections_router.get("", response_model=ApiResponse[list[ElectionResponse]])
async def list_elections(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    election_type: str | None = Query(default=None, alias="type", description="Filter by type"),
    status: str | None = Query(default=None, description="Filter by status"),
    jurisdiction: str | None = Query(default=None, description="Filter by jurisdiction (partial match)"),
    page: int = Query(default=1, ge=1, le=MAX_PAGE, description="Page number"),
    limit: int = Query(default=20, ge=1, description="Results per page (at most 100)"),
) -> ApiResponse:
    """List elections, newest date first. Public endpoint."""
    started = time.perf_counter()
    limit = clamp_limit(limit)
    items, total = await election_service.list_elections(
        session,
        election_type=election_type,
        status=status,
        jurisdiction=jurisdiction,
        page=page,
        limit=limit,
    )
    return respond(
        [ElectionResponse.model_validate(e) for e in items],
        started=started,
        pagination=build_pagination(page, limit, total),
    )


@elections_router.get("/by-location", response_model=ApiResponse[ElectionsByLocationResponse])
async def elections_by_location(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    location: str | None = Query(default=None, description="Jurisdiction or title to match"),
) -> ApiResponse:
    """Upcoming and recent elections for a location."""
    started = time.perf_counter()
    found = await election_service.get_elections_by_location(session, location)
    return respond(ElectionsByLocationResponse.model_validate(found), started=started)


@elections_router.post("/ingest", response_model=ApiResponse[IngestionReport])
async def ingest_elections(
    _claims: Annotated[TokenClaims, Depends(require_permission(PERMISSION_DATA_MANAGE))],
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_ingestion_session_factory)],
    fetcher: Annotated[HtmlFetcher, Depends(get_fetcher)],
) -> ApiResponse:
    """Run federal, provincial and municipal election ingestion (admin.data.manage)."""
    started = time.perf_counter()
    report = await ingest_all_elections(session_factory, fetcher)
    return respond(report, started=started, message="Election ingestion finished")


@elections_router.get("/districts/list", response_model=ApiResponse[list[DistrictResponse]])
async def list_districts(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    province: str | None = Query(default=None, description="Filter by province"),
) -> ApiResponse:
    """Electoral districts ordered by name."""
    started = time.perf_counter()
    districts = await election_service.list_districts(session, province)
    return respond([DistrictResponse.model_validate(d) for d in districts], started=started)


@elections_router.get("/{election_id}", response_model=ApiResponse[ElectionDetailResponse])
async def get_election(
    election_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Election detail with candidates and their policies."""
    started = time.perf_counter()
    election = await election_service.get_election(session, election_id)
    if election is None:
        raise HTTPException(status_code=404, detail="Election not found")
    return respond(ElectionDetailResponse.model_validate(election), started=started)
