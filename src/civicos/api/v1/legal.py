"""Legal reference API endpoints.

GET /legal, GET /legal/search, GET /legal/acts,
GET /legal/criminal-code, GET /legal/stats.
"""

import time
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from civicos.core.dependencies import get_async_session, get_fetcher_factory
from civicos.lib.scraper.fetcher import HtmlFetcher
from civicos.schemas.common import ApiResponse, respond
from civicos.schemas.legal import (
    CriminalCodeSectionResponse,
    LegalActResponse,
    LegalCaseResponse,
    LegalOverviewResponse,
    LegalSearchHit,
    LegalSearchResponse,
    LegalStatsResponse,
)
from civicos.services import legal_service

legal_router = APIRouter(prefix="/legal", tags=["legal"])


@legal_router.get("", response_model=ApiResponse[LegalOverviewResponse])
async def list_legal(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    fetcher_factory: Annotated[Callable[[], HtmlFetcher], Depends(get_fetcher_factory)],
) -> ApiResponse:
    """Stored acts and cases; acts are ingested on demand when none are stored."""
    started = time.perf_counter()
    acts, cases = await legal_service.list_acts_and_cases(session, fetcher_factory)
    data = LegalOverviewResponse(
        acts=[LegalActResponse.model_validate(a) for a in acts],
        cases=[LegalCaseResponse.model_validate(c) for c in cases],
    )
    return respond(data, started=started)


@legal_router.get("/search", response_model=ApiResponse[LegalSearchResponse])
async def search_legal(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    q: str = Query(default="", description="Search text"),
) -> ApiResponse:
    """Search acts and cases. A blank query returns no results."""
    started = time.perf_counter()
    hits = await legal_service.search_legal(session, q)
    data = LegalSearchResponse(
        query=q,
        total_results=len(hits),
        results=[LegalSearchHit.model_validate(hit) for hit in hits],
    )
    return respond(data, started=started)


@legal_router.get("/acts", response_model=ApiResponse[list[LegalActResponse]])
async def list_acts(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    search: str | None = Query(default=None, description="Match on title or summary"),
    category: str | None = Query(default=None, description="Category, or 'all'"),
) -> ApiResponse:
    """Stored acts filtered by text and category."""
    started = time.perf_counter()
    acts = await legal_service.list_acts(session, search, category)
    return respond([LegalActResponse.model_validate(a) for a in acts], started=started)


@legal_router.get("/criminal-code", response_model=ApiResponse[list[CriminalCodeSectionResponse]])
async def list_criminal_code(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    search: str | None = Query(default=None, description="Match on title, summary or section number"),
) -> ApiResponse:
    """Criminal Code sections, seeded from the curated list on first use."""
    started = time.perf_counter()
    sections = await legal_service.list_criminal_code(session, search)
    return respond([CriminalCodeSectionResponse.model_validate(s) for s in sections], started=started)


@legal_router.get("/stats", response_model=ApiResponse[LegalStatsResponse])
async def legal_stats(
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Row counts of the legal reference tables."""
    started = time.perf_counter()
    return respond(LegalStatsResponse(**await legal_service.legal_stats(session)), started=started)
