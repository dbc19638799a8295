"""Common Pydantic v2 schemas shared across the API.

Provides the response envelope, pagination metadata and the camelCase
base model used by every response schema.
"""

import math
import time
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100
MAX_PAGE = 10_000


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys and populated by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PaginationMeta(CamelModel):
    """Pagination metadata included in paginated responses."""

    page: int = Field(description="Current page number")
    limit: int = Field(description="Items per page")
    total: int = Field(description="Total number of items matching the filters")
    total_pages: int = Field(description="Total number of pages")
    has_next: bool
    has_prev: bool


class ApiResponse(CamelModel, Generic[T]):
    """Uniform response envelope."""

    success: bool = True
    message: str = ""
    data: T | None = None
    pagination: PaginationMeta | None = None
    processing_time: float = Field(default=0.0, description="Handler time in milliseconds")


def clamp_limit(limit: int | None, default: int = DEFAULT_PAGE_LIMIT) -> int:
    """Clamp a requested page size to 1..100."""
    if limit is None:
        return default
    return max(1, min(MAX_PAGE_LIMIT, limit))


def build_pagination(page: int, limit: int, total: int) -> PaginationMeta:
    """Compute pagination metadata for a filtered result set.

    Args:
        page: 1-based page number.
        limit: Page size (already clamped).
        total: Number of rows matching the filters.

    Returns:
        Pagination metadata with ``totalPages = ceil(total / limit)``.
    """
    total_pages = math.ceil(total / limit) if limit else 0
    return PaginationMeta(
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )


def elapsed_ms(started: float) -> float:
    """Milliseconds since a ``time.perf_counter()`` reading."""
    return round((time.perf_counter() - started) * 1000, 2)


def respond(
    data: Any = None,
    *,
    started: float,
    message: str = "",
    pagination: PaginationMeta | None = None,
) -> ApiResponse:
    """Wrap a handler result in the success envelope."""
    return ApiResponse(
        success=True,
        message=message,
        data=data,
        pagination=pagination,
        processing_time=elapsed_ms(started),
    )


def error_body(message: str, processing_time: float = 0.0) -> dict[str, Any]:
    """JSON body of an error envelope."""
    return ApiResponse(success=False, message=message, data=None, processing_time=processing_time).model_dump(
        by_alias=True, exclude_none=False
    )
