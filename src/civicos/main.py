"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
and OpenAPI metadata.
"""

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from civicos import __version__
from civicos.core.config import get_settings
from civicos.core.database import dispose_engine, init_engine
from civicos.core.logging import setup_logging
from civicos.schemas.common import error_body
from civicos.services.friend_service import FriendNotFoundError
from civicos.services.politician_service import PoliticianNotFoundError
from civicos.services.social_service import SocialNotFoundError

NOT_FOUND_ERRORS: tuple[type[LookupError], ...] = (
    PoliticianNotFoundError,
    FriendNotFoundError,
    SocialNotFoundError,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifecycle: init engine on startup, dispose on shutdown."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_dir)
    init_engine(settings.database_url, echo=False)

    refresh_task = None
    if settings.ingestion_refresh_enabled:
        from civicos.services.pipeline_service import ingestion_refresh_loop

        refresh_task = asyncio.create_task(ingestion_refresh_loop(settings.ingestion_refresh_interval))

    yield

    if refresh_task is not None:
        refresh_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await refresh_task

    await dispose_engine()


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    return f"{location}: {first.get('msg', 'invalid value')}" if location else str(first.get("msg", "Invalid request"))


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as the uniform ``{success: false, message, data: null}`` envelope.

    Args:
        app: The FastAPI application.
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content=error_body(_validation_message(exc)))

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content=error_body(str(exc)))

    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=404, content=error_body(str(exc)))

    for error_class in NOT_FOUND_ERRORS:
        app.add_exception_handler(error_class, not_found_handler)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
        return JSONResponse(status_code=500, content=error_body("Internal server error"))


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="CivicOS API",
        description="Canadian civic data: elections, politicians, legal references and a civic social layer",
        version=__version__,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    from civicos.api.router import create_router, setup_middleware

    setup_middleware(app, settings)
    app.include_router(create_router(settings))

    return app
