"""Root API router under the configured prefix, and middleware registration."""

from fastapi import APIRouter, FastAPI

from civicos.api.middleware import RateLimitMiddleware, SecurityHeadersMiddleware, setup_cors
from civicos.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with all sub-routers included.

    Args:
        settings: Application settings.

    Returns:
        Configured API router.
    """
    from civicos.api.v1.auth import router as auth_router
    from civicos.api.v1.elections import elections_router
    from civicos.api.v1.friends import friends_router
    from civicos.api.v1.legal import legal_router
    from civicos.api.v1.politicians import politicians_router
    from civicos.api.v1.social import social_router

    root_router = APIRouter(prefix=settings.api_prefix)
    root_router.include_router(auth_router)
    root_router.include_router(politicians_router)
    root_router.include_router(elections_router)
    root_router.include_router(legal_router)
    root_router.include_router(friends_router)
    root_router.include_router(social_router)

    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    setup_cors(app, settings)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_minute=settings.rate_limit_per_minute,
        trusted_proxy_headers=settings.trusted_proxy_header_list,
    )
