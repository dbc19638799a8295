"""HTTP middleware: CORS, security headers and per-client rate limiting."""

import time
from collections import defaultdict, deque

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from civicos.core.config import Settings
from civicos.schemas.common import error_body

DEFAULT_PROXY_HEADERS: tuple[str, ...] = ("CF-Connecting-IP", "X-Forwarded-For", "X-Real-IP")

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}

RATE_WINDOW_SECONDS = 60.0


def get_client_ip(request: Request, trusted_headers: list[str] | None = None) -> str:
    """Best guess at the caller's address.

    The first non-empty trusted proxy header wins; for ``X-Forwarded-For``
    the leftmost hop is the original client. Without a usable header the
    socket peer is used, and "unknown" when even that is missing.
    """
    for header in DEFAULT_PROXY_HEADERS if trusted_headers is None else trusted_headers:
        value = request.headers.get(header, "").strip()
        if value:
            return value.split(",", 1)[0].strip() if header.lower() == "x-forwarded-for" else value
    return request.client.host if request.client else "unknown"


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Allow the configured origin list and/or origin regex."""
    origin_regex = settings.cors_origin_regex.strip() or None
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_origin_regex=origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp ``SECURITY_HEADERS`` on every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding one-minute request budget per client address, kept in process memory.

    Requests over budget are answered with a 429 failure envelope and do not
    count against the window.
    """

    def __init__(
        self,
        app: ASGIApp,
        requests_per_minute: int = 200,
        trusted_proxy_headers: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.trusted_proxy_headers = trusted_proxy_headers
        self._hits: defaultdict[str, deque[float]] = defaultdict(deque)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        now = time.monotonic()
        hits = self._hits[get_client_ip(request, self.trusted_proxy_headers)]
        while hits and hits[0] <= now - RATE_WINDOW_SECONDS:
            hits.popleft()

        if len(hits) >= self.requests_per_minute:
            return JSONResponse(status_code=429, content=error_body("Rate limit exceeded"))

        hits.append(now)
        return await call_next(request)
