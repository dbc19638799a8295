"""HTTP client for civic-data sources.

Wraps a single ``httpx.AsyncClient`` with a fixed User-Agent, a
per-request timeout and a fixed-delay retry on transient failures.
No backoff schedule and no circuit breaker: a source that stays down
surfaces as a ``FetchError`` and the caller falls back.
"""

import asyncio
from typing import Any

import httpx
from loguru import logger

from civicos.core.config import DEFAULT_USER_AGENT, Settings


class FetchError(Exception):
    """Raised when a source cannot be fetched."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def _is_retryable_status(status_code: int) -> bool:
    return status_code >= 500


class HtmlFetcher:
    """Fetch pages and JSON documents from government and legislative sites.

    Args:
        timeout: Per-request timeout in seconds.
        retries: Extra attempts after a timeout, transport error or 5xx.
        retry_delay: Fixed delay between attempts in seconds.
        user_agent: User-Agent header sent with every request.
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        timeout: float = 15.0,
        retries: int = 1,
        retry_delay: float = 1.0,
        user_agent: str = DEFAULT_USER_AGENT,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._retries = retries
        self._retry_delay = retry_delay
        self._client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={
                "User-Agent": user_agent,
                "Accept": "text/html,application/xhtml+xml,application/json;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-CA,en;q=0.8",
            },
            transport=transport,
        )

    async def __aenter__(self) -> "HtmlFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _get(self, url: str) -> httpx.Response:
        attempts = self._retries + 1
        last_error: FetchError | None = None

        for attempt in range(1, attempts + 1):
            try:
                logger.debug("Fetching {} (attempt {}/{})", url, attempt, attempts)
                response = await self._client.get(url)
                response.raise_for_status()
                return response
            except httpx.TimeoutException as exc:
                last_error = FetchError(url, f"Timeout fetching {url}")
                last_error.__cause__ = exc
            except httpx.HTTPStatusError as exc:
                status_code = exc.response.status_code
                error = FetchError(url, f"HTTP {status_code} fetching {url}", status_code=status_code)
                if not _is_retryable_status(status_code):
                    logger.warning(str(error))
                    raise error from exc
                last_error = error
                last_error.__cause__ = exc
            except httpx.HTTPError as exc:
                last_error = FetchError(url, f"HTTP error fetching {url}: {exc}")
                last_error.__cause__ = exc

            if attempt < attempts:
                logger.info("{}; retrying in {}s", last_error, self._retry_delay)
                await asyncio.sleep(self._retry_delay)

        assert last_error is not None
        logger.warning(str(last_error))
        raise last_error

    async def fetch_text(self, url: str) -> str:
        """Fetch a URL and return its decoded body.

        Args:
            url: Absolute URL to fetch.

        Returns:
            The response body as text.

        Raises:
            FetchError: On a non-2xx status or after retries are exhausted.
        """
        response = await self._get(url)
        return response.text

    async def fetch_json(self, url: str) -> Any:
        """Fetch a URL and decode its body as JSON.

        Raises:
            FetchError: On a non-2xx status, exhausted retries or invalid JSON.
        """
        response = await self._get(url)
        try:
            return response.json()
        except ValueError as exc:
            msg = f"Invalid JSON response from {url}"
            logger.warning(msg)
            raise FetchError(url, msg, status_code=response.status_code) from exc


def fetcher_from_settings(settings: Settings) -> HtmlFetcher:
    """Build a fetcher configured from the scraper settings."""
    return HtmlFetcher(
        timeout=settings.scraper_timeout,
        retries=settings.scraper_retries,
        retry_delay=settings.scraper_retry_delay,
        user_agent=settings.scraper_user_agent,
    )
