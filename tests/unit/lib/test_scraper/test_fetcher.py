"""Unit tests for the civic-data HTTP fetcher."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from civicos.core.config import DEFAULT_USER_AGENT, Settings
from civicos.lib.scraper.fetcher import FetchError, HtmlFetcher, fetcher_from_settings

URL = "https://www.elections.ca/index.html"


def _fetcher(handler, retries: int = 0) -> HtmlFetcher:
    return HtmlFetcher(retries=retries, retry_delay=0, transport=httpx.MockTransport(handler))


class TestFetchText:
    """Tests for HtmlFetcher.fetch_text()."""

    async def test_returns_body(self) -> None:
        async with _fetcher(lambda request: httpx.Response(200, text="<html>ok</html>")) as fetcher:
            assert await fetcher.fetch_text(URL) == "<html>ok</html>"

    async def test_sends_user_agent(self) -> None:
        seen: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["ua"] = request.headers["User-Agent"]
            return httpx.Response(200, text="")

        async with _fetcher(handler) as fetcher:
            await fetcher.fetch_text(URL)
        assert seen["ua"] == DEFAULT_USER_AGENT

    async def test_404_raises_without_retry(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(404)

        async with _fetcher(handler, retries=2) as fetcher:
            with pytest.raises(FetchError, match="HTTP 404") as exc_info:
                await fetcher.fetch_text(URL)
        assert exc_info.value.status_code == 404
        assert exc_info.value.url == URL
        assert len(calls) == 1

    async def test_5xx_retried_then_succeeds(self) -> None:
        responses = iter([httpx.Response(502), httpx.Response(200, text="recovered")])

        async with _fetcher(lambda request: next(responses), retries=1) as fetcher:
            assert await fetcher.fetch_text(URL) == "recovered"

    async def test_5xx_exhausts_retries(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        async with _fetcher(handler, retries=2) as fetcher:
            with pytest.raises(FetchError, match="HTTP 503"):
                await fetcher.fetch_text(URL)
        assert len(calls) == 3

    async def test_timeout_raises_fetch_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with _fetcher(handler) as fetcher:
            with pytest.raises(FetchError, match="Timeout"):
                await fetcher.fetch_text(URL)

    async def test_transport_error_raises_fetch_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _fetcher(handler) as fetcher:
            with pytest.raises(FetchError, match="HTTP error"):
                await fetcher.fetch_text(URL)

    async def test_retry_waits_fixed_delay(self) -> None:
        responses = iter([httpx.Response(500), httpx.Response(200, text="ok")])
        fetcher = HtmlFetcher(
            retries=1, retry_delay=2.5, transport=httpx.MockTransport(lambda request: next(responses))
        )
        with patch("civicos.lib.scraper.fetcher.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            async with fetcher:
                await fetcher.fetch_text(URL)
        mock_sleep.assert_awaited_once_with(2.5)


class TestFetchJson:
    """Tests for HtmlFetcher.fetch_json()."""

    async def test_decodes_json(self) -> None:
        async with _fetcher(lambda request: httpx.Response(200, json={"Members": []})) as fetcher:
            assert await fetcher.fetch_json(URL) == {"Members": []}

    async def test_invalid_json_raises_fetch_error(self) -> None:
        async with _fetcher(lambda request: httpx.Response(200, text="<html>")) as fetcher:
            with pytest.raises(FetchError, match="Invalid JSON"):
                await fetcher.fetch_json(URL)


class TestFetcherFromSettings:
    def test_uses_scraper_settings(self) -> None:
        settings = Settings(
            database_url="sqlite+aiosqlite:///:memory:",
            jwt_secret_key="test-secret-key-not-for-production",
            scraper_timeout=3.0,
            scraper_retries=4,
            scraper_retry_delay=0.5,
            scraper_user_agent="CivicOS-Test/1.0",
        )
        fetcher = fetcher_from_settings(settings)
        assert fetcher._retries == 4
        assert fetcher._retry_delay == 0.5
        assert fetcher._client.headers["User-Agent"] == "CivicOS-Test/1.0"
        assert fetcher._client.timeout.read == 3.0
