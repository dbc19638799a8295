"""Source registry and the live-versus-fallback result type.

Every ingestion source resolves to a ``DataSourceResult``: either the
records that were actually scraped (``LiveResult``) or the curated
records substituted for them together with the reason (``FallbackResult``).
Callers and logs can always tell the two apart.
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Generic, Literal, TypeVar

from loguru import logger

from civicos.lib.scraper.fetcher import FetchError

T = TypeVar("T")

REASON_NO_RECORDS = "no records parsed"
REASON_NO_LIVE_SOURCE = "no live source configured"


@dataclass(frozen=True)
class SourceInfo:
    """A named external source."""

    name: str
    url: str
    level: str
    jurisdiction: str


@dataclass(frozen=True)
class LiveResult(Generic[T]):
    """Records scraped from the live source."""

    source: str
    records: Sequence[T] = field(default_factory=tuple)
    kind: Literal["live"] = "live"


@dataclass(frozen=True)
class FallbackResult(Generic[T]):
    """Curated records substituted because the live source yielded nothing."""

    source: str
    reason: str
    records: Sequence[T] = field(default_factory=tuple)
    kind: Literal["fallback"] = "fallback"


DataSourceResult = LiveResult[T] | FallbackResult[T]


# ---------------------------------------------------------------------------
# Source URLs
# ---------------------------------------------------------------------------

FEDERAL_ELECTIONS_URL = "https://www.elections.ca/content.aspx?section=ele&dir=pas&document=index&lang=e"
FEDERAL_MEMBERS_URL = "https://www.ourcommons.ca/Members/en/search"
FEDERAL_MEMBERS_JSON_URL = "https://www.ourcommons.ca/members/en/search?output=JSON"
ELECTORAL_DISTRICTS_URL = "https://www.elections.ca/Scripts/vis/FindED?L=e&QID=-1&PAGEID=20"
FEDERAL_ACTS_URL = "https://laws-lois.justice.gc.ca/eng/acts/"

PROVINCIAL_ELECTION_URLS: dict[str, str] = {
    "ontario": "https://www.elections.on.ca/",
    "quebec": "https://www.electionsquebec.qc.ca/english/",
    "bc": "https://elections.bc.ca/",
    "alberta": "https://www.elections.ab.ca/",
}

PROVINCE_NAMES: dict[str, str] = {
    "ontario": "Ontario",
    "quebec": "Quebec",
    "bc": "British Columbia",
    "alberta": "Alberta",
}

ELECTION_SOURCES: tuple[SourceInfo, ...] = (
    SourceInfo("Elections Canada", "https://www.elections.ca", "federal", "Canada"),
    SourceInfo("Elections Ontario", "https://www.elections.on.ca", "provincial", "Ontario"),
    SourceInfo("Elections BC", "https://elections.bc.ca", "provincial", "British Columbia"),
    SourceInfo("Elections Alberta", "https://www.elections.ab.ca", "provincial", "Alberta"),
    SourceInfo("Élections Québec", "https://www.electionsquebec.qc.ca", "provincial", "Quebec"),
    SourceInfo(
        "Toronto Elections",
        "https://www.toronto.ca/city-government/elections",
        "municipal",
        "Toronto, Ontario",
    ),
    SourceInfo(
        "Vancouver Elections",
        "https://vancouver.ca/your-government/elections",
        "municipal",
        "Vancouver, British Columbia",
    ),
    SourceInfo("Montreal Elections", "https://montreal.ca/en/elections", "municipal", "Montreal, Quebec"),
)


def next_federal_election_year(today: date) -> int:
    """Return the next year divisible by four, counting ``today.year`` itself."""
    remainder = today.year % 4
    return today.year if remainder == 0 else today.year + (4 - remainder)


async def collect(
    source: str,
    load: Callable[[], Awaitable[Sequence[T]]],
    fallback: Callable[[], Sequence[T]],
) -> DataSourceResult[T]:
    """Run a live loader and fall back to curated records when it yields nothing.

    Args:
        source: Source name used in logs and reports.
        load: Coroutine factory that fetches and parses the live source.
        fallback: Factory for the curated records.

    Returns:
        ``LiveResult`` with the scraped records, or ``FallbackResult`` with
        the curated records and the reason the live source was not used.
    """
    try:
        records = await load()
    except FetchError as e:
        reason = f"source unreachable: {e}"
        logger.warning("{}: falling back to curated records ({})", source, reason)
        return FallbackResult(source=source, reason=reason, records=tuple(fallback()))

    if not records:
        logger.warning("{}: falling back to curated records ({})", source, REASON_NO_RECORDS)
        return FallbackResult(source=source, reason=REASON_NO_RECORDS, records=tuple(fallback()))

    logger.info("{}: {} live records", source, len(records))
    return LiveResult(source=source, records=tuple(records))


def curated(source: str, records: Sequence[T]) -> FallbackResult[T]:
    """Result for a source that has no live scraper."""
    return FallbackResult(source=source, reason=REASON_NO_LIVE_SOURCE, records=tuple(records))
