"""Fetch-and-parse entry points for each civic-data source.

``load_*`` functions propagate ``FetchError`` so callers can tell an
unreachable source from an empty one (see ``sources.collect``).
``scrape_*`` functions wrap them and never raise: any failure is logged
and yields an empty list.
"""

from collections.abc import Awaitable, Callable
from datetime import date
from typing import TypeVar

from loguru import logger

from civicos.lib.scraper.fetcher import FetchError, HtmlFetcher
from civicos.lib.scraper.parser import (
    parse_electoral_districts,
    parse_federal_acts,
    parse_federal_elections,
    parse_federal_members,
    parse_member_json,
    parse_provincial_elections,
)
from civicos.lib.scraper.records import (
    CandidateRecord,
    DistrictRecord,
    ElectionRecord,
    LegalActRecord,
    PoliticianRecord,
)
from civicos.lib.scraper.samples import provincial_election_date
from civicos.lib.scraper.sources import (
    ELECTORAL_DISTRICTS_URL,
    FEDERAL_ACTS_URL,
    FEDERAL_ELECTIONS_URL,
    FEDERAL_MEMBERS_JSON_URL,
    FEDERAL_MEMBERS_URL,
    PROVINCE_NAMES,
    PROVINCIAL_ELECTION_URLS,
)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Loaders (raise FetchError)
# ---------------------------------------------------------------------------


async def load_federal_elections(fetcher: HtmlFetcher, today: date | None = None) -> list[ElectionRecord]:
    """Fetch and parse the Elections Canada index."""
    html = await fetcher.fetch_text(FEDERAL_ELECTIONS_URL)
    return parse_federal_elections(html, today or date.today())


async def load_federal_members(fetcher: HtmlFetcher) -> list[PoliticianRecord]:
    """Fetch sitting MPs, trying the JSON feed before the HTML member search.

    Raises:
        FetchError: When both the JSON feed and the HTML page are unreachable.
    """
    try:
        members = parse_member_json(await fetcher.fetch_json(FEDERAL_MEMBERS_JSON_URL))
    except FetchError as e:
        logger.info("Member JSON feed unavailable ({}); trying HTML member search", e)
        members = []
    if members:
        return members

    html = await fetcher.fetch_text(FEDERAL_MEMBERS_URL)
    return parse_federal_members(html)


async def load_provincial_elections(fetcher: HtmlFetcher, province: str) -> list[ElectionRecord]:
    """Fetch and parse one provincial election agency page.

    Raises:
        ValueError: If ``province`` has no configured source.
        FetchError: If the page cannot be fetched.
    """
    url = PROVINCIAL_ELECTION_URLS.get(province)
    if url is None:
        msg = f"No election source configured for province '{province}'"
        raise ValueError(msg)
    election_date = provincial_election_date(PROVINCE_NAMES[province])
    if election_date is None:
        return []
    html = await fetcher.fetch_text(url)
    return parse_provincial_elections(html, province, election_date)


async def load_electoral_districts(fetcher: HtmlFetcher) -> list[DistrictRecord]:
    """Fetch and parse the Elections Canada district finder."""
    html = await fetcher.fetch_text(ELECTORAL_DISTRICTS_URL)
    return parse_electoral_districts(html)


async def load_federal_acts(fetcher: HtmlFetcher) -> list[LegalActRecord]:
    """Fetch and parse the Justice Laws alphabetical act index."""
    html = await fetcher.fetch_text(FEDERAL_ACTS_URL)
    return parse_federal_acts(html)


# ---------------------------------------------------------------------------
# Scrapers (never raise)
# ---------------------------------------------------------------------------


async def _safely(label: str, load: Callable[[], Awaitable[list[T]]]) -> list[T]:
    try:
        records = await load()
    except FetchError as e:
        logger.error("Error scraping {}: {}", label, e)
        return []
    except Exception:
        logger.exception("Unexpected error scraping {}", label)
        return []
    logger.info("Scraped {} {} records", len(records), label)
    return records


async def scrape_federal_elections(fetcher: HtmlFetcher, today: date | None = None) -> list[ElectionRecord]:
    """Scrape federal elections; empty on any failure."""
    return await _safely("federal elections", lambda: load_federal_elections(fetcher, today))


async def scrape_federal_members(fetcher: HtmlFetcher) -> list[PoliticianRecord]:
    """Scrape sitting MPs; empty on any failure."""
    return await _safely("federal members", lambda: load_federal_members(fetcher))


async def scrape_federal_candidates(fetcher: HtmlFetcher) -> list[CandidateRecord]:
    """Scrape sitting MPs as incumbent candidates in their ridings."""
    members = await scrape_federal_members(fetcher)
    return [
        CandidateRecord(
            name=member.name,
            constituency=member.riding or "",
            party=member.party,
            occupation="Member of Parliament",
            is_incumbent=True,
        )
        for member in members
        if member.riding
    ]


async def scrape_provincial_elections(fetcher: HtmlFetcher, province: str) -> list[ElectionRecord]:
    """Scrape one provincial election source; empty on any failure."""
    return await _safely(f"{province} provincial elections", lambda: load_provincial_elections(fetcher, province))


async def scrape_electoral_districts(fetcher: HtmlFetcher) -> list[DistrictRecord]:
    """Scrape electoral districts; empty on any failure."""
    return await _safely("electoral districts", lambda: load_electoral_districts(fetcher))


async def scrape_federal_acts(fetcher: HtmlFetcher) -> list[LegalActRecord]:
    """Scrape the federal act index; empty on any failure."""
    return await _safely("federal acts", lambda: load_federal_acts(fetcher))
