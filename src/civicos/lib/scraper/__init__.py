"""Scraper library — fetch, parse and fall back for civic-data sources.

Public API:
    - HtmlFetcher: httpx-backed fetcher with timeout and fixed-delay retry
    - FetchError: Raised when a source cannot be fetched
    - DataSourceResult: LiveResult | FallbackResult tagged union
    - collect: Run a live loader with a curated fallback
    - scrape_*: Fetch-and-parse functions that never raise
    - parse_*: Pure HTML/JSON parsers
"""

from civicos.lib.scraper.fetcher import FetchError, HtmlFetcher, fetcher_from_settings
from civicos.lib.scraper.parser import (
    classify_district,
    parse_electoral_districts,
    parse_federal_acts,
    parse_federal_elections,
    parse_federal_members,
    parse_member_json,
    parse_provincial_elections,
)
from civicos.lib.scraper.records import (
    CandidateRecord,
    CriminalCodeRecord,
    DistrictRecord,
    ElectionRecord,
    LegalActRecord,
    LegalCaseRecord,
    PoliticianRecord,
    PolicyRecord,
)
from civicos.lib.scraper.scrapers import (
    scrape_electoral_districts,
    scrape_federal_acts,
    scrape_federal_candidates,
    scrape_federal_elections,
    scrape_federal_members,
    scrape_provincial_elections,
)
from civicos.lib.scraper.sources import (
    ELECTION_SOURCES,
    PROVINCIAL_ELECTION_URLS,
    REASON_NO_LIVE_SOURCE,
    REASON_NO_RECORDS,
    DataSourceResult,
    FallbackResult,
    LiveResult,
    SourceInfo,
    collect,
    curated,
)

__all__ = [
    "ELECTION_SOURCES",
    "PROVINCIAL_ELECTION_URLS",
    "REASON_NO_LIVE_SOURCE",
    "REASON_NO_RECORDS",
    "CandidateRecord",
    "CriminalCodeRecord",
    "DataSourceResult",
    "DistrictRecord",
    "ElectionRecord",
    "FallbackResult",
    "FetchError",
    "HtmlFetcher",
    "LegalActRecord",
    "LegalCaseRecord",
    "LiveResult",
    "PoliticianRecord",
    "PolicyRecord",
    "SourceInfo",
    "classify_district",
    "collect",
    "curated",
    "fetcher_from_settings",
    "parse_electoral_districts",
    "parse_federal_acts",
    "parse_federal_elections",
    "parse_federal_members",
    "parse_member_json",
    "parse_provincial_elections",
    "scrape_electoral_districts",
    "scrape_federal_acts",
    "scrape_federal_candidates",
    "scrape_federal_elections",
    "scrape_federal_members",
    "scrape_provincial_elections",
]
