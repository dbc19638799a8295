"""HTML and JSON parsing for civic-data sources.

Pure functions: markup in, record dataclasses out.  Selectors mirror the
markup of the public Elections Canada, House of Commons, provincial
election agency and Justice Laws pages.  Fields that cannot be found are
left empty; an unexpected page layout shows up as an empty result.
"""

import re
from datetime import date, timedelta
from typing import Any
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from civicos.lib.scraper.records import DistrictRecord, ElectionRecord, LegalActRecord, PoliticianRecord
from civicos.lib.scraper.sources import (
    FEDERAL_ACTS_URL,
    PROVINCE_NAMES,
    PROVINCIAL_ELECTION_URLS,
    next_federal_election_year,
)

_ELECTION_ROW_SELECTOR = ".election-info, .election-table tr, .content-list li"
_BY_ELECTION_SELECTOR = ".by-election, .byelection"
_MEMBER_TILE_SELECTOR = ".mp-tile, .member-card, .mp-info"
_PROVINCIAL_ELECTION_SELECTOR = ".upcoming-election, .next-election, .election-info"
_DISTRICT_SELECTOR = ".district, .electoral-district, .riding"

_URBAN_MARKERS = ("toronto", "vancouver", "montreal")
_RURAL_MARKERS = ("rural", "county")

BY_ELECTION_LEAD_DAYS = 90

_ACT_HREF = re.compile(r"(?:^|/eng/acts/)([A-Z][\w.-]*)/(?:index\.html)?$")


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def _text(node: Tag | None) -> str:
    if node is None:
        return ""
    return node.get_text(" ", strip=True)


def _first_line(node: Tag) -> str:
    for line in node.get_text("\n").splitlines():
        if line.strip():
            return " ".join(line.split())
    return ""


def classify_district(name: str) -> tuple[bool, bool]:
    """Classify a district name as (is_urban, is_rural) by keyword."""
    lowered = name.lower()
    is_urban = any(marker in lowered for marker in _URBAN_MARKERS)
    is_rural = any(marker in lowered for marker in _RURAL_MARKERS)
    return is_urban, is_rural


def parse_federal_elections(html: str, today: date) -> list[ElectionRecord]:
    """Extract federal general elections and by-elections from the Elections Canada index.

    Args:
        html: Page markup.
        today: Reference date for computing scheduled dates.

    Returns:
        Election records, de-duplicated by title.
    """
    soup = _soup(html)
    election_date = date(next_federal_election_year(today), 10, 20)
    by_election_date = today + timedelta(days=BY_ELECTION_LEAD_DAYS)
    records: dict[str, ElectionRecord] = {}

    for element in soup.select(_ELECTION_ROW_SELECTOR):
        text = _text(element).lower()
        if "election" not in text and "referendum" not in text:
            continue
        title = _first_line(element) or "Federal Election"
        records.setdefault(
            title,
            ElectionRecord(
                election_type="federal",
                jurisdiction="Canada",
                title=title,
                election_date=election_date,
                status="upcoming",
                source_name="Elections Canada",
                source_url="https://www.elections.ca",
            ),
        )

    for element in soup.select(_BY_ELECTION_SELECTOR):
        riding = _text(element.select_one(".constituency, .riding"))
        if not riding:
            continue
        title = f"{riding} By-Election"
        records.setdefault(
            title,
            ElectionRecord(
                election_type="by-election",
                jurisdiction="Canada",
                title=title,
                election_date=by_election_date,
                status="upcoming",
                source_name="Elections Canada",
                source_url="https://www.elections.ca",
            ),
        )

    return list(records.values())


def _member_id_from_href(href: str | None) -> str | None:
    if not href:
        return None
    segments = [s for s in urlparse(href).path.split("/") if s]
    return segments[-1] if segments else None


def parse_federal_members(html: str) -> list[PoliticianRecord]:
    """Extract sitting MPs from the House of Commons member search page."""
    soup = _soup(html)
    members: list[PoliticianRecord] = []
    seen: set[tuple[str, str]] = set()

    for tile in soup.select(_MEMBER_TILE_SELECTOR):
        name = _text(tile.select_one(".mp-name, .member-name, h3, h4"))
        riding = _text(tile.select_one(".constituency, .riding, .electoral-district"))
        if not name or not riding or (name, riding) in seen:
            continue
        seen.add((name, riding))
        party = _text(tile.select_one(".party, .political-affiliation")) or None
        link = tile.select_one("a[href]")
        image = tile.select_one("img[src]")
        members.append(
            _federal_member(
                name=name,
                riding=riding,
                party=party,
                member_id=_member_id_from_href(link.get("href") if link else None),
                image_url=image.get("src") if image else None,
            )
        )

    return members


def _federal_member(
    *,
    name: str,
    riding: str,
    party: str | None,
    member_id: str | None,
    image_url: str | None = None,
) -> PoliticianRecord:
    return PoliticianRecord(
        name=name,
        level="federal",
        jurisdiction="Canada",
        party=party or "Independent",
        position="Member of Parliament",
        riding=riding,
        image_url=image_url,
        civic_level="Federal Representative",
        recent_activity="Active in Parliament",
        bio="Member of Parliament representing constituents.",
        policy_positions=["Democracy", "Transparency", "Public Service"],
        key_achievements=["Elected to Parliament", "Serving constituents"],
        is_incumbent=True,
        parliament_member_id=member_id,
    )


def parse_member_json(payload: Any) -> list[PoliticianRecord]:
    """Extract sitting MPs from the House of Commons JSON member search.

    The feed has used several field spellings over time; each field is
    read from the first alias present.
    """
    if not isinstance(payload, dict):
        return []
    items = payload.get("Members") or []
    members: list[PoliticianRecord] = []

    for item in items:
        if not isinstance(item, dict):
            continue
        name = (
            item.get("Name")
            or item.get("EnglishName")
            or f"{item.get('FirstName') or ''} {item.get('LastName') or ''}".strip()
        )
        riding = item.get("ConstituencyName") or item.get("Riding") or item.get("EnglishConstituency")
        party = item.get("Party") or item.get("CaucusShortName") or item.get("PartyShortName")
        member_id = item.get("PersonId") or item.get("MemberId") or item.get("Id")
        if not name or not riding:
            continue
        members.append(
            _federal_member(
                name=str(name).strip(),
                riding=str(riding).strip(),
                party=str(party).strip() if party else None,
                member_id=str(member_id) if member_id is not None else None,
            )
        )

    return members


def parse_provincial_elections(html: str, province: str, election_date: date) -> list[ElectionRecord]:
    """Extract the next general election announced on a provincial agency page.

    Args:
        html: Page markup.
        province: Province key from ``PROVINCIAL_ELECTION_URLS``.
        election_date: Scheduled date of the province's next general election.

    Returns:
        At most one election record for the province.
    """
    soup = _soup(html)
    province_name = PROVINCE_NAMES.get(province, province.title())

    for element in soup.select(_PROVINCIAL_ELECTION_SELECTOR):
        if "election" not in _text(element).lower():
            continue
        return [
            ElectionRecord(
                election_type="provincial",
                jurisdiction=province_name,
                title=f"{province_name} Provincial Election",
                election_date=election_date,
                status="upcoming",
                description=_first_line(element) or None,
                source_name=f"Elections {province_name}",
                source_url=PROVINCIAL_ELECTION_URLS.get(province),
            )
        ]
    return []


def parse_electoral_districts(html: str) -> list[DistrictRecord]:
    """Extract electoral district names and provinces from the district finder."""
    soup = _soup(html)
    districts: dict[tuple[str, str], DistrictRecord] = {}

    for element in soup.select(_DISTRICT_SELECTOR):
        name = _text(element.select_one(".district-name, .name"))
        if not name:
            continue
        province = _text(element.select_one(".province, .prov"))
        is_urban, is_rural = classify_district(name)
        districts.setdefault(
            (name, province),
            DistrictRecord(district_name=name, province=province, is_urban=is_urban, is_rural=is_rural),
        )

    return list(districts.values())


def parse_federal_acts(html: str) -> list[LegalActRecord]:
    """Extract consolidated federal act titles from the Justice Laws index.

    Act links look like ``A-1/index.html`` (relative) or
    ``/eng/acts/C-46/index.html``; the path segment is the act's
    consolidation number.
    """
    soup = _soup(html)
    acts: dict[str, LegalActRecord] = {}

    for link in soup.select("a[href]"):
        href = str(link.get("href") or "")
        match = _ACT_HREF.search(href)
        title = _text(link)
        if match is None or not title:
            continue
        acts.setdefault(
            title,
            LegalActRecord(
                title=title,
                jurisdiction="federal",
                act_number=match.group(1),
                source="Justice Laws Website",
                source_url=urljoin(FEDERAL_ACTS_URL, href),
            ),
        )

    return list(acts.values())
