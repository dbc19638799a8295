"""Intermediate record dataclasses produced by the parse layer.

Field names match the ORM column names so the service layer can persist a
record with ``dataclasses.asdict``.  Database operations live in the
service layer.
"""

from dataclasses import dataclass, field
from datetime import date


@dataclass
class ElectionRecord:
    """A scraped or curated election."""

    election_type: str
    jurisdiction: str
    title: str
    election_date: date
    status: str = "upcoming"
    description: str | None = None
    source_name: str | None = None
    source_url: str | None = None
    registration_deadline: date | None = None
    advance_voting_dates: list[str] = field(default_factory=list)


@dataclass
class PolicyRecord:
    """A candidate platform commitment."""

    policy_area: str
    policy_title: str
    policy_description: str | None = None
    implementation_plan: str | None = None
    estimated_cost: str | None = None
    timeline: str | None = None
    priority: str = "medium"


@dataclass
class CandidateRecord:
    """A candidate standing in an election."""

    name: str
    constituency: str
    party: str | None = None
    occupation: str | None = None
    key_platform_points: list[str] = field(default_factory=list)
    campaign_promises: list[str] = field(default_factory=list)
    endorsements: list[str] = field(default_factory=list)
    is_incumbent: bool = False
    is_elected: bool = False


@dataclass
class DistrictRecord:
    """An electoral district profile."""

    district_name: str
    province: str = ""
    district_number: str | None = None
    population: int | None = None
    area: float | None = None
    key_issues: list[str] = field(default_factory=list)
    major_cities: list[str] = field(default_factory=list)
    current_representative: str | None = None
    last_election_turnout: float | None = None
    is_urban: bool = False
    is_rural: bool = False


@dataclass
class PoliticianRecord:
    """A politician as ingested from a member feed or curated list."""

    name: str
    level: str
    jurisdiction: str
    party: str | None = None
    position: str | None = None
    riding: str | None = None
    image_url: str | None = None
    civic_level: str | None = None
    recent_activity: str | None = None
    bio: str | None = None
    policy_positions: list[str] = field(default_factory=list)
    voting_record: dict = field(default_factory=lambda: {"yes": 0, "no": 0, "abstain": 0})
    contact_info: dict = field(default_factory=dict)
    key_achievements: list[str] = field(default_factory=list)
    committees: list[str] = field(default_factory=list)
    expenses: dict = field(default_factory=dict)
    is_incumbent: bool = False
    parliament_member_id: str | None = None


@dataclass
class LegalActRecord:
    """A statute from the act index or the curated list."""

    title: str
    jurisdiction: str = "federal"
    act_number: str | None = None
    summary: str | None = None
    category: str | None = None
    year: int | None = None
    key_provisions: list[str] = field(default_factory=list)
    full_text: str | None = None
    source: str | None = None
    source_url: str | None = None


@dataclass
class LegalCaseRecord:
    """A court case of public interest."""

    case_number: str
    title: str
    description: str | None = None
    jurisdiction: str = "federal"
    status: str | None = None


@dataclass
class CriminalCodeRecord:
    """A Criminal Code section."""

    section_number: str
    title: str
    full_text: str | None = None
    summary: str | None = None
    penalties: str | None = None
    category: str | None = None
