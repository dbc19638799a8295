"""Election, candidate and district Pydantic v2 schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import Field

from civicos.schemas.common import CamelModel


class ElectionResponse(CamelModel):
    """An election summary."""

    id: UUID
    election_type: str
    jurisdiction: str
    title: str
    election_date: date
    status: str
    description: str | None = None
    source_name: str | None = None
    source_url: str | None = None
    registration_deadline: date | None = None
    advance_voting_dates: list[str] = Field(default_factory=list)


class CandidatePolicyResponse(CamelModel):
    """A candidate platform commitment."""

    id: UUID
    policy_area: str
    policy_title: str
    policy_description: str | None = None
    implementation_plan: str | None = None
    estimated_cost: str | None = None
    timeline: str | None = None
    priority: str


class CandidateResponse(CamelModel):
    """A candidate with their policies."""

    id: UUID
    name: str
    party: str | None = None
    constituency: str
    occupation: str | None = None
    key_platform_points: list[str] = Field(default_factory=list)
    campaign_promises: list[str] = Field(default_factory=list)
    endorsements: list[str] = Field(default_factory=list)
    is_incumbent: bool = False
    is_elected: bool = False
    policies: list[CandidatePolicyResponse] = Field(default_factory=list)


class ElectionDetailResponse(ElectionResponse):
    """An election with its candidates."""

    candidates: list[CandidateResponse] = Field(default_factory=list)


class ElectionsByLocationResponse(CamelModel):
    """Elections matching a location split into upcoming and recent."""

    upcoming: list[ElectionResponse]
    recent: list[ElectionResponse]
    last_updated: datetime
    sources: list[str]


class DistrictResponse(CamelModel):
    """An electoral district profile."""

    id: UUID
    district_name: str
    district_number: str | None = None
    province: str
    population: int | None = None
    area: float | None = None
    key_issues: list[str] = Field(default_factory=list)
    major_cities: list[str] = Field(default_factory=list)
    current_representative: str | None = None
    last_election_turnout: float | None = None
    is_urban: bool = False
    is_rural: bool = False
