"""Politician Pydantic v2 schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from civicos.schemas.common import CamelModel

MAX_VOTE_COUNT = 100_000
MAX_EXPENSE_AMOUNT = 1_000_000_000


class PoliticianResponse(CamelModel):
    """A politician as listed and searched."""

    id: UUID
    name: str
    level: str
    jurisdiction: str
    party: str | None = None
    position: str | None = None
    riding: str | None = None
    image_url: str | None = None
    trust_score: int
    civic_level: str | None = None
    recent_activity: str | None = None
    bio: str | None = None
    policy_positions: list[str] = Field(default_factory=list)
    voting_record: dict = Field(default_factory=dict)
    contact_info: dict = Field(default_factory=dict)
    key_achievements: list[str] = Field(default_factory=list)
    committees: list[str] = Field(default_factory=list)
    expenses: dict = Field(default_factory=dict)
    is_incumbent: bool = False
    parliament_member_id: str | None = None
    updated_at: datetime | None = None


class PoliticianActivityStats(CamelModel):
    """Counts of a politician's recorded statements and positions."""

    statements: int = 0
    positions: int = 0


class CampaignFinanceResponse(CamelModel):
    """Fundraising totals for one reporting period."""

    reporting_period: str
    total_raised: float
    total_spent: float
    source_url: str | None = None


class TruthTrackingResponse(CamelModel):
    """Running fact-check tally."""

    truth_score: float
    statements_checked: int
    last_checked_at: datetime | None = None


class ParliamentMemberResponse(CamelModel):
    """House of Commons directory entry."""

    member_id: str
    name: str
    party: str | None = None
    constituency: str | None = None
    image_url: str | None = None
    active: bool = True


class PoliticianDetailResponse(PoliticianResponse):
    """A politician with accountability data."""

    stats: PoliticianActivityStats
    campaign_finance: list[CampaignFinanceResponse] = Field(default_factory=list)
    truth_tracking: TruthTrackingResponse | None = None
    parliament_member: ParliamentMemberResponse | None = None


class VotingTally(CamelModel):
    """Recorded votes by outcome."""

    yes: int = Field(default=0, ge=0, le=MAX_VOTE_COUNT)
    no: int = Field(default=0, ge=0, le=MAX_VOTE_COUNT)
    abstain: int = Field(default=0, ge=0, le=MAX_VOTE_COUNT)


class ExpenseBreakdown(CamelModel):
    """Annual office expenses in dollars."""

    travel: float | None = Field(default=None, ge=0, le=MAX_EXPENSE_AMOUNT, allow_inf_nan=False)
    hospitality: float | None = Field(default=None, ge=0, le=MAX_EXPENSE_AMOUNT, allow_inf_nan=False)
    office: float | None = Field(default=None, ge=0, le=MAX_EXPENSE_AMOUNT, allow_inf_nan=False)
    total: float | None = Field(default=None, ge=0, le=MAX_EXPENSE_AMOUNT, allow_inf_nan=False)
    year: int | None = Field(default=None, ge=1867, le=2100)


class PoliticianUpdateRequest(CamelModel):
    """Partial update of a politician's descriptive fields."""

    party: str | None = None
    position: str | None = None
    riding: str | None = None
    image_url: str | None = None
    civic_level: str | None = None
    recent_activity: str | None = None
    bio: str | None = None
    policy_positions: list[str] | None = None
    voting_record: VotingTally | None = None
    contact_info: dict | None = None
    key_achievements: list[str] | None = None
    committees: list[str] | None = None
    expenses: ExpenseBreakdown | None = None
    is_incumbent: bool | None = None


class PoliticianStatsResponse(CamelModel):
    """Aggregate politician counts."""

    total: int
    by_level: dict[str, int]
    by_party: dict[str, int]
    average_trust_score: float | None = None


class StatementCreateRequest(CamelModel):
    """A public statement submitted for a politician."""

    statement: str = Field(max_length=5000)
    context: str | None = Field(default=None, max_length=100)
    source: str | None = Field(default=None, max_length=100)


class StatementResponse(CamelModel):
    """A recorded statement."""

    id: UUID
    politician_id: UUID
    statement: str
    context: str
    source: str
    submitted_by_id: UUID | None = None
    created_at: datetime
