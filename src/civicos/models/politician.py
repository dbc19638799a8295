"""Politician model and the per-politician accountability tables.

Politicians are keyed on (name, level, jurisdiction).  Ingestion writes
them with an insert-on-conflict against ``uq_politician_identity`` and
the trust-score pass overwrites ``trust_score`` on every run.  Federal
members also link to their House of Commons directory entry through
``parliament_member_id``.
"""

import uuid
from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    false,
    func,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column

from civicos.models.base import Base, JSONType, TimestampMixin, UUIDMixin


class ParliamentMember(Base, UUIDMixin, TimestampMixin):
    """House of Commons directory entry, keyed on the Commons member id."""

    __tablename__ = "parliament_members"

    member_id: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    party: Mapped[str | None] = mapped_column(String(150), nullable=True)
    constituency: Mapped[str | None] = mapped_column(String(200), nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())


class Politician(Base, UUIDMixin, TimestampMixin):
    """Elected or appointed official at the federal, provincial or municipal level."""

    __tablename__ = "politicians"

    # Identity (natural key: name + level + jurisdiction)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    level: Mapped[str] = mapped_column(String(20), nullable=False)
    jurisdiction: Mapped[str] = mapped_column(String(150), nullable=False)

    party: Mapped[str | None] = mapped_column(String(150), nullable=True)
    position: Mapped[str | None] = mapped_column(String(150), nullable=True)
    riding: Mapped[str | None] = mapped_column(String(200), nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    trust_score: Mapped[int] = mapped_column(Integer, nullable=False, default=50, server_default="50")
    civic_level: Mapped[str | None] = mapped_column(String(100), nullable=True)
    recent_activity: Mapped[str | None] = mapped_column(Text, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)

    policy_positions: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    voting_record: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    contact_info: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    key_achievements: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    committees: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    expenses: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)

    is_incumbent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    parliament_member_id: Mapped[str | None] = mapped_column(
        ForeignKey("parliament_members.member_id", ondelete="SET NULL"), nullable=True, index=True
    )

    __table_args__ = (
        UniqueConstraint("name", "level", "jurisdiction", name="uq_politician_identity"),
        CheckConstraint("trust_score >= 0 AND trust_score <= 100", name="ck_politician_trust_score_range"),
        Index("ix_politicians_level_jurisdiction", "level", "jurisdiction"),
        Index("ix_politicians_party", "party"),
    )


class PoliticianStatement(Base, UUIDMixin):
    """Public statement attributed to a politician."""

    __tablename__ = "politician_statements"

    politician_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("politicians.id", ondelete="CASCADE"), nullable=False, index=True
    )
    statement: Mapped[str] = mapped_column(Text, nullable=False)
    context: Mapped[str] = mapped_column(String(100), nullable=False, default="general")
    source: Mapped[str] = mapped_column(String(100), nullable=False, default="user_submitted")
    submitted_by_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())


class PoliticianPosition(Base, UUIDMixin):
    """A politician's stated stance on an issue."""

    __tablename__ = "politician_positions"

    politician_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("politicians.id", ondelete="CASCADE"), nullable=False, index=True
    )
    issue: Mapped[str] = mapped_column(String(200), nullable=False)
    stance: Mapped[str] = mapped_column(Text, nullable=False)
    stated_on: Mapped[date | None] = mapped_column(Date, nullable=True)

    __table_args__ = (UniqueConstraint("politician_id", "issue", name="uq_politician_position_issue"),)


class CampaignFinance(Base, UUIDMixin):
    """Fundraising and spending totals for one reporting period."""

    __tablename__ = "campaign_finances"

    politician_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("politicians.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reporting_period: Mapped[str] = mapped_column(String(50), nullable=False)
    total_raised: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_spent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    source_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (UniqueConstraint("politician_id", "reporting_period", name="uq_campaign_finance_period"),)


class PoliticianTruthTracking(Base, UUIDMixin):
    """Running fact-check tally for a politician."""

    __tablename__ = "politician_truth_tracking"

    politician_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("politicians.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    truth_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    statements_checked: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_checked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
