"""Election, candidate, candidate policy and electoral district models.

Elections are keyed on (election_type, jurisdiction, title); candidates,
policies and districts are write-once children created while seeding and
carry their own natural-key constraints so reseeding is a no-op.
"""

import uuid
from datetime import date

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    false,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from civicos.models.base import Base, JSONType, TimestampMixin, UUIDMixin

ELECTION_STATUSES = ("upcoming", "ongoing", "completed")


class Election(Base, UUIDMixin, TimestampMixin):
    """A federal, provincial, municipal or by-election."""

    __tablename__ = "elections"

    election_type: Mapped[str] = mapped_column(String(20), nullable=False)
    jurisdiction: Mapped[str] = mapped_column(String(150), nullable=False)
    title: Mapped[str] = mapped_column(String(300), nullable=False)

    election_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="upcoming")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    source_name: Mapped[str | None] = mapped_column(String(150), nullable=True)
    source_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    registration_deadline: Mapped[date | None] = mapped_column(Date, nullable=True)
    advance_voting_dates: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)

    candidates: Mapped[list["Candidate"]] = relationship(
        back_populates="election",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Candidate.name",
    )

    __table_args__ = (
        UniqueConstraint("election_type", "jurisdiction", "title", name="uq_election_identity"),
        CheckConstraint("status IN ('upcoming', 'ongoing', 'completed')", name="ck_election_status"),
        Index("ix_elections_date", "election_date"),
    )


class Candidate(Base, UUIDMixin, TimestampMixin):
    """A candidate standing in an election."""

    __tablename__ = "electoral_candidates"

    election_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("elections.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    party: Mapped[str | None] = mapped_column(String(150), nullable=True)
    constituency: Mapped[str] = mapped_column(String(200), nullable=False)
    occupation: Mapped[str | None] = mapped_column(String(200), nullable=True)
    key_platform_points: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    campaign_promises: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    endorsements: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    is_incumbent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    is_elected: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    election: Mapped[Election] = relationship(back_populates="candidates")
    policies: Mapped[list["CandidatePolicy"]] = relationship(
        back_populates="candidate",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="CandidatePolicy.policy_title",
    )

    __table_args__ = (
        UniqueConstraint("election_id", "name", "constituency", name="uq_candidate_identity"),
    )


class CandidatePolicy(Base, UUIDMixin):
    """A platform commitment with its cost and timeline estimate."""

    __tablename__ = "candidate_policies"

    candidate_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("electoral_candidates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    policy_area: Mapped[str] = mapped_column(String(100), nullable=False)
    policy_title: Mapped[str] = mapped_column(String(300), nullable=False)
    policy_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    implementation_plan: Mapped[str | None] = mapped_column(Text, nullable=True)
    estimated_cost: Mapped[str | None] = mapped_column(String(150), nullable=True)
    timeline: Mapped[str | None] = mapped_column(String(100), nullable=True)
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="medium")

    candidate: Mapped[Candidate] = relationship(back_populates="policies")

    __table_args__ = (UniqueConstraint("candidate_id", "policy_title", name="uq_candidate_policy_title"),)


class ElectoralDistrict(Base, UUIDMixin, TimestampMixin):
    """Federal electoral district (riding) profile."""

    __tablename__ = "electoral_districts"

    district_name: Mapped[str] = mapped_column(String(200), nullable=False)
    district_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    province: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    population: Mapped[int | None] = mapped_column(Integer, nullable=True)
    area: Mapped[float | None] = mapped_column(Float, nullable=True)
    key_issues: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    major_cities: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    current_representative: Mapped[str | None] = mapped_column(String(200), nullable=True)
    last_election_turnout: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_urban: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    is_rural: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    __table_args__ = (UniqueConstraint("district_name", "province", name="uq_district_name_province"),)
