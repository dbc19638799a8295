"""Initial schema: users, politicians, elections, legal references and social tables.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import JSONB, UUID

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _json_list(name: str) -> sa.Column:
    return sa.Column(name, JSONB, nullable=False, server_default=sa.text("'[]'::jsonb"))


def _json_object(name: str) -> sa.Column:
    return sa.Column(name, JSONB, nullable=False, server_default=sa.text("'{}'::jsonb"))


def upgrade() -> None:
    # Users
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="citizen"),
        _json_list("permissions"),
        sa.Column("display_name", sa.String(150), nullable=True),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("location", sa.String(200), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Politicians and accountability data
    op.create_table(
        "politicians",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("level", sa.String(20), nullable=False),
        sa.Column("jurisdiction", sa.String(150), nullable=False),
        sa.Column("party", sa.String(150), nullable=True),
        sa.Column("position", sa.String(150), nullable=True),
        sa.Column("riding", sa.String(200), nullable=True),
        sa.Column("image_url", sa.Text, nullable=True),
        sa.Column("trust_score", sa.Integer, nullable=False, server_default="50"),
        sa.Column("civic_level", sa.String(100), nullable=True),
        sa.Column("recent_activity", sa.Text, nullable=True),
        sa.Column("bio", sa.Text, nullable=True),
        _json_list("policy_positions"),
        _json_object("voting_record"),
        _json_object("contact_info"),
        _json_list("key_achievements"),
        _json_list("committees"),
        _json_object("expenses"),
        sa.Column("is_incumbent", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("parliament_member_id", sa.String(100), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("name", "level", "jurisdiction", name="uq_politician_identity"),
        sa.CheckConstraint("trust_score >= 0 AND trust_score <= 100", name="ck_politician_trust_score_range"),
    )
    op.create_index("ix_politicians_level_jurisdiction", "politicians", ["level", "jurisdiction"])
    op.create_index("ix_politicians_party", "politicians", ["party"])

    op.create_table(
        "politician_statements",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "politician_id",
            UUID(as_uuid=True),
            sa.ForeignKey("politicians.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("statement", sa.Text, nullable=False),
        sa.Column("context", sa.String(100), nullable=False, server_default="general"),
        sa.Column("source", sa.String(100), nullable=False, server_default="user_submitted"),
        sa.Column(
            "submitted_by_id",
            UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_politician_statements_politician_id", "politician_statements", ["politician_id"])

    op.create_table(
        "politician_positions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "politician_id",
            UUID(as_uuid=True),
            sa.ForeignKey("politicians.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("issue", sa.String(200), nullable=False),
        sa.Column("stance", sa.Text, nullable=False),
        sa.Column("stated_on", sa.Date, nullable=True),
        sa.UniqueConstraint("politician_id", "issue", name="uq_politician_position_issue"),
    )
    op.create_index("ix_politician_positions_politician_id", "politician_positions", ["politician_id"])

    op.create_table(
        "campaign_finances",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "politician_id",
            UUID(as_uuid=True),
            sa.ForeignKey("politicians.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("reporting_period", sa.String(50), nullable=False),
        sa.Column("total_raised", sa.Float, nullable=False, server_default="0"),
        sa.Column("total_spent", sa.Float, nullable=False, server_default="0"),
        sa.Column("source_url", sa.Text, nullable=True),
        sa.UniqueConstraint("politician_id", "reporting_period", name="uq_campaign_finance_period"),
    )
    op.create_index("ix_campaign_finances_politician_id", "campaign_finances", ["politician_id"])

    op.create_table(
        "politician_truth_tracking",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "politician_id",
            UUID(as_uuid=True),
            sa.ForeignKey("politicians.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("truth_score", sa.Float, nullable=False, server_default="0"),
        sa.Column("statements_checked", sa.Integer, nullable=False, server_default="0"),
        sa.Column("last_checked_at", sa.DateTime(timezone=True), nullable=True),
    )

    # Elections, candidates, policies, districts
    op.create_table(
        "elections",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("election_type", sa.String(20), nullable=False),
        sa.Column("jurisdiction", sa.String(150), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("election_date", sa.Date, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="upcoming"),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("source_name", sa.String(150), nullable=True),
        sa.Column("source_url", sa.Text, nullable=True),
        sa.Column("registration_deadline", sa.Date, nullable=True),
        _json_list("advance_voting_dates"),
        *_timestamps(),
        sa.UniqueConstraint("election_type", "jurisdiction", "title", name="uq_election_identity"),
        sa.CheckConstraint("status IN ('upcoming', 'ongoing', 'completed')", name="ck_election_status"),
    )
    op.create_index("ix_elections_date", "elections", ["election_date"])

    op.create_table(
        "electoral_candidates",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "election_id",
            UUID(as_uuid=True),
            sa.ForeignKey("elections.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("party", sa.String(150), nullable=True),
        sa.Column("constituency", sa.String(200), nullable=False),
        sa.Column("occupation", sa.String(200), nullable=True),
        _json_list("key_platform_points"),
        _json_list("campaign_promises"),
        _json_list("endorsements"),
        sa.Column("is_incumbent", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_elected", sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint("election_id", "name", "constituency", name="uq_candidate_identity"),
    )
    op.create_index("ix_electoral_candidates_election_id", "electoral_candidates", ["election_id"])

    op.create_table(
        "candidate_policies",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "candidate_id",
            UUID(as_uuid=True),
            sa.ForeignKey("electoral_candidates.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("policy_area", sa.String(100), nullable=False),
        sa.Column("policy_title", sa.String(300), nullable=False),
        sa.Column("policy_description", sa.Text, nullable=True),
        sa.Column("implementation_plan", sa.Text, nullable=True),
        sa.Column("estimated_cost", sa.String(150), nullable=True),
        sa.Column("timeline", sa.String(100), nullable=True),
        sa.Column("priority", sa.String(20), nullable=False, server_default="medium"),
        sa.UniqueConstraint("candidate_id", "policy_title", name="uq_candidate_policy_title"),
    )
    op.create_index("ix_candidate_policies_candidate_id", "candidate_policies", ["candidate_id"])

    op.create_table(
        "electoral_districts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("district_name", sa.String(200), nullable=False),
        sa.Column("district_number", sa.String(20), nullable=True),
        sa.Column("province", sa.String(100), nullable=False, server_default=""),
        sa.Column("population", sa.Integer, nullable=True),
        sa.Column("area", sa.Float, nullable=True),
        _json_list("key_issues"),
        _json_list("major_cities"),
        sa.Column("current_representative", sa.String(200), nullable=True),
        sa.Column("last_election_turnout", sa.Float, nullable=True),
        sa.Column("is_urban", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_rural", sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint("district_name", "province", name="uq_district_name_province"),
    )

    # Legal references
    op.create_table(
        "legal_acts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(400), nullable=False),
        sa.Column("jurisdiction", sa.String(100), nullable=False, server_default="federal"),
        sa.Column("act_number", sa.String(100), nullable=True),
        sa.Column("summary", sa.Text, nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("year", sa.Integer, nullable=True),
        _json_list("key_provisions"),
        sa.Column("full_text", sa.Text, nullable=True),
        sa.Column("source", sa.String(100), nullable=True),
        sa.Column("source_url", sa.Text, nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("title", "jurisdiction", name="uq_legal_act_title_jurisdiction"),
    )

    op.create_table(
        "legal_cases",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("case_number", sa.String(100), nullable=False, unique=True),
        sa.Column("title", sa.String(400), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("jurisdiction", sa.String(100), nullable=False, server_default="federal"),
        sa.Column("status", sa.String(50), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "criminal_code_sections",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("section_number", sa.String(20), nullable=False, unique=True),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("full_text", sa.Text, nullable=True),
        sa.Column("summary", sa.Text, nullable=True),
        sa.Column("penalties", sa.String(200), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
    )

    # Social layer
    op.create_table(
        "user_friends",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("friend_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("pair_key", sa.String(80), nullable=False, unique=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        *_timestamps(),
        sa.CheckConstraint("user_id <> friend_id", name="ck_friendship_not_self"),
        sa.CheckConstraint("status IN ('pending', 'accepted', 'rejected')", name="ck_friendship_status"),
    )
    op.create_index("ix_user_friends_user_id", "user_friends", ["user_id"])
    op.create_index("ix_user_friends_friend_id", "user_friends", ["friend_id"])

    op.create_table(
        "user_messages",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("sender_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("recipient_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("subject", sa.String(200), nullable=True),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("is_read", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_user_messages_sender", "user_messages", ["sender_id", "created_at"])
    op.create_index("ix_user_messages_recipient", "user_messages", ["recipient_id", "created_at"])

    op.create_table(
        "social_posts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("image_url", sa.Text, nullable=True),
        sa.Column("visibility", sa.String(20), nullable=False, server_default="public"),
        *_timestamps(),
        sa.CheckConstraint("visibility IN ('public', 'friends', 'private')", name="ck_social_post_visibility"),
    )
    op.create_index("ix_social_posts_user_id", "social_posts", ["user_id"])
    op.create_index("ix_social_posts_created", "social_posts", ["created_at"])


def downgrade() -> None:
    op.drop_table("social_posts")
    op.drop_table("user_messages")
    op.drop_table("user_friends")
    op.drop_table("criminal_code_sections")
    op.drop_table("legal_cases")
    op.drop_table("legal_acts")
    op.drop_table("electoral_districts")
    op.drop_table("candidate_policies")
    op.drop_table("electoral_candidates")
    op.drop_table("elections")
    op.drop_table("politician_truth_tracking")
    op.drop_table("campaign_finances")
    op.drop_table("politician_positions")
    op.drop_table("politician_statements")
    op.drop_table("politicians")
    op.drop_table("users")
