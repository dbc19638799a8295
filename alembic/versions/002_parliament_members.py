"""Create parliament_members and link politicians to it.

Revision ID: 002
Revises: 001
Create Date: 2026-10-25
"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "002"
down_revision = "001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create parliament_members and the politicians.parliament_member_id foreign key."""
    op.create_table(
        "parliament_members",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("member_id", sa.String(100), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("party", sa.String(150), nullable=True),
        sa.Column("constituency", sa.String(200), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("member_id", name="uq_parliament_members_member_id"),
    )

    # Member ids written before this table existed have no directory row yet.
    op.execute(
        """
        INSERT INTO parliament_members (id, member_id, name, party, constituency, image_url)
        SELECT DISTINCT ON (parliament_member_id)
            gen_random_uuid(), parliament_member_id, name, party, riding, image_url
        FROM politicians
        WHERE parliament_member_id IS NOT NULL
        ORDER BY parliament_member_id, updated_at DESC
        """
    )

    op.create_index("ix_politicians_parliament_member_id", "politicians", ["parliament_member_id"])
    op.create_foreign_key(
        "fk_politicians_parliament_member_id",
        "politicians",
        "parliament_members",
        ["parliament_member_id"],
        ["member_id"],
        ondelete="SET NULL",
    )


def downgrade() -> None:
    """Drop the foreign key and parliament_members."""
    op.drop_constraint("fk_politicians_parliament_member_id", "politicians", type_="foreignkey")
    op.drop_index("ix_politicians_parliament_member_id", table_name="politicians")
    op.drop_table("parliament_members")
