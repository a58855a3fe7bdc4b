"""initial_schema

Create the schema for Together's pairing and unbinding lifecycle:
- Users (projection of the identity service, for partner profiles)
- Spaces and their members (at most two, a user in at most one space)
- Invite codes (registry of every code ever minted)
- Unbind requests (cooling-off history, at most one pending per space)

Revision ID: 3f1c2a9d7e40
Revises:
Create Date: 2026-10-18 09:12:44.310528

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE invite_code_status AS ENUM ('live', 'retired');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE unbind_status AS ENUM ('pending', 'cancelled', 'completed');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("nickname", sa.String(50), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # ========================================================================
    # SPACES table
    # ========================================================================
    op.create_table(
        "spaces",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("anniversary_date", sa.Date(), nullable=False),
        sa.Column("invite_code", sa.String(16), nullable=True),
        sa.Column(
            "member_count", sa.SmallInteger(), nullable=False, server_default="1"
        ),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("invite_code"),
        sa.CheckConstraint(
            "member_count BETWEEN 1 AND 2", name="ck_spaces_member_count"
        ),
        sa.CheckConstraint(
            "member_count = 1 OR invite_code IS NULL",
            name="ck_spaces_paired_without_code",
        ),
    )

    # ========================================================================
    # SPACE_MEMBERS table
    # ========================================================================
    op.create_table(
        "space_members",
        sa.Column("space_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("position", sa.SmallInteger(), nullable=False),
        sa.Column("pet_name", sa.String(30), nullable=True),
        sa.Column(
            "joined_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["space_id"], ["spaces.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("space_id", "user_id", name="pk_space_members"),
        # A user belongs to at most one space
        sa.UniqueConstraint("user_id", name="uq_space_members_user_id"),
        # Two positions, so never more than two members
        sa.UniqueConstraint("space_id", "position", name="uq_space_members_position"),
        sa.CheckConstraint("position IN (0, 1)", name="ck_space_members_position"),
    )

    # ========================================================================
    # INVITE_CODES table
    # ========================================================================
    op.create_table(
        "invite_codes",
        sa.Column("code", sa.String(16), nullable=False),
        sa.Column("space_id", sa.UUID(), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(name="invite_code_status", create_type=False),
            nullable=False,
            server_default="live",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("retired_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("code"),
    )
    op.create_index(
        "idx_invite_codes_unique_live_space",
        "invite_codes",
        ["space_id"],
        unique=True,
        postgresql_where=sa.text("status = 'live'"),
    )

    # ========================================================================
    # UNBIND_REQUESTS table
    # ========================================================================
    op.create_table(
        "unbind_requests",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("space_id", sa.UUID(), nullable=False),
        sa.Column("requested_by", sa.UUID(), nullable=False),
        sa.Column("requested_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(name="unbind_status", create_type=False),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("resolved_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("resolved_by", sa.UUID(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_unbind_requests_space_status",
        "unbind_requests",
        ["space_id", "status"],
    )
    op.create_index(
        "idx_unbind_requests_unique_pending_space",
        "unbind_requests",
        ["space_id"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )
    op.create_index(
        "idx_unbind_requests_pending_expires_at",
        "unbind_requests",
        ["expires_at"],
        postgresql_where=sa.text("status = 'pending'"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(
        "idx_unbind_requests_pending_expires_at", table_name="unbind_requests"
    )
    op.drop_index(
        "idx_unbind_requests_unique_pending_space", table_name="unbind_requests"
    )
    op.drop_index("idx_unbind_requests_space_status", table_name="unbind_requests")
    op.drop_index("idx_invite_codes_unique_live_space", table_name="invite_codes")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("unbind_requests")
    op.drop_table("invite_codes")
    op.drop_table("space_members")
    op.drop_table("spaces")
    op.drop_table("users")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS unbind_status")
    op.execute("DROP TYPE IF EXISTS invite_code_status")
