"""SQLAlchemy table definitions for Together.

These are SQLAlchemy Core tables; rows are mapped to the immutable domain
models by hand (see mappers.py). They match the schema defined in the
Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

invite_code_status = postgresql.ENUM(
    "live", "retired", name="invite_code_status", create_type=False
)
unbind_status = postgresql.ENUM(
    "pending", "cancelled", "completed", name="unbind_status", create_type=False
)

# ============================================================================
# USERS TABLE (projection of the identity service)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("nickname", String(50), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column("email", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# SPACES TABLE
# ============================================================================
spaces_table = Table(
    "spaces",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("anniversary_date", Date, nullable=False),
    # Set only while waiting for the second partner
    Column("invite_code", String(16), nullable=True, unique=True),
    Column("member_count", SmallInteger, nullable=False, server_default="1"),
    # Optimistic lock, bumped on every membership change
    Column("version", Integer, nullable=False, server_default="1"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("member_count BETWEEN 1 AND 2", name="ck_spaces_member_count"),
    CheckConstraint(
        "member_count = 1 OR invite_code IS NULL",
        name="ck_spaces_paired_without_code",
    ),
)

# ============================================================================
# SPACE MEMBERS TABLE
# ============================================================================
space_members_table = Table(
    "space_members",
    metadata,
    Column(
        "space_id",
        UUID,
        ForeignKey("spaces.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, nullable=False),
    # 0 = creator, 1 = joined partner; caps a space at two members
    Column("position", SmallInteger, nullable=False),
    # What this member calls their partner
    Column("pet_name", String(30), nullable=True),
    Column(
        "joined_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("space_id", "user_id", name="pk_space_members"),
    UniqueConstraint("user_id", name="uq_space_members_user_id"),
    UniqueConstraint("space_id", "position", name="uq_space_members_position"),
    CheckConstraint("position IN (0, 1)", name="ck_space_members_position"),
)

# ============================================================================
# INVITE CODES TABLE (registry of every code ever minted)
# ============================================================================
invite_codes_table = Table(
    "invite_codes",
    metadata,
    Column("code", String(16), primary_key=True),
    # No FK: retired codes outlive their space so they are never reissued
    Column("space_id", UUID, nullable=False),
    Column("status", invite_code_status, nullable=False, server_default="live"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("retired_at", TIMESTAMP(timezone=True), nullable=True),
)

# One live code per space
Index(
    "idx_invite_codes_unique_live_space",
    invite_codes_table.c.space_id,
    unique=True,
    postgresql_where=invite_codes_table.c.status == "live",
)

# ============================================================================
# UNBIND REQUESTS TABLE
# ============================================================================
unbind_requests_table = Table(
    "unbind_requests",
    metadata,
    Column("id", UUID, primary_key=True),
    # No FK: history survives the space's deletion
    Column("space_id", UUID, nullable=False),
    Column("requested_by", UUID, nullable=False),
    Column("requested_at", TIMESTAMP(timezone=True), nullable=False),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("status", unbind_status, nullable=False, server_default="pending"),
    Column("resolved_at", TIMESTAMP(timezone=True), nullable=True),
    Column("resolved_by", UUID, nullable=True),
    Column("version", Integer, nullable=False, server_default="1"),
)

Index(
    "idx_unbind_requests_space_status",
    unbind_requests_table.c.space_id,
    unbind_requests_table.c.status,
)

# At most one pending request per space
Index(
    "idx_unbind_requests_unique_pending_space",
    unbind_requests_table.c.space_id,
    unique=True,
    postgresql_where=unbind_requests_table.c.status == "pending",
)

# Finalizer sweep
Index(
    "idx_unbind_requests_pending_expires_at",
    unbind_requests_table.c.expires_at,
    postgresql_where=unbind_requests_table.c.status == "pending",
)
