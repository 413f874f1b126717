"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)

metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", String, primary_key=True),  # UUID as string
    Column("email", String(320), nullable=False),
    Column("provider", String(50), nullable=False),  # ProviderKey value
    Column("provider_id", String(255), nullable=False),  # "sub" claim
    Column("created_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("provider", "provider_id", name="uq_users_provider_identity"),
)


# ============================================================================
# ORGANIZATIONS TABLE
# ============================================================================
organizations_table = Table(
    "organizations",
    metadata,
    Column("id", String, primary_key=True),  # UUID as string
    Column("name", String(255), nullable=False),
    Column("created_ip", String(64), nullable=True),
    Column("created_user_agent", String(512), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
)


# ============================================================================
# ORGANIZATION MEMBERS TABLE
# ============================================================================
organization_members_table = Table(
    "organization_members",
    metadata,
    Column(
        "organization_id",
        String,
        ForeignKey("organizations.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("user_id", String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role", String(16), nullable=False),  # Role value
    Column("invitation_id", String, nullable=True),  # Set when joined through an invite
    Column("created_at", DateTime(timezone=True), nullable=False),
)

Index("ix_organization_members_user_id", organization_members_table.c.user_id)
