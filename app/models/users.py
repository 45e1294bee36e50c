"""User, session and system setting tables using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    text,
    true,
)

from app.models.patients import metadata

users = Table(
    "users",
    metadata,
    Column("id", String(50), primary_key=True),
    Column("username", String(100), nullable=False, unique=True, index=True),
    Column("email", String(255), nullable=False, unique=True, index=True),
    Column("password_hash", String(255), nullable=False),
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False),
    Column("role", String(50), nullable=False, index=True),
    Column("department", String(100)),
    Column("is_active", Boolean, server_default=true()),
    Column("last_login", DateTime(timezone=True)),
    Column("created_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    Column("updated_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    CheckConstraint(
        "role IN ('admin', 'physician', 'nurse', 'receptionist', 'medical_assistant')",
        name="users_role_check",
    ),
)

user_sessions = Table(
    "user_sessions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "user_id",
        String(50),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("token", String(500), nullable=False, index=True),
    Column("ip_address", String(45)),
    Column("user_agent", Text),
    Column("created_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    Column("expires_at", DateTime(timezone=True), nullable=False, index=True),
    Column("is_active", Boolean, server_default=true()),
)

system_settings = Table(
    "system_settings",
    metadata,
    Column("key", String(100), primary_key=True),
    Column("value", Text),
    Column("data_type", String(20)),
    Column("description", Text),
    Column("updated_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    Column("updated_by", String(50)),
)
