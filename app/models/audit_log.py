"""Audit log table using SQLAlchemy Core."""

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    DateTime,
    Index,
    Integer,
    String,
    Table,
    Text,
    text,
)

from app.models.patients import metadata

audit_log = Table(
    "audit_log",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("entity_type", String(50), nullable=False),
    Column("entity_id", String(100), nullable=False),
    Column("action", String(50), nullable=False, index=True),
    Column("user_id", String(50), nullable=False, index=True),
    Column("user_role", String(50)),
    Column("ip_address", String(45)),
    Column("user_agent", Text),
    Column("changes", JSON),
    Column("timestamp", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    CheckConstraint(
        "action IN ('CREATE', 'READ', 'UPDATE', 'DELETE', 'LOGIN', 'LOGOUT', 'PRINT', 'EXPORT')",
        name="audit_action_check",
    ),
)

Index("idx_audit_entity", audit_log.c.entity_type, audit_log.c.entity_id)
Index("idx_audit_timestamp", audit_log.c.timestamp.desc())
