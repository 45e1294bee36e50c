"""Workflow template and instance tables using SQLAlchemy Core."""

from sqlalchemy import (
    JSON,
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

workflow_templates = Table(
    "workflow_templates",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(200), nullable=False),
    Column("description", Text),
    Column("category", String(100)),
    Column("steps", JSON, nullable=False),
    Column("checklist_items", JSON),
    Column("usage_count", Integer, server_default=text("0")),
    Column("is_active", Boolean, server_default=true()),
    Column("created_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    Column("created_by", String(50)),
)

# A workflow template started for a patient
workflow_instances = Table(
    "workflow_instances",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("patient_id", String(50), ForeignKey("patients.id", ondelete="CASCADE")),
    Column("template_id", Integer, ForeignKey("workflow_templates.id")),
    Column("status", String(20), server_default="in_progress"),
    Column("current_step", Integer, server_default=text("1")),
    Column("completed_steps", JSON),
    Column("started_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    Column("started_by", String(50)),
    Column("completed_at", DateTime(timezone=True)),
    CheckConstraint(
        "status IN ('in_progress', 'completed', 'abandoned')",
        name="workflow_status_check",
    ),
)
