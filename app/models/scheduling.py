"""Task, appointment and referral tables using SQLAlchemy Core."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    text,
)

from app.models.patients import metadata

tasks = Table(
    "tasks",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    # Tasks may exist without a patient
    Column(
        "patient_id",
        String(50),
        ForeignKey("patients.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    ),
    Column("title", String(500), nullable=False),
    Column("description", Text),
    Column("task_type", String(50)),
    Column("priority", String(20), server_default="medium"),
    Column("status", String(20), server_default="pending", index=True),
    Column("assigned_to", String(50), index=True),
    Column("due_date", DateTime(timezone=True), index=True),
    Column("completed_at", DateTime(timezone=True)),
    Column("completed_by", String(50)),
    Column("created_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    Column("created_by", String(50)),
    CheckConstraint(
        "priority IN ('low', 'medium', 'high', 'urgent')",
        name="tasks_priority_check",
    ),
    CheckConstraint(
        "status IN ('pending', 'in_progress', 'completed', 'cancelled')",
        name="tasks_status_check",
    ),
)

appointments = Table(
    "appointments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "patient_id",
        String(50),
        ForeignKey("patients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("appointment_type", String(100), nullable=False),
    Column("scheduled_date", DateTime(timezone=True), nullable=False, index=True),
    Column("duration_minutes", Integer, server_default=text("30")),
    Column("provider", String(200)),
    Column("location", String(200)),
    Column("status", String(20), server_default="scheduled", index=True),
    Column("reason", Text),
    Column("notes", Text),
    Column("created_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    Column("created_by", String(50)),
    CheckConstraint(
        "status IN ('scheduled', 'confirmed', 'completed', 'cancelled', 'no_show')",
        name="appointments_status_check",
    ),
)

referrals = Table(
    "referrals",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "patient_id",
        String(50),
        ForeignKey("patients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("referring_physician", String(200)),
    Column("specialist", String(200), nullable=False),
    Column("specialty", String(100)),
    Column("reason", Text, nullable=False),
    Column("urgency", String(20), server_default="routine"),
    Column("status", String(20), server_default="pending", index=True),
    Column("referral_date", Date, server_default=text("CURRENT_DATE")),
    Column("appointment_date", DateTime(timezone=True)),
    Column("notes", Text),
    Column("created_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    Column("created_by", String(50)),
    CheckConstraint(
        "urgency IN ('routine', 'urgent', 'emergency')",
        name="referrals_urgency_check",
    ),
    CheckConstraint(
        "status IN ('pending', 'scheduled', 'completed', 'cancelled')",
        name="referrals_status_check",
    ),
)
