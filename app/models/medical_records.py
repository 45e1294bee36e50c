"""Allergy, chronic condition and medication tables using SQLAlchemy Core."""

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


def _patient_fk() -> Column:
    return Column(
        "patient_id",
        String(50),
        ForeignKey("patients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


allergies = Table(
    "allergies",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    _patient_fk(),
    Column("allergen", String(200), nullable=False),
    Column("reaction", Text),
    Column("severity", String(20), server_default="moderate"),
    Column("status", String(20), server_default="active"),
    Column("diagnosed_date", Date),
    Column("notes", Text),
    Column("created_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    Column("created_by", String(50)),
    CheckConstraint(
        "severity IN ('mild', 'moderate', 'severe', 'life_threatening')",
        name="allergies_severity_check",
    ),
    CheckConstraint(
        "status IN ('active', 'resolved', 'historical')",
        name="allergies_status_check",
    ),
)

chronic_conditions = Table(
    "chronic_conditions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    _patient_fk(),
    Column("condition", String(200), nullable=False),
    Column("diagnosis_date", Date),
    Column("status", String(20), server_default="active"),
    Column("notes", Text),
    Column("created_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    Column("created_by", String(50)),
    CheckConstraint(
        "status IN ('active', 'resolved', 'in_remission')",
        name="conditions_status_check",
    ),
)

medications = Table(
    "medications",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    _patient_fk(),
    Column("medication_name", String(200), nullable=False),
    Column("dosage", String(100)),
    Column("frequency", String(100)),
    Column("route", String(50)),
    Column("prescribing_physician", String(200)),
    Column("start_date", Date),
    Column("end_date", Date),
    Column("status", String(20), server_default="active"),
    Column("notes", Text),
    Column("created_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    Column("created_by", String(50)),
    CheckConstraint(
        "status IN ('active', 'discontinued', 'completed')",
        name="medications_status_check",
    ),
)
