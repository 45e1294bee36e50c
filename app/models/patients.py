"""Patient table model using SQLAlchemy Core."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Index,
    MetaData,
    String,
    Table,
    Text,
    text,
)

# Metadata shared by every table of the relational schema
metadata = MetaData()

patients = Table(
    "patients",
    metadata,
    Column("id", String(50), primary_key=True),
    # Demographics
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False),
    Column("date_of_birth", Date, nullable=False),
    Column("gender", String(50)),
    Column("blood_type", String(5)),
    # Contact
    Column("phone", String(20)),
    Column("email", String(255)),
    Column("address", Text),
    Column("city", String(100)),
    Column("state", String(2)),
    Column("zip_code", String(10)),
    # Emergency contact
    Column("emergency_contact_name", String(200)),
    Column("emergency_contact_phone", String(20)),
    # Insurance
    Column("insurance_provider", String(200)),
    Column("insurance_policy_number", String(100)),
    Column("status", String(20), nullable=False, server_default="active"),
    # Audit fields
    Column("created_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    Column("updated_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    Column("created_by", String(50)),
    Column("updated_by", String(50)),
    CheckConstraint(
        "status IN ('active', 'inactive', 'deceased')",
        name="patients_status_check",
    ),
)

Index("idx_patients_name", patients.c.last_name, patients.c.first_name)
Index("idx_patients_status", patients.c.status)
Index("idx_patients_dob", patients.c.date_of_birth)
Index("idx_patients_email", patients.c.email)
