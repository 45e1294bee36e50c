"""Clinical note and note template tables using SQLAlchemy Core."""

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
    false,
    text,
    true,
)

from app.models.patients import metadata

clinical_notes = Table(
    "clinical_notes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "patient_id",
        String(50),
        ForeignKey("patients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("note_type", String(50), nullable=False, index=True),
    Column("subject", String(500)),
    Column("content", Text, nullable=False),
    Column("status", String(20), server_default="draft", index=True),
    Column("is_ai_generated", Boolean, server_default=false()),
    Column("encounter_date", DateTime(timezone=True)),
    Column("signed_by", String(50)),
    Column("signed_at", DateTime(timezone=True)),
    Column("created_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    Column("updated_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    Column("created_by", String(50), nullable=False),
    Column("updated_by", String(50)),
    # SOAP notes are accepted alongside the classic note types
    CheckConstraint(
        "note_type IN ('soap', 'progress', 'assessment', 'consultation', "
        "'procedure', 'discharge', 'admission')",
        name="notes_type_check",
    ),
    CheckConstraint(
        "status IN ('draft', 'final', 'amended', 'signed')",
        name="notes_status_check",
    ),
)

note_templates = Table(
    "note_templates",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(200), nullable=False),
    Column("note_type", String(50), nullable=False),
    Column("template_content", Text, nullable=False),
    Column("category", String(100)),
    Column("usage_count", Integer, server_default=text("0")),
    Column("is_active", Boolean, server_default=true()),
    Column("created_at", DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP")),
    Column("created_by", String(50)),
)
