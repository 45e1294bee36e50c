"""Clinical note schemas for request/response validation."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from app.core.validators import validate_required


class NoteStatus(str, Enum):
    """
    Clinical note status enumeration.

    Notes start as drafts and are finalized, then amended or signed. Any
    transition between these values is accepted.
    """

    DRAFT = "draft"
    FINAL = "final"
    AMENDED = "amended"
    SIGNED = "signed"


class ClinicalNoteBase(BaseModel):
    """Base clinical note schema with common fields."""

    patient_id: str = Field(..., min_length=1, max_length=50)
    # soap, progress, assessment, consultation, procedure, discharge, admission
    note_type: str = Field(..., min_length=1, max_length=50)
    subject: str | None = Field(None, max_length=500)
    content: str
    is_ai_generated: bool = False
    encounter_date: datetime | None = None
    created_by: str | None = Field(None, max_length=50)


class ClinicalNoteCreate(ClinicalNoteBase):
    """Schema for creating a clinical note."""

    # Optional in the body: routes under /patients/{id} supply it from the path
    patient_id: str | None = Field(None, max_length=50)
    status: NoteStatus | None = None

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Reject empty note bodies."""
        return validate_required(v, "Note content")


class ClinicalNoteUpdate(BaseModel):
    """Schema for editing a clinical note."""

    note_type: str | None = Field(None, min_length=1, max_length=50)
    subject: str | None = Field(None, max_length=500)
    content: str | None = None
    status: NoteStatus | None = None
    is_ai_generated: bool | None = None
    encounter_date: datetime | None = None
    signed_by: str | None = Field(None, max_length=50)
    signed_at: datetime | None = None
    updated_by: str | None = Field(None, max_length=50)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str | None) -> str | None:
        """Reject empty note bodies."""
        if v is None:
            return v
        return validate_required(v, "Note content")


class ClinicalNote(ClinicalNoteBase):
    """Clinical note record as held by the repository."""

    id: int
    status: NoteStatus
    signed_by: str | None = None
    signed_at: datetime | None = None
    updated_by: str | None = None
    created_at: datetime
    updated_at: datetime
