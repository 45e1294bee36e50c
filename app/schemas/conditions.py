"""Chronic condition schemas for request/response validation."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class ConditionStatus(str, Enum):
    """Chronic condition status enumeration."""

    ACTIVE = "active"
    RESOLVED = "resolved"
    IN_REMISSION = "in_remission"


class ChronicConditionBase(BaseModel):
    """Base chronic condition schema with common fields."""

    patient_id: str = Field(..., min_length=1, max_length=50)
    condition: str = Field(..., min_length=1, max_length=200)
    diagnosis_date: date | None = None
    notes: str | None = None
    created_by: str | None = Field(None, max_length=50)


class ChronicConditionCreate(ChronicConditionBase):
    """Schema for recording a new chronic condition."""

    # Optional in the body: routes under /patients/{id} supply it from the path
    patient_id: str | None = Field(None, max_length=50)
    status: ConditionStatus | None = None


class ChronicCondition(ChronicConditionBase):
    """Chronic condition record as held by the repository."""

    id: int
    status: ConditionStatus
    created_at: datetime
