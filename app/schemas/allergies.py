"""Allergy schemas for request/response validation."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class AllergySeverity(str, Enum):
    """Allergy severity enumeration."""

    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"
    LIFE_THREATENING = "life_threatening"


class AllergyStatus(str, Enum):
    """Allergy status enumeration."""

    ACTIVE = "active"
    RESOLVED = "resolved"
    HISTORICAL = "historical"


class AllergyBase(BaseModel):
    """Base allergy schema with common fields."""

    patient_id: str = Field(..., min_length=1, max_length=50)
    allergen: str = Field(..., min_length=1, max_length=200)
    reaction: str | None = None
    severity: AllergySeverity = AllergySeverity.MODERATE
    diagnosed_date: date | None = None
    notes: str | None = None
    created_by: str | None = Field(None, max_length=50)


class AllergyCreate(AllergyBase):
    """Schema for recording a new allergy."""

    # Optional in the body: routes under /patients/{id} supply it from the path
    patient_id: str | None = Field(None, max_length=50)
    status: AllergyStatus | None = None


class Allergy(AllergyBase):
    """Allergy record as held by the repository."""

    id: int
    status: AllergyStatus
    created_at: datetime
