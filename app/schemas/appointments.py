"""Appointment schemas for request/response validation."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from app.core.time_utils import ensure_utc


class AppointmentStatus(str, Enum):
    """Appointment status enumeration."""

    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class AppointmentBase(BaseModel):
    """Base appointment schema with common fields."""

    patient_id: str = Field(..., min_length=1, max_length=50)
    appointment_type: str = Field(..., min_length=1, max_length=100)
    scheduled_date: datetime
    duration_minutes: int = Field(default=30, ge=1)
    provider: str | None = Field(None, max_length=200)
    location: str | None = Field(None, max_length=200)
    reason: str | None = None
    notes: str | None = None
    created_by: str | None = Field(None, max_length=50)

    @field_validator("scheduled_date")
    @classmethod
    def normalize_scheduled_date(cls, v: datetime) -> datetime:
        """Store scheduled dates as UTC."""
        return ensure_utc(v)


class AppointmentCreate(AppointmentBase):
    """Schema for booking an appointment."""

    # Optional in the body: routes under /patients/{id} supply it from the path
    patient_id: str | None = Field(None, max_length=50)
    status: AppointmentStatus | None = None


class Appointment(AppointmentBase):
    """Appointment record as held by the repository."""

    id: int
    status: AppointmentStatus
    created_at: datetime
