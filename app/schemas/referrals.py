"""Referral schemas for request/response validation."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class ReferralStatus(str, Enum):
    """Referral status enumeration."""

    PENDING = "pending"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ReferralUrgency(str, Enum):
    """Referral urgency enumeration."""

    ROUTINE = "routine"
    URGENT = "urgent"
    EMERGENCY = "emergency"


class ReferralBase(BaseModel):
    """Base referral schema with common fields."""

    patient_id: str = Field(..., min_length=1, max_length=50)
    referring_physician: str | None = Field(None, max_length=200)
    specialist: str = Field(..., min_length=1, max_length=200)
    specialty: str | None = Field(None, max_length=100)
    reason: str = Field(..., min_length=1)
    urgency: ReferralUrgency = ReferralUrgency.ROUTINE
    appointment_date: datetime | None = None
    notes: str | None = None
    created_by: str | None = Field(None, max_length=50)


class ReferralCreate(ReferralBase):
    """Schema for creating a referral."""

    # Optional in the body: routes under /patients/{id} supply it from the path
    patient_id: str | None = Field(None, max_length=50)
    status: ReferralStatus | None = None


class Referral(ReferralBase):
    """Referral record as held by the repository."""

    id: int
    status: ReferralStatus
    referral_date: date
    created_at: datetime
