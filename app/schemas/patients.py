"""Patient schemas for request/response validation."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.core.validators import (
    validate_blood_type,
    validate_date_of_birth,
    validate_phone,
    validate_policy_number,
    validate_required,
)
from app.schemas.allergies import Allergy
from app.schemas.appointments import Appointment
from app.schemas.clinical_notes import ClinicalNote
from app.schemas.conditions import ChronicCondition
from app.schemas.referrals import Referral
from app.schemas.tasks import Task


class PatientStatus(str, Enum):
    """Patient status enumeration."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    DECEASED = "deceased"


class PatientFields(BaseModel):
    """Demographic, contact and insurance fields shared by patient schemas."""

    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    date_of_birth: date
    gender: str | None = Field(None, max_length=50)
    blood_type: str | None = Field(None, max_length=5)
    phone: str | None = Field(None, max_length=20)
    email: str | None = Field(None, max_length=255)
    address: str | None = None
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=2)
    zip_code: str | None = Field(None, max_length=10)
    emergency_contact_name: str | None = Field(None, max_length=200)
    emergency_contact_phone: str | None = Field(None, max_length=20)
    insurance_provider: str | None = Field(None, max_length=200)
    insurance_policy_number: str | None = Field(None, max_length=100)


class _PatientInputValidators(BaseModel):
    """Field checks applied to patient data on the way into the repository."""

    @field_validator("first_name", "last_name", check_fields=False)
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        """Reject blank names."""
        if v is None:
            return v
        return validate_required(v, "Name").strip()

    @field_validator("date_of_birth", check_fields=False)
    @classmethod
    def validate_dob(cls, v: date | None) -> date | None:
        """Validate date of birth is in the past."""
        if v is None:
            return v
        return validate_date_of_birth(v)

    @field_validator("phone", "emergency_contact_phone", check_fields=False)
    @classmethod
    def validate_phone_number(cls, v: str | None) -> str | None:
        """Validate phone number format."""
        if v is None:
            return v
        return validate_phone(v)

    @field_validator("blood_type", check_fields=False)
    @classmethod
    def validate_blood(cls, v: str | None) -> str | None:
        """Validate blood type."""
        if v is None:
            return v
        return validate_blood_type(v)

    @field_validator("insurance_policy_number", check_fields=False)
    @classmethod
    def validate_policy(cls, v: str | None) -> str | None:
        """Validate insurance policy number."""
        if v is None:
            return v
        return validate_policy_number(v)


class PatientCreate(_PatientInputValidators, PatientFields):
    """Schema for registering a new patient."""

    email: EmailStr | None = None


class PatientUpdate(_PatientInputValidators):
    """Schema for updating an existing patient."""

    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    date_of_birth: date | None = None
    gender: str | None = Field(None, max_length=50)
    blood_type: str | None = Field(None, max_length=5)
    phone: str | None = Field(None, max_length=20)
    email: EmailStr | None = None
    address: str | None = None
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=2)
    zip_code: str | None = Field(None, max_length=10)
    emergency_contact_name: str | None = Field(None, max_length=200)
    emergency_contact_phone: str | None = Field(None, max_length=20)
    insurance_provider: str | None = Field(None, max_length=200)
    insurance_policy_number: str | None = Field(None, max_length=100)
    status: PatientStatus | None = None


class Patient(PatientFields):
    """Patient record as held by the repository."""

    id: str
    status: PatientStatus = PatientStatus.ACTIVE
    created_at: datetime
    updated_at: datetime | None = None

    @property
    def full_name(self) -> str:
        """Return "First Last"."""
        return f"{self.first_name} {self.last_name}"


class PatientDetail(Patient):
    """Patient chart: the patient merged with its dependent records."""

    allergies: list[Allergy] = Field(default_factory=list)
    chronic_conditions: list[ChronicCondition] = Field(default_factory=list)
    clinical_notes: list[ClinicalNote] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)
    appointments: list[Appointment] = Field(default_factory=list)
    referrals: list[Referral] = Field(default_factory=list)


class DeleteResponse(BaseModel):
    """Acknowledgement returned by delete operations."""

    success: bool = True
