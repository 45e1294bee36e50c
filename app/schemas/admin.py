"""Dashboard schemas."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class Statistics(BaseModel):
    """Dashboard counters computed over the live repository."""

    total_patients: int = Field(..., description="Number of registered patients")
    active_patients: int = Field(..., description="Patients with status active")
    total_clinical_notes: int
    ai_generated_notes: int
    pending_tasks: int
    upcoming_appointments: int = Field(
        ..., description="Scheduled appointments dated after the time of the request"
    )


class PatientSummary(BaseModel):
    """Per-patient activity counts."""

    id: str
    first_name: str
    last_name: str
    date_of_birth: date
    gender: str | None = None
    status: str
    note_count: int
    appointment_count: int
    task_count: int
    last_note_date: datetime | None = None
