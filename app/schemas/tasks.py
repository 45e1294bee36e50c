"""Task schemas for request/response validation."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from app.core.time_utils import ensure_utc


class TaskPriority(str, Enum):
    """Task priority enumeration."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskStatus(str, Enum):
    """Task status enumeration."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskBase(BaseModel):
    """Base task schema with common fields."""

    patient_id: str | None = Field(None, max_length=50)
    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    task_type: str | None = Field(None, max_length=50)
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to: str | None = Field(None, max_length=50)
    due_date: datetime | None = None
    created_by: str | None = Field(None, max_length=50)

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, v: datetime | None) -> datetime | None:
        """Store due dates as UTC."""
        if v is None:
            return v
        return ensure_utc(v)


class TaskCreate(TaskBase):
    """Schema for creating a task."""

    status: TaskStatus | None = None


class TaskUpdate(BaseModel):
    """Schema for updating a task."""

    title: str | None = Field(None, min_length=1, max_length=500)
    description: str | None = None
    task_type: str | None = Field(None, max_length=50)
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    assigned_to: str | None = Field(None, max_length=50)
    due_date: datetime | None = None
    completed_by: str | None = Field(None, max_length=50)


class Task(TaskBase):
    """Task record as held by the repository."""

    id: int
    status: TaskStatus
    created_at: datetime
    completed_at: datetime | None = None
    completed_by: str | None = None


class ActiveTask(Task):
    """Open task annotated with the patient's name."""

    patient_name: str | None = None
