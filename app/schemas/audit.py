"""Audit log schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class AuditAction(str, Enum):
    """Audit action enumeration."""

    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class AuditEntry(BaseModel):
    """Append-only record of a change to the repository."""

    id: int
    entity_type: str
    entity_id: str
    action: AuditAction
    user_id: str
    timestamp: datetime


class AuditLogFilters(BaseModel):
    """Schema for audit log filtering. All given filters must match."""

    entity_type: str | None = None
    entity_id: str | None = None
    user_id: str | None = None
    action: AuditAction | None = None
    limit: int | None = Field(default=None, ge=1, le=1000)
