"""Admin dashboard endpoints: audit trail and statistics."""

from fastapi import APIRouter, Query, status

from app.dependencies import Repository
from app.schemas.admin import PatientSummary, Statistics
from app.schemas.audit import AuditAction, AuditEntry, AuditLogFilters
from app.schemas.tasks import ActiveTask

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get(
    "/audit-log",
    response_model=list[AuditEntry],
    status_code=status.HTTP_200_OK,
    summary="Read the audit log",
)
async def get_audit_log(
    repository: Repository,
    entity_type: str | None = Query(None, description="Filter by entity type, e.g. Patient"),
    entity_id: str | None = Query(None, description="Filter by entity ID"),
    user_id: str | None = Query(None, description="Filter by acting user"),
    action: AuditAction | None = Query(None, description="Filter by action"),
    limit: int | None = Query(None, ge=1, le=1000, description="Maximum entries"),
) -> list[AuditEntry]:
    """
    Get audit entries, most recent first.

    All supplied filters must match.

    Args:
        repository: Clinical repository
        entity_type: Filter by entity type
        entity_id: Filter by entity ID
        user_id: Filter by acting user
        action: Filter by action
        limit: Maximum number of entries to return

    Returns:
        Matching audit entries
    """
    filters = AuditLogFilters(
        entity_type=entity_type,
        entity_id=entity_id,
        user_id=user_id,
        action=action,
        limit=limit,
    )
    return await repository.get_audit_log(filters)


@router.get(
    "/statistics",
    response_model=Statistics,
    status_code=status.HTTP_200_OK,
    summary="Dashboard statistics",
)
async def get_statistics(repository: Repository) -> Statistics:
    """
    Get patient, note, task and appointment counters.

    Returns:
        Statistics computed at request time
    """
    return await repository.get_statistics()


@router.get(
    "/active-tasks",
    response_model=list[ActiveTask],
    status_code=status.HTTP_200_OK,
    summary="Open tasks by priority",
)
async def get_active_tasks(repository: Repository) -> list[ActiveTask]:
    """List pending and in-progress tasks ordered by priority, then due date."""
    return await repository.get_active_tasks()


@router.get(
    "/patient-summaries",
    response_model=list[PatientSummary],
    status_code=status.HTTP_200_OK,
    summary="Per-patient activity counts",
)
async def get_patient_summaries(repository: Repository) -> list[PatientSummary]:
    """List note, appointment and task counts for every patient."""
    return await repository.get_patient_summaries()
