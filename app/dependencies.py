"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Header, Request

from app.config import Settings, settings
from app.core.store import EntityStore
from app.services.audit_service import AuditRecorder
from app.services.clinical_repository import ClinicalRepository
from app.services.demo_data import load_demo_data


def build_repository(config: Settings = settings) -> ClinicalRepository:
    """
    Create a repository configured from settings.

    Args:
        config: Application settings

    Returns:
        Repository backed by a fresh store, seeded with demo data if enabled
    """
    store = EntityStore()
    if config.seed_demo_data:
        load_demo_data(store)

    return ClinicalRepository(
        store,
        AuditRecorder(store),
        system_user=config.system_user_id,
        strict_references=config.strict_references,
        audit_reads=config.audit_reads,
    )


def get_repository(request: Request) -> ClinicalRepository:
    """Return the repository created at application startup."""
    return request.app.state.repository


async def get_acting_user(
    x_user_id: Annotated[str | None, Header(max_length=50)] = None,
) -> str | None:
    """
    Read the acting user from the ``X-User-Id`` header.

    The value is only used to attribute audit entries; it is not authenticated.
    """
    return x_user_id or None


# Type aliases for dependency injection
Repository = Annotated[ClinicalRepository, Depends(get_repository)]
ActingUser = Annotated[str | None, Depends(get_acting_user)]
