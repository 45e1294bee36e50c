"""Health check endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from app.config import settings
from app.dependencies import Repository

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    environment: str


class DetailedHealthResponse(HealthResponse):
    """Detailed health check response model."""

    patients: int
    audit_entries: int


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Basic health check",
)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns:
        Basic health status
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get(
    "/health/detailed",
    response_model=DetailedHealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Detailed health check",
)
async def detailed_health_check(repository: Repository) -> DetailedHealthResponse:
    """
    Health check including the size of the in-memory repository.

    Returns:
        Health status with record counts
    """
    return DetailedHealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
        patients=repository.store.count("patients"),
        audit_entries=repository.store.count("audit_log"),
    )


@router.get(
    "/ping",
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Simple ping",
)
async def ping() -> dict[str, str]:
    """
    Simple ping endpoint.

    Returns:
        Pong response
    """
    return {"message": "pong"}
