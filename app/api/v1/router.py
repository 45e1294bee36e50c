"""API v1 router configuration."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    admin,
    allergies,
    health,
    notes,
    patients,
    tasks,
    workflows,
)

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(patients.router, prefix="/patients", tags=["Patients"])
api_router.include_router(allergies.router, prefix="/allergies", tags=["Allergies"])
api_router.include_router(notes.router, prefix="/notes", tags=["Clinical Notes"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
api_router.include_router(workflows.router, prefix="/workflows", tags=["Workflows"])
api_router.include_router(admin.router, tags=["Admin"])
