"""Relational schema for a persistent clinical store."""

from app.models.audit_log import audit_log
from app.models.clinical_notes import clinical_notes, note_templates
from app.models.medical_records import allergies, chronic_conditions, medications
from app.models.patients import metadata, patients
from app.models.scheduling import appointments, referrals, tasks
from app.models.users import system_settings, user_sessions, users
from app.models.workflows import workflow_instances, workflow_templates

__all__ = [
    "allergies",
    "appointments",
    "audit_log",
    "chronic_conditions",
    "clinical_notes",
    "medications",
    "metadata",
    "note_templates",
    "patients",
    "referrals",
    "system_settings",
    "tasks",
    "user_sessions",
    "users",
    "workflow_instances",
    "workflow_templates",
]
