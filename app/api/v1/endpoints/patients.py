"""Patient endpoints."""

from fastapi import APIRouter, Query, status

from app.dependencies import ActingUser, Repository
from app.schemas.allergies import Allergy, AllergyCreate
from app.schemas.appointments import Appointment, AppointmentCreate
from app.schemas.clinical_notes import ClinicalNote, ClinicalNoteCreate
from app.schemas.conditions import ChronicCondition, ChronicConditionCreate
from app.schemas.patients import (
    DeleteResponse,
    Patient,
    PatientCreate,
    PatientDetail,
    PatientUpdate,
)
from app.schemas.referrals import Referral, ReferralCreate
from app.schemas.tasks import Task, TaskCreate

router = APIRouter()


@router.get(
    "/",
    response_model=list[Patient],
    status_code=status.HTTP_200_OK,
    summary="List or search patients",
)
async def list_patients(
    repository: Repository,
    q: str | None = Query(None, max_length=200, description="Name, ID or email fragment"),
) -> list[Patient]:
    """
    List all patients, or those matching a search term.

    Args:
        repository: Clinical repository
        q: Case-insensitive search over first name, last name, ID and email

    Returns:
        Patients in registration order
    """
    if q and q.strip():
        return await repository.search_patients(q.strip())
    return await repository.get_all_patients()


@router.post(
    "/",
    response_model=Patient,
    status_code=status.HTTP_201_CREATED,
    summary="Register patient",
)
async def create_patient(
    data: PatientCreate,
    repository: Repository,
    user_id: ActingUser,
) -> Patient:
    """Register a new patient."""
    return await repository.create_patient(data, user_id)


@router.get(
    "/{patient_id}",
    response_model=PatientDetail,
    status_code=status.HTTP_200_OK,
    summary="Get patient chart",
)
async def get_patient(
    patient_id: str,
    repository: Repository,
    user_id: ActingUser,
) -> PatientDetail:
    """
    Get a patient together with allergies, conditions, notes, tasks,
    appointments and referrals.

    Raises:
        NotFoundException: If patient not found
    """
    return await repository.get_patient_by_id(patient_id, user_id)


@router.put(
    "/{patient_id}",
    response_model=Patient,
    status_code=status.HTTP_200_OK,
    summary="Update patient",
)
async def update_patient(
    patient_id: str,
    data: PatientUpdate,
    repository: Repository,
    user_id: ActingUser,
) -> Patient:
    """Update the supplied patient fields."""
    return await repository.update_patient(patient_id, data, user_id)


@router.delete(
    "/{patient_id}",
    response_model=DeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete patient",
)
async def delete_patient(
    patient_id: str,
    repository: Repository,
    user_id: ActingUser,
) -> DeleteResponse:
    """Delete a patient and all of its dependent records."""
    return await repository.delete_patient(patient_id, user_id)


# Dependent records. The patient ID in the path wins over any in the body.


@router.get("/{patient_id}/allergies", response_model=list[Allergy])
async def list_allergies(patient_id: str, repository: Repository) -> list[Allergy]:
    """List a patient's allergies."""
    return await repository.get_allergies_by_patient(patient_id)


@router.post(
    "/{patient_id}/allergies",
    response_model=Allergy,
    status_code=status.HTTP_201_CREATED,
)
async def add_allergy(
    patient_id: str,
    data: AllergyCreate,
    repository: Repository,
    user_id: ActingUser,
) -> Allergy:
    """Record an allergy for a patient."""
    data = data.model_copy(update={"patient_id": patient_id})
    return await repository.add_allergy(data, user_id)


@router.get("/{patient_id}/conditions", response_model=list[ChronicCondition])
async def list_conditions(patient_id: str, repository: Repository) -> list[ChronicCondition]:
    """List a patient's chronic conditions."""
    return await repository.get_chronic_conditions_by_patient(patient_id)


@router.post(
    "/{patient_id}/conditions",
    response_model=ChronicCondition,
    status_code=status.HTTP_201_CREATED,
)
async def add_condition(
    patient_id: str,
    data: ChronicConditionCreate,
    repository: Repository,
    user_id: ActingUser,
) -> ChronicCondition:
    """Record a chronic condition for a patient."""
    data = data.model_copy(update={"patient_id": patient_id})
    return await repository.add_chronic_condition(data, user_id)


@router.get("/{patient_id}/notes", response_model=list[ClinicalNote])
async def list_notes(patient_id: str, repository: Repository) -> list[ClinicalNote]:
    """List a patient's clinical notes."""
    return await repository.get_clinical_notes_by_patient(patient_id)


@router.post(
    "/{patient_id}/notes",
    response_model=ClinicalNote,
    status_code=status.HTTP_201_CREATED,
)
async def create_note(
    patient_id: str,
    data: ClinicalNoteCreate,
    repository: Repository,
    user_id: ActingUser,
) -> ClinicalNote:
    """Write a clinical note for a patient."""
    data = data.model_copy(update={"patient_id": patient_id})
    return await repository.create_clinical_note(data, user_id)


@router.get("/{patient_id}/tasks", response_model=list[Task])
async def list_tasks(patient_id: str, repository: Repository) -> list[Task]:
    """List a patient's tasks."""
    return await repository.get_tasks_by_patient(patient_id)


@router.post(
    "/{patient_id}/tasks",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    patient_id: str,
    data: TaskCreate,
    repository: Repository,
    user_id: ActingUser,
) -> Task:
    """Create a task for a patient."""
    data = data.model_copy(update={"patient_id": patient_id})
    return await repository.create_task(data, user_id)


@router.get("/{patient_id}/appointments", response_model=list[Appointment])
async def list_appointments(patient_id: str, repository: Repository) -> list[Appointment]:
    """List a patient's appointments."""
    return await repository.get_appointments_by_patient(patient_id)


@router.post(
    "/{patient_id}/appointments",
    response_model=Appointment,
    status_code=status.HTTP_201_CREATED,
)
async def create_appointment(
    patient_id: str,
    data: AppointmentCreate,
    repository: Repository,
    user_id: ActingUser,
) -> Appointment:
    """Book an appointment for a patient."""
    data = data.model_copy(update={"patient_id": patient_id})
    return await repository.create_appointment(data, user_id)


@router.get("/{patient_id}/referrals", response_model=list[Referral])
async def list_referrals(patient_id: str, repository: Repository) -> list[Referral]:
    """List a patient's referrals."""
    return await repository.get_referrals_by_patient(patient_id)


@router.post(
    "/{patient_id}/referrals",
    response_model=Referral,
    status_code=status.HTTP_201_CREATED,
)
async def create_referral(
    patient_id: str,
    data: ReferralCreate,
    repository: Repository,
    user_id: ActingUser,
) -> Referral:
    """Refer a patient to a specialist."""
    data = data.model_copy(update={"patient_id": patient_id})
    return await repository.create_referral(data, user_id)
