"""Clinical data repository: the single entry point to patient records."""

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

import structlog
from pydantic import BaseModel, ValidationError

from app.core.exceptions import NotFoundException, ReferenceException, ValidationException
from app.core.store import PATIENT_DEPENDENTS, EntityStore
from app.core.time_utils import ensure_utc, utcnow
from app.schemas.admin import PatientSummary, Statistics
from app.schemas.allergies import Allergy, AllergyCreate, AllergyStatus
from app.schemas.appointments import Appointment, AppointmentCreate, AppointmentStatus
from app.schemas.audit import AuditAction, AuditEntry, AuditLogFilters
from app.schemas.clinical_notes import (
    ClinicalNote,
    ClinicalNoteCreate,
    ClinicalNoteUpdate,
    NoteStatus,
)
from app.schemas.conditions import (
    ChronicCondition,
    ChronicConditionCreate,
    ConditionStatus,
)
from app.schemas.patients import (
    DeleteResponse,
    Patient,
    PatientCreate,
    PatientDetail,
    PatientStatus,
    PatientUpdate,
)
from app.schemas.referrals import Referral, ReferralCreate, ReferralStatus
from app.schemas.tasks import (
    ActiveTask,
    Task,
    TaskCreate,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
)
from app.schemas.workflows import WorkflowTemplate
from app.services.audit_service import AuditRecorder

logger = structlog.get_logger()

PRIORITY_RANK = {
    TaskPriority.URGENT: 1,
    TaskPriority.HIGH: 2,
    TaskPriority.MEDIUM: 3,
    TaskPriority.LOW: 4,
}

OPEN_TASK_STATUSES = (TaskStatus.PENDING, TaskStatus.IN_PROGRESS)

_LATEST = datetime.max.replace(tzinfo=UTC)


def _changes(updates: BaseModel) -> dict[str, Any]:
    """Return the fields a caller actually supplied, skipping nulls."""
    return {
        field: value
        for field, value in updates.model_dump(exclude_unset=True).items()
        if value is not None
    }


def _merge(record: BaseModel, changes: dict[str, Any]) -> Any:
    """Shallow-merge ``changes`` over ``record`` and re-check the record shape."""
    return type(record).model_validate({**record.model_dump(), **changes})


class ClinicalRepository:
    """
    Patient registry, chart records, workflows, audit log and statistics.

    Every mutation appends exactly one audit entry before returning. All
    operations are coroutines for parity with a networked backend, but none
    of them suspends: each runs to completion while holding the store lock.
    """

    def __init__(
        self,
        store: EntityStore | None = None,
        audit: AuditRecorder | None = None,
        *,
        system_user: str = "system",
        strict_references: bool = False,
        audit_reads: bool = False,
    ):
        """
        Initialize repository.

        Args:
            store: Backing entity store, a fresh empty one by default
            audit: Audit recorder, one writing to ``store`` by default
            system_user: User recorded when no acting user is known
            strict_references: Reject records that reference unknown patients
            audit_reads: Record READ entries when a patient chart is opened
        """
        self.store = store or EntityStore()
        self.audit = audit or AuditRecorder(self.store)
        self.system_user = system_user
        self.strict_references = strict_references
        self.audit_reads = audit_reads

    def _actor(self, *candidates: str | None) -> str:
        for candidate in candidates:
            if candidate:
                return candidate
        return self.system_user

    def _log_audit(
        self,
        entity_type: str,
        entity_id: str | int,
        action: AuditAction,
        user_id: str,
    ) -> None:
        self.audit.record(entity_type, entity_id, action, user_id)

    def _check_patient_reference(self, patient_id: str | None) -> None:
        if patient_id is None or not self.strict_references:
            return
        if not self.store.exists("patients", patient_id):
            raise ReferenceException(f"Patient {patient_id} does not exist")

    def _new_patient_id(self) -> str:
        while True:
            candidate = f"P{uuid4().hex[:12].upper()}"
            if not self.store.exists("patients", candidate):
                return candidate

    def _create_dependent(
        self,
        entity: str,
        entity_type: str,
        record_type: type[BaseModel],
        data: BaseModel,
        default_status: Any,
        user_id: str | None,
        **extra: Any,
    ) -> Any:
        values = data.model_dump()
        values["status"] = values.get("status") or default_status

        with self.store.lock:
            self._check_patient_reference(values.get("patient_id"))
            try:
                record = record_type(**values, **extra, id=0, created_at=utcnow())
            except ValidationError as e:
                raise ValidationException(f"Invalid {entity_type}: {e.errors()[0]['msg']}") from e

            # Identifiers are only reserved once the record is known to be valid
            record = record.model_copy(update={"id": self.store.next_id(entity)})
            created = self.store.insert(entity, record)
            self._log_audit(
                entity_type,
                created.id,
                AuditAction.CREATE,
                self._actor(values.get("created_by"), user_id),
            )

        logger.info(
            "record_created",
            entity_type=entity_type,
            record_id=created.id,
            patient_id=values.get("patient_id"),
        )
        return created

    # Patients

    async def get_all_patients(self) -> list[Patient]:
        """Return all patients in insertion order."""
        return self.store.all("patients")

    async def get_patient_by_id(
        self,
        patient_id: str,
        user_id: str | None = None,
    ) -> PatientDetail:
        """
        Get a patient with all dependent records.

        Args:
            patient_id: Patient ID
            user_id: Acting user, recorded only when read auditing is on

        Returns:
            Patient merged with allergies, chronic conditions, clinical notes,
            tasks, appointments and referrals

        Raises:
            NotFoundException: If patient not found
        """
        with self.store.lock:
            patient = self.store.get("patients", patient_id)
            if patient is None:
                raise NotFoundException("Patient not found")

            detail = PatientDetail(
                **patient.model_dump(),
                allergies=self.store.by_patient("allergies", patient_id),
                chronic_conditions=self.store.by_patient("chronic_conditions", patient_id),
                clinical_notes=self.store.by_patient("clinical_notes", patient_id),
                tasks=self.store.by_patient("tasks", patient_id),
                appointments=self.store.by_patient("appointments", patient_id),
                referrals=self.store.by_patient("referrals", patient_id),
            )

        if self.audit_reads:
            self._log_audit("Patient", patient_id, AuditAction.READ, self._actor(user_id))
        return detail

    async def create_patient(
        self,
        data: PatientCreate,
        user_id: str | None = None,
    ) -> Patient:
        """
        Register a new patient.

        Args:
            data: Patient data, already validated by the request schema
            user_id: Acting user

        Returns:
            Created patient with a new identifier and status active
        """
        now = utcnow()

        with self.store.lock:
            patient = Patient(
                **data.model_dump(),
                id=self._new_patient_id(),
                status=PatientStatus.ACTIVE,
                created_at=now,
                updated_at=now,
            )
            created = self.store.insert("patients", patient)
            self._log_audit("Patient", created.id, AuditAction.CREATE, self._actor(user_id))

        logger.info("patient_created", patient_id=created.id)
        return created

    async def update_patient(
        self,
        patient_id: str,
        updates: PatientUpdate,
        user_id: str | None = None,
    ) -> Patient:
        """
        Update a patient with the supplied fields.

        Raises:
            NotFoundException: If patient not found
        """
        changes = _changes(updates)

        with self.store.lock:
            current = self.store.get("patients", patient_id)
            if current is None:
                raise NotFoundException("Patient not found")

            merged = _merge(current, {**changes, "updated_at": utcnow()})
            updated = self.store.replace("patients", merged)
            self._log_audit("Patient", patient_id, AuditAction.UPDATE, self._actor(user_id))

        logger.info("patient_updated", patient_id=patient_id, fields=sorted(changes))
        return updated

    async def delete_patient(
        self,
        patient_id: str,
        user_id: str | None = None,
    ) -> DeleteResponse:
        """
        Delete a patient and every record that references it.

        Raises:
            NotFoundException: If patient not found
        """
        with self.store.lock:
            if not self.store.remove("patients", patient_id):
                raise NotFoundException("Patient not found")

            cascaded = {
                entity: self.store.remove_where(
                    entity, lambda record: record.patient_id == patient_id
                )
                for entity in PATIENT_DEPENDENTS
            }
            self._log_audit("Patient", patient_id, AuditAction.DELETE, self._actor(user_id))

        logger.info("patient_deleted", patient_id=patient_id, cascaded=cascaded)
        return DeleteResponse(success=True)

    async def search_patients(self, query: str) -> list[Patient]:
        """
        Search patients by name, ID or email.

        Matching is a case-insensitive substring test; results keep store order.
        """
        needle = query.lower()

        def matches(patient: Patient) -> bool:
            fields = (patient.first_name, patient.last_name, patient.id, patient.email)
            return any(needle in value.lower() for value in fields if value)

        return self.store.find("patients", matches)

    # Allergies

    async def get_allergies_by_patient(self, patient_id: str) -> list[Allergy]:
        """Return a patient's allergies in insertion order."""
        return self.store.by_patient("allergies", patient_id)

    async def add_allergy(self, data: AllergyCreate, user_id: str | None = None) -> Allergy:
        """Record an allergy. Status defaults to active."""
        return self._create_dependent(
            "allergies", "Allergy", Allergy, data, AllergyStatus.ACTIVE, user_id
        )

    async def remove_allergy(
        self,
        allergy_id: int,
        user_id: str | None = None,
    ) -> DeleteResponse:
        """
        Remove an allergy.

        Raises:
            NotFoundException: If allergy not found
        """
        with self.store.lock:
            if not self.store.remove("allergies", allergy_id):
                raise NotFoundException("Allergy not found")
            self._log_audit("Allergy", allergy_id, AuditAction.DELETE, self._actor(user_id))

        logger.info("record_deleted", entity_type="Allergy", record_id=allergy_id)
        return DeleteResponse(success=True)

    # Chronic conditions

    async def get_chronic_conditions_by_patient(self, patient_id: str) -> list[ChronicCondition]:
        """Return a patient's chronic conditions in insertion order."""
        return self.store.by_patient("chronic_conditions", patient_id)

    async def add_chronic_condition(
        self,
        data: ChronicConditionCreate,
        user_id: str | None = None,
    ) -> ChronicCondition:
        """Record a chronic condition. Status defaults to active."""
        return self._create_dependent(
            "chronic_conditions",
            "ChronicCondition",
            ChronicCondition,
            data,
            ConditionStatus.ACTIVE,
            user_id,
        )

    # Clinical notes

    async def get_clinical_notes_by_patient(self, patient_id: str) -> list[ClinicalNote]:
        """Return a patient's clinical notes in insertion order."""
        return self.store.by_patient("clinical_notes", patient_id)

    async def create_clinical_note(
        self,
        data: ClinicalNoteCreate,
        user_id: str | None = None,
    ) -> ClinicalNote:
        """
        Create a clinical note.

        Status defaults to draft. The audit entry names ``data.created_by``
        when given, otherwise the acting user, otherwise the system user.
        """
        return self._create_dependent(
            "clinical_notes",
            "ClinicalNote",
            ClinicalNote,
            data,
            NoteStatus.DRAFT,
            user_id,
            updated_at=utcnow(),
        )

    async def update_clinical_note(
        self,
        note_id: int,
        updates: ClinicalNoteUpdate,
        user_id: str | None = None,
    ) -> ClinicalNote:
        """
        Update a clinical note with the supplied fields.

        Raises:
            NotFoundException: If clinical note not found
        """
        changes = _changes(updates)

        with self.store.lock:
            current = self.store.get("clinical_notes", note_id)
            if current is None:
                raise NotFoundException("Clinical note not found")

            merged = _merge(current, {**changes, "updated_at": utcnow()})
            updated = self.store.replace("clinical_notes", merged)
            self._log_audit(
                "ClinicalNote",
                note_id,
                AuditAction.UPDATE,
                self._actor(changes.get("updated_by"), user_id),
            )

        return updated

    # Tasks

    async def get_tasks_by_patient(self, patient_id: str) -> list[Task]:
        """Return a patient's tasks in insertion order."""
        return self.store.by_patient("tasks", patient_id)

    async def create_task(self, data: TaskCreate, user_id: str | None = None) -> Task:
        """Create a task. Status defaults to pending; a completed task is stamped now."""
        completed_at = utcnow() if data.status == TaskStatus.COMPLETED else None
        return self._create_dependent(
            "tasks",
            "Task",
            Task,
            data,
            TaskStatus.PENDING,
            user_id,
            completed_at=completed_at,
        )

    async def update_task(
        self,
        task_id: int,
        updates: TaskUpdate,
        user_id: str | None = None,
    ) -> Task:
        """
        Update a task with the supplied fields.

        Moving a task into completed stamps ``completed_at``; moving it out
        again clears the completion fields.

        Raises:
            NotFoundException: If task not found
        """
        changes = _changes(updates)

        with self.store.lock:
            current = self.store.get("tasks", task_id)
            if current is None:
                raise NotFoundException("Task not found")

            merged = _merge(current, changes)
            if merged.status != TaskStatus.COMPLETED:
                merged.completed_at = None
                merged.completed_by = None
            elif current.status != TaskStatus.COMPLETED:
                merged.completed_at = utcnow()

            updated = self.store.replace("tasks", merged)
            self._log_audit("Task", task_id, AuditAction.UPDATE, self._actor(user_id))

        return updated

    async def get_active_tasks(self) -> list[ActiveTask]:
        """Return pending and in-progress tasks, most urgent and soonest due first."""
        with self.store.lock:
            names = {patient.id: patient.full_name for patient in self.store.all("patients")}
            open_tasks = self.store.find("tasks", lambda task: task.status in OPEN_TASK_STATUSES)

        open_tasks.sort(
            key=lambda task: (
                PRIORITY_RANK[task.priority],
                ensure_utc(task.due_date) if task.due_date else _LATEST,
            )
        )
        return [
            ActiveTask(**task.model_dump(), patient_name=names.get(task.patient_id))
            for task in open_tasks
        ]

    # Appointments

    async def get_appointments_by_patient(self, patient_id: str) -> list[Appointment]:
        """Return a patient's appointments in insertion order."""
        return self.store.by_patient("appointments", patient_id)

    async def create_appointment(
        self,
        data: AppointmentCreate,
        user_id: str | None = None,
    ) -> Appointment:
        """Book an appointment. Status defaults to scheduled."""
        return self._create_dependent(
            "appointments",
            "Appointment",
            Appointment,
            data,
            AppointmentStatus.SCHEDULED,
            user_id,
        )

    # Referrals

    async def get_referrals_by_patient(self, patient_id: str) -> list[Referral]:
        """Return a patient's referrals in insertion order."""
        return self.store.by_patient("referrals", patient_id)

    async def create_referral(self, data: ReferralCreate, user_id: str | None = None) -> Referral:
        """Create a referral. Status defaults to pending."""
        return self._create_dependent(
            "referrals",
            "Referral",
            Referral,
            data,
            ReferralStatus.PENDING,
            user_id,
            referral_date=utcnow().date(),
        )

    # Workflow templates

    async def get_all_workflows(self) -> list[WorkflowTemplate]:
        """Return all workflow templates."""
        return self.store.all("workflows")

    async def get_workflow_by_id(self, workflow_id: int) -> WorkflowTemplate:
        """
        Get a workflow template.

        Raises:
            NotFoundException: If workflow not found
        """
        workflow = self.store.get("workflows", workflow_id)
        if workflow is None:
            raise NotFoundException("Workflow not found")
        return workflow

    async def increment_workflow_usage(
        self,
        workflow_id: int,
        user_id: str | None = None,
    ) -> WorkflowTemplate | None:
        """
        Count one use of a workflow template.

        Unlike other lookups this does not raise for an unknown ID: it returns
        None and records nothing.
        """
        with self.store.lock:
            workflow = self.store.get("workflows", workflow_id)
            if workflow is None:
                return None

            workflow.usage_count += 1
            updated = self.store.replace("workflows", workflow)
            self._log_audit(
                "WorkflowTemplate", workflow_id, AuditAction.UPDATE, self._actor(user_id)
            )

        return updated

    # Audit log and dashboard

    async def get_audit_log(self, filters: AuditLogFilters | None = None) -> list[AuditEntry]:
        """Return audit entries matching all given filters, most recent first."""
        return self.audit.entries(filters)

    async def get_statistics(self) -> Statistics:
        """Compute dashboard counters over the current contents of the store."""
        now = utcnow()

        with self.store.lock:
            return Statistics(
                total_patients=self.store.count("patients"),
                active_patients=self.store.count(
                    "patients", lambda p: p.status == PatientStatus.ACTIVE
                ),
                total_clinical_notes=self.store.count("clinical_notes"),
                ai_generated_notes=self.store.count(
                    "clinical_notes", lambda n: n.is_ai_generated
                ),
                pending_tasks=self.store.count(
                    "tasks", lambda t: t.status == TaskStatus.PENDING
                ),
                upcoming_appointments=self.store.count(
                    "appointments",
                    lambda a: a.status == AppointmentStatus.SCHEDULED
                    and ensure_utc(a.scheduled_date) > now,
                ),
            )

    async def get_patient_summaries(self) -> list[PatientSummary]:
        """Return note, appointment and task counts for every patient."""
        summaries = []

        with self.store.lock:
            for patient in self.store.all("patients"):
                notes = self.store.by_patient("clinical_notes", patient.id)
                summaries.append(
                    PatientSummary(
                        id=patient.id,
                        first_name=patient.first_name,
                        last_name=patient.last_name,
                        date_of_birth=patient.date_of_birth,
                        gender=patient.gender,
                        status=patient.status.value,
                        note_count=len(notes),
                        appointment_count=len(self.store.by_patient("appointments", patient.id)),
                        task_count=len(self.store.by_patient("tasks", patient.id)),
                        last_note_date=max((note.created_at for note in notes), default=None),
                    )
                )

        return summaries
