"""Tests for the clinical repository."""

from collections.abc import Awaitable
from datetime import date, timedelta
from typing import Any

import pytest

from app.core.exceptions import NotFoundException, ReferenceException, ValidationException
from app.core.store import PATIENT_DEPENDENTS
from app.core.time_utils import utcnow
from app.schemas.allergies import AllergyCreate, AllergySeverity
from app.schemas.appointments import AppointmentCreate, AppointmentStatus
from app.schemas.audit import AuditAction, AuditLogFilters
from app.schemas.clinical_notes import ClinicalNoteCreate, ClinicalNoteUpdate, NoteStatus
from app.schemas.conditions import ChronicConditionCreate
from app.schemas.patients import PatientCreate, PatientStatus, PatientUpdate
from app.schemas.referrals import ReferralCreate, ReferralUrgency
from app.schemas.tasks import TaskCreate, TaskPriority, TaskStatus, TaskUpdate
from app.services.clinical_repository import ClinicalRepository


async def _populate_chart(repository: ClinicalRepository, patient_id: str) -> None:
    """Give a patient one record of every dependent type."""
    await repository.add_allergy(AllergyCreate(patient_id=patient_id, allergen="Latex"))
    await repository.add_chronic_condition(
        ChronicConditionCreate(patient_id=patient_id, condition="Asthma")
    )
    await repository.create_clinical_note(
        ClinicalNoteCreate(patient_id=patient_id, note_type="progress", content="Stable")
    )
    await repository.create_task(TaskCreate(patient_id=patient_id, title="Follow up"))
    await repository.create_appointment(
        AppointmentCreate(
            patient_id=patient_id,
            appointment_type="Checkup",
            scheduled_date=utcnow() + timedelta(days=3),
        )
    )
    await repository.create_referral(
        ReferralCreate(patient_id=patient_id, specialist="Dr. Grey", reason="Cardiology review")
    )


@pytest.mark.asyncio
async def test_create_patient_assigns_id_and_status(
    repository: ClinicalRepository,
    patient_create: PatientCreate,
) -> None:
    """Test a new patient gets an identifier, active status and timestamps."""
    patient = await repository.create_patient(patient_create)

    assert patient.id.startswith("P")
    assert len(patient.id) > 1
    assert patient.status == PatientStatus.ACTIVE
    assert patient.created_at is not None
    assert patient.updated_at is not None


@pytest.mark.asyncio
async def test_get_patient_returns_stored_fields(
    repository: ClinicalRepository,
    patient_create: PatientCreate,
) -> None:
    """Test reading a patient back yields the registered fields."""
    patient = await repository.create_patient(patient_create)

    detail = await repository.get_patient_by_id(patient.id)

    for field, value in patient_create.model_dump().items():
        assert getattr(detail, field) == value
    assert detail.status == PatientStatus.ACTIVE
    assert detail.allergies == []
    assert detail.referrals == []


@pytest.mark.asyncio
async def test_patient_ids_are_unique(
    repository: ClinicalRepository,
    patient_create: PatientCreate,
) -> None:
    """Test patients created back to back never share an identifier."""
    ids = {(await repository.create_patient(patient_create)).id for _ in range(50)}
    assert len(ids) == 50


@pytest.mark.asyncio
async def test_get_missing_patient_raises(repository: ClinicalRepository) -> None:
    """Test reading an unknown patient raises NotFound."""
    with pytest.raises(NotFoundException, match="Patient not found"):
        await repository.get_patient_by_id("P-missing")


@pytest.mark.asyncio
async def test_returned_records_are_copies(
    repository: ClinicalRepository,
    patient_create: PatientCreate,
) -> None:
    """Test mutating a returned record does not change the store."""
    patient = await repository.create_patient(patient_create)
    patient.first_name = "Changed"

    patients = await repository.get_all_patients()
    assert patients[0].first_name == "Ada"


@pytest.mark.asyncio
async def test_update_patient_merges_fields(
    repository: ClinicalRepository,
    patient_create: PatientCreate,
) -> None:
    """Test updates overwrite only the supplied fields."""
    patient = await repository.create_patient(patient_create)

    await repository.update_patient(patient.id, PatientUpdate(city="London"))
    updated = await repository.update_patient(
        patient.id, PatientUpdate(status=PatientStatus.INACTIVE)
    )

    assert updated.city == "London"
    assert updated.status == PatientStatus.INACTIVE
    assert updated.first_name == "Ada"
    assert updated.updated_at >= patient.updated_at


@pytest.mark.asyncio
async def test_repeated_update_is_idempotent(
    repository: ClinicalRepository,
    patient_create: PatientCreate,
) -> None:
    """Test applying the same update twice matches applying it once."""
    patient = await repository.create_patient(patient_create)
    update = PatientUpdate(gender="Female", phone="5551234567")

    once = await repository.update_patient(patient.id, update)
    twice = await repository.update_patient(patient.id, update)

    assert once.model_dump(exclude={"updated_at"}) == twice.model_dump(exclude={"updated_at"})


@pytest.mark.asyncio
async def test_update_missing_patient_raises(repository: ClinicalRepository) -> None:
    """Test updating an unknown patient raises NotFound without auditing."""
    with pytest.raises(NotFoundException):
        await repository.update_patient("P-missing", PatientUpdate(city="Paris"))

    assert await repository.get_audit_log() == []


@pytest.mark.asyncio
async def test_delete_patient_cascades(
    repository: ClinicalRepository,
    patient_create: PatientCreate,
) -> None:
    """Test deleting a patient removes every dependent record and nothing else."""
    patient = await repository.create_patient(patient_create)
    other = await repository.create_patient(patient_create)
    await _populate_chart(repository, patient.id)
    await _populate_chart(repository, other.id)

    result = await repository.delete_patient(patient.id)

    assert result.success is True
    for entity in PATIENT_DEPENDENTS:
        records = repository.store.all(entity)
        assert all(record.patient_id != patient.id for record in records)
        assert any(record.patient_id == other.id for record in records)

    with pytest.raises(NotFoundException):
        await repository.get_patient_by_id(patient.id)


@pytest.mark.asyncio
async def test_delete_patient_records_single_audit_entry(
    repository: ClinicalRepository,
    patient_create: PatientCreate,
) -> None:
    """Test a cascading delete is audited once, for the patient."""
    patient = await repository.create_patient(patient_create)
    await _populate_chart(repository, patient.id)
    before = len(await repository.get_audit_log())

    await repository.delete_patient(patient.id, user_id="dr-adams")

    log = await repository.get_audit_log()
    assert len(log) == before + 1
    assert log[0].entity_type == "Patient"
    assert log[0].entity_id == patient.id
    assert log[0].action == AuditAction.DELETE
    assert log[0].user_id == "dr-adams"


@pytest.mark.asyncio
async def test_delete_missing_patient_raises(repository: ClinicalRepository) -> None:
    """Test deleting an unknown patient raises NotFound."""
    with pytest.raises(NotFoundException):
        await repository.delete_patient("P-missing")


async def _audited(
    repository: ClinicalRepository,
    operation: Awaitable[Any],
    action: AuditAction,
    entity_type: str,
    entity_id: str | int | None = None,
) -> Any:
    """Run a mutation and check it appended exactly one matching audit entry."""
    before = len(await repository.get_audit_log())
    result = await operation
    log = await repository.get_audit_log()

    assert len(log) == before + 1
    assert (log[0].action, log[0].entity_type) == (action, entity_type)
    assert log[0].entity_id == str(result.id if entity_id is None else entity_id)
    return result


@pytest.mark.asyncio
async def test_every_mutation_adds_one_audit_entry(
    seeded_repository: ClinicalRepository,
    patient_create: PatientCreate,
) -> None:
    """Test each create, update and delete appends exactly one matching entry."""
    repository = seeded_repository
    create, update, delete = AuditAction.CREATE, AuditAction.UPDATE, AuditAction.DELETE

    patient = await _audited(
        repository, repository.create_patient(patient_create), create, "Patient"
    )
    await _audited(
        repository,
        repository.update_patient(patient.id, PatientUpdate(city="Leeds")),
        update,
        "Patient",
    )
    allergy = await _audited(
        repository,
        repository.add_allergy(AllergyCreate(patient_id=patient.id, allergen="Dust")),
        create,
        "Allergy",
    )
    await _audited(
        repository,
        repository.add_chronic_condition(
            ChronicConditionCreate(patient_id=patient.id, condition="Asthma")
        ),
        create,
        "ChronicCondition",
    )
    note = await _audited(
        repository,
        repository.create_clinical_note(
            ClinicalNoteCreate(patient_id=patient.id, note_type="soap", content="S: cough")
        ),
        create,
        "ClinicalNote",
    )
    await _audited(
        repository,
        repository.update_clinical_note(note.id, ClinicalNoteUpdate(status=NoteStatus.FINAL)),
        update,
        "ClinicalNote",
    )
    task = await _audited(
        repository,
        repository.create_task(TaskCreate(patient_id=patient.id, title="Call")),
        create,
        "Task",
    )
    await _audited(
        repository,
        repository.update_task(task.id, TaskUpdate(status=TaskStatus.IN_PROGRESS)),
        update,
        "Task",
    )
    await _audited(
        repository,
        repository.create_appointment(
            AppointmentCreate(
                patient_id=patient.id,
                appointment_type="Checkup",
                scheduled_date=utcnow() + timedelta(days=1),
            )
        ),
        create,
        "Appointment",
    )
    await _audited(
        repository,
        repository.create_referral(
            ReferralCreate(patient_id=patient.id, specialist="Dr. Grey", reason="Cardiology")
        ),
        create,
        "Referral",
    )
    await _audited(
        repository,
        repository.remove_allergy(allergy.id),
        delete,
        "Allergy",
        allergy.id,
    )
    await _audited(
        repository,
        repository.increment_workflow_usage(1),
        update,
        "WorkflowTemplate",
    )
    await _audited(
        repository,
        repository.delete_patient(patient.id),
        delete,
        "Patient",
        patient.id,
    )

@pytest.mark.asyncio
async def test_search_patients_is_case_insensitive(
    repository: ClinicalRepository,
    patient_create: PatientCreate,
) -> None:
    """Test search matches last name regardless of case."""
    patient = await repository.create_patient(patient_create)
    await repository.create_patient(
        PatientCreate(first_name="Grace", last_name="Hopper", date_of_birth=date(1980, 12, 9))
    )

    results = await repository.search_patients("lovelace")

    assert [p.id for p in results] == [patient.id]


@pytest.mark.asyncio
async def test_search_patients_matches_id_and_email(
    seeded_repository: ClinicalRepository,
) -> None:
    """Test search covers identifiers and email addresses."""
    by_id = await seeded_repository.search_patients("p2025000")
    by_email = await seeded_repository.search_patients("EMILY.CHEN@")

    assert [p.id for p in by_id] == ["P20250002", "P20250003", "P20250001"]
    assert [p.id for p in by_email] == ["P20250003"]


@pytest.mark.asyncio
async def test_add_allergy_defaults(repository: ClinicalRepository) -> None:
    """Test allergies default to active with sequential identifiers."""
    first = await repository.add_allergy(AllergyCreate(patient_id="P1", allergen="Latex"))
    second = await repository.add_allergy(
        AllergyCreate(patient_id="P1", allergen="Peanuts", severity=AllergySeverity.SEVERE)
    )

    assert first.status == "active"
    assert first.severity == AllergySeverity.MODERATE
    assert second.id == first.id + 1
    assert await repository.get_allergies_by_patient("P1") == [first, second]


@pytest.mark.asyncio
async def test_allergy_ids_are_not_reused(repository: ClinicalRepository) -> None:
    """Test removing an allergy does not free its identifier."""
    first = await repository.add_allergy(AllergyCreate(patient_id="P1", allergen="Latex"))
    await repository.remove_allergy(first.id)

    second = await repository.add_allergy(AllergyCreate(patient_id="P1", allergen="Latex"))

    assert second.id == first.id + 1


@pytest.mark.asyncio
async def test_seeded_allergy_ids_continue(seeded_repository: ClinicalRepository) -> None:
    """Test new allergies are numbered after the demo records."""
    allergy = await seeded_repository.add_allergy(
        AllergyCreate(patient_id="P20250003", allergen="Pollen")
    )
    assert allergy.id == 4


@pytest.mark.asyncio
async def test_remove_allergy(seeded_repository: ClinicalRepository) -> None:
    """Test removing an allergy deletes it and audits DELETE."""
    await seeded_repository.remove_allergy(2)

    remaining = await seeded_repository.get_allergies_by_patient("P20250001")
    assert [a.id for a in remaining] == [3]

    log = await seeded_repository.get_audit_log()
    assert (log[0].entity_type, log[0].entity_id, log[0].action) == (
        "Allergy",
        "2",
        AuditAction.DELETE,
    )


@pytest.mark.asyncio
async def test_remove_missing_allergy_raises(repository: ClinicalRepository) -> None:
    """Test removing an unknown allergy raises NotFound."""
    with pytest.raises(NotFoundException, match="Allergy not found"):
        await repository.remove_allergy(42)


@pytest.mark.asyncio
async def test_dependent_record_requires_patient_id(repository: ClinicalRepository) -> None:
    """Test records that must reference a patient are rejected without one."""
    with pytest.raises(ValidationException):
        await repository.add_allergy(AllergyCreate(allergen="Latex"))

    assert await repository.get_audit_log() == []


@pytest.mark.asyncio
async def test_permissive_references_by_default(repository: ClinicalRepository) -> None:
    """Test records for unknown patients are accepted unless strict mode is on."""
    condition = await repository.add_chronic_condition(
        ChronicConditionCreate(patient_id="P-unknown", condition="Gout")
    )
    assert condition.status == "active"


@pytest.mark.asyncio
async def test_strict_references_reject_unknown_patient() -> None:
    """Test strict mode rejects records for unknown patients without auditing."""
    repository = ClinicalRepository(strict_references=True)

    with pytest.raises(ReferenceException):
        await repository.add_allergy(AllergyCreate(patient_id="P-unknown", allergen="Latex"))

    assert await repository.get_audit_log() == []
    # Tasks may have no patient at all
    task = await repository.create_task(TaskCreate(title="Restock exam room"))
    assert task.patient_id is None


@pytest.mark.asyncio
async def test_clinical_note_defaults_and_audit_user(repository: ClinicalRepository) -> None:
    """Test notes default to draft and are audited under their author."""
    note = await repository.create_clinical_note(
        ClinicalNoteCreate(
            patient_id="P1",
            note_type="soap",
            content="S: cough",
            created_by="dr-house",
        )
    )
    anonymous = await repository.create_clinical_note(
        ClinicalNoteCreate(patient_id="P1", note_type="progress", content="Improving")
    )

    assert note.status == NoteStatus.DRAFT
    assert note.created_at is not None
    assert note.updated_at is not None

    entries = await repository.get_audit_log(AuditLogFilters(entity_type="ClinicalNote"))
    users = {entry.entity_id: entry.user_id for entry in entries}
    assert users[str(note.id)] == "dr-house"
    assert users[str(anonymous.id)] == "system"


@pytest.mark.asyncio
async def test_clinical_note_keeps_supplied_status(repository: ClinicalRepository) -> None:
    """Test a caller-supplied note status is kept."""
    note = await repository.create_clinical_note(
        ClinicalNoteCreate(
            patient_id="P1",
            note_type="discharge",
            content="Discharged home",
            status=NoteStatus.FINAL,
        )
    )
    assert note.status == NoteStatus.FINAL


@pytest.mark.asyncio
async def test_update_clinical_note(repository: ClinicalRepository) -> None:
    """Test signing a note merges the change and audits the signer."""
    note = await repository.create_clinical_note(
        ClinicalNoteCreate(patient_id="P1", note_type="progress", content="Stable")
    )

    signed = await repository.update_clinical_note(
        note.id,
        ClinicalNoteUpdate(status=NoteStatus.SIGNED, signed_by="dr-adams", updated_by="dr-adams"),
    )

    assert signed.status == NoteStatus.SIGNED
    assert signed.content == "Stable"
    assert signed.updated_at >= note.updated_at

    log = await repository.get_audit_log()
    assert log[0].action == AuditAction.UPDATE
    assert log[0].user_id == "dr-adams"


@pytest.mark.asyncio
async def test_update_missing_clinical_note_raises(repository: ClinicalRepository) -> None:
    """Test editing an unknown note raises NotFound."""
    with pytest.raises(NotFoundException, match="Clinical note not found"):
        await repository.update_clinical_note(7, ClinicalNoteUpdate(content="x"))


@pytest.mark.asyncio
async def test_task_completion_stamps_time(repository: ClinicalRepository) -> None:
    """Test completing a task sets completed_at once."""
    task = await repository.create_task(TaskCreate(title="Follow up", patient_id="P1"))
    assert task.status == TaskStatus.PENDING
    assert task.completed_at is None

    completed = await repository.update_task(task.id, TaskUpdate(status=TaskStatus.COMPLETED))
    assert completed.status == TaskStatus.COMPLETED
    assert completed.completed_at is not None

    reprioritized = await repository.update_task(task.id, TaskUpdate(priority=TaskPriority.LOW))
    assert reprioritized.completed_at == completed.completed_at


@pytest.mark.asyncio
async def test_update_missing_task_raises(repository: ClinicalRepository) -> None:
    """Test updating an unknown task raises NotFound."""
    with pytest.raises(NotFoundException, match="Task not found"):
        await repository.update_task(99, TaskUpdate(status=TaskStatus.CANCELLED))


@pytest.mark.asyncio
async def test_reopened_task_clears_completion(
    repository: ClinicalRepository,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Test reopening a task clears its completion and completing again re-stamps it."""
    task = await repository.create_task(TaskCreate(title="Review labs", patient_id="P1"))
    completed = await repository.update_task(
        task.id, TaskUpdate(status=TaskStatus.COMPLETED, completed_by="dr-adams")
    )

    reopened = await repository.update_task(task.id, TaskUpdate(status=TaskStatus.IN_PROGRESS))
    assert reopened.completed_at is None
    assert reopened.completed_by is None

    later = completed.completed_at + timedelta(hours=1)
    monkeypatch.setattr("app.services.clinical_repository.utcnow", lambda: later)

    recompleted = await repository.update_task(task.id, TaskUpdate(status=TaskStatus.COMPLETED))
    assert recompleted.completed_at == later


@pytest.mark.asyncio
async def test_task_created_completed_is_stamped(repository: ClinicalRepository) -> None:
    """Test a task created as completed carries its completion time from the start."""
    task = await repository.create_task(
        TaskCreate(title="Already done", status=TaskStatus.COMPLETED)
    )
    assert task.completed_at is not None

    edited = await repository.update_task(task.id, TaskUpdate(priority=TaskPriority.HIGH))
    assert edited.completed_at == task.completed_at


@pytest.mark.asyncio
async def test_rejected_record_does_not_consume_id(repository: ClinicalRepository) -> None:
    """Test a record failing validation leaves the id sequence untouched."""
    with pytest.raises(ValidationException):
        await repository.create_clinical_note(
            ClinicalNoteCreate(note_type="progress", content="No patient")
        )

    note = await repository.create_clinical_note(
        ClinicalNoteCreate(patient_id="P1", note_type="progress", content="Stable")
    )
    assert note.id == 1


@pytest.mark.asyncio
async def test_appointment_and_referral_defaults(repository: ClinicalRepository) -> None:
    """Test appointments default to scheduled and referrals to pending."""
    appointment = await repository.create_appointment(
        AppointmentCreate(
            patient_id="P1",
            appointment_type="Follow-up",
            scheduled_date=utcnow() + timedelta(days=1),
        )
    )
    referral = await repository.create_referral(
        ReferralCreate(patient_id="P1", specialist="Dr. Strange", reason="Neurology")
    )

    assert appointment.status == AppointmentStatus.SCHEDULED
    assert appointment.duration_minutes == 30
    assert referral.status == "pending"
    assert referral.urgency == ReferralUrgency.ROUTINE
    assert referral.referral_date == utcnow().date()
    assert await repository.get_appointments_by_patient("P1") == [appointment]
    assert await repository.get_referrals_by_patient("P1") == [referral]


@pytest.mark.asyncio
async def test_workflow_lookup(seeded_repository: ClinicalRepository) -> None:
    """Test workflow templates can be listed and fetched."""
    workflows = await seeded_repository.get_all_workflows()
    assert [w.id for w in workflows] == [1, 2, 3]

    workflow = await seeded_repository.get_workflow_by_id(2)
    assert workflow.name == "Annual Physical Examination"

    with pytest.raises(NotFoundException, match="Workflow not found"):
        await seeded_repository.get_workflow_by_id(9999)


@pytest.mark.asyncio
async def test_increment_workflow_usage(seeded_repository: ClinicalRepository) -> None:
    """Test using a workflow increments its counter by one and audits it."""
    workflow = await seeded_repository.increment_workflow_usage(1)

    assert workflow is not None
    assert workflow.usage_count == 157
    assert (await seeded_repository.get_workflow_by_id(1)).usage_count == 157

    log = await seeded_repository.get_audit_log()
    assert (log[0].entity_type, log[0].entity_id, log[0].action) == (
        "WorkflowTemplate",
        "1",
        AuditAction.UPDATE,
    )


@pytest.mark.asyncio
async def test_increment_unknown_workflow_is_silent(
    seeded_repository: ClinicalRepository,
) -> None:
    """Test an unknown workflow returns None, changes nothing and is not audited."""
    before = [w.usage_count for w in await seeded_repository.get_all_workflows()]

    result = await seeded_repository.increment_workflow_usage(9999)

    assert result is None
    assert [w.usage_count for w in await seeded_repository.get_all_workflows()] == before
    assert await seeded_repository.get_audit_log() == []


@pytest.mark.asyncio
async def test_statistics(
    repository: ClinicalRepository,
    patient_create: PatientCreate,
) -> None:
    """Test dashboard counters reflect the current store."""
    patient = await repository.create_patient(patient_create)
    inactive = await repository.create_patient(patient_create)
    await repository.update_patient(inactive.id, PatientUpdate(status=PatientStatus.INACTIVE))

    await repository.create_clinical_note(
        ClinicalNoteCreate(
            patient_id=patient.id, note_type="soap", content="AI draft", is_ai_generated=True
        )
    )
    await repository.create_clinical_note(
        ClinicalNoteCreate(patient_id=patient.id, note_type="soap", content="Manual")
    )
    task = await repository.create_task(TaskCreate(patient_id=patient.id, title="One"))
    await repository.create_task(TaskCreate(patient_id=patient.id, title="Two"))
    await repository.update_task(task.id, TaskUpdate(status=TaskStatus.IN_PROGRESS))

    for days, status in [
        (2, None),
        (-2, None),
        (5, AppointmentStatus.CANCELLED),
        (7, AppointmentStatus.CONFIRMED),
    ]:
        await repository.create_appointment(
            AppointmentCreate(
                patient_id=patient.id,
                appointment_type="Visit",
                scheduled_date=utcnow() + timedelta(days=days),
                status=status,
            )
        )

    stats = await repository.get_statistics()

    assert stats.total_patients == len(await repository.get_all_patients()) == 2
    assert stats.active_patients == 1
    assert stats.total_clinical_notes == 2
    assert stats.ai_generated_notes == 1
    assert stats.pending_tasks == 1
    assert stats.upcoming_appointments == 1


@pytest.mark.asyncio
async def test_statistics_track_deletes(
    seeded_repository: ClinicalRepository,
) -> None:
    """Test statistics are recomputed on every call."""
    assert (await seeded_repository.get_statistics()).total_patients == 3

    await seeded_repository.delete_patient("P20250001")

    assert (await seeded_repository.get_statistics()).total_patients == 2


@pytest.mark.asyncio
async def test_active_tasks_ordering(seeded_repository: ClinicalRepository) -> None:
    """Test open tasks are ordered by priority, then due date, with patient names."""
    soon = utcnow() + timedelta(hours=2)
    later = utcnow() + timedelta(days=2)
    low = await seeded_repository.create_task(
        TaskCreate(title="Low", priority=TaskPriority.LOW, due_date=soon)
    )
    high_late = await seeded_repository.create_task(
        TaskCreate(
            title="High later",
            priority=TaskPriority.HIGH,
            due_date=later,
            patient_id="P20250003",
        )
    )
    high_undated = await seeded_repository.create_task(
        TaskCreate(title="High undated", priority=TaskPriority.HIGH)
    )
    high_soon = await seeded_repository.create_task(
        TaskCreate(title="High soon", priority=TaskPriority.HIGH, due_date=soon)
    )
    urgent = await seeded_repository.create_task(
        TaskCreate(title="Urgent", priority=TaskPriority.URGENT, patient_id="P20250001")
    )
    done = await seeded_repository.create_task(TaskCreate(title="Done"))
    await seeded_repository.update_task(done.id, TaskUpdate(status=TaskStatus.COMPLETED))

    active = await seeded_repository.get_active_tasks()

    assert [t.id for t in active] == [
        urgent.id,
        high_soon.id,
        high_late.id,
        high_undated.id,
        low.id,
    ]
    assert active[0].patient_name == "Sarah Johnson"
    assert active[2].patient_name == "Emily Chen"
    assert active[1].patient_name is None


@pytest.mark.asyncio
async def test_patient_summaries(seeded_repository: ClinicalRepository) -> None:
    """Test per-patient counts and latest note date."""
    await _populate_chart(seeded_repository, "P20250003")
    note = await seeded_repository.create_clinical_note(
        ClinicalNoteCreate(patient_id="P20250003", note_type="progress", content="Second")
    )

    summaries = {s.id: s for s in await seeded_repository.get_patient_summaries()}

    assert summaries["P20250003"].note_count == 2
    assert summaries["P20250003"].appointment_count == 1
    assert summaries["P20250003"].task_count == 1
    assert summaries["P20250003"].last_note_date == note.created_at
    assert summaries["P20250001"].note_count == 0
    assert summaries["P20250001"].last_note_date is None


@pytest.mark.asyncio
async def test_read_auditing(patient_create: PatientCreate) -> None:
    """Test opening a chart is audited only when read auditing is enabled."""
    repository = ClinicalRepository(audit_reads=True)
    patient = await repository.create_patient(patient_create)

    await repository.get_patient_by_id(patient.id, user_id="nurse-1")

    log = await repository.get_audit_log(AuditLogFilters(action=AuditAction.READ))
    assert len(log) == 1
    assert log[0].user_id == "nurse-1"
