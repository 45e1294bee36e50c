"""Demo records loaded into a fresh repository."""

from datetime import UTC, date, datetime

import structlog

from app.core.store import EntityStore
from app.schemas.allergies import Allergy, AllergySeverity, AllergyStatus
from app.schemas.conditions import ChronicCondition, ConditionStatus
from app.schemas.patients import Patient, PatientStatus
from app.schemas.workflows import WorkflowTemplate

logger = structlog.get_logger()

DEMO_PATIENTS = [
    Patient(
        id="P20250002",
        first_name="James",
        last_name="Martinez",
        date_of_birth=date(1978, 7, 21),
        gender="Male",
        blood_type="A+",
        phone="(555) 234-5678",
        email="james.martinez@email.com",
        emergency_contact_name="Maria Martinez",
        emergency_contact_phone="(555) 234-5679",
        insurance_provider="Aetna",
        insurance_policy_number="AET987654321",
        status=PatientStatus.ACTIVE,
        created_at=datetime(2025, 1, 7, tzinfo=UTC),
    ),
    Patient(
        id="P20250003",
        first_name="Emily",
        last_name="Chen",
        date_of_birth=date(1992, 11, 29),
        gender="Female",
        blood_type="O+",
        phone="(555) 345-6789",
        email="emily.chen@email.com",
        emergency_contact_name="David Chen",
        emergency_contact_phone="(555) 345-6790",
        insurance_provider="Blue Cross",
        insurance_policy_number="BC123456789",
        status=PatientStatus.ACTIVE,
        created_at=datetime(2025, 1, 4, tzinfo=UTC),
    ),
    Patient(
        id="P20250001",
        first_name="Sarah",
        last_name="Johnson",
        date_of_birth=date(1985, 3, 14),
        gender="Female",
        blood_type="B+",
        phone="(555) 123-4567",
        email="sarah.johnson@email.com",
        emergency_contact_name="Michael Johnson",
        emergency_contact_phone="(555) 123-4568",
        insurance_provider="United Healthcare",
        insurance_policy_number="UHC987654321",
        status=PatientStatus.ACTIVE,
        created_at=datetime(2025, 1, 9, tzinfo=UTC),
    ),
]

_SEEDED_AT = datetime(2025, 1, 9, tzinfo=UTC)

DEMO_ALLERGIES = [
    Allergy(
        id=1,
        patient_id="P20250002",
        allergen="Latex",
        reaction="Skin rash, itching",
        severity=AllergySeverity.MODERATE,
        status=AllergyStatus.ACTIVE,
        created_at=_SEEDED_AT,
    ),
    Allergy(
        id=2,
        patient_id="P20250001",
        allergen="Penicillin",
        reaction="Hives, difficulty breathing",
        severity=AllergySeverity.SEVERE,
        status=AllergyStatus.ACTIVE,
        created_at=_SEEDED_AT,
    ),
    Allergy(
        id=3,
        patient_id="P20250001",
        allergen="Shellfish",
        reaction="Anaphylaxis",
        severity=AllergySeverity.LIFE_THREATENING,
        status=AllergyStatus.ACTIVE,
        created_at=_SEEDED_AT,
    ),
]

DEMO_CONDITIONS = [
    ChronicCondition(
        id=1,
        patient_id="P20250002",
        condition="Type 2 Diabetes",
        diagnosis_date=date(2015, 6, 15),
        status=ConditionStatus.ACTIVE,
        created_at=_SEEDED_AT,
    ),
    ChronicCondition(
        id=2,
        patient_id="P20250002",
        condition="High Cholesterol",
        diagnosis_date=date(2018, 3, 22),
        status=ConditionStatus.ACTIVE,
        created_at=_SEEDED_AT,
    ),
]

DEMO_WORKFLOWS = [
    WorkflowTemplate(
        id=1,
        name="Emergency Department Triage",
        description="Rapid assessment workflow for emergency department patients",
        category="emergency",
        steps=4,
        checklist_items=5,
        usage_count=156,
    ),
    WorkflowTemplate(
        id=2,
        name="Annual Physical Examination",
        description="Standard workflow for routine annual health checkups",
        category="examination",
        steps=5,
        checklist_items=5,
        usage_count=89,
    ),
    WorkflowTemplate(
        id=3,
        name="New Patient Intake",
        description="Comprehensive workflow for registering and onboarding new patients",
        category="intake",
        steps=4,
        checklist_items=5,
        usage_count=45,
    ),
]


def load_demo_data(store: EntityStore) -> None:
    """Insert the demo records directly, without audit entries."""
    seeds = {
        "patients": DEMO_PATIENTS,
        "allergies": DEMO_ALLERGIES,
        "chronic_conditions": DEMO_CONDITIONS,
        "workflows": DEMO_WORKFLOWS,
    }

    with store.lock:
        for entity, records in seeds.items():
            for record in records:
                store.insert(entity, record)

    logger.info("demo_data_loaded", **{entity: len(records) for entity, records in seeds.items()})
