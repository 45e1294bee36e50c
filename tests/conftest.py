"""Shared test fixtures."""

from collections.abc import AsyncGenerator
from datetime import date

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.store import EntityStore
from app.dependencies import get_repository
from app.main import app
from app.schemas.patients import PatientCreate
from app.services.clinical_repository import ClinicalRepository
from app.services.demo_data import load_demo_data


@pytest.fixture
def repository() -> ClinicalRepository:
    """Create an empty repository."""
    return ClinicalRepository()


@pytest.fixture
def seeded_repository() -> ClinicalRepository:
    """Create a repository holding the demo patients and workflows."""
    store = EntityStore()
    load_demo_data(store)
    return ClinicalRepository(store)


async def _client_for(repository: ClinicalRepository) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_repository] = lambda: repository

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(repository: ClinicalRepository) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client backed by an empty repository."""
    async for client in _client_for(repository):
        yield client


@pytest_asyncio.fixture
async def seeded_client(
    seeded_repository: ClinicalRepository,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client backed by the demo data."""
    async for client in _client_for(seeded_repository):
        yield client


@pytest.fixture
def sample_patient_data() -> dict:
    """Sample patient registration payload."""
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "date_of_birth": "1990-01-01",
        "blood_type": "O+",
        "phone": "(555) 987-6543",
        "email": "ada.lovelace@example.com",
        "insurance_provider": "Aetna",
        "insurance_policy_number": "AET123456",
    }


@pytest.fixture
def patient_create() -> PatientCreate:
    """Validated patient registration data."""
    return PatientCreate(
        first_name="Ada",
        last_name="Lovelace",
        date_of_birth=date(1990, 1, 1),
        blood_type="O+",
    )
