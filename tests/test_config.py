"""Tests for settings and repository construction."""

import pytest
from fastapi import FastAPI

from app.config import Settings
from app.core.exceptions import ReferenceException
from app.dependencies import build_repository
from app.main import lifespan
from app.schemas.allergies import AllergyCreate


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test repository options are read from environment variables."""
    monkeypatch.setenv("SEED_DEMO_DATA", "false")
    monkeypatch.setenv("STRICT_REFERENCES", "true")
    monkeypatch.setenv("SYSTEM_USER_ID", "scheduler")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

    config = Settings()

    assert config.seed_demo_data is False
    assert config.strict_references is True
    assert config.system_user_id == "scheduler"
    assert config.cors_origins == ["http://a.test", "http://b.test"]


def test_build_repository_seeds_demo_data() -> None:
    """Test the default repository starts with the demo records."""
    repository = build_repository(Settings(SEED_DEMO_DATA=True))

    assert repository.store.count("patients") == 3
    assert repository.store.count("workflows") == 3
    assert repository.store.count("audit_log") == 0


@pytest.mark.asyncio
async def test_build_repository_options() -> None:
    """Test settings flow into the repository."""
    repository = build_repository(
        Settings(SEED_DEMO_DATA=False, STRICT_REFERENCES=True, SYSTEM_USER_ID="scheduler")
    )

    assert repository.store.count("patients") == 0
    with pytest.raises(ReferenceException):
        await repository.add_allergy(AllergyCreate(patient_id="P1", allergen="Latex"))
    assert repository.system_user == "scheduler"


@pytest.mark.asyncio
async def test_lifespan_owns_repository() -> None:
    """Test the application builds its repository on startup and drops it on shutdown."""
    application = FastAPI()
    application.state.settings = Settings(SEED_DEMO_DATA=True, AUDIT_READS=True)

    async with lifespan(application):
        repository = application.state.repository
        assert repository.store.count("patients") == 3
        assert repository.audit_reads is True

    assert application.state.repository is None
