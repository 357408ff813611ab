"""
Shared pytest fixtures.

The API fixtures build a fresh app per test with auth, the workout
repository, the exercise generator and settings overridden, so no test
touches Supabase or OpenAI.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from api.deps import (
    get_current_user,
    get_exercise_generator,
    get_settings,
    get_workout_repo,
)
from backend.main import create_app
from backend.settings import Settings
from tests.fakes import FakeWorkoutSessionRepository


# ---------------------------------------------------------------------------
# Auth Mock
# ---------------------------------------------------------------------------

TEST_USER_ID = "test-user-123"
OTHER_USER_ID = "other-user-456"


async def mock_get_current_user() -> str:
    """Mock auth dependency that returns a test user."""
    return TEST_USER_ID


# ---------------------------------------------------------------------------
# Test App and Client
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with minimal configuration."""
    return Settings(environment="test", _env_file=None)


@pytest.fixture
def app(test_settings):
    """Create test application instance."""
    return create_app(settings=test_settings)


@pytest.fixture
def fake_repo() -> FakeWorkoutSessionRepository:
    return FakeWorkoutSessionRepository()


@pytest.fixture
def fake_generator():
    """No generator by default: generated workouts use the fallback plan."""
    return None


@pytest.fixture
def client(app, fake_repo, fake_generator, test_settings) -> Generator[TestClient, None, None]:
    """
    Per-test FastAPI TestClient backed by the in-memory repository.
    Properly cleans up dependency overrides after each test.
    """
    app.dependency_overrides[get_current_user] = mock_get_current_user
    app.dependency_overrides[get_workout_repo] = lambda: fake_repo
    app.dependency_overrides[get_exercise_generator] = lambda: fake_generator
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()
