"""
End-to-end workout session flow.

The client-side controller talks to the real FastAPI app over
httpx.ASGITransport, with real JWT authentication and the in-memory
repository in place of Supabase.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import httpx
import jwt
import pytest

from api.deps import get_exercise_generator, get_settings, get_workout_repo
from backend.main import create_app
from backend.settings import Settings
from client import WorkoutApiClient, WorkoutApiError, WorkoutSessionController
from domain.models import WorkoutStatus
from tests.fakes import FakeWorkoutSessionRepository

pytestmark = pytest.mark.integration

JWT_SECRET = "integration-secret"
OWNER = "owner-1"
STRANGER = "stranger-2"


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def settings():
    return Settings(environment="test", jwt_secret=JWT_SECRET, _env_file=None)


@pytest.fixture
def repo():
    return FakeWorkoutSessionRepository()


@pytest.fixture
def app(settings, repo):
    app = create_app(settings=settings)
    app.dependency_overrides[get_workout_repo] = lambda: repo
    app.dependency_overrides[get_exercise_generator] = lambda: None
    app.dependency_overrides[get_settings] = lambda: settings
    with patch("backend.auth.get_settings", return_value=settings):
        yield app
    app.dependency_overrides.clear()


def _api(app, user_id: str) -> WorkoutApiClient:
    token = jwt.encode({"sub": user_id}, JWT_SECRET, algorithm="HS256")
    return WorkoutApiClient(
        "http://testserver",
        token,
        transport=httpx.ASGITransport(app=app),
    )


class TestWorkoutSessionFlow:
    """Create, run and finish a session; then reopen it."""

    @pytest.mark.asyncio
    async def test_squat_session_round_trip(self, app):
        clock = FakeClock(datetime.now(timezone.utc))

        async with _api(app, OWNER) as api:
            created = await api.create_workout(
                "Leg Day",
                [{"name": "Squat", "sets": 4, "reps": 10, "rest": 90, "weight": 60}],
            )
            assert [s.set_number for s in created.exercises[0].sets] == [1, 2, 3, 4]

            async with WorkoutSessionController(api, created.id, clock=clock, tick_seconds=3600) as session:
                await session.load()
                assert session.is_started is False

                await session.start()
                assert session.workout.status == WorkoutStatus.IN_PROGRESS

                for workout_set in created.exercises[0].sets:
                    await session.complete_set(workout_set.id, weight="60", reps="10")
                    assert session.rest.remaining_seconds == 90

                assert session.can_finish is True
                clock.advance(600)
                summary = await session.finish()

            assert summary.completion.duration_minutes == 10
            assert summary.completion.total_kg_lifted == 240.0
            # 10 * 6 + 240 * 0.015 = 63.6
            assert summary.completion.calories_burned == 64
            assert summary.workout.status == WorkoutStatus.COMPLETE
            assert summary.workout.total_kg_lifted == 240.0

            async with WorkoutSessionController(api, created.id, clock=clock, tick_seconds=3600) as reopened:
                await reopened.load()

                assert reopened.is_started is False
                assert reopened.elapsed.elapsed_seconds == 600
                assert reopened.summary.metrics.total_sets == 4
                assert reopened.summary.metrics.duration_label == "10m"

    @pytest.mark.asyncio
    async def test_other_user_cannot_see_or_change_workout(self, app, repo):
        async with _api(app, OWNER) as owner_api:
            created = await owner_api.create_workout("Push Day", [{"name": "Bench", "sets": 2, "reps": 8}])

        set_id = created.exercises[0].sets[0].id
        async with _api(app, STRANGER) as stranger_api:
            with pytest.raises(WorkoutApiError) as exc_info:
                await stranger_api.get_workout(created.id)
            assert exc_info.value.status_code == 404

            with pytest.raises(WorkoutApiError) as exc_info:
                await stranger_api.update_set(created.id, set_id, 100.0, 8, True)
            assert exc_info.value.status_code == 404

            with pytest.raises(WorkoutApiError) as exc_info:
                await stranger_api.start_workout(created.id)
            assert exc_info.value.status_code == 404

            assert await stranger_api.list_workouts() == []

        stored = repo.get(created.id, OWNER)
        assert stored.status == WorkoutStatus.READY
        assert stored.completed_set_count == 0

    @pytest.mark.asyncio
    async def test_missing_token_is_rejected(self, app):
        async with WorkoutApiClient("http://testserver", "", transport=httpx.ASGITransport(app=app)) as api:
            with pytest.raises(WorkoutApiError) as exc_info:
                await api.list_workouts()

        assert exc_info.value.status_code == 401
