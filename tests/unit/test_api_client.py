"""
Unit tests for the workout API HTTP client.

Requests are served by httpx.MockTransport, so no server is needed.
"""

import json

import httpx
import pytest

from client.api_client import (
    WorkoutApiClient,
    WorkoutApiError,
    WorkoutApiUnavailable,
)
from domain.services import CompletionMetrics
from tests.fakes import build_workout

BASE_URL = "http://workouts.test"


def _workout_payload(**kwargs):
    workout = build_workout(exercises=[("Squat", 2, 5, 90, 100.0)], **kwargs)
    return {"success": True, "workout": workout.model_dump(mode="json")}


class RecordingHandler:
    """MockTransport handler that records requests and returns canned responses."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last_json(self):
        return json.loads(self.requests[-1].content)


def _client(handler) -> WorkoutApiClient:
    return WorkoutApiClient(BASE_URL, "token-abc", transport=httpx.MockTransport(handler))


@pytest.mark.unit
class TestWorkoutApiClient:
    """Tests for request shapes and response parsing."""

    @pytest.mark.asyncio
    async def test_get_workout(self):
        handler = RecordingHandler(httpx.Response(200, json=_workout_payload()))

        async with _client(handler) as api:
            workout = await api.get_workout("w1")

        request = handler.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/workouts/w1"
        assert request.headers["Authorization"] == "Bearer token-abc"
        assert workout.id == "w1"
        assert len(workout.exercises[0].sets) == 2

    @pytest.mark.asyncio
    async def test_list_workouts(self):
        payload = {"success": True, "workouts": [_workout_payload()["workout"]], "count": 1}
        handler = RecordingHandler(httpx.Response(200, json=payload))

        async with _client(handler) as api:
            workouts = await api.list_workouts()

        assert [w.id for w in workouts] == ["w1"]

    @pytest.mark.asyncio
    async def test_create_workout(self):
        handler = RecordingHandler(httpx.Response(201, json=_workout_payload()))

        async with _client(handler) as api:
            await api.create_workout("Leg Day", [{"name": "Squat", "sets": 2}])

        assert handler.requests[0].method == "POST"
        assert handler.last_json == {
            "name": "Leg Day",
            "description": None,
            "exercises": [{"name": "Squat", "sets": 2}],
        }

    @pytest.mark.asyncio
    async def test_start_workout(self):
        handler = RecordingHandler(httpx.Response(200, json=_workout_payload()))

        async with _client(handler) as api:
            await api.start_workout("w1")

        assert handler.requests[0].method == "PUT"
        assert handler.last_json == {"action": "start"}

    @pytest.mark.asyncio
    async def test_complete_workout_sends_metrics(self):
        handler = RecordingHandler(httpx.Response(200, json=_workout_payload()))
        metrics = CompletionMetrics(duration_minutes=5, calories_burned=32, total_kg_lifted=150.0)

        async with _client(handler) as api:
            await api.complete_workout("w1", metrics)

        assert handler.last_json == {
            "action": "complete",
            "duration": 5,
            "calories_burned": 32,
            "total_kg_lifted": 150.0,
        }

    @pytest.mark.asyncio
    async def test_update_set(self):
        handler = RecordingHandler(httpx.Response(200, json=_workout_payload()))

        async with _client(handler) as api:
            await api.update_set("w1", "s1", weight_kg=60.0, reps_completed=10, completed=True)

        assert handler.requests[0].url.path == "/workouts/w1/sets/s1"
        assert handler.last_json == {"weight_kg": 60.0, "reps_completed": 10, "completed": True}


@pytest.mark.unit
class TestWorkoutApiClientErrors:
    """Tests for error mapping."""

    @pytest.mark.asyncio
    async def test_error_status_raises_api_error(self):
        handler = RecordingHandler(httpx.Response(404, json={"detail": "Workout not found"}))

        async with _client(handler) as api:
            with pytest.raises(WorkoutApiError) as exc_info:
                await api.get_workout("w1")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_connect_error_raises_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as api:
            with pytest.raises(WorkoutApiUnavailable):
                await api.get_workout("w1")

    @pytest.mark.asyncio
    async def test_timeout_raises_unavailable(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with _client(handler) as api:
            with pytest.raises(WorkoutApiUnavailable):
                await api.start_workout("w1")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error_cls",
        [httpx.ReadError, httpx.WriteError, httpx.RemoteProtocolError],
    )
    async def test_other_transport_errors_raise_unavailable(self, error_cls):
        def handler(request):
            raise error_cls("connection dropped", request=request)

        async with _client(handler) as api:
            with pytest.raises(WorkoutApiUnavailable) as exc_info:
                await api.get_workout("w1")

        assert isinstance(exc_info.value.__cause__, error_cls)
