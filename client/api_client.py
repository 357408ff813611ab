"""
HTTP client for the workout session API.

Used by the session controller to read and mutate a workout on behalf of
an authenticated user. Every mutating call returns the refreshed workout
so the caller can replace its snapshot in one step.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from domain.models import Workout
from domain.services import CompletionMetrics, WorkoutAction

logger = logging.getLogger(__name__)


class WorkoutApiClientError(Exception):
    """Base exception for workout API client errors."""

    pass


class WorkoutApiUnavailable(WorkoutApiClientError):
    """Raised when the workout API is unreachable or times out."""

    pass


class WorkoutApiError(WorkoutApiClientError):
    """Raised when the workout API returns a non-2xx response."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class WorkoutApiClient:
    """
    HTTP client for workout session endpoints.

    Holds one httpx.AsyncClient for the session; close it with close() or
    use the client as an async context manager.
    """

    def __init__(
        self,
        base_url: str,
        auth_token: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the workout API client.

        Args:
            base_url: Base URL of the API (e.g., "http://localhost:8001")
            auth_token: Bearer token for the user
            timeout: Request timeout in seconds
            transport: Optional transport (httpx.MockTransport in tests)
        """
        self._base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            headers={"Authorization": f"Bearer {auth_token}"},
            transport=transport,
        )

    async def close(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "WorkoutApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        try:
            response = await self._http.request(method, path, json=json)
        except httpx.TimeoutException as e:
            logger.error(f"Workout API timeout: {e}")
            raise WorkoutApiUnavailable("Workout API request timed out") from e
        except httpx.TransportError as e:
            # connect, read, write and protocol failures
            logger.error(f"Workout API unavailable: {type(e).__name__}: {e}")
            raise WorkoutApiUnavailable(
                f"Workout API is not available at {self._base_url}"
            ) from e

        if response.is_success:
            return response.json()

        logger.error(f"Workout API error: {response.status_code} - {response.text}")
        raise WorkoutApiError(
            f"{method} {path} failed: {response.text}",
            response.status_code,
        )

    async def list_workouts(self) -> List[Workout]:
        data = await self._request("GET", "/workouts")
        return [Workout.model_validate(w) for w in data.get("workouts", [])]

    async def create_workout(
        self,
        name: str,
        exercises: List[Dict[str, Any]],
        description: Optional[str] = None,
    ) -> Workout:
        data = await self._request(
            "POST",
            "/workouts",
            json={"name": name, "description": description, "exercises": exercises},
        )
        return Workout.model_validate(data["workout"])

    async def get_workout(self, workout_id: str) -> Workout:
        """
        Get a workout with exercises and sets.

        Raises:
            WorkoutApiUnavailable: If the API is not reachable
            WorkoutApiError: If the API returns an error response (404 when not owned)
        """
        data = await self._request("GET", f"/workouts/{workout_id}")
        return Workout.model_validate(data["workout"])

    async def start_workout(self, workout_id: str) -> Workout:
        data = await self._request("PUT", f"/workouts/{workout_id}", json={"action": WorkoutAction.START.value})
        return Workout.model_validate(data["workout"])

    async def complete_workout(self, workout_id: str, metrics: CompletionMetrics) -> Workout:
        data = await self._request(
            "PUT",
            f"/workouts/{workout_id}",
            json={
                "action": WorkoutAction.COMPLETE.value,
                "duration": metrics.duration_minutes,
                "calories_burned": metrics.calories_burned,
                "total_kg_lifted": metrics.total_kg_lifted,
            },
        )
        return Workout.model_validate(data["workout"])

    async def update_set(
        self,
        workout_id: str,
        set_id: str,
        weight_kg: Optional[float],
        reps_completed: Optional[int],
        completed: bool,
    ) -> Workout:
        data = await self._request(
            "PUT",
            f"/workouts/{workout_id}/sets/{set_id}",
            json={
                "weight_kg": weight_kg,
                "reps_completed": reps_completed,
                "completed": completed,
            },
        )
        return Workout.model_validate(data["workout"])
