"""
Client-side workout session controller.

Drives one workout session on behalf of the user: loads the workout,
starts it, logs and undoes sets, moves between exercises and finishes the
session with metrics computed locally. Server calls go through
WorkoutApiClient; a failed call leaves the local snapshot untouched and is
re-raised as SessionRequestError.

The controller owns two timers (rest countdown and elapsed ticker) and
cancels both in close(), so it should be used as an async context manager
or closed explicitly.

Usage:
    async with WorkoutApiClient(base_url, token) as api:
        async with WorkoutSessionController(api, workout_id) as session:
            await session.load()
            await session.start()
            await session.complete_set(set_id, weight=60, reps=10)
            ...
            summary = await session.finish()
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional

from client.api_client import WorkoutApiClient, WorkoutApiClientError, WorkoutApiError
from client.timers import TICK_SECONDS, ElapsedTicker, RestCountdown
from domain.models import Workout, WorkoutExercise
from domain.models.exercise import parse_weight
from domain.services import (
    CompletionMetrics,
    SessionMetrics,
    all_sets_completed,
    build_completion_metrics,
    computed_duration_seconds,
    derive_session_metrics,
    next_pending_exercise_index,
)
from domain.services.session_metrics import elapsed_seconds_between

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionControllerError(Exception):
    """Base exception for session controller errors."""

    pass


class SessionRequestError(SessionControllerError):
    """A server call failed; the local snapshot was not changed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SetInputError(SessionControllerError):
    """Weight or reps missing or not numeric when completing a set."""

    pass


class SessionStateError(SessionControllerError):
    """The action is not allowed in the session's current state."""

    pass


@dataclass(frozen=True)
class SessionSummary:
    """What the user sees after finishing (or reopening) a completed workout."""

    workout: Workout
    metrics: SessionMetrics
    completed_at: datetime
    completion: Optional[CompletionMetrics] = None


class WorkoutSessionController:
    """Session state and operations for a single workout."""

    def __init__(
        self,
        api: WorkoutApiClient,
        workout_id: str,
        clock: Callable[[], datetime] = _utcnow,
        tick_seconds: float = TICK_SECONDS,
    ):
        self._api = api
        self._workout_id = workout_id
        self._clock = clock

        self.workout: Optional[Workout] = None
        self.is_started = False
        self.current_exercise_index = 0
        self.saving_set_id: Optional[str] = None
        self.summary: Optional[SessionSummary] = None

        self.rest = RestCountdown(tick_seconds=tick_seconds)
        self.elapsed = ElapsedTicker(clock=clock, tick_seconds=tick_seconds)

    async def __aenter__(self) -> "WorkoutSessionController":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Cancel both timers."""
        self.rest.skip()
        self.elapsed.stop()

    # -------------------------------------------------------------------------
    # Server calls
    # -------------------------------------------------------------------------

    async def _call(self, request: Awaitable[Workout]) -> Workout:
        try:
            return await request
        except WorkoutApiError as e:
            raise SessionRequestError(str(e), e.status_code) from e
        except WorkoutApiClientError as e:
            raise SessionRequestError(str(e)) from e

    def _require_workout(self) -> Workout:
        if self.workout is None:
            raise SessionStateError("Workout not loaded")
        return self.workout

    async def load(self) -> Workout:
        """Fetch the workout and restore timers, cursor and summary from it."""
        workout = await self._call(self._api.get_workout(self._workout_id))

        self.workout = workout
        self.is_started = workout.is_in_progress
        self.rest.skip()

        if workout.is_in_progress:
            self.elapsed.start(workout.started_at or self._clock())
        elif workout.is_complete:
            self.elapsed.freeze(computed_duration_seconds(workout, 0))
        else:
            self.elapsed.reset()

        self.current_exercise_index = next_pending_exercise_index(workout)

        if workout.is_complete:
            duration = computed_duration_seconds(workout, 0)
            self.summary = SessionSummary(
                workout=workout,
                metrics=derive_session_metrics(workout, duration),
                completed_at=workout.completed_at or self._clock(),
            )
        else:
            self.summary = None
        return workout

    async def start(self) -> Workout:
        """Start the session. Completed workouts cannot be restarted from here."""
        current = self._require_workout()
        if current.is_complete:
            raise SessionStateError("Workout already completed")

        workout = await self._call(self._api.start_workout(self._workout_id))

        self.workout = workout
        self.is_started = True
        self.summary = None
        self.elapsed.start(self._clock())
        logger.info(f"Started workout {self._workout_id}")
        return workout

    async def complete_set(self, set_id: str, weight: Any, reps: Any) -> Workout:
        """
        Log a set as done.

        Both weight and reps are required and must be numeric. On success a
        rest countdown starts when the exercise has a rest interval.
        """
        weight_kg = parse_weight(weight)
        reps_value = parse_weight(reps)
        if weight_kg is None or reps_value is None:
            raise SetInputError("Enter weight and reps before completing the set")
        return await self._update_set(set_id, weight_kg, int(reps_value), completed=True)

    async def undo_set(self, set_id: str, weight: Any = None, reps: Any = None) -> Workout:
        """Mark a set as not done, keeping whatever values were entered."""
        reps_value = parse_weight(reps)
        return await self._update_set(
            set_id,
            parse_weight(weight),
            int(reps_value) if reps_value is not None else None,
            completed=False,
        )

    async def _update_set(
        self,
        set_id: str,
        weight_kg: Optional[float],
        reps_completed: Optional[int],
        completed: bool,
    ) -> Workout:
        current = self._require_workout()
        exercise = current.exercise_for_set(set_id)
        if exercise is None:
            raise SessionStateError(f"Set {set_id} is not part of this workout")

        self.saving_set_id = set_id
        try:
            workout = await self._call(
                self._api.update_set(
                    self._workout_id,
                    set_id,
                    weight_kg=weight_kg,
                    reps_completed=reps_completed,
                    completed=completed,
                )
            )
        finally:
            self.saving_set_id = None

        self.workout = workout
        self.current_exercise_index = next_pending_exercise_index(workout)
        if completed and exercise.rest_seconds and exercise.rest_seconds > 0:
            self.rest.start(exercise.rest_seconds)
        return workout

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    @property
    def current_exercise(self) -> Optional[WorkoutExercise]:
        if self.workout is None or not self.workout.exercises:
            return None
        return self.workout.exercises[self.current_exercise_index]

    @property
    def _last_index(self) -> int:
        if self.workout is None:
            return 0
        return max(0, len(self.workout.exercises) - 1)

    def previous_exercise(self) -> int:
        self.current_exercise_index = max(0, self.current_exercise_index - 1)
        return self.current_exercise_index

    def next_exercise(self) -> int:
        self.current_exercise_index = min(self._last_index, self.current_exercise_index + 1)
        return self.current_exercise_index

    @property
    def can_advance(self) -> bool:
        return self.workout is not None and self.current_exercise_index < self._last_index

    @property
    def can_finish(self) -> bool:
        """Only on the last exercise, and only once every set is completed."""
        if self.workout is None or not self.workout.exercises:
            return False
        return self.current_exercise_index == self._last_index and all_sets_completed(self.workout)

    # -------------------------------------------------------------------------
    # Finish
    # -------------------------------------------------------------------------

    def _elapsed_for_finish(self, workout: Workout) -> int:
        live = self.elapsed.elapsed_seconds
        if live > 0:
            return live
        started_at = self.elapsed.started_at or workout.started_at
        return elapsed_seconds_between(started_at, self._clock())

    async def finish(self) -> SessionSummary:
        """Complete the workout with locally computed metrics."""
        current = self._require_workout()
        if not self.is_started:
            raise SessionStateError("Start the workout before finishing")
        if not self.can_finish:
            raise SessionStateError("Complete every set before finishing")

        elapsed = self._elapsed_for_finish(current)
        snapshot = derive_session_metrics(current, elapsed)
        completion = build_completion_metrics(current, elapsed)

        workout = await self._call(self._api.complete_workout(self._workout_id, completion))

        self.workout = workout
        self.is_started = False
        self.rest.skip()
        self.elapsed.freeze(elapsed)
        self.summary = SessionSummary(
            workout=workout,
            metrics=snapshot,
            completed_at=workout.completed_at or self._clock(),
            completion=completion,
        )
        logger.info(
            f"Finished workout {self._workout_id}: {completion.duration_minutes} min, "
            f"{completion.total_kg_lifted} kg, {completion.calories_burned} kcal"
        )
        return self.summary
