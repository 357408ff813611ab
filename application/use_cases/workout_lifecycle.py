"""
Workout lifecycle use case: start and complete.

These are the only operations that change a workout's status. Which
source states each action accepts is decided by WorkoutStateMachine; by
default any state is accepted, so a completed workout can be restarted
(discarding its metrics) and completion gating is left to the client.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from application.exceptions import InvalidTransitionError, NotFoundError
from application.ports import WorkoutSessionRepository
from domain.models import Workout
from domain.services import (
    WorkoutAction,
    WorkoutStateMachine,
    derive_session_metrics,
    duration_minutes_for,
    estimate_calories,
)
from domain.services.session_metrics import elapsed_seconds_between

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WorkoutLifecycleUseCase:
    """
    Applies start/complete transitions to a workout.

    Args:
        workout_repo: Repository for workout persistence
        strict: Reject start from complete and complete from anything but in_progress
        recompute_metrics: Derive calories and lifted weight from persisted sets
            instead of trusting the caller
        clock: Returns the current UTC time (injectable for tests)
    """

    def __init__(
        self,
        workout_repo: WorkoutSessionRepository,
        strict: bool = False,
        recompute_metrics: bool = False,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._workout_repo = workout_repo
        self._state_machine = WorkoutStateMachine(strict=strict)
        self._recompute_metrics = recompute_metrics
        self._clock = clock

    def _load(self, workout_id: str, owner_id: str) -> Workout:
        workout = self._workout_repo.get(workout_id, owner_id)
        if workout is None:
            raise NotFoundError("Workout not found")
        return workout

    def _check(self, action: WorkoutAction, workout: Workout) -> None:
        if not self._state_machine.can_apply(action, workout.status):
            logger.warning(
                f"Rejected {action.value} for workout {workout.id} in status {workout.status.value}"
            )
            raise InvalidTransitionError(action.value, workout.status.value)

    def start(self, workout_id: str, owner_id: str) -> Workout:
        """
        Start (or restart) a workout.

        Sets started_at to now, status to in_progress and clears every
        completion field.

        Raises:
            NotFoundError: If the workout does not exist or is not owned
            InvalidTransitionError: In strict mode, if the workout is complete
        """
        workout = self._load(workout_id, owner_id)
        self._check(WorkoutAction.START, workout)

        update = self._state_machine.start(self._clock())
        if self._workout_repo.update_status(workout_id, owner_id, update) is None:
            raise NotFoundError("Workout not found")

        logger.info(f"Started workout {workout_id} (was {workout.status.value})")
        return self._load(workout_id, owner_id)

    def complete(
        self,
        workout_id: str,
        owner_id: str,
        duration_minutes: Optional[int] = None,
        calories_burned: Optional[int] = None,
        total_kg_lifted: Optional[float] = None,
    ) -> Workout:
        """
        Complete a workout, recording its metrics.

        Calories and lifted weight of 0 are stored as null. With
        recompute_metrics enabled, both are derived from the persisted sets
        and a missing duration falls back to the time since started_at.

        Raises:
            NotFoundError: If the workout does not exist or is not owned
            InvalidTransitionError: In strict mode, if the workout is not in progress
        """
        workout = self._load(workout_id, owner_id)
        self._check(WorkoutAction.COMPLETE, workout)

        now = self._clock()
        if self._recompute_metrics:
            if duration_minutes is None:
                duration_minutes = duration_minutes_for(
                    elapsed_seconds_between(workout.started_at, now)
                )
            total_kg_lifted = derive_session_metrics(workout).total_lifted_kg
            calories_burned = estimate_calories(duration_minutes, total_kg_lifted)

        update = self._state_machine.complete(
            now,
            duration_minutes=duration_minutes,
            calories_burned=calories_burned or None,
            total_kg_lifted=total_kg_lifted or None,
        )
        if self._workout_repo.update_status(workout_id, owner_id, update) is None:
            raise NotFoundError("Workout not found")

        logger.info(
            f"Completed workout {workout_id}: {update.duration_minutes} min, "
            f"{update.calories_burned} kcal, {update.total_kg_lifted} kg"
        )
        return self._load(workout_id, owner_id)
