"""
Get Workout Use Case.

Reads workouts for their owner. A single-workout read runs the set
auto-provisioner first, so every exercise comes back with exactly its
planned number of set rows.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from application.exceptions import NotFoundError
from application.ports import WorkoutSessionRepository
from domain.models import Workout
from domain.services import SessionMetrics, computed_duration_seconds, derive_session_metrics
from domain.services.session_metrics import elapsed_seconds_between
from domain.services.set_provisioning import missing_set_rows

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class WorkoutSummaryResult:
    """A workout together with its derived session metrics."""
    workout: Workout
    metrics: SessionMetrics


class GetWorkoutUseCase:
    """
    Use case for retrieving workouts.

    Encapsulates getting an individual workout (with provisioning),
    listing an owner's workouts, and building a metrics summary.
    """

    def __init__(
        self,
        workout_repo: WorkoutSessionRepository,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize with required dependencies.

        Args:
            workout_repo: Repository for workout persistence
            clock: Returns the current UTC time (injectable for tests)
        """
        self._workout_repo = workout_repo
        self._clock = clock

    def execute(self, workout_id: str, owner_id: str) -> Workout:
        """
        Get a single workout by ID, provisioning missing set rows.

        Args:
            workout_id: ID of the workout to retrieve
            owner_id: Current user ID (for authorization)

        Returns:
            Fully nested Workout

        Raises:
            NotFoundError: If the workout does not exist or is not owned by the user
            PersistenceError: If provisioning fails
        """
        workout = self._workout_repo.get(workout_id, owner_id)
        if workout is None:
            raise NotFoundError("Workout not found")

        rows = missing_set_rows(workout)
        if not rows:
            return workout

        inserted = self._workout_repo.add_sets(
            owner_id, workout_id, [row.to_row() for row in rows]
        )
        logger.info(f"Provisioned {inserted} set rows for workout {workout_id}")

        workout = self._workout_repo.get(workout_id, owner_id)
        if workout is None:
            raise NotFoundError("Workout not found")
        return workout

    def list_workouts(self, owner_id: str, limit: int = 50) -> List[Workout]:
        """List an owner's workouts, newest first."""
        return self._workout_repo.list(owner_id, limit=limit)

    def summarize(self, workout_id: str, owner_id: str) -> WorkoutSummaryResult:
        """
        Build the metrics snapshot for a workout.

        Completed workouts report their frozen duration; a workout in
        progress reports time elapsed since it was started.
        """
        workout = self.execute(workout_id, owner_id)

        live_seconds = 0
        if workout.is_in_progress:
            live_seconds = elapsed_seconds_between(workout.started_at, self._clock())
        duration = (
            computed_duration_seconds(workout, live_seconds)
            if workout.is_complete
            else live_seconds
        )
        return WorkoutSummaryResult(
            workout=workout,
            metrics=derive_session_metrics(workout, duration),
        )
