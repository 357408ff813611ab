"""
UpdateSet use case.

Records the weight and reps logged for one set, or reverts it to
incomplete. The repository checks set -> workout -> owner and writes the
row in one statement, so a set that is not reachable from the caller's
workout is reported as not found and nothing changes.
"""

import logging
from typing import Optional

from application.exceptions import NotFoundError
from application.ports import WorkoutSessionRepository
from domain.models import Workout

logger = logging.getLogger(__name__)


class UpdateSetUseCase:
    """Use case for logging a set."""

    def __init__(self, workout_repo: WorkoutSessionRepository):
        self._workout_repo = workout_repo

    def execute(
        self,
        owner_id: str,
        workout_id: str,
        set_id: str,
        weight_kg: Optional[float] = None,
        reps_completed: Optional[int] = None,
        completed: Optional[bool] = True,
    ) -> Workout:
        """
        Update a set and return the refreshed workout.

        Only an explicit completed=False marks the set incomplete; a
        missing flag means completed.

        Raises:
            NotFoundError: If the set/workout/owner chain does not resolve
        """
        is_completed = completed is not False
        updated = self._workout_repo.update_set(
            owner_id=owner_id,
            workout_id=workout_id,
            set_id=set_id,
            weight_kg=weight_kg,
            reps_completed=reps_completed,
            completed=is_completed,
        )
        if not updated:
            raise NotFoundError("Set not found")

        logger.debug(f"Updated set {set_id} of workout {workout_id} (completed={is_completed})")

        workout = self._workout_repo.get(workout_id, owner_id)
        if workout is None:
            raise NotFoundError("Workout not found")
        return workout
