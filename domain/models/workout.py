"""
Workout aggregate root - the main domain entity.

A Workout owns its exercises, and each exercise owns its logged sets.
The tree is read and written as a unit, always scoped by owner.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

WORKOUT_NAME_MAX_LENGTH = 200
WORKOUT_DESCRIPTION_MAX_LENGTH = 2000


class WorkoutStatus(str, Enum):
    """Lifecycle status of a workout session."""

    READY = "ready"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class WorkoutSet(BaseModel):
    """
    One discrete attempt at an exercise.

    weight_kg and reps_completed stay null until the set is logged.
    """

    id: str = Field(..., description="Set UUID")
    exercise_id: str = Field(..., description="Owning exercise UUID")
    workout_id: str = Field(..., description="Owning workout UUID (denormalized)")
    set_number: int = Field(..., ge=1, description="1-based position within the exercise")
    weight_kg: Optional[float] = Field(default=None, ge=0, description="Logged weight in kg")
    reps_completed: Optional[int] = Field(default=None, ge=0, description="Logged reps")
    completed: bool = Field(default=False, description="Whether the set is done")
    updated_at: Optional[datetime] = None


class WorkoutExercise(BaseModel):
    """
    A planned movement within a workout.

    planned_sets is the prescription fixed at creation time; sets holds the
    persisted set rows, ordered by set_number.
    """

    id: str = Field(..., description="Exercise UUID")
    workout_id: str = Field(..., description="Owning workout UUID")
    position: int = Field(default=0, ge=0, description="0-based order within the workout")
    name: str = Field(..., description="Exercise name")
    planned_sets: int = Field(default=0, ge=0, description="Number of planned sets")
    reps: int = Field(default=0, ge=0, description="Planned reps per set")
    rest_seconds: Optional[int] = Field(
        default=None, ge=0, description="Rest interval after each set"
    )
    target_weight_kg: Optional[float] = Field(
        default=None, ge=0, description="Target weight used as the default for each set"
    )
    sets: List[WorkoutSet] = Field(default_factory=list)

    @property
    def completed_sets(self) -> List[WorkoutSet]:
        return [s for s in self.sets if s.completed]

    @property
    def has_pending_sets(self) -> bool:
        return any(not s.completed for s in self.sets)


class Workout(BaseModel):
    """
    Aggregate root representing a user's training session.

    Status is never null and defaults to ready. The completion fields
    (completed_at, duration_minutes, calories_burned, total_kg_lifted) are
    only populated by the complete transition and are cleared on start.

    Examples:
        >>> workout = Workout(id="w1", owner_id="user-1", name="Leg Day")
        >>> workout.status
        <WorkoutStatus.READY: 'ready'>
        >>> workout.all_sets_completed
        True
    """

    id: str = Field(..., description="Workout UUID")
    owner_id: str = Field(..., description="Owning user ID")
    name: str = Field(..., min_length=1, max_length=WORKOUT_NAME_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=WORKOUT_DESCRIPTION_MAX_LENGTH)
    status: WorkoutStatus = Field(default=WorkoutStatus.READY)

    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    calories_burned: Optional[int] = Field(default=None, ge=0)
    total_kg_lifted: Optional[float] = Field(default=None, ge=0)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    exercises: List[WorkoutExercise] = Field(default_factory=list)

    @property
    def is_in_progress(self) -> bool:
        return self.status == WorkoutStatus.IN_PROGRESS

    @property
    def is_complete(self) -> bool:
        return self.status == WorkoutStatus.COMPLETE

    @property
    def total_set_count(self) -> int:
        return sum(len(ex.sets) for ex in self.exercises)

    @property
    def completed_set_count(self) -> int:
        return sum(len(ex.completed_sets) for ex in self.exercises)

    @property
    def all_sets_completed(self) -> bool:
        """True when every set of every exercise is completed."""
        return all(not ex.has_pending_sets for ex in self.exercises)

    def find_set(self, set_id: str) -> Optional[WorkoutSet]:
        for exercise in self.exercises:
            for workout_set in exercise.sets:
                if workout_set.id == set_id:
                    return workout_set
        return None

    def exercise_for_set(self, set_id: str) -> Optional[WorkoutExercise]:
        for exercise in self.exercises:
            if any(s.id == set_id for s in exercise.sets):
                return exercise
        return None
