"""
Set auto-provisioning.

Every exercise must have exactly `planned_sets` set rows before a session
is presented. Rows are created up front when a workout is created, and
rebuilt on read for exercises that have none persisted (workouts written
before set tracking existed, or a partial write).

Provisioning only ever acts on exercises with zero persisted sets, which
makes repeated reads idempotent.
"""

from dataclasses import dataclass
from typing import List, Optional

from domain.models import Workout, WorkoutExercise


@dataclass(frozen=True)
class SetRowDraft:
    """A set row that has not been persisted yet."""

    workout_id: str
    exercise_id: str
    set_number: int
    weight_kg: Optional[float] = None
    reps_completed: Optional[int] = None
    completed: bool = False

    def to_row(self) -> dict:
        return {
            "workout_id": self.workout_id,
            "exercise_id": self.exercise_id,
            "set_number": self.set_number,
            "weight_kg": self.weight_kg,
            "reps_completed": self.reps_completed,
            "completed": self.completed,
        }


def planned_set_rows(
    workout_id: str,
    exercise_id: str,
    planned_sets: int,
    target_weight_kg: Optional[float] = None,
) -> List[SetRowDraft]:
    """
    Build set rows 1..planned_sets for one exercise.

    Weight defaults to the exercise target (or None); reps stay empty and
    every row starts incomplete.
    """
    return [
        SetRowDraft(
            workout_id=workout_id,
            exercise_id=exercise_id,
            set_number=number,
            weight_kg=target_weight_kg,
        )
        for number in range(1, max(0, planned_sets) + 1)
    ]


def needs_provisioning(exercise: WorkoutExercise) -> bool:
    return exercise.planned_sets > 0 and not exercise.sets


def missing_set_rows(workout: Workout) -> List[SetRowDraft]:
    """
    Return the rows that must be inserted so each exercise has its planned sets.

    Exercises that already have at least one persisted set are left alone.
    """
    rows: List[SetRowDraft] = []
    for exercise in workout.exercises:
        if needs_provisioning(exercise):
            rows.extend(
                planned_set_rows(
                    workout_id=workout.id,
                    exercise_id=exercise.id,
                    planned_sets=exercise.planned_sets,
                    target_weight_kg=exercise.target_weight_kg,
                )
            )
    return rows
