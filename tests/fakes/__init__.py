"""
Fake Implementations for Testing.

This package provides in-memory fake implementations of the repository and
generator interfaces for fast, isolated testing. No database or external
dependencies required.

Features:
- Fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeWorkoutSessionRepository, build_workout

    repo = FakeWorkoutSessionRepository()
    repo.seed([build_workout(owner_id="user1", exercises=[("Squat", 3, 10, 60, None)])])
"""
from typing import List, Optional, Sequence, Tuple
from datetime import datetime, timezone

from domain.models import Workout, WorkoutExercise, WorkoutSet, WorkoutStatus

from tests.fakes.workout_repository import FakeWorkoutSessionRepository
from tests.fakes.exercise_generator import FakeExerciseGenerator

# (name, planned_sets, reps, rest_seconds, target_weight_kg)
ExerciseRow = Tuple[str, int, int, Optional[int], Optional[float]]


# =============================================================================
# Factory Functions
# =============================================================================


def build_workout(
    *,
    workout_id: str = "w1",
    owner_id: str = "test-user-123",
    name: str = "Test Workout",
    exercises: Sequence[ExerciseRow] = (),
    status: WorkoutStatus = WorkoutStatus.READY,
    with_sets: bool = True,
    completed_sets: int = 0,
    started_at: Optional[datetime] = None,
    completed_at: Optional[datetime] = None,
    duration_minutes: Optional[int] = None,
) -> Workout:
    """
    Build a Workout aggregate with deterministic ids.

    Exercise ids are "{workout_id}-e{i}" and set ids "{workout_id}-e{i}-s{n}".
    When with_sets is False the exercises have no set rows, as for
    workouts that need provisioning. The first completed_sets sets (in
    exercise order) are marked completed with their target weight.
    """
    remaining_completed = completed_sets
    built: List[WorkoutExercise] = []
    for i, (ex_name, planned, reps, rest, target) in enumerate(exercises):
        exercise_id = f"{workout_id}-e{i}"
        sets: List[WorkoutSet] = []
        if with_sets:
            for n in range(1, planned + 1):
                done = remaining_completed > 0
                if done:
                    remaining_completed -= 1
                sets.append(
                    WorkoutSet(
                        id=f"{exercise_id}-s{n}",
                        exercise_id=exercise_id,
                        workout_id=workout_id,
                        set_number=n,
                        weight_kg=target,
                        reps_completed=reps if done else None,
                        completed=done,
                    )
                )
        built.append(
            WorkoutExercise(
                id=exercise_id,
                workout_id=workout_id,
                position=i,
                name=ex_name,
                planned_sets=planned,
                reps=reps,
                rest_seconds=rest,
                target_weight_kg=target,
                sets=sets,
            )
        )

    return Workout(
        id=workout_id,
        owner_id=owner_id,
        name=name,
        status=status,
        started_at=started_at,
        completed_at=completed_at,
        duration_minutes=duration_minutes,
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        exercises=built,
    )


def create_workout_repo(*workouts: Workout) -> FakeWorkoutSessionRepository:
    """Create a FakeWorkoutSessionRepository seeded with the given workouts."""
    repo = FakeWorkoutSessionRepository()
    repo.seed(list(workouts))
    return repo


__all__ = [
    "FakeWorkoutSessionRepository",
    "FakeExerciseGenerator",
    "build_workout",
    "create_workout_repo",
]
