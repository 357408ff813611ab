"""
Domain models for the LiftLog workout session engine.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core business concepts:
- Workout: The aggregate root containing exercises and their sets
- WorkoutExercise: A planned movement with a fixed set/rep/rest scheme
- WorkoutSet: One logged attempt at an exercise
- WorkoutStatus: Closed enumeration of lifecycle states
- ExerciseSpec: Creation-time template for a single exercise

Usage:
    >>> from domain.models import ExerciseSpec, Workout, WorkoutStatus

    >>> spec = ExerciseSpec(name="Squat", sets=4, reps=10, rest=75)
    >>> workout = Workout(id="w1", owner_id="user-1", name="Leg Day")
    >>> workout.status is WorkoutStatus.READY
    True
"""

from domain.models.exercise import ExerciseSpec
from domain.models.workout import Workout, WorkoutExercise, WorkoutSet, WorkoutStatus

__all__ = [
    # Main entities
    "Workout",
    "WorkoutExercise",
    "WorkoutSet",
    # Value objects
    "ExerciseSpec",
    # Enums
    "WorkoutStatus",
]
