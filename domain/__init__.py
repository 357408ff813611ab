"""
Domain layer for the LiftLog workout session engine.

This package contains pure domain models and services that are independent
of infrastructure concerns (database, API, external services).
"""

from domain.models import (
    ExerciseSpec,
    Workout,
    WorkoutExercise,
    WorkoutSet,
    WorkoutStatus,
)

__all__ = [
    "ExerciseSpec",
    "Workout",
    "WorkoutExercise",
    "WorkoutSet",
    "WorkoutStatus",
]
