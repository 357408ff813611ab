"""
Application use cases for the workout session engine.

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters. Use cases are the entry points for
business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return domain models and raise application.exceptions errors

Usage:
    from application.use_cases import GetWorkoutUseCase, WorkoutLifecycleUseCase

    workout = GetWorkoutUseCase(workout_repo=repo).execute("w-123", "user-123")

    lifecycle = WorkoutLifecycleUseCase(workout_repo=repo)
    lifecycle.start("w-123", "user-123")
"""

from application.use_cases.create_workout import (
    FALLBACK_EXERCISES,
    CreateWorkoutUseCase,
    GenerateWorkoutResult,
    GenerateWorkoutUseCase,
    normalize_exercises,
)
from application.use_cases.get_workout import GetWorkoutUseCase, WorkoutSummaryResult
from application.use_cases.update_set import UpdateSetUseCase
from application.use_cases.workout_lifecycle import WorkoutLifecycleUseCase

__all__ = [
    # CreateWorkout
    "CreateWorkoutUseCase",
    "GenerateWorkoutUseCase",
    "GenerateWorkoutResult",
    "FALLBACK_EXERCISES",
    "normalize_exercises",
    # GetWorkout
    "GetWorkoutUseCase",
    "WorkoutSummaryResult",
    # UpdateSet
    "UpdateSetUseCase",
    # Lifecycle
    "WorkoutLifecycleUseCase",
]
