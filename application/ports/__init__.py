"""
Repository and service interfaces (ports) for the workout session engine.

This package defines abstract interfaces that decouple domain logic from
infrastructure (database, external services). Implementations are provided
in the infrastructure layer and in backend/services.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations elsewhere (how it's provided)

Usage:
    from application.ports import WorkoutSessionRepository

    class StartWorkout:
        def __init__(self, workout_repo: WorkoutSessionRepository):
            self.workout_repo = workout_repo
"""

from application.ports.workout_repository import WorkoutSessionRepository
from application.ports.exercise_generator import ExerciseGenerator, GeneratedPlan

__all__ = [
    "WorkoutSessionRepository",
    "ExerciseGenerator",
    "GeneratedPlan",
]
