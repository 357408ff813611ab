"""Backend services for the workout session API."""

from backend.services.exercise_generator import (
    OpenAIExerciseGenerator,
    parse_generated_exercises,
)

__all__ = [
    "OpenAIExerciseGenerator",
    "parse_generated_exercises",
]
