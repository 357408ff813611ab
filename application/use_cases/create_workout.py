"""
CreateWorkout and GenerateWorkout use cases.

Both instantiate a workout template: the workout row, its ordered
exercises and one set row per planned set, written atomically by the
repository. GenerateWorkout asks the exercise generator for the template
and falls back to a fixed beginner plan when generation fails.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from application.exceptions import UpstreamGenerationError, ValidationError
from application.ports import ExerciseGenerator, WorkoutSessionRepository
from domain.models import ExerciseSpec, Workout
from domain.models.workout import WORKOUT_DESCRIPTION_MAX_LENGTH, WORKOUT_NAME_MAX_LENGTH

logger = logging.getLogger(__name__)

FALLBACK_EXERCISES: List[ExerciseSpec] = [
    ExerciseSpec(name="Push-ups", sets=3, reps=12, rest=60),
    ExerciseSpec(name="Squats", sets=4, reps=10, rest=75),
    ExerciseSpec(name="Plank", sets=3, reps=45, rest=60),
]


def normalize_exercises(items: Optional[Iterable[Any]]) -> List[ExerciseSpec]:
    """
    Parse raw exercise input into ExerciseSpecs.

    Accepts dicts or ExerciseSpec instances. Numeric fields are parsed
    leniently by ExerciseSpec; blank names become "Exercise N".
    """
    specs: List[ExerciseSpec] = []
    for index, item in enumerate(items or []):
        if isinstance(item, ExerciseSpec):
            spec = item
        elif isinstance(item, dict):
            try:
                spec = ExerciseSpec.model_validate(item)
            except PydanticValidationError as e:
                raise ValidationError(
                    f"Invalid exercise at position {index + 1}: {e.errors()[0]['msg']}",
                    field=f"exercises[{index}]",
                ) from e
        else:
            raise ValidationError(
                f"Invalid exercise at position {index + 1}",
                field=f"exercises[{index}]",
            )
        specs.append(spec.with_default_name(index))
    return specs


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Name is required", field="name")
    return cleaned[:WORKOUT_NAME_MAX_LENGTH]


def _clean_description(description: Optional[str]) -> Optional[str]:
    cleaned = (description or "").strip()
    if len(cleaned) > WORKOUT_DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Description must be at most {WORKOUT_DESCRIPTION_MAX_LENGTH} characters",
            field="description",
        )
    return cleaned or None


class CreateWorkoutUseCase:
    """
    Use case for creating a workout from a submitted template.

    Usage:
        >>> use_case = CreateWorkoutUseCase(workout_repo=repo)
        >>> workout = use_case.execute(
        ...     owner_id="user-123",
        ...     name="Leg Day",
        ...     exercises=[{"name": "Squat", "sets": 4, "reps": 8, "rest": 90}],
        ... )
    """

    def __init__(self, workout_repo: WorkoutSessionRepository):
        self._workout_repo = workout_repo

    def execute(
        self,
        owner_id: str,
        name: Optional[str],
        description: Optional[str] = None,
        exercises: Optional[Iterable[Any]] = None,
    ) -> Workout:
        """
        Validate the template and persist it.

        Raises:
            ValidationError: If the name is blank, the description too long
                or an exercise malformed
            PersistenceError: If the atomic write fails
        """
        workout_name = _clean_name(name)
        workout_description = _clean_description(description)
        specs = normalize_exercises(exercises)

        workout = self._workout_repo.create(
            owner_id=owner_id,
            name=workout_name,
            description=workout_description,
            exercises=specs,
        )
        logger.info(
            f"Created workout {workout.id} for {owner_id} "
            f"with {len(specs)} exercises and {workout.total_set_count} sets"
        )
        return workout


@dataclass
class GenerateWorkoutResult:
    """Result of generating a workout from a prompt."""

    workout: Workout
    used_fallback: bool = False


class GenerateWorkoutUseCase:
    """
    Use case for creating a workout from a free-text prompt.

    The generator is a black box; any failure (including an empty list)
    falls back to FALLBACK_EXERCISES so the caller always gets a workout.
    """

    def __init__(
        self,
        workout_repo: WorkoutSessionRepository,
        generator: Optional[ExerciseGenerator] = None,
    ):
        self._workout_repo = workout_repo
        self._generator = generator

    async def execute(self, owner_id: str, prompt: Optional[str] = None) -> GenerateWorkoutResult:
        prompt_text = (prompt or "").strip()
        name = f"AI: {prompt_text}" if prompt_text else "AI Workout"
        description = prompt_text or None
        exercises = list(FALLBACK_EXERCISES)
        used_fallback = True

        if self._generator is not None:
            try:
                plan = await self._generator.generate(prompt_text or None)
                if plan.exercises:
                    exercises = normalize_exercises(plan.exercises)
                    name = plan.name or name
                    description = plan.description or description
                    used_fallback = False
            except UpstreamGenerationError as e:
                logger.warning(f"Exercise generation failed, using fallback plan: {e}")

        workout = self._workout_repo.create(
            owner_id=owner_id,
            name=name[:WORKOUT_NAME_MAX_LENGTH],
            description=(description or "").strip()[:WORKOUT_DESCRIPTION_MAX_LENGTH] or None,
            exercises=exercises,
        )
        logger.info(
            f"Generated workout {workout.id} for {owner_id} (fallback={used_fallback})"
        )
        return GenerateWorkoutResult(workout=workout, used_fallback=used_fallback)
