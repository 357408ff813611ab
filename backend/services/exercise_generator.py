"""
OpenAI-backed exercise generator.

Asks a chat model for a JSON array of exercises and normalizes whatever
comes back. The model is treated as a black box: the first JSON array in
the reply is extracted, missing or invalid numbers fall back to defaults,
and names are capped at 80 characters. Failures surface as
UpstreamGenerationError so callers can fall back to a fixed plan.
"""

import json
import logging
import re
from typing import Any, List, Optional

from openai import AsyncOpenAI

from application.exceptions import UpstreamGenerationError
from application.ports import GeneratedPlan
from backend.ai.retry import retry_async_call
from domain.models import ExerciseSpec
from domain.models.exercise import EXERCISE_NAME_MAX_LENGTH, parse_positive_int, parse_weight

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "30 minute beginner full-body strength workout with 3-5 exercises."
DEFAULT_SETS = 3
DEFAULT_REPS = 10
DEFAULT_REST_SECONDS = 60

GENERATION_SYSTEM_PROMPT = (
    "You are an expert strength coach. Create a workout based on the user's request.\n"
    "Return ONLY a JSON array (no prose) where each item has:\n"
    "  - name (string)\n"
    "  - sets (number)\n"
    "  - reps (number)\n"
    "  - rest (seconds, number)\n"
    "  - weight_kg (number or null)"
)

_JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")


def _first(item: dict, *keys: str) -> Any:
    for key in keys:
        if item.get(key) is not None:
            return item[key]
    return None


def parse_generated_exercises(text: Optional[str]) -> List[ExerciseSpec]:
    """
    Extract and normalize the exercise array from a model reply.

    Returns an empty list when no JSON array can be parsed.

    Examples:
        >>> parse_generated_exercises('Sure! [{"name": "Squat", "sets": 5}]')
        [ExerciseSpec(name='Squat', sets=5, reps=10, rest=60, weight=None)]
    """
    if not text:
        return []
    match = _JSON_ARRAY_PATTERN.search(text)
    if not match:
        return []
    try:
        raw = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse generated exercises as JSON: {e}")
        return []
    if not isinstance(raw, list):
        return []

    exercises: List[ExerciseSpec] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            continue
        name = str(_first(item, "name", "exercise") or f"Exercise {index + 1}")
        spec = ExerciseSpec(
            name=name[:EXERCISE_NAME_MAX_LENGTH],
            sets=parse_positive_int(_first(item, "sets", "set_count"), DEFAULT_SETS),
            reps=parse_positive_int(
                _first(item, "reps", "repetitions", "reps_per_set"), DEFAULT_REPS
            ),
            rest=parse_positive_int(
                _first(item, "rest", "rest_seconds", "rest_secs"), DEFAULT_REST_SECONDS
            ),
            weight=parse_weight(_first(item, "weight_kg", "weight")),
        )
        exercises.append(spec.with_default_name(index))
    return exercises


class OpenAIExerciseGenerator:
    """ExerciseGenerator implementation using the OpenAI chat completions API."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = "gpt-4o-mini",
        max_attempts: int = 2,
        temperature: float = 0.7,
        max_tokens: int = 600,
    ):
        self._client = client
        self._model = model
        self._max_attempts = max_attempts
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def _complete(self, user_prompt: str) -> str:
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": GENERATION_SYSTEM_PROMPT},
                {"role": "user", "content": f"User request: {user_prompt}"},
            ],
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )
        return response.choices[0].message.content or ""

    async def generate(self, prompt: Optional[str]) -> GeneratedPlan:
        user_prompt = (prompt or "").strip() or DEFAULT_PROMPT

        try:
            content = await retry_async_call(
                self._complete,
                user_prompt,
                max_attempts=self._max_attempts,
            )
        except Exception as e:
            logger.warning(f"OpenAI generation failed: {e}")
            raise UpstreamGenerationError(f"Generation request failed: {e}") from e

        exercises = parse_generated_exercises(content)
        if not exercises:
            raise UpstreamGenerationError("Generation returned no usable exercises")

        logger.info(f"Generated {len(exercises)} exercises with {self._model}")
        return GeneratedPlan(
            exercises=exercises,
            name=f"AI: {user_prompt}"[:EXERCISE_NAME_MAX_LENGTH],
            description=f"AI generated via {self._model}",
        )
