"""
Exercise specification value object.

An ExerciseSpec is the template for one exercise as submitted by the
workout creation collaborator (manual form or AI generator). Numeric input
is parsed leniently: values that do not parse fall back to 0 or None rather
than rejecting the whole request, and oversized values are clamped to the
MAX_* bounds.
"""

import math
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

EXERCISE_NAME_MAX_LENGTH = 80

# Upper bounds for planned values; larger input is clamped to these
MAX_PLANNED_SETS = 50
MAX_REPS = 1000
MAX_REST_SECONDS = 3600


def _to_number(value: Any) -> Optional[float]:
    """Parse a number from int/float/str input, or None if it does not parse."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_non_negative_int(value: Any, default: int = 0) -> int:
    """Parse a non-negative integer, truncating decimals. Falls back to default."""
    number = _to_number(value)
    if number is None or number < 0:
        return default
    return int(number)


def parse_positive_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """Parse a strictly positive integer. Falls back to default."""
    number = _to_number(value)
    if number is None or int(number) <= 0:
        return default
    return int(number)


def parse_weight(value: Any) -> Optional[float]:
    """Parse a non-negative weight in kg, or None."""
    number = _to_number(value)
    if number is None or number < 0:
        return None
    return number


class ExerciseSpec(BaseModel):
    """
    Value object describing one planned exercise.

    Examples:
        >>> ExerciseSpec(name="Squat", sets="4", reps=10, rest=75, weight=None)
        ExerciseSpec(name='Squat', sets=4, reps=10, rest=75, weight=None)

        >>> ExerciseSpec(name="Row", sets="abc", reps=-2, rest=0, weight="x")
        ExerciseSpec(name='Row', sets=0, reps=0, rest=None, weight=None)
    """

    name: str = Field(default="", description="Exercise name")
    sets: int = Field(default=0, ge=0, le=MAX_PLANNED_SETS, description="Planned number of sets")
    reps: int = Field(default=0, ge=0, le=MAX_REPS, description="Planned reps per set")
    rest: Optional[int] = Field(
        default=None, ge=1, le=MAX_REST_SECONDS, description="Rest seconds after each set"
    )
    weight: Optional[float] = Field(default=None, ge=0, description="Target weight in kg")

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v).strip()[:EXERCISE_NAME_MAX_LENGTH]

    @field_validator("sets", mode="before")
    @classmethod
    def parse_sets(cls, v: Any) -> int:
        return min(parse_non_negative_int(v), MAX_PLANNED_SETS)

    @field_validator("reps", mode="before")
    @classmethod
    def parse_reps(cls, v: Any) -> int:
        return min(parse_non_negative_int(v), MAX_REPS)

    @field_validator("rest", mode="before")
    @classmethod
    def parse_rest(cls, v: Any) -> Optional[int]:
        rest = parse_positive_int(v)
        return None if rest is None else min(rest, MAX_REST_SECONDS)

    @field_validator("weight", mode="before")
    @classmethod
    def parse_target_weight(cls, v: Any) -> Optional[float]:
        return parse_weight(v)

    def with_default_name(self, index: int) -> "ExerciseSpec":
        """Return a copy named "Exercise N" (1-based) when the name is blank."""
        if self.name:
            return self
        return self.model_copy(update={"name": f"Exercise {index + 1}"})
