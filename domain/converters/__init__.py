"""
Domain converters between storage rows and the Workout domain model.

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import db_row_to_workout

    >>> workout = db_row_to_workout({
    ...     "id": "w1",
    ...     "owner_id": "user-123",
    ...     "name": "Push Day",
    ...     "status": "ready",
    ...     "workout_exercises": [],
    ... })
"""

from domain.converters.db_converters import (
    db_row_to_exercise,
    db_row_to_set,
    db_row_to_workout,
    exercise_spec_to_db_row,
    exercise_specs_to_db_rows,
)

__all__ = [
    "db_row_to_exercise",
    "db_row_to_set",
    "db_row_to_workout",
    "exercise_spec_to_db_row",
    "exercise_specs_to_db_rows",
]
