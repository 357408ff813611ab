"""
Converters: Database row format <-> domain Workout.

Provides conversion between Supabase rows (including PostgREST nested
embeds) and the Workout domain model.

Database schema:
- workouts: id, owner_id, name, description, status, started_at,
  completed_at, duration_minutes, calories_burned, total_kg_lifted,
  created_at, updated_at
- workout_exercises: id, workout_id, position, name, sets, reps,
  rest_seconds, target_weight_kg
- workout_sets: id, workout_id, exercise_id, set_number, weight_kg,
  reps_completed, completed, updated_at

Note the column/field rename: workout_exercises.sets is the planned set
count (WorkoutExercise.planned_sets); the embedded workout_sets rows
become WorkoutExercise.sets.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from domain.models import ExerciseSpec, Workout, WorkoutExercise, WorkoutSet, WorkoutStatus


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse datetime from various formats."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            # Handle ISO format with Z suffix
            if value.endswith("Z"):
                value = value[:-1] + "+00:00"
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def _parse_status(value: Any) -> WorkoutStatus:
    """Rows written before status existed are treated as ready."""
    if value is None or value == "":
        return WorkoutStatus.READY
    return WorkoutStatus(value)


def _optional_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def db_row_to_set(row: Dict[str, Any]) -> WorkoutSet:
    return WorkoutSet(
        id=str(row["id"]),
        exercise_id=str(row["exercise_id"]),
        workout_id=str(row["workout_id"]),
        set_number=int(row["set_number"]),
        weight_kg=_optional_float(row.get("weight_kg")),
        reps_completed=row.get("reps_completed"),
        completed=bool(row.get("completed") or False),
        updated_at=_parse_datetime(row.get("updated_at")),
    )


def db_row_to_exercise(row: Dict[str, Any]) -> WorkoutExercise:
    set_rows = row.get("workout_sets") or []
    sets = sorted(
        (db_row_to_set(s) for s in set_rows),
        key=lambda s: s.set_number,
    )
    return WorkoutExercise(
        id=str(row["id"]),
        workout_id=str(row["workout_id"]),
        position=row.get("position") or 0,
        name=row.get("name") or "",
        planned_sets=row.get("sets") or 0,
        reps=row.get("reps") or 0,
        rest_seconds=row.get("rest_seconds"),
        target_weight_kg=_optional_float(row.get("target_weight_kg")),
        sets=sets,
    )


def db_row_to_workout(row: Dict[str, Any]) -> Workout:
    """
    Convert a workouts row (optionally with embedded exercises/sets) to a Workout.

    Exercises are ordered by position, then id, and sets by set_number.
    """
    exercise_rows = row.get("workout_exercises") or []
    exercises = sorted(
        (db_row_to_exercise(ex) for ex in exercise_rows),
        key=lambda ex: (ex.position, ex.id),
    )
    return Workout(
        id=str(row["id"]),
        owner_id=str(row["owner_id"]),
        name=row["name"],
        description=row.get("description"),
        status=_parse_status(row.get("status")),
        started_at=_parse_datetime(row.get("started_at")),
        completed_at=_parse_datetime(row.get("completed_at")),
        duration_minutes=row.get("duration_minutes"),
        calories_burned=row.get("calories_burned"),
        total_kg_lifted=_optional_float(row.get("total_kg_lifted")),
        created_at=_parse_datetime(row.get("created_at")),
        updated_at=_parse_datetime(row.get("updated_at")),
        exercises=exercises,
    )


def exercise_spec_to_db_row(spec: ExerciseSpec, position: int) -> Dict[str, Any]:
    """Convert a creation-time ExerciseSpec into a workout_exercises row payload."""
    return {
        "position": position,
        "name": spec.name,
        "sets": spec.sets,
        "reps": spec.reps,
        "rest_seconds": spec.rest,
        "target_weight_kg": spec.weight,
    }


def exercise_specs_to_db_rows(specs: List[ExerciseSpec]) -> List[Dict[str, Any]]:
    return [exercise_spec_to_db_row(spec, i) for i, spec in enumerate(specs)]
