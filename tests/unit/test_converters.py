"""
Unit tests for domain converters.

Tests for:
- db_row_to_workout (including PostgREST nested embeds)
- exercise_spec_to_db_row / exercise_specs_to_db_rows
"""

from datetime import datetime, timezone

import pytest

from domain.converters import (
    db_row_to_workout,
    exercise_spec_to_db_row,
    exercise_specs_to_db_rows,
)
from domain.models import ExerciseSpec, WorkoutStatus


def _set_row(set_id, exercise_id, number, completed=False, weight=None, reps=None):
    return {
        "id": set_id,
        "exercise_id": exercise_id,
        "workout_id": "w1",
        "set_number": number,
        "weight_kg": weight,
        "reps_completed": reps,
        "completed": completed,
    }


# =============================================================================
# db_row_to_workout tests
# =============================================================================


@pytest.mark.unit
class TestDbRowToWorkout:
    """Tests for db_row_to_workout converter."""

    def test_basic_row(self):
        """Convert a workouts row without embeds."""
        row = {
            "id": "w1",
            "owner_id": "user-1",
            "name": "Leg Day",
            "description": "Heavy",
            "status": "in_progress",
            "started_at": "2026-03-01T09:00:00Z",
            "created_at": "2026-03-01T08:59:00+00:00",
        }

        workout = db_row_to_workout(row)

        assert workout.id == "w1"
        assert workout.owner_id == "user-1"
        assert workout.status == WorkoutStatus.IN_PROGRESS
        assert workout.started_at == datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
        assert workout.exercises == []

    def test_missing_status_is_ready(self):
        """Rows with no status are read as ready."""
        workout = db_row_to_workout({"id": "w1", "owner_id": "u", "name": "X", "status": None})
        assert workout.status == WorkoutStatus.READY

    def test_unparseable_timestamp_is_none(self):
        """Bad timestamps become None rather than failing."""
        workout = db_row_to_workout(
            {"id": "w1", "owner_id": "u", "name": "X", "started_at": "yesterday"}
        )
        assert workout.started_at is None

    def test_planned_sets_column_rename(self):
        """workout_exercises.sets maps to planned_sets."""
        row = {
            "id": "w1",
            "owner_id": "u",
            "name": "X",
            "workout_exercises": [
                {
                    "id": "e1",
                    "workout_id": "w1",
                    "position": 0,
                    "name": "Squat",
                    "sets": 4,
                    "reps": 10,
                    "rest_seconds": 75,
                    "target_weight_kg": "62.5",
                }
            ],
        }

        exercise = db_row_to_workout(row).exercises[0]

        assert exercise.planned_sets == 4
        assert exercise.sets == []
        assert exercise.target_weight_kg == 62.5
        assert exercise.rest_seconds == 75

    def test_exercises_ordered_by_position_then_id(self):
        """Exercises come back in position order regardless of row order."""
        row = {
            "id": "w1",
            "owner_id": "u",
            "name": "X",
            "workout_exercises": [
                {"id": "e3", "workout_id": "w1", "position": 2, "name": "C", "sets": 1},
                {"id": "e2", "workout_id": "w1", "position": 0, "name": "B", "sets": 1},
                {"id": "e1", "workout_id": "w1", "position": 0, "name": "A", "sets": 1},
            ],
        }

        names = [ex.name for ex in db_row_to_workout(row).exercises]

        assert names == ["A", "B", "C"]

    def test_embedded_sets_ordered_by_set_number(self):
        """Embedded workout_sets are sorted by set_number."""
        row = {
            "id": "w1",
            "owner_id": "u",
            "name": "X",
            "workout_exercises": [
                {
                    "id": "e1",
                    "workout_id": "w1",
                    "position": 0,
                    "name": "Squat",
                    "sets": 3,
                    "reps": 5,
                    "workout_sets": [
                        _set_row("s3", "e1", 3),
                        _set_row("s1", "e1", 1, completed=True, weight=100, reps=5),
                        _set_row("s2", "e1", 2),
                    ],
                }
            ],
        }

        sets = db_row_to_workout(row).exercises[0].sets

        assert [s.set_number for s in sets] == [1, 2, 3]
        assert sets[0].completed is True
        assert sets[0].weight_kg == 100.0
        assert sets[0].reps_completed == 5
        assert sets[1].completed is False

    def test_completion_fields(self):
        """Completion metrics are carried over."""
        row = {
            "id": "w1",
            "owner_id": "u",
            "name": "X",
            "status": "complete",
            "completed_at": "2026-03-01T10:00:00+00:00",
            "duration_minutes": 45,
            "calories_burned": 300,
            "total_kg_lifted": 1200,
        }

        workout = db_row_to_workout(row)

        assert workout.is_complete
        assert workout.duration_minutes == 45
        assert workout.calories_burned == 300
        assert workout.total_kg_lifted == 1200.0


# =============================================================================
# exercise_spec_to_db_row tests
# =============================================================================


@pytest.mark.unit
class TestExerciseSpecToDbRow:
    """Tests for ExerciseSpec -> workout_exercises row payloads."""

    def test_single_spec(self):
        spec = ExerciseSpec(name="Squat", sets=4, reps=10, rest=75, weight=None)

        row = exercise_spec_to_db_row(spec, 2)

        assert row == {
            "position": 2,
            "name": "Squat",
            "sets": 4,
            "reps": 10,
            "rest_seconds": 75,
            "target_weight_kg": None,
        }

    def test_positions_follow_input_order(self):
        specs = [ExerciseSpec(name="A"), ExerciseSpec(name="B"), ExerciseSpec(name="C")]

        rows = exercise_specs_to_db_rows(specs)

        assert [(r["position"], r["name"]) for r in rows] == [(0, "A"), (1, "B"), (2, "C")]
