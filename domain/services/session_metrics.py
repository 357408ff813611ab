"""
Session metrics engine.

Derives the numbers shown while a workout is running and reported when it
is completed: per-exercise summaries, session totals, duration strings and
the calorie estimate.

Lifted weight is always summed over completed sets only, so totals reflect
work actually done rather than planned targets. A set contributes its
logged weight_kg once (not multiplied by reps); sets with no logged weight
count as 0.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from domain.models import Workout, WorkoutExercise

# Calorie estimate constants
CALORIES_PER_MINUTE = 6.0
CALORIES_PER_KG_LIFTED = 0.015
CALORIE_FLOOR = 25


@dataclass(frozen=True)
class ExerciseSummary:
    """Per-exercise breakdown for the summary view."""

    exercise_id: str
    name: str
    completed_sets: int
    planned_sets: int
    reps_per_set: int
    total_weight_kg: float
    avg_weight_kg: float


@dataclass(frozen=True)
class SessionMetrics:
    """Session totals derived from a workout snapshot."""

    duration_seconds: int
    total_lifted_kg: float
    total_sets: int
    per_exercise: List[ExerciseSummary] = field(default_factory=list)

    @property
    def duration_label(self) -> str:
        return format_duration(self.duration_seconds)


@dataclass(frozen=True)
class CompletionMetrics:
    """Values submitted with the complete transition."""

    duration_minutes: int
    calories_burned: int
    total_kg_lifted: float


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def summarize_exercise(exercise: WorkoutExercise) -> ExerciseSummary:
    """Summarize completed work for one exercise."""
    completed = exercise.completed_sets
    total_weight = sum(float(s.weight_kg or 0) for s in completed)
    avg_weight = total_weight / len(completed) if completed else 0.0
    planned = len(exercise.sets) if exercise.sets else exercise.planned_sets

    return ExerciseSummary(
        exercise_id=exercise.id,
        name=exercise.name,
        completed_sets=len(completed),
        planned_sets=planned,
        reps_per_set=exercise.reps,
        total_weight_kg=total_weight,
        avg_weight_kg=avg_weight,
    )


def derive_session_metrics(workout: Workout, duration_seconds: int = 0) -> SessionMetrics:
    """Aggregate per-exercise summaries into session totals."""
    per_exercise = [summarize_exercise(ex) for ex in workout.exercises]
    return SessionMetrics(
        duration_seconds=max(0, int(duration_seconds or 0)),
        total_lifted_kg=sum(ex.total_weight_kg for ex in per_exercise),
        total_sets=sum(ex.completed_sets for ex in per_exercise),
        per_exercise=per_exercise,
    )


def duration_minutes_for(duration_seconds: float) -> int:
    """Round a duration to whole minutes, never less than 1."""
    return max(1, _round_half_up(max(0, duration_seconds or 0) / 60))


def estimate_calories(duration_minutes: float, total_lifted_kg: float) -> int:
    """
    Estimate calories burned for a strength session.

    Non-decreasing in both duration and lifted weight, and never below
    CALORIE_FLOOR so short or light sessions still report a positive value.
    """
    minutes = max(0.0, float(duration_minutes or 0))
    lifted = max(0.0, float(total_lifted_kg or 0))
    estimate = _round_half_up(minutes * CALORIES_PER_MINUTE + lifted * CALORIES_PER_KG_LIFTED)
    return max(CALORIE_FLOOR, estimate)


def build_completion_metrics(workout: Workout, elapsed_seconds: float) -> CompletionMetrics:
    """Compute the duration, calorie and weight values sent on completion."""
    metrics = derive_session_metrics(workout, int(max(0, elapsed_seconds or 0)))
    minutes = duration_minutes_for(metrics.duration_seconds)
    return CompletionMetrics(
        duration_minutes=minutes,
        calories_burned=estimate_calories(minutes, metrics.total_lifted_kg),
        total_kg_lifted=metrics.total_lifted_kg,
    )


def next_pending_exercise_index(workout: Optional[Workout]) -> int:
    """
    Index of the first exercise that still has an incomplete set.

    Returns 0 when every set is completed (or there are no exercises);
    callers check all_sets_completed separately before offering Finish.
    """
    if workout is None:
        return 0
    for index, exercise in enumerate(workout.exercises):
        if exercise.has_pending_sets:
            return index
    return 0


def all_sets_completed(workout: Optional[Workout]) -> bool:
    if workout is None:
        return False
    return workout.all_sets_completed


def elapsed_seconds_between(start: Optional[datetime], end: datetime) -> int:
    if start is None:
        return 0
    return max(0, int((end - start).total_seconds()))


def computed_duration_seconds(workout: Optional[Workout], fallback_seconds: int = 0) -> int:
    """
    Fixed duration of a workout for display.

    Prefers the stored duration_minutes, then the started/completed
    timestamps, then the supplied fallback.
    """
    fallback = max(0, int(fallback_seconds or 0))
    if workout is None:
        return fallback
    if workout.duration_minutes is not None:
        return max(0, workout.duration_minutes * 60)
    if workout.started_at and workout.completed_at:
        return elapsed_seconds_between(workout.started_at, workout.completed_at)
    return fallback


def format_duration(duration_seconds: float) -> str:
    """
    Human readable duration: "1h 5m", "2h", "45m".

    Any positive duration shows at least "1m".
    """
    seconds = max(0, int(duration_seconds or 0))
    if seconds == 0:
        return "0m"
    total_minutes = seconds // 60
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m" if minutes > 0 else f"{hours}h"
    return f"{max(1, minutes)}m"


def format_timer(seconds: float) -> str:
    """Countdown display as M:SS."""
    seconds = max(0, int(seconds or 0))
    mins, secs = divmod(seconds, 60)
    return f"{mins}:{secs:02d}"
