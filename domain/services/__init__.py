"""
Domain services for the workout session engine.

- set_provisioning: builds missing set rows for exercises
- session_metrics: per-exercise and session metrics, calorie estimate, cursor
- session_state: the start/complete state machine
"""

from domain.services.session_metrics import (
    CompletionMetrics,
    ExerciseSummary,
    SessionMetrics,
    all_sets_completed,
    build_completion_metrics,
    computed_duration_seconds,
    derive_session_metrics,
    duration_minutes_for,
    estimate_calories,
    format_duration,
    format_timer,
    next_pending_exercise_index,
    summarize_exercise,
)
from domain.services.session_state import (
    StatusUpdate,
    WorkoutAction,
    WorkoutStateMachine,
)
from domain.services.set_provisioning import (
    SetRowDraft,
    missing_set_rows,
    planned_set_rows,
)

__all__ = [
    "CompletionMetrics",
    "ExerciseSummary",
    "SessionMetrics",
    "all_sets_completed",
    "build_completion_metrics",
    "computed_duration_seconds",
    "derive_session_metrics",
    "duration_minutes_for",
    "estimate_calories",
    "format_duration",
    "format_timer",
    "next_pending_exercise_index",
    "summarize_exercise",
    "StatusUpdate",
    "WorkoutAction",
    "WorkoutStateMachine",
    "SetRowDraft",
    "missing_set_rows",
    "planned_set_rows",
]
