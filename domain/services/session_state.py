"""
Workout session state machine.

Status moves ready -> in_progress -> complete. Only two actions change it:
start and complete. Both are declared here with the set of source states
they accept, in a permissive table (matching what clients already rely
on: a completed workout can be restarted, and completion is gated by the
client) and a strict table that enforces the lifecycle on the server.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

from domain.models import WorkoutStatus


class WorkoutAction(str, Enum):
    """Actions that change a workout's status."""

    START = "start"
    COMPLETE = "complete"


_ALL_STATES = frozenset(WorkoutStatus)

PERMISSIVE_TRANSITIONS: Dict[WorkoutAction, FrozenSet[WorkoutStatus]] = {
    WorkoutAction.START: _ALL_STATES,
    WorkoutAction.COMPLETE: _ALL_STATES,
}

STRICT_TRANSITIONS: Dict[WorkoutAction, FrozenSet[WorkoutStatus]] = {
    WorkoutAction.START: frozenset({WorkoutStatus.READY, WorkoutStatus.IN_PROGRESS}),
    WorkoutAction.COMPLETE: frozenset({WorkoutStatus.IN_PROGRESS}),
}

TARGET_STATUS: Dict[WorkoutAction, WorkoutStatus] = {
    WorkoutAction.START: WorkoutStatus.IN_PROGRESS,
    WorkoutAction.COMPLETE: WorkoutStatus.COMPLETE,
}


@dataclass(frozen=True)
class StatusUpdate:
    """Column values written by a transition."""

    status: WorkoutStatus
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    calories_burned: Optional[int] = None
    total_kg_lifted: Optional[float] = None

    def changes(self) -> Dict[str, Any]:
        """Workout fields this transition sets, keyed by column name."""
        fields: Dict[str, Any] = {
            "status": self.status,
            "completed_at": self.completed_at,
            "duration_minutes": self.duration_minutes,
            "calories_burned": self.calories_burned,
            "total_kg_lifted": self.total_kg_lifted,
        }
        # complete leaves started_at as it was
        if self.started_at is not None:
            fields["started_at"] = self.started_at
        return fields

    def to_row(self) -> Dict[str, Any]:
        """changes() serialized for a PostgREST update."""
        row: Dict[str, Any] = {}
        for column, value in self.changes().items():
            if isinstance(value, WorkoutStatus):
                value = value.value
            elif isinstance(value, datetime):
                value = value.isoformat()
            row[column] = value
        return row


class WorkoutStateMachine:
    """Decides whether an action is allowed and what it writes."""

    def __init__(self, strict: bool = False):
        self._strict = strict
        self._transitions = STRICT_TRANSITIONS if strict else PERMISSIVE_TRANSITIONS

    @property
    def strict(self) -> bool:
        return self._strict

    def can_apply(self, action: WorkoutAction, current: WorkoutStatus) -> bool:
        return current in self._transitions[action]

    def start(self, now: datetime) -> StatusUpdate:
        """Begin (or restart) a session, discarding any prior completion metrics."""
        return StatusUpdate(
            status=TARGET_STATUS[WorkoutAction.START],
            started_at=now,
        )

    def complete(
        self,
        now: datetime,
        duration_minutes: Optional[int],
        calories_burned: Optional[int],
        total_kg_lifted: Optional[float],
    ) -> StatusUpdate:
        """Close a session, recording the supplied metrics."""
        return StatusUpdate(
            status=TARGET_STATUS[WorkoutAction.COMPLETE],
            completed_at=now,
            duration_minutes=duration_minutes,
            calories_burned=calories_burned,
            total_kg_lifted=total_kg_lifted,
        )
