"""
Workout Session Repository Interface (Port).

This module defines the abstract interface for workout session persistence.
Implementations may use Supabase, in-memory storage, or other backends.
"""
from typing import Any, Dict, List, Optional, Protocol, Sequence

from domain.models import ExerciseSpec, Workout
from domain.services.session_state import StatusUpdate


class WorkoutSessionRepository(Protocol):
    """
    Abstract interface for workout session persistence operations.

    Every read and write is scoped to an owner id. A workout that exists but
    belongs to someone else is indistinguishable from one that does not exist.

    Implementations raise application.exceptions.PersistenceError on storage
    failures. Writes that touch more than one row are atomic.
    """

    def create(
        self,
        owner_id: str,
        name: str,
        description: Optional[str],
        exercises: Sequence[ExerciseSpec],
    ) -> Workout:
        """
        Create a workout with its exercises and planned set rows.

        Each exercise gets set rows 1..sets with weight_kg defaulted to the
        exercise's target weight and completed=False. Everything is written
        in one transaction.

        Args:
            owner_id: User ID that will own the workout
            name: Workout name (already validated non-blank)
            description: Optional description
            exercises: Normalized exercise specs, in display order

        Returns:
            The created Workout, fully nested, status=ready
        """
        ...

    def get(
        self,
        workout_id: str,
        owner_id: str,
    ) -> Optional[Workout]:
        """
        Get a workout with exercises and sets.

        Exercises are ordered by position, sets by set_number.

        Returns:
            Workout or None if not found/not owned
        """
        ...

    def list(
        self,
        owner_id: str,
        limit: int = 50,
    ) -> List[Workout]:
        """
        List an owner's workouts, newest first.

        Returned workouts carry their exercises but not set rows.
        """
        ...

    def add_sets(
        self,
        owner_id: str,
        workout_id: str,
        rows: List[Dict[str, Any]],
    ) -> int:
        """
        Insert provisioned set rows for an owned workout.

        Args:
            owner_id: User ID (for authorization)
            workout_id: Workout UUID
            rows: workout_sets row payloads

        Returns:
            Number of rows inserted (0 if the workout is not owned)
        """
        ...

    def update_status(
        self,
        workout_id: str,
        owner_id: str,
        update: StatusUpdate,
    ) -> Optional[Workout]:
        """
        Write the columns a status transition decided on.

        Implementations persist exactly update.changes() (plus their own
        updated_at bookkeeping) and make no decisions of their own.

        Returns:
            Updated Workout (without set rows) or None if not found/not owned
        """
        ...

    def update_set(
        self,
        owner_id: str,
        workout_id: str,
        set_id: str,
        weight_kg: Optional[float],
        reps_completed: Optional[int],
        completed: bool,
    ) -> bool:
        """
        Update one set's logged values.

        The set must belong to the workout and the workout to the owner;
        the check and the write happen in one statement.

        Returns:
            True if the row was updated, False if the chain did not resolve
        """
        ...
