"""
Supabase implementation of WorkoutSessionRepository.

This module provides the concrete Supabase implementation for workout
session persistence. Writes that span several rows (creating a workout
with its exercises and sets, and the ownership-checked set update) go
through PostgreSQL functions so they commit or roll back as one unit;
see supabase/migrations/.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from supabase import Client

from application.exceptions import PersistenceError
from domain.converters import db_row_to_workout, exercise_specs_to_db_rows
from domain.models import ExerciseSpec, Workout
from domain.services.session_state import StatusUpdate

logger = logging.getLogger(__name__)

WORKOUTS_TABLE = "workouts"
SETS_TABLE = "workout_sets"

# PostgREST embeds: exercises with their sets, or exercises only
WORKOUT_DETAIL_SELECT = "*, workout_exercises(*, workout_sets(*))"
WORKOUT_LIST_SELECT = "*, workout_exercises(*)"

# PostgreSQL invalid_text_representation, raised for ids that are not UUIDs
INVALID_ID_CODE = "22P02"


def _is_invalid_id_error(error: Exception) -> bool:
    if getattr(error, "code", None) == INVALID_ID_CODE:
        return True
    message = str(error)
    return INVALID_ID_CODE in message or "invalid input syntax for type uuid" in message.lower()


class SupabaseWorkoutSessionRepository:
    """
    Supabase implementation of WorkoutSessionRepository protocol.

    All Supabase query logic for workout sessions is encapsulated here.
    The client is injected via constructor for testability.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def create(
        self,
        owner_id: str,
        name: str,
        description: Optional[str],
        exercises: Sequence[ExerciseSpec],
    ) -> Workout:
        """Create a workout, its exercises and planned sets in one transaction."""
        try:
            response = self._client.rpc(
                "create_workout_with_exercises",
                {
                    "p_owner_id": owner_id,
                    "p_name": name,
                    "p_description": description,
                    "p_exercises": exercise_specs_to_db_rows(list(exercises)),
                },
            ).execute()
        except Exception as e:
            logger.error(f"Atomic workout creation failed for {owner_id}: {e}")
            raise PersistenceError(f"Atomic workout creation failed: {e}") from e

        workout_id = response.data
        if not workout_id:
            raise PersistenceError("Workout creation RPC returned no data")

        workout = self.get(str(workout_id), owner_id)
        if workout is None:
            raise PersistenceError(f"Created workout {workout_id} could not be read back")
        return workout

    def get(
        self,
        workout_id: str,
        owner_id: str,
    ) -> Optional[Workout]:
        """Get a single workout with exercises and sets."""
        try:
            result = (
                self._client.table(WORKOUTS_TABLE)
                .select(WORKOUT_DETAIL_SELECT)
                .eq("id", workout_id)
                .eq("owner_id", owner_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            if _is_invalid_id_error(e):
                return None
            logger.error(f"Failed to get workout {workout_id}: {e}")
            raise PersistenceError(f"Failed to get workout: {e}") from e

        if not result.data:
            return None
        return db_row_to_workout(result.data[0])

    def list(
        self,
        owner_id: str,
        limit: int = 50,
    ) -> List[Workout]:
        """List an owner's workouts with exercises, newest first."""
        try:
            result = (
                self._client.table(WORKOUTS_TABLE)
                .select(WORKOUT_LIST_SELECT)
                .eq("owner_id", owner_id)
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list workouts for {owner_id}: {e}")
            raise PersistenceError(f"Failed to list workouts: {e}") from e

        return [db_row_to_workout(row) for row in result.data or []]

    def add_sets(
        self,
        owner_id: str,
        workout_id: str,
        rows: List[Dict[str, Any]],
    ) -> int:
        """
        Insert provisioned set rows.

        Rows that already exist for (exercise_id, set_number) are skipped,
        so two concurrent reads provisioning the same exercise cannot
        create duplicates.
        """
        if not rows:
            return 0
        try:
            owned = (
                self._client.table(WORKOUTS_TABLE)
                .select("id")
                .eq("id", workout_id)
                .eq("owner_id", owner_id)
                .limit(1)
                .execute()
            )
            if not owned.data:
                return 0

            result = (
                self._client.table(SETS_TABLE)
                .upsert(
                    [{**row, "workout_id": workout_id} for row in rows],
                    on_conflict="exercise_id,set_number",
                    ignore_duplicates=True,
                )
                .execute()
            )
        except Exception as e:
            if _is_invalid_id_error(e):
                return 0
            logger.error(f"Failed to provision sets for workout {workout_id}: {e}")
            raise PersistenceError(f"Failed to provision sets: {e}") from e

        return len(result.data or [])

    def update_status(
        self,
        workout_id: str,
        owner_id: str,
        update: StatusUpdate,
    ) -> Optional[Workout]:
        """Write a transition's columns; the state machine decides what they are."""
        data = update.to_row()
        data["updated_at"] = datetime.now(timezone.utc).isoformat()
        try:
            result = (
                self._client.table(WORKOUTS_TABLE)
                .update(data)
                .eq("id", workout_id)
                .eq("owner_id", owner_id)
                .execute()
            )
        except Exception as e:
            if _is_invalid_id_error(e):
                return None
            logger.error(f"Failed to update workout {workout_id}: {e}")
            raise PersistenceError(f"Failed to update workout: {e}") from e

        if not result.data:
            return None
        return db_row_to_workout(result.data[0])

    def update_set(
        self,
        owner_id: str,
        workout_id: str,
        set_id: str,
        weight_kg: Optional[float],
        reps_completed: Optional[int],
        completed: bool,
    ) -> bool:
        """Ownership-checked set update via RPC. Returns whether a row changed."""
        try:
            response = self._client.rpc(
                "update_workout_set",
                {
                    "p_owner_id": owner_id,
                    "p_workout_id": workout_id,
                    "p_set_id": set_id,
                    "p_weight_kg": weight_kg,
                    "p_reps_completed": reps_completed,
                    "p_completed": completed,
                },
            ).execute()
        except Exception as e:
            if _is_invalid_id_error(e):
                return False
            logger.error(f"Failed to update set {set_id}: {e}")
            raise PersistenceError(f"Failed to update set: {e}") from e

        return bool(response.data)
