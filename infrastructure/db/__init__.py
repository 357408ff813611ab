"""
Supabase adapters for the application.ports repository protocols.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabaseWorkoutSessionRepository

    client = create_client(SUPABASE_URL, SUPABASE_KEY)
    workout_repo = SupabaseWorkoutSessionRepository(client)
"""

from infrastructure.db.workout_repository import SupabaseWorkoutSessionRepository

__all__ = [
    "SupabaseWorkoutSessionRepository",
]
