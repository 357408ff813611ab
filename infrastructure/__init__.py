"""
Adapters that implement the application ports against real services.
"""

from infrastructure.db import SupabaseWorkoutSessionRepository

__all__ = [
    "SupabaseWorkoutSessionRepository",
]
