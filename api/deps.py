"""
Dependency wiring for the workout session routers.

Routers depend on Protocol-typed providers from this module and never
construct adapters themselves. Process-wide clients (Supabase, OpenAI)
are built once and cached; repositories and use cases are cheap and are
created per request around those clients.

Tests replace any provider through FastAPI overrides, for example:

    app.dependency_overrides[get_workout_repo] = lambda: FakeWorkoutSessionRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from openai import AsyncOpenAI
from supabase import Client, create_client

from application.ports import ExerciseGenerator, WorkoutSessionRepository
from application.use_cases import (
    CreateWorkoutUseCase,
    GenerateWorkoutUseCase,
    GetWorkoutUseCase,
    UpdateSetUseCase,
    WorkoutLifecycleUseCase,
)
from backend.auth import get_current_user as _get_current_user
from backend.services.exercise_generator import OpenAIExerciseGenerator
from backend.settings import Settings, get_settings as _get_settings
from infrastructure import SupabaseWorkoutSessionRepository


# =============================================================================
# Settings and external clients
# =============================================================================


def get_settings() -> Settings:
    """Cached Settings; overridable per app in tests."""
    return _get_settings()


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """Shared Supabase client, or None without SUPABASE_URL and a key."""
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """Supabase client for routes that cannot work without the database (503 otherwise)."""
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Adapters
# =============================================================================


def get_workout_repo(
    client: Client = Depends(get_supabase_client_required),
) -> WorkoutSessionRepository:
    return SupabaseWorkoutSessionRepository(client)


@lru_cache
def _get_openai_client() -> Optional[AsyncOpenAI]:
    settings = _get_settings()
    if not settings.openai_api_key:
        return None
    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        timeout=settings.generation_timeout_seconds,
    )


def get_exercise_generator(
    settings: Settings = Depends(get_settings),
) -> Optional[ExerciseGenerator]:
    """
    Get the ExerciseGenerator, or None when OpenAI is not configured.

    Without a generator, generated workouts use the fallback plan.
    """
    client = _get_openai_client()
    if client is None:
        return None
    return OpenAIExerciseGenerator(
        client,
        model=settings.openai_model,
        max_attempts=settings.generation_max_attempts,
    )


# =============================================================================
# Use cases
# =============================================================================


def get_get_workout_use_case(
    workout_repo: WorkoutSessionRepository = Depends(get_workout_repo),
) -> GetWorkoutUseCase:
    return GetWorkoutUseCase(workout_repo=workout_repo)


def get_create_workout_use_case(
    workout_repo: WorkoutSessionRepository = Depends(get_workout_repo),
) -> CreateWorkoutUseCase:
    return CreateWorkoutUseCase(workout_repo=workout_repo)


def get_generate_workout_use_case(
    workout_repo: WorkoutSessionRepository = Depends(get_workout_repo),
    generator: Optional[ExerciseGenerator] = Depends(get_exercise_generator),
) -> GenerateWorkoutUseCase:
    return GenerateWorkoutUseCase(workout_repo=workout_repo, generator=generator)


def get_lifecycle_use_case(
    workout_repo: WorkoutSessionRepository = Depends(get_workout_repo),
    settings: Settings = Depends(get_settings),
) -> WorkoutLifecycleUseCase:
    """Lifecycle use case configured from the transition/metrics feature flags."""
    return WorkoutLifecycleUseCase(
        workout_repo=workout_repo,
        strict=settings.strict_status_transitions,
        recompute_metrics=settings.recompute_completion_metrics,
    )


def get_update_set_use_case(
    workout_repo: WorkoutSessionRepository = Depends(get_workout_repo),
) -> UpdateSetUseCase:
    return UpdateSetUseCase(workout_repo=workout_repo)


# =============================================================================
# Authentication
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> str:
    """Owner id of the caller; 401 when neither credential checks out."""
    return await _get_current_user(
        authorization=authorization,
        x_api_key=x_api_key,
    )

