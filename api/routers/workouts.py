"""
Workouts router for workout templates and live sessions.

This router contains endpoints for:
- /workouts - List and create workouts
- /workouts/generate - Create a workout from a free-text prompt (also /workouts/ai)
- /workouts/{workout_id} - Read (with set provisioning), start and complete
- /workouts/{workout_id}/summary - Session metrics snapshot
- /workouts/{workout_id}/sets/{set_id} - Log or undo a set

Application errors are translated to HTTP status codes here:
ValidationError -> 400, NotFoundError -> 404, InvalidTransitionError -> 409,
PersistenceError -> 500.
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Literal, NoReturn, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from api.deps import (
    get_create_workout_use_case,
    get_current_user,
    get_generate_workout_use_case,
    get_get_workout_use_case,
    get_lifecycle_use_case,
    get_settings,
    get_update_set_use_case,
)
from application.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    PersistenceError,
    ValidationError,
    WorkoutSessionError,
)
from application.use_cases import (
    CreateWorkoutUseCase,
    GenerateWorkoutUseCase,
    GetWorkoutUseCase,
    UpdateSetUseCase,
    WorkoutLifecycleUseCase,
)
from backend.settings import Settings
from domain.models import Workout
from domain.models.exercise import MAX_REPS
from domain.models.workout import WORKOUT_DESCRIPTION_MAX_LENGTH

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Workouts"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class CreateWorkoutRequest(BaseModel):
    """Request for creating a workout from a template.

    Exercise fields are parsed leniently by the use case, so they are
    accepted here as raw dicts.
    """
    name: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=WORKOUT_DESCRIPTION_MAX_LENGTH)
    exercises: List[Dict[str, Any]] = Field(default_factory=list)


class GenerateWorkoutRequest(BaseModel):
    """Request for generating a workout from a prompt."""
    prompt: Optional[str] = Field(default=None, max_length=500)


class WorkoutActionRequest(BaseModel):
    """Request for a status transition."""
    action: Literal["start", "complete"]
    duration: Optional[int] = Field(default=None, ge=0, description="Duration in minutes")
    calories_burned: Optional[int] = Field(default=None, ge=0)
    total_kg_lifted: Optional[float] = Field(default=None, ge=0)


class UpdateSetRequest(BaseModel):
    """Request for logging a set. completed=false marks it undone."""
    weight_kg: Optional[float] = Field(default=None, ge=0)
    reps_completed: Optional[int] = Field(default=None, ge=0, le=MAX_REPS)
    completed: Optional[bool] = None


# =============================================================================
# Helpers
# =============================================================================


def _raise_http(e: WorkoutSessionError) -> NoReturn:
    """Translate an application error into an HTTPException."""
    if isinstance(e, ValidationError):
        logger.warning(f"Validation failed on {e.field}: {e.message}")
        raise HTTPException(
            status_code=400,
            detail={"message": e.message, "field": e.field},
        ) from e
    if isinstance(e, NotFoundError):
        raise HTTPException(status_code=404, detail=str(e)) from e
    if isinstance(e, InvalidTransitionError):
        raise HTTPException(status_code=409, detail=str(e)) from e
    if isinstance(e, PersistenceError):
        logger.exception(f"Persistence error: {e}")
        raise HTTPException(
            status_code=500,
            detail="Failed to save workout. Check server logs.",
        ) from e
    logger.exception(f"Unexpected workout session error: {e}")
    raise HTTPException(status_code=500, detail="Internal error") from e


def _workout_response(workout: Workout) -> Dict[str, Any]:
    return {
        "success": True,
        "workout": workout.model_dump(mode="json"),
    }


# =============================================================================
# Collection Endpoints
# =============================================================================


@router.get("/workouts")
def list_workouts_endpoint(
    user_id: str = Depends(get_current_user),
    use_case: GetWorkoutUseCase = Depends(get_get_workout_use_case),
    settings: Settings = Depends(get_settings),
    limit: Optional[int] = Query(None, ge=1, le=500, description="Maximum number of workouts"),
):
    """List the authenticated user's workouts, newest first."""
    try:
        workouts = use_case.list_workouts(
            user_id,
            limit=min(limit or settings.workout_list_limit, settings.workout_list_limit),
        )
    except WorkoutSessionError as e:
        _raise_http(e)

    return {
        "success": True,
        "workouts": [w.model_dump(mode="json") for w in workouts],
        "count": len(workouts),
    }


@router.post("/workouts", status_code=201)
def create_workout_endpoint(
    request: CreateWorkoutRequest,
    user_id: str = Depends(get_current_user),
    use_case: CreateWorkoutUseCase = Depends(get_create_workout_use_case),
):
    """Create a workout with its exercises and planned sets."""
    try:
        workout = use_case.execute(
            owner_id=user_id,
            name=request.name,
            description=request.description,
            exercises=request.exercises,
        )
    except WorkoutSessionError as e:
        _raise_http(e)

    return _workout_response(workout)


@router.post("/workouts/generate", status_code=201)
@router.post("/workouts/ai", status_code=201, include_in_schema=False)
async def generate_workout_endpoint(
    request: GenerateWorkoutRequest,
    user_id: str = Depends(get_current_user),
    use_case: GenerateWorkoutUseCase = Depends(get_generate_workout_use_case),
):
    """Create a workout from a free-text prompt.

    Falls back to a fixed beginner plan when generation is unavailable.
    """
    try:
        result = await use_case.execute(owner_id=user_id, prompt=request.prompt)
    except WorkoutSessionError as e:
        _raise_http(e)

    response = _workout_response(result.workout)
    response["used_fallback"] = result.used_fallback
    return response


# =============================================================================
# Workout Endpoints (Parameterized routes)
# =============================================================================


@router.get("/workouts/{workout_id}")
def get_workout_endpoint(
    workout_id: str,
    user_id: str = Depends(get_current_user),
    use_case: GetWorkoutUseCase = Depends(get_get_workout_use_case),
):
    """Get a single workout with exercises and sets, provisioning missing sets."""
    try:
        workout = use_case.execute(workout_id, user_id)
    except WorkoutSessionError as e:
        _raise_http(e)

    return _workout_response(workout)


@router.get("/workouts/{workout_id}/summary")
def get_workout_summary_endpoint(
    workout_id: str,
    user_id: str = Depends(get_current_user),
    use_case: GetWorkoutUseCase = Depends(get_get_workout_use_case),
):
    """Metrics snapshot: duration, lifted weight and per-exercise breakdown."""
    try:
        result = use_case.summarize(workout_id, user_id)
    except WorkoutSessionError as e:
        _raise_http(e)

    metrics = result.metrics
    return {
        "success": True,
        "workout_id": result.workout.id,
        "status": result.workout.status.value,
        "duration_seconds": metrics.duration_seconds,
        "duration_label": metrics.duration_label,
        "total_lifted_kg": metrics.total_lifted_kg,
        "total_sets": metrics.total_sets,
        "calories_burned": result.workout.calories_burned,
        "exercises": [asdict(ex) for ex in metrics.per_exercise],
    }


@router.put("/workouts/{workout_id}")
def update_workout_status_endpoint(
    workout_id: str,
    request: WorkoutActionRequest,
    user_id: str = Depends(get_current_user),
    use_case: WorkoutLifecycleUseCase = Depends(get_lifecycle_use_case),
):
    """Start or complete a workout."""
    try:
        if request.action == "start":
            workout = use_case.start(workout_id, user_id)
        else:
            workout = use_case.complete(
                workout_id,
                user_id,
                duration_minutes=request.duration,
                calories_burned=request.calories_burned,
                total_kg_lifted=request.total_kg_lifted,
            )
    except WorkoutSessionError as e:
        _raise_http(e)

    return _workout_response(workout)


@router.put("/workouts/{workout_id}/sets/{set_id}")
def update_set_endpoint(
    workout_id: str,
    set_id: str,
    request: UpdateSetRequest,
    user_id: str = Depends(get_current_user),
    use_case: UpdateSetUseCase = Depends(get_update_set_use_case),
):
    """Log weight and reps for a set, or mark it undone."""
    try:
        workout = use_case.execute(
            owner_id=user_id,
            workout_id=workout_id,
            set_id=set_id,
            weight_kg=request.weight_kg,
            reps_completed=request.reps_completed,
            completed=request.completed,
        )
    except WorkoutSessionError as e:
        _raise_http(e)

    return _workout_response(workout)
