"""Liveness and readiness checks for the load balancer and uptime checks."""

from fastapi import APIRouter, Depends

from api.deps import get_settings, get_supabase_client
from backend.settings import Settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health():
    """Process is up; no dependencies are touched."""
    return {"status": "ok"}


@router.get("/health/ready")
def readiness(settings: Settings = Depends(get_settings)):
    """Configuration flags for the database and generator. Always 200."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "database": get_supabase_client() is not None,
        "generator": bool(settings.openai_api_key),
    }
