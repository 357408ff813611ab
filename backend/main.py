"""
FastAPI application factory for the workout session service.

`create_app()` wires Sentry, CORS and the routers around a Settings
object. Tests build their own app with `Settings(_env_file=None, ...)`
and swap dependencies through `app.dependency_overrides`; uvicorn serves
the module-level `app`:

    uvicorn backend.main:app --reload
"""

import logging
from typing import List, Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Web dashboard and Expo dev server
LOCAL_DEV_ORIGINS = (
    "http://localhost:3000",
    "http://localhost:8081",
)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API. Falls back to environment settings when none are passed."""
    settings = settings or get_settings()

    _init_sentry(settings)

    app = FastAPI(
        title="LiftLog Workout Session API",
        description="Workout session tracking: templates, live sessions and metrics",
        version="1.0.0",
    )
    _configure_cors(app, settings)
    _include_routers(app)
    _log_feature_flags(settings)

    logger.debug(f"Workout session API created for environment={settings.environment}")
    return app


def _init_sentry(settings: Settings) -> None:
    if not settings.sentry_dsn:
        return
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        traces_sample_rate=0.1,
    )
    logger.info("Sentry initialized for workout session api")


def _allowed_origins(settings: Settings) -> List[str]:
    origins = list(LOCAL_DEV_ORIGINS)
    origins.extend(o for o in settings.cors_origins_list if o not in origins)
    return origins


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    """Allow the local dev frontends plus CORS_ALLOWED_ORIGINS."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    from api.routers import health_router, workouts_router

    for router in (health_router, workouts_router):
        app.include_router(router)


def _log_feature_flags(settings: Settings) -> None:
    """Report non-default behaviour switches once at startup."""
    if settings.is_production and settings.uses_default_jwt_secret:
        logger.warning("JWT_SECRET is the built-in placeholder in production")
    if settings.strict_status_transitions:
        logger.info("STRICT_STATUS_TRANSITIONS is active")
    if settings.recompute_completion_metrics:
        logger.info("RECOMPUTE_COMPLETION_METRICS is active")
    if not settings.openai_api_key:
        logger.info("OPENAI_API_KEY not set; generated workouts use the fallback plan")


app = create_app()
