"""
Environment-driven configuration for the workout session service.

Every tunable lives on `Settings`; values come from the process
environment or a local `.env`. FastAPI routes receive it through
`Depends(get_settings)`, which caches one instance per process:

    settings = get_settings()
    settings.strict_status_transitions  # STRICT_STATUS_TRANSITIONS

Tests construct `Settings(_env_file=None, ...)` directly and call
`get_settings.cache_clear()` when they need a fresh environment read.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "liftlog-jwt-secret-change-in-production"
ENVIRONMENTS = ("development", "staging", "production", "test")


def _split_csv(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseSettings):
    """Service configuration. Field names map to upper-case env vars."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Runtime
    # =========================================================================
    environment: str = Field(
        default="development",
        description=f"One of {', '.join(ENVIRONMENTS)}",
    )

    # =========================================================================
    # Persistence (Supabase)
    # =========================================================================
    supabase_url: Optional[str] = Field(default=None, description="Project URL")
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Service role key; bypasses row level security",
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Anon key, used only when no service role key is set",
    )

    # =========================================================================
    # Auth
    # =========================================================================
    jwt_secret: str = Field(
        default=DEFAULT_JWT_SECRET,
        description="HS256 secret for bearer tokens",
    )
    api_keys: str = Field(
        default="",
        description="Comma-separated service keys accepted via X-API-Key",
    )

    # =========================================================================
    # Session behaviour
    # =========================================================================
    strict_status_transitions: bool = Field(
        default=False,
        description="Answer 409 for start on a finished workout or complete on one never started",
    )
    recompute_completion_metrics: bool = Field(
        default=False,
        description="Ignore client-sent calories and kg; derive them from logged sets",
    )
    workout_list_limit: int = Field(
        default=50,
        ge=1,
        le=500,
        description="Upper bound on rows returned by GET /workouts",
    )

    # =========================================================================
    # Workout generation (OpenAI)
    # =========================================================================
    openai_api_key: Optional[str] = Field(
        default=None,
        description="Unset disables generation; the fallback plan is used instead",
    )
    openai_model: str = Field(default="gpt-4o-mini")
    generation_timeout_seconds: float = Field(default=30.0, gt=0)
    generation_max_attempts: int = Field(
        default=2,
        ge=1,
        description="Tries per prompt before giving up on generation",
    )

    # =========================================================================
    # HTTP and observability
    # =========================================================================
    cors_allowed_origins: str = Field(
        default="",
        description="Comma-separated origins allowed on top of the local dev ones",
    )
    sentry_dsn: Optional[str] = Field(default=None)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        normalized = v.lower()
        if normalized not in ENVIRONMENTS:
            raise ValueError(f"Invalid environment '{v}'. Expected one of {ENVIRONMENTS}")
        return normalized

    @property
    def supabase_key(self) -> Optional[str]:
        """Service role key when present, anon key otherwise."""
        return self.supabase_service_role_key or self.supabase_anon_key

    @property
    def api_keys_list(self) -> list[str]:
        return _split_csv(self.api_keys)

    @property
    def cors_origins_list(self) -> list[str]:
        return _split_csv(self.cors_allowed_origins)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def uses_default_jwt_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET


@lru_cache
def get_settings() -> Settings:
    """Process-wide Settings, read from the environment on first call."""
    return Settings()
