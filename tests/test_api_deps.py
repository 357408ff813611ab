"""
Unit tests for api/deps.py dependency providers.

These tests verify that the dependency providers are properly wired and
return the correct types. Uses mocks for external dependencies.
"""

import pytest
from fastapi import HTTPException
from unittest.mock import AsyncMock, MagicMock, Mock, patch

from backend.settings import Settings

# All tests in this module are pure logic tests with mocks - mark as unit
pytestmark = pytest.mark.unit


# =============================================================================
# Supabase Client
# =============================================================================


class TestSupabaseClientProviders:
    """Tests for Supabase client providers."""

    def test_client_none_without_credentials(self):
        from api import deps

        deps.get_supabase_client.cache_clear()
        try:
            with patch("api.deps._get_settings", return_value=Settings(_env_file=None, supabase_url=None)):
                assert deps.get_supabase_client() is None
        finally:
            deps.get_supabase_client.cache_clear()

    def test_client_created_with_credentials(self):
        from api import deps

        settings = Settings(
            supabase_url="https://db.example.supabase.co",
            supabase_service_role_key="service-key",
            _env_file=None,
        )
        deps.get_supabase_client.cache_clear()
        try:
            with patch("api.deps._get_settings", return_value=settings), \
                    patch("api.deps.create_client") as mock_create:
                client = deps.get_supabase_client()

            mock_create.assert_called_once_with("https://db.example.supabase.co", "service-key")
            assert client is mock_create.return_value
        finally:
            deps.get_supabase_client.cache_clear()

    def test_required_raises_503_when_missing(self):
        from api.deps import get_supabase_client_required

        with patch("api.deps.get_supabase_client", return_value=None):
            with pytest.raises(HTTPException) as exc_info:
                get_supabase_client_required()

        assert exc_info.value.status_code == 503

    def test_required_returns_client(self):
        from api.deps import get_supabase_client_required

        mock_client = Mock()
        with patch("api.deps.get_supabase_client", return_value=mock_client):
            assert get_supabase_client_required() is mock_client


# =============================================================================
# Repositories and Generator
# =============================================================================


class TestRepositoryProviders:
    """Tests for repository providers."""

    def test_get_workout_repo_returns_supabase_repository(self):
        from api.deps import get_workout_repo
        from infrastructure import SupabaseWorkoutSessionRepository

        mock_client = Mock()
        repo = get_workout_repo(client=mock_client)

        assert isinstance(repo, SupabaseWorkoutSessionRepository)
        assert repo._client is mock_client


class TestExerciseGeneratorProvider:
    """Tests for the exercise generator provider."""

    def test_none_without_openai_key(self):
        from api.deps import get_exercise_generator

        with patch("api.deps._get_openai_client", return_value=None):
            assert get_exercise_generator(settings=Settings(_env_file=None)) is None

    def test_openai_generator_with_key(self):
        from api.deps import get_exercise_generator
        from backend.services import OpenAIExerciseGenerator

        settings = Settings(openai_model="gpt-4o", generation_max_attempts=3, _env_file=None)
        with patch("api.deps._get_openai_client", return_value=MagicMock()):
            generator = get_exercise_generator(settings=settings)

        assert isinstance(generator, OpenAIExerciseGenerator)
        assert generator._model == "gpt-4o"
        assert generator._max_attempts == 3


# =============================================================================
# Use Cases
# =============================================================================


class TestUseCaseProviders:
    """Tests for use case providers."""

    def test_use_cases_wrap_repository(self):
        from api.deps import (
            get_create_workout_use_case,
            get_get_workout_use_case,
            get_update_set_use_case,
        )

        repo = Mock()

        assert get_get_workout_use_case(workout_repo=repo)._workout_repo is repo
        assert get_create_workout_use_case(workout_repo=repo)._workout_repo is repo
        assert get_update_set_use_case(workout_repo=repo)._workout_repo is repo

    def test_generate_use_case_gets_generator(self):
        from api.deps import get_generate_workout_use_case

        repo, generator = Mock(), Mock()
        use_case = get_generate_workout_use_case(workout_repo=repo, generator=generator)

        assert use_case._generator is generator

    def test_lifecycle_reads_feature_flags(self):
        from api.deps import get_lifecycle_use_case

        settings = Settings(
            strict_status_transitions=True,
            recompute_completion_metrics=True,
            _env_file=None,
        )
        use_case = get_lifecycle_use_case(workout_repo=Mock(), settings=settings)

        assert use_case._state_machine.strict is True
        assert use_case._recompute_metrics is True


# =============================================================================
# Authentication
# =============================================================================


class TestAuthProvider:
    """Tests for the auth wrapper."""

    @pytest.mark.asyncio
    async def test_get_current_user_delegates(self):
        from api.deps import get_current_user

        with patch("api.deps._get_current_user", new_callable=AsyncMock, return_value="user-1") as mock_auth:
            user = await get_current_user(authorization="Bearer x", x_api_key=None)

        assert user == "user-1"
        mock_auth.assert_awaited_once_with(authorization="Bearer x", x_api_key=None)
