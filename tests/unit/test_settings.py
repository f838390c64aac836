"""
Unit tests for backend/settings.py and the create_app() factory.
"""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from pydantic import ValidationError

from backend.main import _init_sentry, create_app
from backend.settings import Settings, get_settings


# Environment variables that CI might set which we need to clear for default tests
CI_ENV_VARS = [
    "ENVIRONMENT",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_ANON_KEY",
    "EXPORT_DIR",
    "CORS_ALLOWED_ORIGINS",
    "SENTRY_DSN",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Clear CI environment variables to test true defaults."""
    for var in CI_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.mark.unit
class TestSettingsDefaults:
    """Test that Settings applies correct defaults."""

    def test_environment_default(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.environment == "development"
        assert settings.is_development

    def test_supabase_fields_default_to_none(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.supabase_url is None
        assert settings.supabase_key is None

    def test_export_dir_default(self, clean_env):
        assert Settings(_env_file=None).export_dir == "./exports"

    def test_sentry_dsn_default_to_none(self, clean_env):
        assert Settings(_env_file=None).sentry_dsn is None


@pytest.mark.unit
class TestSettingsFromEnv:
    """Test that Settings reads environment variables."""

    def test_reads_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "Production")
        settings = Settings(_env_file=None)
        assert settings.environment == "production"
        assert settings.is_production

    def test_reads_export_dir(self, clean_env, monkeypatch):
        monkeypatch.setenv("EXPORT_DIR", "/vault/Workouts")
        assert Settings(_env_file=None).export_dir == "/vault/Workouts"

    def test_service_role_key_preferred(self, clean_env, monkeypatch):
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service")
        assert Settings(_env_file=None).supabase_key == "service"

    def test_anon_key_fallback(self, clean_env, monkeypatch):
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
        assert Settings(_env_file=None).supabase_key == "anon"

    def test_cors_origins_list(self, clean_env, monkeypatch):
        monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://a.example, https://b.example,")
        assert Settings(_env_file=None).cors_origins_list == [
            "https://a.example",
            "https://b.example",
        ]


@pytest.mark.unit
class TestSettingsValidation:

    def test_invalid_environment_raises(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(environment="moon", _env_file=None)


@pytest.mark.unit
def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()


# =============================================================================
# create_app
# =============================================================================


@pytest.mark.unit
class TestCreateApp:

    def test_returns_fastapi_instance(self):
        app = create_app(settings=Settings(environment="test", _env_file=None))

        assert isinstance(app, FastAPI)
        assert app.title == "Workout Logbook API"
        assert app.state.workout_session is None

    def test_uses_default_settings_when_none_provided(self):
        with patch("backend.main.get_settings") as mock_get_settings:
            mock_get_settings.return_value = Settings(environment="test", _env_file=None)

            create_app(settings=None)

            mock_get_settings.assert_called_once()

    def test_registers_routes(self):
        app = create_app(settings=Settings(environment="test", _env_file=None))
        paths = {route.path for route in app.routes}

        for path in ("/health", "/exercises", "/templates", "/session", "/logs"):
            assert path in paths


@pytest.mark.unit
class TestInitSentry:

    def test_skipped_when_no_dsn(self):
        with patch("backend.main.sentry_sdk.init") as mock_init:
            _init_sentry(Settings(environment="test", _env_file=None))
            mock_init.assert_not_called()

    def test_called_with_dsn(self):
        settings = Settings(
            environment="test", sentry_dsn="https://key@sentry.example/1", _env_file=None
        )
        with patch("backend.main.sentry_sdk.init") as mock_init:
            _init_sentry(settings)
            mock_init.assert_called_once()
            assert mock_init.call_args.kwargs["environment"] == "test"
