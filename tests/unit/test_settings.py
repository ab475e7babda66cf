"""
Unit tests for backend/settings.py
"""

import pytest
from pydantic import ValidationError

from backend.settings import Settings, get_settings


# Environment variables that CI might set which we need to clear for default tests
CI_ENV_VARS = [
    "ENVIRONMENT",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_ANON_KEY",
    "SUPABASE_JWT_SECRET",
    "API_KEYS",
    "OPENFOODFACTS_BASE_URL",
    "LAUNCHER_CACHE_TTL_HOURS",
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

    def test_supabase_fields_default_to_none(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.supabase_url is None
        assert settings.supabase_service_role_key is None
        assert settings.supabase_anon_key is None

    def test_auth_defaults(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.supabase_jwt_secret == ""
        assert settings.jwt_audience == "authenticated"
        assert settings.api_keys_list == []

    def test_openfoodfacts_defaults(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.openfoodfacts_base_url == "https://world.openfoodfacts.org"
        assert settings.openfoodfacts_timeout_seconds == 10.0
        assert settings.openfoodfacts_search_timeout_seconds == 1.6

    def test_launcher_cache_ttl_default(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.launcher_cache_ttl_hours == 6.0
        assert settings.launcher_cache_ttl_seconds == 21600

    def test_sentry_dsn_default_to_none(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.sentry_dsn is None


@pytest.mark.unit
class TestSettingsValidation:
    """Test Settings validation behavior."""

    def test_valid_environments_accepted(self):
        for env in ["development", "staging", "production", "test"]:
            settings = Settings(environment=env, _env_file=None)
            assert settings.environment == env

    def test_environment_case_insensitive(self):
        settings = Settings(environment="PRODUCTION", _env_file=None)
        assert settings.environment == "production"

    def test_invalid_environment_raises_error(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(environment="invalid", _env_file=None)
        assert "Invalid environment" in str(exc_info.value)

    @pytest.mark.parametrize("field", [
        "launcher_cache_ttl_hours",
        "openfoodfacts_timeout_seconds",
        "openfoodfacts_search_timeout_seconds",
    ])
    def test_durations_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: 0})


@pytest.mark.unit
class TestSettingsProperties:
    """Test Settings computed properties."""

    def test_supabase_key_prefers_service_role(self, clean_env):
        settings = Settings(
            _env_file=None,
            supabase_service_role_key="service-key",
            supabase_anon_key="anon-key",
        )
        assert settings.supabase_key == "service-key"

    def test_supabase_key_falls_back_to_anon(self, clean_env):
        settings = Settings(
            _env_file=None,
            supabase_service_role_key=None,
            supabase_anon_key="anon-key",
        )
        assert settings.supabase_key == "anon-key"

    def test_supabase_key_returns_none_if_neither(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.supabase_key is None

    def test_api_keys_list_strips_whitespace(self):
        settings = Settings(api_keys="  key1  ,  key2  ,", _env_file=None)
        assert settings.api_keys_list == ["key1", "key2"]

    def test_environment_flags(self):
        assert Settings(environment="production", _env_file=None).is_production is True
        assert Settings(environment="development", _env_file=None).is_development is True
        assert Settings(environment="test", _env_file=None).is_test is True
        assert Settings(environment="staging", _env_file=None).is_production is False


@pytest.mark.unit
class TestGetSettings:
    """Test get_settings() function."""

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert isinstance(settings1, Settings)
        assert settings1 is settings2


@pytest.mark.unit
class TestSettingsFromEnv:
    """Test Settings loading from environment variables."""

    def test_settings_loads_from_env(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "staging")
        monkeypatch.setenv("SUPABASE_URL", "https://test.supabase.co")
        monkeypatch.setenv("SUPABASE_JWT_SECRET", "my-secret")
        monkeypatch.setenv("LAUNCHER_CACHE_TTL_HOURS", "0.5")

        settings = Settings(_env_file=None)

        assert settings.environment == "staging"
        assert settings.supabase_url == "https://test.supabase.co"
        assert settings.supabase_jwt_secret == "my-secret"
        assert settings.launcher_cache_ttl_seconds == 1800
