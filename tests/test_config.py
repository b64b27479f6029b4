# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================
# Run with: pytest tests/test_config.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from app.config import Settings

REQUIRED = {
    "SUPABASE_URL": "https://abc.supabase.co/",
    "SUPABASE_ANON_KEY": "anon",
    "SUPABASE_SERVICE_ROLE_KEY": "service",
}


@pytest.fixture
def clean_env(monkeypatch):
    """Drop optional variables conftest sets so defaults show through."""
    for name in ("ENVIRONMENT", "DEBUG", "DEFAULT_AVG_SPEED_KMPH", "CORS_ORIGINS", "SUPABASE_JWT_SECRET"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None, **REQUIRED)

        assert settings.DEFAULT_AVG_SPEED_KMPH == 20.0
        assert settings.REDIS_URL == "redis://localhost:6379/0"
        assert settings.SCHEDULE_TODAY_HOUR == 0
        assert settings.SCHEDULE_TODAY_MINUTE == 5
        assert settings.ENVIRONMENT == "development"
        assert settings.is_development
        assert not settings.is_production

    def test_missing_supabase_url(self, clean_env, monkeypatch):
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None, SUPABASE_ANON_KEY="anon", SUPABASE_SERVICE_ROLE_KEY="service")

    def test_missing_anon_key(self, clean_env, monkeypatch):
        """Every entry point that builds a client, the seeder included, needs the anon key."""
        monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None, SUPABASE_URL="https://abc.supabase.co", SUPABASE_SERVICE_ROLE_KEY="service")

    @pytest.mark.parametrize("speed", [0, -10, 500])
    def test_speed_bounds(self, clean_env, speed):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, DEFAULT_AVG_SPEED_KMPH=speed, **REQUIRED)

    def test_speed_from_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("DEFAULT_AVG_SPEED_KMPH", "35.5")
        assert Settings(_env_file=None, **REQUIRED).DEFAULT_AVG_SPEED_KMPH == 35.5

    def test_cors_origins_list(self, clean_env):
        settings = Settings(
            _env_file=None,
            CORS_ORIGINS="http://localhost:3000, https://app.nutrifit.example,",
            **REQUIRED,
        )
        assert settings.cors_origins_list == ["http://localhost:3000", "https://app.nutrifit.example"]

    def test_jwks_url(self, clean_env):
        settings = Settings(_env_file=None, **REQUIRED)
        assert settings.jwks_url == "https://abc.supabase.co/auth/v1/.well-known/jwks.json"

    def test_invalid_environment(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, ENVIRONMENT="qa", **REQUIRED)
