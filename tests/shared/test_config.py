"""Tests for shared/config.py."""

import os
from datetime import timedelta
from unittest.mock import patch

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings(_env_file=None, environment="development", storage_backend="memory")
        assert settings.app_name == "AIGate API"
        assert settings.port == 8000
        assert settings.jwt_algorithm == "HS256"
        assert settings.min_password_length == 6
        assert settings.rate_limit_requests == 100
        assert settings.auth_rate_limit_requests == 5
        assert settings.ai_rate_limit_requests == 50
        assert settings.ai_query_max_length == 2000

    def test_token_ttls(self):
        settings = Settings(_env_file=None)
        assert settings.session_token_ttl == timedelta(hours=24)
        assert settings.password_reset_token_ttl == timedelta(hours=1)
        assert settings.email_verification_token_ttl == timedelta(hours=24)

    def test_is_development(self):
        assert Settings(_env_file=None, environment="development").is_development is True
        assert Settings(_env_file=None, environment="production").is_development is False

    def test_environment_defaults_to_production(self):
        settings = Settings(_env_file=None)
        assert settings.environment == "production"
        assert settings.is_development is False

    def test_loads_from_env(self):
        with patch.dict(os.environ, {
            "PORT": "9000",
            "SESSION_TOKEN_TTL_MINUTES": "30",
            "AI_PROVIDER": "azure_openai",
        }):
            settings = Settings(_env_file=None)
            assert settings.port == 9000
            assert settings.session_token_ttl == timedelta(minutes=30)
            assert settings.ai_provider == "azure_openai"


class TestGetSettings:
    def test_get_settings_caches(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
