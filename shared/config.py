"""
Centralized configuration for the AIGate backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., JWT_*, SUPABASE_*, GEMINI_*).
"""

from datetime import timedelta
from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "AIGate API"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "test"] = "production"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Rate limiting (windows in seconds)
    rate_limit_enabled: bool = True
    rate_limit_requests: int = 100
    rate_limit_window: int = 900
    auth_rate_limit_requests: int = 5
    auth_rate_limit_window: int = 900
    ai_rate_limit_requests: int = 50
    ai_rate_limit_window: int = 3600

    # Tokens
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    session_token_ttl_minutes: int = 24 * 60
    password_reset_token_ttl_minutes: int = 60
    email_verification_token_ttl_minutes: int = 24 * 60

    # Accounts
    min_password_length: int = 6
    link_provider_accounts_by_email: bool = True

    # Frontend URLs (for emailed links)
    frontend_url: str = "http://localhost:3000"

    # Storage
    storage_backend: Literal["memory", "supabase"] = "memory"
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""

    # Generative AI
    ai_provider: Literal["gemini", "azure_openai"] = "gemini"
    ai_query_max_length: int = 2000
    ai_default_temperature: float = 0.7
    ai_default_max_tokens: int = 1024
    google_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    azure_openai_endpoint: str = ""
    azure_openai_key: str = ""
    azure_openai_deployment: str = ""
    azure_openai_api_version: str = "2024-06-01"

    @property
    def is_development(self) -> bool:
        """Whether development-only conveniences should be enabled."""
        return self.environment == "development"

    @property
    def session_token_ttl(self) -> timedelta:
        return timedelta(minutes=self.session_token_ttl_minutes)

    @property
    def password_reset_token_ttl(self) -> timedelta:
        return timedelta(minutes=self.password_reset_token_ttl_minutes)

    @property
    def email_verification_token_ttl(self) -> timedelta:
        return timedelta(minutes=self.email_verification_token_ttl_minutes)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
