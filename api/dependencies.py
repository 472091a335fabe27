"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

STORAGE_BACKEND picks the repositories: "memory" for development and
tests, "supabase" for production.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from api.middleware.rate_limit import FixedWindowRateLimiter
    from modules.ai.interfaces import IAIService
    from modules.audit.interfaces import IAuditLog
    from modules.auth.interfaces import IAuthService, IEmailSender, IUserRepository
    from modules.auth.tokens import TokenCodec
    from modules.subscriptions.interfaces import (
        ISubscriptionRepository,
        ISubscriptionService,
    )


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._token_codec: "TokenCodec | None" = None
        self._user_repository: "IUserRepository | None" = None
        self._subscription_repository: "ISubscriptionRepository | None" = None
        self._audit_log: "IAuditLog | None" = None
        self._email_sender: "IEmailSender | None" = None
        self._auth_service: "IAuthService | None" = None
        self._subscription_service: "ISubscriptionService | None" = None
        self._ai_service: "IAIService | None" = None
        self._rate_limiters: "dict[str, FixedWindowRateLimiter] | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def uses_supabase(self) -> bool:
        return self.settings.storage_backend == "supabase"

    @property
    def token_codec(self) -> "TokenCodec":
        """Get the token codec. The signing secret is fixed from here on."""
        if self._token_codec is None:
            from modules.auth.models import TokenPurpose
            from modules.auth.tokens import TokenCodec

            settings = self.settings
            self._token_codec = TokenCodec(
                secret=settings.jwt_secret,
                algorithm=settings.jwt_algorithm,
                session_ttl=settings.session_token_ttl,
                purpose_ttls={
                    TokenPurpose.PASSWORD_RESET: settings.password_reset_token_ttl,
                    TokenPurpose.EMAIL_VERIFICATION: settings.email_verification_token_ttl,
                },
            )
        return self._token_codec

    @property
    def user_repository(self) -> "IUserRepository":
        if self._user_repository is None:
            if self.uses_supabase:
                from modules.auth.repository import SupabaseUserRepository
                from shared.database import get_supabase_client
                self._user_repository = SupabaseUserRepository(get_supabase_client(self.settings))
            else:
                from modules.auth.repository import InMemoryUserRepository
                self._user_repository = InMemoryUserRepository()
        return self._user_repository

    @property
    def subscription_repository(self) -> "ISubscriptionRepository":
        if self._subscription_repository is None:
            if self.uses_supabase:
                from modules.subscriptions.repository import SupabaseSubscriptionRepository
                from shared.database import get_supabase_client
                self._subscription_repository = SupabaseSubscriptionRepository(
                    get_supabase_client(self.settings)
                )
            else:
                from modules.subscriptions.repository import InMemorySubscriptionRepository
                self._subscription_repository = InMemorySubscriptionRepository()
        return self._subscription_repository

    @property
    def audit_log(self) -> "IAuditLog":
        if self._audit_log is None:
            if self.uses_supabase:
                from modules.audit.service import SupabaseAuditLog
                from shared.database import get_supabase_client
                self._audit_log = SupabaseAuditLog(get_supabase_client(self.settings))
            else:
                from modules.audit.service import AuditLog
                self._audit_log = AuditLog()
        return self._audit_log

    @property
    def email_sender(self) -> "IEmailSender":
        if self._email_sender is None:
            from modules.auth.notifications import LoggingEmailSender
            self._email_sender = LoggingEmailSender()
        return self._email_sender

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService

            settings = self.settings
            self._auth_service = AuthService(
                users=self.user_repository,
                codec=self.token_codec,
                email_sender=self.email_sender,
                frontend_url=settings.frontend_url,
                min_password_length=settings.min_password_length,
                link_provider_accounts_by_email=settings.link_provider_accounts_by_email,
            )
        return self._auth_service

    @property
    def subscriptions(self) -> "ISubscriptionService":
        """Get the subscription service instance."""
        if self._subscription_service is None:
            from modules.subscriptions.service import SubscriptionService
            self._subscription_service = SubscriptionService(
                repository=self.subscription_repository,
                audit=self.audit_log,
            )
        return self._subscription_service

    @property
    def ai(self) -> "IAIService":
        """Get the AI proxy service instance."""
        if self._ai_service is None:
            from modules.ai.service import AIService
            from providers import get_provider, model_config_from_settings
            from providers.base import GenerationOptions

            settings = self.settings
            self._ai_service = AIService(
                provider=get_provider(settings.ai_provider),
                model_config=model_config_from_settings(settings),
                subscriptions=self.subscriptions,
                audit=self.audit_log,
                default_options=GenerationOptions(
                    temperature=settings.ai_default_temperature,
                    max_tokens=settings.ai_default_max_tokens,
                ),
                max_query_length=settings.ai_query_max_length,
            )
        return self._ai_service

    @property
    def rate_limiters(self) -> "dict[str, FixedWindowRateLimiter]":
        if self._rate_limiters is None:
            from api.middleware.rate_limit import build_limiters
            self._rate_limiters = build_limiters(self.settings)
        return self._rate_limiters

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._settings = None
        self._token_codec = None
        self._user_repository = None
        self._subscription_repository = None
        self._audit_log = None
        self._email_sender = None
        self._auth_service = None
        self._subscription_service = None
        self._ai_service = None
        self._rate_limiters = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_subscription_service() -> "ISubscriptionService":
    """FastAPI dependency for subscription service."""
    return get_container().subscriptions


def get_ai_service() -> "IAIService":
    """FastAPI dependency for AI proxy service."""
    return get_container().ai


def get_app_settings() -> Settings:
    """FastAPI dependency for the settings the container was built with."""
    return get_container().settings
