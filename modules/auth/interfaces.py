"""
Authentication module interfaces.

Other modules should depend on IAuthService, not the concrete implementation.
The service itself depends on IUserRepository and IEmailSender so storage
and delivery can be swapped without touching the credential logic.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser

from .models import (
    LoginResult,
    RegistrationResult,
    ResendVerificationResult,
    User,
    VerificationOutcome,
)


@runtime_checkable
class IUserRepository(Protocol):
    """
    Storage contract for user accounts.

    Emails passed in are already normalised (stripped, lower-cased).
    """

    async def get_by_id(self, user_id: str) -> Optional[User]:
        ...

    async def get_by_email(self, email: str) -> Optional[User]:
        ...

    async def get_by_provider(self, provider: str, provider_user_id: str) -> Optional[User]:
        ...

    async def create(self, user: User) -> User:
        """
        Persist a new user.

        Raises:
            DuplicateUserError: If the email is already taken
        """
        ...

    async def update(self, user: User) -> User:
        """Persist changes to an existing user and return the stored copy."""
        ...


@runtime_checkable
class IEmailSender(Protocol):
    """Delivers account emails. The default implementation only logs."""

    async def send_verification_email(self, email: str, link: str) -> None:
        ...

    async def send_password_reset_email(self, email: str, link: str) -> None:
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer and to other modules.
    """

    async def register(self, email: str, password: str, name: str) -> RegistrationResult:
        """
        Create an unverified account and log it in.

        Raises:
            DuplicateUserError: If the email is already registered
        """
        ...

    async def login(self, email: str, password: str) -> LoginResult:
        """
        Check credentials and issue a session token.

        Raises:
            InvalidCredentialsError: For an unknown email or a wrong password alike
        """
        ...

    async def login_with_provider(
        self,
        provider: str,
        provider_user_id: str,
        email: str,
        name: str,
    ) -> LoginResult:
        """Sign in a user whose identity an external provider has asserted."""
        ...

    async def request_password_reset(self, email: str) -> Optional[str]:
        """
        Start a password reset.

        Returns:
            The reset token when the account exists, otherwise None.
            Callers must not reveal which case happened.
        """
        ...

    async def complete_password_reset(self, token: str, new_password: str) -> None:
        ...

    async def verify_email(self, token: str) -> VerificationOutcome:
        ...

    async def resend_verification(self, email: str) -> ResendVerificationResult:
        ...

    async def authenticate(self, token: str) -> AuthenticatedUser:
        """
        Validate a session token and return the caller's identity.

        Raises:
            InvalidTokenError / ExpiredTokenError: If the token cannot be trusted
        """
        ...
