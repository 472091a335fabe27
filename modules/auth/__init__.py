"""
Authentication module.

Handles token issuance and validation, credential checks, and the
password-reset and email-verification flows.

Public API:
- IAuthService: Interface for auth operations
- TokenCodec: Signs and verifies session and purpose tokens
- User, TokenPurpose, VerificationOutcome: Data models
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, IUserRepository, IEmailSender
from .models import (
    User,
    UserRole,
    TokenPurpose,
    SessionClaims,
    PurposeClaims,
    VerificationOutcome,
    RegistrationResult,
    LoginResult,
    ResendVerificationResult,
)
from .tokens import TokenCodec
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    AuthenticationFailedError,
    InvalidCredentialsError,
    DuplicateUserError,
    InvalidOrExpiredTokenError,
    WrongTokenPurposeError,
    PasswordTooShortError,
    PasswordTooLongError,
    UserNotFoundError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserRepository",
    "IEmailSender",
    # Models
    "User",
    "UserRole",
    "TokenPurpose",
    "SessionClaims",
    "PurposeClaims",
    "VerificationOutcome",
    "RegistrationResult",
    "LoginResult",
    "ResendVerificationResult",
    # Codec
    "TokenCodec",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "AuthenticationFailedError",
    "InvalidCredentialsError",
    "DuplicateUserError",
    "InvalidOrExpiredTokenError",
    "WrongTokenPurposeError",
    "PasswordTooShortError",
    "PasswordTooLongError",
    "UserNotFoundError",
]
