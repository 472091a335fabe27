"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.

Codec-level failures (InvalidTokenError, ExpiredTokenError) are kept
distinct so callers can react differently; the request guard and the
purpose-token flows deliberately collapse them into coarser errors.
"""

from typing import Optional

from shared.exceptions import AuthenticationError, NotFoundError, ValidationError


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "No authentication token provided"):
        super().__init__(message, code="NO_TOKEN")


class AuthenticationFailedError(AuthenticationError):
    """
    Raised by the request guard when a bearer token cannot be trusted.

    Expired and malformed tokens are not told apart at this layer.
    """

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTH_FAILED")


class InvalidCredentialsError(AuthenticationError):
    """
    Raised when login fails.

    The same message is used whether the email is unknown or the
    password is wrong.
    """

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class DuplicateUserError(ValidationError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: Optional[str] = None):
        super().__init__("User already exists", code="DUPLICATE_USER")
        self.email = email


class InvalidOrExpiredTokenError(ValidationError):
    """Raised when a password-reset or verification token fails to decode."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, code="INVALID_OR_EXPIRED_TOKEN")


class WrongTokenPurposeError(ValidationError):
    """Raised when a purpose token is presented for a different purpose."""

    def __init__(
        self,
        expected: str,
        actual: Optional[str] = None,
        message: Optional[str] = None,
    ):
        super().__init__(
            message or f"Token is not valid for {expected.replace('_', ' ')}",
            code="WRONG_TOKEN_PURPOSE",
        )
        self.expected = expected
        self.actual = actual


class PasswordTooShortError(ValidationError):
    """Raised when a new password is below the minimum length."""

    def __init__(self, min_length: int):
        super().__init__(
            f"Password must be at least {min_length} characters long",
            code="PASSWORD_TOO_SHORT",
            details={"min_length": min_length},
        )


class PasswordTooLongError(ValidationError):
    """Raised when a new password exceeds what bcrypt can hash."""

    def __init__(self, max_bytes: int):
        super().__init__(
            f"Password must be at most {max_bytes} bytes long",
            code="PASSWORD_TOO_LONG",
            details={"max_bytes": max_bytes},
        )


class UserNotFoundError(NotFoundError):
    """Raised when a user lookup by email finds nothing."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, code="USER_NOT_FOUND")
