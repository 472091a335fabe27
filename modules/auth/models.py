"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator


class UserRole(str, Enum):
    """Flat role flag. Enforcement of admin-only actions lives elsewhere."""

    USER = "user"
    ADMIN = "admin"


class TokenPurpose(str, Enum):
    """The single action a purpose token authorizes."""

    PASSWORD_RESET = "password_reset"
    EMAIL_VERIFICATION = "email_verification"


class TokenType(str, Enum):
    """Discriminates session tokens from purpose tokens."""

    SESSION = "session"
    PURPOSE = "purpose"


class VerificationOutcome(str, Enum):
    """Result of verifying an email address."""

    VERIFIED = "verified"
    ALREADY_VERIFIED = "already_verified"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    """
    A stored user account.

    ``password_hash`` is None for accounts created through a federated
    identity provider. Emails are stored lower-cased.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: str = Field(..., description="Lower-cased email address")
    name: str = Field(..., description="Display name")
    password_hash: Optional[str] = Field(None, description="Bcrypt hash, if any")
    is_verified: bool = Field(default=False, description="Whether email is verified")
    role: UserRole = Field(default=UserRole.USER, description="User role")
    provider: Optional[str] = Field(None, description="Federated provider, e.g. google")
    provider_user_id: Optional[str] = Field(None, description="ID at the provider")
    last_login: Optional[datetime] = Field(None, description="Last successful login")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def has_password(self) -> bool:
        return self.password_hash is not None


class SessionClaims(BaseModel):
    """Decoded claims of a session token."""

    sub: str = Field(..., description="Subject (user ID)")
    email: str = Field(..., description="User's email")
    typ: TokenType = Field(default=TokenType.SESSION)
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")

    model_config = {"extra": "ignore"}


class PurposeClaims(BaseModel):
    """Decoded claims of a purpose token."""

    sub: str = Field(..., description="Subject (user ID)")
    typ: TokenType = Field(default=TokenType.PURPOSE)
    purpose: TokenPurpose = Field(..., description="Action the token authorizes")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")

    model_config = {"extra": "ignore"}


class RegistrationResult(BaseModel):
    """What a successful registration hands back to the caller."""

    user: User
    token: str = Field(..., description="Session token")
    verification_token: str = Field(..., description="Email verification token")


class LoginResult(BaseModel):
    """What a successful login hands back to the caller."""

    user: User
    token: str = Field(..., description="Session token")


class ResendVerificationResult(BaseModel):
    """Result of re-sending a verification email."""

    already_verified: bool = Field(default=False)
    verification_token: Optional[str] = Field(
        None,
        description="Issued token; None when the email was already verified",
    )


# Request and response models for the auth routes


def _check_email(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Email is required")
    try:
        validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Please provide a valid email")
    return value.strip()


def _check_password_present(value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError("Password is required")
    return value


class RegisterRequest(BaseModel):
    """Body of POST /api/auth/register. Password length is checked by the service."""

    email: str
    password: str
    name: str

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, value: Any) -> str:
        return _check_email(value)

    @field_validator("password", mode="before")
    @classmethod
    def check_password(cls, value: Any) -> str:
        return _check_password_present(value)

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Name is required")
        if len(value.strip()) < 2:
            raise ValueError("Name must be at least 2 characters long")
        return value.strip()


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, value: Any) -> str:
        return _check_email(value)

    @field_validator("password", mode="before")
    @classmethod
    def check_password(cls, value: Any) -> str:
        return _check_password_present(value)


class EmailRequest(BaseModel):
    """Body of forgot-password and resend-verification."""

    email: str

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, value: Any) -> str:
        return _check_email(value)


class ResetPasswordRequest(BaseModel):
    password: str

    @field_validator("password", mode="before")
    @classmethod
    def check_password(cls, value: Any) -> str:
        return _check_password_present(value)


class UserSummary(BaseModel):
    """Public view of a user. ``isVerified`` is only sent on registration."""

    model_config = {"populate_by_name": True}

    id: str
    email: str
    name: str
    is_verified: Optional[bool] = Field(None, alias="isVerified")


class AuthResponse(BaseModel):
    """Response of register and login."""

    model_config = {"populate_by_name": True}

    message: str
    token: str
    user: UserSummary
    verification_token: Optional[str] = Field(None, alias="verificationToken")


class MessageResponse(BaseModel):
    """
    A plain message. The token fields are only populated in development,
    so clients can follow emailed links without a mail server.
    """

    model_config = {"populate_by_name": True}

    message: str
    reset_token: Optional[str] = Field(None, alias="resetToken")
    verification_token: Optional[str] = Field(None, alias="verificationToken")
