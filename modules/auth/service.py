"""
Authentication service implementation.

Verifies credentials, issues session tokens and drives the password-reset
and email-verification token life cycles.
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from shared.models import AuthenticatedUser

from .exceptions import (
    DuplicateUserError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    InvalidTokenError,
    MissingTokenError,
    PasswordTooShortError,
    PasswordTooLongError,
    UserNotFoundError,
    WrongTokenPurposeError,
)
from .interfaces import IAuthService, IEmailSender, IUserRepository
from .models import (
    LoginResult,
    PurposeClaims,
    RegistrationResult,
    ResendVerificationResult,
    TokenPurpose,
    User,
    VerificationOutcome,
)
from .notifications import LoggingEmailSender
from .passwords import MAX_PASSWORD_BYTES, hash_password, password_too_long, verify_password
from .tokens import TokenCodec

logger = logging.getLogger(__name__)

# Messages for purpose-token failures, per flow
_TOKEN_MESSAGES = {
    TokenPurpose.PASSWORD_RESET: ("Invalid or expired reset token", "Invalid reset token"),
    TokenPurpose.EMAIL_VERIFICATION: (
        "Invalid or expired verification token",
        "Invalid verification token",
    ),
}


def normalize_email(email: str) -> str:
    """Emails are compared case-insensitively everywhere."""
    return email.strip().lower()


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Passwords are hashed with bcrypt off the event loop. Login failures
    are uniform: an unknown email and a wrong password produce the same
    error after the same amount of hashing work.
    """

    def __init__(
        self,
        users: IUserRepository,
        codec: TokenCodec,
        email_sender: Optional[IEmailSender] = None,
        frontend_url: str = "http://localhost:3000",
        min_password_length: int = 6,
        link_provider_accounts_by_email: bool = True,
    ):
        self._users = users
        self._codec = codec
        self._email_sender = email_sender or LoggingEmailSender()
        self._frontend_url = frontend_url.rstrip("/")
        self._min_password_length = min_password_length
        self._link_provider_accounts_by_email = link_provider_accounts_by_email

    # -------------------------------------------------------------------------
    # Registration and login
    # -------------------------------------------------------------------------

    async def register(self, email: str, password: str, name: str) -> RegistrationResult:
        email = normalize_email(email)
        self._check_password_length(password)

        if await self._users.get_by_email(email) is not None:
            raise DuplicateUserError(email)

        password_hash = await asyncio.to_thread(hash_password, password)
        user = await self._users.create(
            User(
                id=str(uuid.uuid4()),
                email=email,
                name=name.strip(),
                password_hash=password_hash,
            )
        )
        logger.info(f"Registered user {user.id}")

        verification_token = await self._send_verification(user)
        return RegistrationResult(
            user=user,
            token=self._codec.issue_session_token(user.id, user.email),
            verification_token=verification_token,
        )

    async def login(self, email: str, password: str) -> LoginResult:
        user = await self._users.get_by_email(normalize_email(email))

        if user is None:
            # Same bcrypt cost as a real check before failing
            await asyncio.to_thread(verify_password, password, None)
            raise InvalidCredentialsError()

        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            raise InvalidCredentialsError()

        return await self._complete_login(user)

    async def login_with_provider(
        self,
        provider: str,
        provider_user_id: str,
        email: str,
        name: str,
    ) -> LoginResult:
        """
        Sign in a user whose identity an external provider has asserted.

        This is the entry point for an OAuth callback once the provider
        handshake has completed; no route in this package calls it.

        An existing local account with the same email is linked to the
        provider identity (and marked verified) when
        ``link_provider_accounts_by_email`` is on. That trusts the
        provider's claim of email ownership for the local account.
        """
        user = await self._users.get_by_provider(provider, provider_user_id)
        if user is not None:
            return await self._complete_login(user)

        email = normalize_email(email)
        existing = await self._users.get_by_email(email)

        if existing is not None:
            if not self._link_provider_accounts_by_email:
                raise DuplicateUserError(email)
            existing.provider = provider
            existing.provider_user_id = provider_user_id
            existing.is_verified = True
            user = await self._users.update(existing)
            logger.info(f"Linked {provider} identity to existing user {user.id}")
        else:
            user = await self._users.create(
                User(
                    id=str(uuid.uuid4()),
                    email=email,
                    name=name.strip(),
                    provider=provider,
                    provider_user_id=provider_user_id,
                    is_verified=True,
                )
            )
            logger.info(f"Created user {user.id} from {provider} login")

        return await self._complete_login(user)

    async def _complete_login(self, user: User) -> LoginResult:
        user.last_login = datetime.now(timezone.utc)
        user = await self._users.update(user)
        return LoginResult(
            user=user,
            token=self._codec.issue_session_token(user.id, user.email),
        )

    # -------------------------------------------------------------------------
    # Password reset
    # -------------------------------------------------------------------------

    async def request_password_reset(self, email: str) -> Optional[str]:
        email = normalize_email(email)
        user = await self._users.get_by_email(email)
        if user is None:
            logger.debug("Password reset requested for unknown email")
            return None

        token = self._codec.issue_purpose_token(user.id, TokenPurpose.PASSWORD_RESET)
        await self._email_sender.send_password_reset_email(
            user.email,
            f"{self._frontend_url}/reset-password/{token}",
        )
        return token

    async def complete_password_reset(self, token: str, new_password: str) -> None:
        self._check_password_length(new_password)
        claims = self._decode_purpose_token(token, TokenPurpose.PASSWORD_RESET)

        user = await self._users.get_by_id(claims.sub)
        if user is None:
            raise InvalidOrExpiredTokenError(_TOKEN_MESSAGES[TokenPurpose.PASSWORD_RESET][0])

        user.password_hash = await asyncio.to_thread(hash_password, new_password)
        await self._users.update(user)
        logger.info(f"Password reset for user {user.id}")

    # -------------------------------------------------------------------------
    # Email verification
    # -------------------------------------------------------------------------

    async def verify_email(self, token: str) -> VerificationOutcome:
        claims = self._decode_purpose_token(token, TokenPurpose.EMAIL_VERIFICATION)

        user = await self._users.get_by_id(claims.sub)
        if user is None:
            raise InvalidOrExpiredTokenError(
                _TOKEN_MESSAGES[TokenPurpose.EMAIL_VERIFICATION][0]
            )

        if user.is_verified:
            return VerificationOutcome.ALREADY_VERIFIED

        user.is_verified = True
        await self._users.update(user)
        logger.info(f"Verified email for user {user.id}")
        return VerificationOutcome.VERIFIED

    async def resend_verification(self, email: str) -> ResendVerificationResult:
        # Unlike password reset, this reveals whether the account exists.
        user = await self._users.get_by_email(normalize_email(email))
        if user is None:
            raise UserNotFoundError()

        if user.is_verified:
            return ResendVerificationResult(already_verified=True)

        return ResendVerificationResult(
            verification_token=await self._send_verification(user),
        )

    async def _send_verification(self, user: User) -> str:
        token = self._codec.issue_purpose_token(user.id, TokenPurpose.EMAIL_VERIFICATION)
        await self._email_sender.send_verification_email(
            user.email,
            f"{self._frontend_url}/verify-email/{token}",
        )
        return token

    # -------------------------------------------------------------------------
    # Token helpers
    # -------------------------------------------------------------------------

    async def authenticate(self, token: str) -> AuthenticatedUser:
        if not token:
            raise MissingTokenError()

        claims = self._codec.verify_session_token(token)
        return AuthenticatedUser(
            id=claims.sub,
            email=claims.email,
            issued_at=datetime.fromtimestamp(claims.iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(claims.exp, tz=timezone.utc),
        )

    def _decode_purpose_token(self, token: str, purpose: TokenPurpose) -> PurposeClaims:
        invalid_message, wrong_purpose_message = _TOKEN_MESSAGES[purpose]
        try:
            return self._codec.verify_purpose_token(token, purpose)
        except (InvalidTokenError, ExpiredTokenError):
            raise InvalidOrExpiredTokenError(invalid_message) from None
        except WrongTokenPurposeError as e:
            raise WrongTokenPurposeError(
                expected=purpose.value,
                actual=e.actual,
                message=wrong_purpose_message,
            ) from None

    def _check_password_length(self, password: str) -> None:
        if len(password) < self._min_password_length:
            raise PasswordTooShortError(self._min_password_length)
        if password_too_long(password):
            raise PasswordTooLongError(MAX_PASSWORD_BYTES)
