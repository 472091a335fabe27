"""
Signed, time-bound tokens.

One codec issues both kinds of token the service hands out:

- session tokens: ``{sub, email, typ="session", iat, exp}``, presented as
  a bearer credential on every request
- purpose tokens: ``{sub, typ="purpose", purpose, iat, exp}``, scoping a
  single action such as a password reset

Tokens are stateless. Nothing is stored, so a token stays valid until it
expires even if it has already been used.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ExpiredTokenError, InvalidTokenError, WrongTokenPurposeError
from .models import PurposeClaims, SessionClaims, TokenPurpose, TokenType

DEFAULT_SESSION_TTL = timedelta(hours=24)
DEFAULT_PURPOSE_TTLS: dict[TokenPurpose, timedelta] = {
    TokenPurpose.PASSWORD_RESET: timedelta(hours=1),
    TokenPurpose.EMAIL_VERIFICATION: timedelta(hours=24),
}


class TokenCodec:
    """
    Issues and verifies HS256-signed JWTs.

    The signing secret is fixed at construction and never changes for
    the lifetime of the codec, so a single instance can be shared by
    all requests without locking.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        session_ttl: timedelta = DEFAULT_SESSION_TTL,
        purpose_ttls: Optional[dict[TokenPurpose, timedelta]] = None,
    ):
        if not secret:
            raise RuntimeError(
                "JWT secret is not configured. Set the JWT_SECRET environment variable."
            )
        self._secret = secret
        self._algorithm = algorithm
        self._session_ttl = session_ttl
        self._purpose_ttls = {**DEFAULT_PURPOSE_TTLS, **(purpose_ttls or {})}

    @property
    def session_ttl(self) -> timedelta:
        return self._session_ttl

    def _encode(self, claims: dict[str, Any], ttl: timedelta) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            **claims,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def issue_session_token(
        self,
        subject_id: str,
        email: str,
        ttl: Optional[timedelta] = None,
    ) -> str:
        """
        Issue a session token for an authenticated user.

        Args:
            subject_id: User ID to put in ``sub``
            email: User's email
            ttl: Lifetime override; defaults to the configured session TTL

        Returns:
            Encoded JWT string
        """
        return self._encode(
            {"sub": subject_id, "email": email, "typ": TokenType.SESSION.value},
            ttl if ttl is not None else self._session_ttl,
        )

    def issue_purpose_token(
        self,
        subject_id: str,
        purpose: TokenPurpose,
        ttl: Optional[timedelta] = None,
    ) -> str:
        """
        Issue a token that authorizes exactly one kind of action.

        Args:
            subject_id: User ID to put in ``sub``
            purpose: What the token may be used for
            ttl: Lifetime override; defaults to the per-purpose TTL

        Returns:
            Encoded JWT string
        """
        purpose = TokenPurpose(purpose)
        return self._encode(
            {
                "sub": subject_id,
                "typ": TokenType.PURPOSE.value,
                "purpose": purpose.value,
            },
            ttl if ttl is not None else self._purpose_ttls[purpose],
        )

    def verify(self, token: str) -> dict[str, Any]:
        """
        Check signature and expiry and return the raw claims.

        Raises:
            ExpiredTokenError: If the token is past its expiry
            InvalidTokenError: If the signature or structure is wrong
        """
        if not token:
            raise InvalidTokenError("Token is empty")

        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError() from None
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from None

    def verify_session_token(self, token: str) -> SessionClaims:
        """
        Verify a bearer token and return its session claims.

        Purpose tokens are rejected here, so a password-reset link can
        never be used to call the API.
        """
        claims = self.verify(token)
        if claims.get("typ") != TokenType.SESSION.value:
            raise InvalidTokenError("Not a session token")
        try:
            return SessionClaims(**claims)
        except PydanticValidationError:
            raise InvalidTokenError("Malformed session claims") from None

    def verify_purpose_token(self, token: str, purpose: TokenPurpose) -> PurposeClaims:
        """
        Verify a purpose token and check it was issued for ``purpose``.

        Raises:
            ExpiredTokenError / InvalidTokenError: From the signature check
            WrongTokenPurposeError: If the token carries another purpose
        """
        purpose = TokenPurpose(purpose)
        claims = self.verify(token)
        if claims.get("typ") != TokenType.PURPOSE.value:
            raise WrongTokenPurposeError(expected=purpose.value, actual=claims.get("typ"))
        if claims.get("purpose") != purpose.value:
            raise WrongTokenPurposeError(expected=purpose.value, actual=claims.get("purpose"))
        try:
            return PurposeClaims(**claims)
        except PydanticValidationError:
            raise InvalidTokenError("Malformed purpose claims") from None
