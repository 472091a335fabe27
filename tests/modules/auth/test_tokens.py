"""Tests for the token codec."""

import pytest
from datetime import timedelta

import jwt

from modules.auth.exceptions import (
    ExpiredTokenError,
    InvalidTokenError,
    WrongTokenPurposeError,
)
from modules.auth.models import TokenPurpose, TokenType
from modules.auth.tokens import TokenCodec

SECRET = "codec-test-secret"


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec(secret=SECRET)


class TestTokenCodecConstruction:
    def test_empty_secret_rejected(self):
        """An empty secret is a configuration error, not a usable codec."""
        with pytest.raises(RuntimeError, match="JWT_SECRET"):
            TokenCodec(secret="")

    def test_session_ttl_default(self, codec):
        assert codec.session_ttl == timedelta(hours=24)


class TestSessionTokens:
    def test_round_trip_claims(self, codec):
        token = codec.issue_session_token("user-1", "a@example.com")
        claims = codec.verify_session_token(token)

        assert claims.sub == "user-1"
        assert claims.email == "a@example.com"
        assert claims.typ == TokenType.SESSION
        assert claims.exp - claims.iat == 24 * 3600

    def test_custom_ttl(self, codec):
        token = codec.issue_session_token("user-1", "a@example.com", ttl=timedelta(minutes=5))
        claims = codec.verify_session_token(token)
        assert claims.exp - claims.iat == 300

    def test_expired_token_raises_expired(self, codec):
        token = codec.issue_session_token("user-1", "a@example.com", ttl=timedelta(seconds=-10))
        with pytest.raises(ExpiredTokenError):
            codec.verify_session_token(token)

    def test_wrong_secret_raises_invalid(self, codec):
        other = TokenCodec(secret="another-secret")
        token = other.issue_session_token("user-1", "a@example.com")
        with pytest.raises(InvalidTokenError):
            codec.verify_session_token(token)

    def test_garbage_raises_invalid(self, codec):
        with pytest.raises(InvalidTokenError):
            codec.verify("not-a-jwt")

    def test_empty_token_raises_invalid(self, codec):
        with pytest.raises(InvalidTokenError):
            codec.verify("")

    def test_expired_and_invalid_are_distinct(self, codec):
        """Expiry and bad signature are different error kinds at the codec."""
        expired = codec.issue_session_token("u", "e@example.com", ttl=timedelta(seconds=-10))
        with pytest.raises(ExpiredTokenError) as exc_info:
            codec.verify(expired)
        assert not isinstance(exc_info.value, InvalidTokenError)

    def test_purpose_token_rejected_as_session(self, codec):
        token = codec.issue_purpose_token("user-1", TokenPurpose.PASSWORD_RESET)
        with pytest.raises(InvalidTokenError, match="Not a session token"):
            codec.verify_session_token(token)

    def test_missing_required_claim(self, codec):
        token = jwt.encode({"sub": "user-1", "typ": "session"}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            codec.verify(token)


class TestPurposeTokens:
    def test_round_trip(self, codec):
        token = codec.issue_purpose_token("user-1", TokenPurpose.EMAIL_VERIFICATION)
        claims = codec.verify_purpose_token(token, TokenPurpose.EMAIL_VERIFICATION)

        assert claims.sub == "user-1"
        assert claims.purpose == TokenPurpose.EMAIL_VERIFICATION
        assert claims.typ == TokenType.PURPOSE

    def test_default_ttls(self, codec):
        reset = codec.verify(codec.issue_purpose_token("u", TokenPurpose.PASSWORD_RESET))
        verify = codec.verify(codec.issue_purpose_token("u", TokenPurpose.EMAIL_VERIFICATION))

        assert reset["exp"] - reset["iat"] == 3600
        assert verify["exp"] - verify["iat"] == 24 * 3600

    def test_configured_ttls(self):
        codec = TokenCodec(
            secret=SECRET,
            purpose_ttls={TokenPurpose.PASSWORD_RESET: timedelta(minutes=10)},
        )
        claims = codec.verify(codec.issue_purpose_token("u", TokenPurpose.PASSWORD_RESET))
        assert claims["exp"] - claims["iat"] == 600

    def test_wrong_purpose_rejected(self, codec):
        token = codec.issue_purpose_token("user-1", TokenPurpose.EMAIL_VERIFICATION)
        with pytest.raises(WrongTokenPurposeError) as exc_info:
            codec.verify_purpose_token(token, TokenPurpose.PASSWORD_RESET)

        assert exc_info.value.expected == "password_reset"
        assert exc_info.value.actual == "email_verification"

    def test_session_token_rejected_as_purpose(self, codec):
        token = codec.issue_session_token("user-1", "a@example.com")
        with pytest.raises(WrongTokenPurposeError):
            codec.verify_purpose_token(token, TokenPurpose.PASSWORD_RESET)

    def test_expired_purpose_token(self, codec):
        token = codec.issue_purpose_token(
            "user-1", TokenPurpose.PASSWORD_RESET, ttl=timedelta(seconds=-10)
        )
        with pytest.raises(ExpiredTokenError):
            codec.verify_purpose_token(token, TokenPurpose.PASSWORD_RESET)

    def test_reuse_before_expiry_succeeds(self, codec):
        """Purpose tokens are not single use."""
        token = codec.issue_purpose_token("user-1", TokenPurpose.PASSWORD_RESET)
        codec.verify_purpose_token(token, TokenPurpose.PASSWORD_RESET)
        codec.verify_purpose_token(token, TokenPurpose.PASSWORD_RESET)
