"""Tests for shared/exceptions.py."""

from shared.exceptions import (
    AIGateError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)


class TestAIGateError:
    def test_message(self):
        error = AIGateError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_default_code_is_class_name(self):
        assert AIGateError("Test error").code == "AIGateError"
        assert NotFoundError("missing").code == "NotFoundError"

    def test_custom_code(self):
        assert AIGateError("Test error", code="CUSTOM_ERROR").code == "CUSTOM_ERROR"

    def test_to_dict_minimal(self):
        assert AIGateError("Test error").to_dict() == {
            "error": "AIGateError",
            "message": "Test error",
        }

    def test_to_dict_flattens_details(self):
        error = AIGateError("Over quota", code="QUOTA_EXCEEDED", details={"quota": 100, "used": 100})
        assert error.to_dict() == {
            "error": "QUOTA_EXCEEDED",
            "message": "Over quota",
            "quota": 100,
            "used": 100,
        }

    def test_details_cannot_override_error_or_message(self):
        error = AIGateError("real", code="REAL", details={"message": "fake", "error": "FAKE"})
        assert error.to_dict()["message"] == "real"
        assert error.to_dict()["error"] == "REAL"


class TestCategories:
    def test_all_inherit_base(self):
        for category in (
            NotFoundError,
            ValidationError,
            AuthenticationError,
            AuthorizationError,
            RateLimitedError,
        ):
            assert isinstance(category("x"), AIGateError)

    def test_rate_limited_retry_after(self):
        assert RateLimitedError("slow down").retry_after is None
        assert RateLimitedError("slow down", retry_after=30).retry_after == 30


class TestExternalServiceError:
    def test_stores_service(self):
        error = ExternalServiceError("Connection failed", service="gemini")
        assert error.service == "gemini"
        assert error.to_dict()["service"] == "gemini"

    def test_preserves_other_details(self):
        error = ExternalServiceError(
            "Connection failed",
            service="gemini",
            details={"status_code": 503},
        )
        assert error.to_dict()["status_code"] == 503
