"""
Base exception classes for the AIGate backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to an HTTP status code, so picking the
right base is what decides the response a client sees.
"""

from typing import Optional, Any


class AIGateError(Exception):
    """
    Base exception for all AIGate errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to a dictionary for API responses.

        Details are merged at the top level so clients can read fields
        such as ``quota`` and ``used`` directly from the body.
        """
        return {
            **self.details,
            "error": self.code,
            "message": self.message,
        }


class NotFoundError(AIGateError):
    """Resource not found."""

    pass


class ValidationError(AIGateError):
    """Input validation failed."""

    pass


class AuthenticationError(AIGateError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(AIGateError):
    """Authorization failed (insufficient permissions or entitlement)."""

    pass


class RateLimitedError(AIGateError):
    """Too many requests, or a metered allowance has been used up."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        retry_after: Optional[int] = None,
    ):
        super().__init__(message, code, details)
        self.retry_after = retry_after


class ExternalServiceError(AIGateError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
