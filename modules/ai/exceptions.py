"""
AI proxy exceptions.
"""

from shared.exceptions import ExternalServiceError


class AIQueryError(ExternalServiceError):
    """Raised when the chat model call fails. The quota unit has been released."""

    def __init__(self, service: str, reason: str = ""):
        super().__init__(
            "Error processing AI query",
            service=service,
            code="AI_QUERY_FAILED",
        )
        self.reason = reason
