"""
AI proxy module.

Forwards metered queries to the configured generative model.

Public API:
- IAIService: Interface for querying and reading the query history
- AIQueryRequest, AIQueryResult, QueryOptions, QueryAnalysis: Data models
- AIQueryError: Raised when the model call fails
"""

from .interfaces import IAIService
from .models import (
    MAX_QUERY_LENGTH,
    AIQueryRequest,
    AIQueryResult,
    QueryAnalysis,
    QueryOptions,
)
from .exceptions import AIQueryError

__all__ = [
    # Interfaces
    "IAIService",
    # Models
    "MAX_QUERY_LENGTH",
    "AIQueryRequest",
    "AIQueryResult",
    "QueryAnalysis",
    "QueryOptions",
    # Exceptions
    "AIQueryError",
]
