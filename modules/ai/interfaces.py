"""
AI proxy interface.
"""

from typing import Protocol, runtime_checkable

from modules.audit import AuditEntry
from modules.subscriptions import Subscription

from .models import AIQueryRequest, AIQueryResult, QueryAnalysis


@runtime_checkable
class IAIService(Protocol):
    """Metered access to the configured chat model."""

    async def process_query(
        self,
        user_id: str,
        subscription: Subscription,
        request: AIQueryRequest,
    ) -> AIQueryResult:
        """
        Take one unit of quota and answer the query.

        Raises:
            QuotaExceededError: If the last unit was taken concurrently
            AIQueryError: If the model call fails
        """
        ...

    async def get_query_logs(self, user_id: str, limit: int = 100) -> list[AuditEntry]:
        ...

    async def get_query_analysis(self, user_id: str) -> QueryAnalysis:
        ...

    async def get_incidents(self, user_id: str, limit: int = 50) -> list[AuditEntry]:
        ...
