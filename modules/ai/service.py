"""
AI proxy service.

Meters each query against the caller's subscription, forwards it to the
configured langchain chat model and keeps an audit trail of queries and
failures.
"""

import logging
from typing import Any, Optional

from langchain_core.messages import BaseMessage, HumanMessage

from modules.audit import AuditEntry, AuditEventType, IAuditLog, record_event
from modules.subscriptions import ISubscriptionService, Subscription
from providers.base import GenerationOptions, LLMProvider, ModelConfig
from shared.exceptions import ValidationError

from .exceptions import AIQueryError
from .interfaces import IAIService
from .models import MAX_QUERY_LENGTH, AIQueryRequest, AIQueryResult, QueryAnalysis

logger = logging.getLogger(__name__)

# Upper bound on entries scanned when computing the analysis
ANALYSIS_SCAN_LIMIT = 10000

INCIDENT_MIN_SEVERITY = 2


def response_text(message: BaseMessage) -> str:
    """Extract plain text from a chat model reply.

    Gemini may return a list of content parts instead of a string.
    """
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class AIService(IAIService):
    """
    Implementation of the AI proxy.

    A quota unit is taken before the model is called and given back if the
    call fails, so users are only charged for answered queries.
    """

    def __init__(
        self,
        provider: LLMProvider,
        model_config: ModelConfig,
        subscriptions: ISubscriptionService,
        audit: Optional[IAuditLog] = None,
        default_options: Optional[GenerationOptions] = None,
        max_query_length: int = MAX_QUERY_LENGTH,
    ):
        self._provider = provider
        self._model_config = model_config
        self._subscriptions = subscriptions
        self._audit = audit
        self._default_options = default_options or GenerationOptions()
        self._max_query_length = max_query_length

    def _resolve_options(self, request: AIQueryRequest) -> GenerationOptions:
        requested = request.options.model_dump(exclude_none=True)
        return self._default_options.model_copy(update=requested)

    async def process_query(
        self,
        user_id: str,
        subscription: Subscription,
        request: AIQueryRequest,
    ) -> AIQueryResult:
        if len(request.query) > self._max_query_length:
            raise ValidationError(
                f"Query must be less than {self._max_query_length} characters",
                code="QUERY_TOO_LONG",
            )

        subscription = await self._subscriptions.consume_quota(subscription)
        options = self._resolve_options(request)

        try:
            llm = self._provider.get_llm(self._model_config, options)
            response = await llm.ainvoke([HumanMessage(content=request.query)])
        except Exception as e:
            logger.error(
                f"AI query failed for user {user_id} "
                f"({self._model_config.provider_type}/{self._model_config.model_id}): {e}"
            )
            await self._subscriptions.release_quota(subscription)
            await record_event(
                self._audit,
                user_id,
                "AI query processing failed",
                event_type=AuditEventType.ERROR,
                metadata={"error": str(e), "query": request.query},
                severity=INCIDENT_MIN_SEVERITY,
            )
            raise AIQueryError(self._model_config.provider_type, str(e)) from e

        text = response_text(response)
        usage: dict[str, Any] = dict(getattr(response, "usage_metadata", None) or {})

        logger.debug(
            f"AI query answered for user {user_id}: "
            f"{usage.get('total_tokens', 'unknown')} tokens, "
            f"quota used {subscription.quota_used}"
        )
        await record_event(
            self._audit,
            user_id,
            request.query,
            event_type=AuditEventType.AI_QUERY,
            metadata={
                "response": text,
                "usage": usage,
                "model": self._model_config.model_id,
                "options": options.model_dump(exclude_none=True),
            },
        )
        return AIQueryResult(success=True, result=text)

    async def get_query_logs(self, user_id: str, limit: int = 100) -> list[AuditEntry]:
        if self._audit is None:
            return []
        return await self._audit.list_entries(
            user_id, event_type=AuditEventType.AI_QUERY, limit=limit
        )

    async def get_query_analysis(self, user_id: str) -> QueryAnalysis:
        entries = await self.get_query_logs(user_id, limit=ANALYSIS_SCAN_LIMIT)
        return QueryAnalysis.from_entries(entries)

    async def get_incidents(self, user_id: str, limit: int = 50) -> list[AuditEntry]:
        if self._audit is None:
            return []
        return await self._audit.list_entries(
            user_id,
            event_type=AuditEventType.ERROR,
            min_severity=INCIDENT_MIN_SEVERITY,
            limit=limit,
        )
