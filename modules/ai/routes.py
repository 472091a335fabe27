"""
AI proxy API endpoints.

POST /query is metered: it needs an active subscription with quota left
and is rate limited per client. The read endpoints only need a login.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_ai_service
from api.middleware.auth import get_current_user
from api.middleware.quota import require_quota
from api.middleware.rate_limit import ai_rate_limit
from modules.audit import AuditEntry
from modules.subscriptions import Subscription
from shared.models import AuthenticatedUser

from .interfaces import IAIService
from .models import AIQueryRequest, AIQueryResult, QueryAnalysis

router = APIRouter()


@router.post("/query", response_model=AIQueryResult, dependencies=[Depends(ai_rate_limit)])
async def process_query(
    request: AIQueryRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    subscription: Subscription = Depends(require_quota),
    service: IAIService = Depends(get_ai_service),
) -> AIQueryResult:
    """
    Answer a query with the configured model, using one unit of quota.
    """
    return await service.process_query(user.id, subscription, request)


@router.get("/logs", response_model=list[AuditEntry])
async def get_query_logs(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAIService = Depends(get_ai_service),
) -> list[AuditEntry]:
    """The caller's 100 most recent queries."""
    return await service.get_query_logs(user.id)


@router.get("/analysis", response_model=QueryAnalysis)
async def get_query_analysis(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAIService = Depends(get_ai_service),
) -> QueryAnalysis:
    return await service.get_query_analysis(user.id)


@router.get("/incidents", response_model=list[AuditEntry])
async def get_incidents(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAIService = Depends(get_ai_service),
) -> list[AuditEntry]:
    """Failed queries and other errors with severity above 1."""
    return await service.get_incidents(user.id)
