"""
Subscription API endpoints.

Plans, the caller's active subscription and its quota usage.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_subscription_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import ISubscriptionService
from .models import (
    PlanInfo,
    PlanRequest,
    RemainingQuota,
    Subscription,
    SubscriptionChangeResponse,
    UsageReport,
)

router = APIRouter()


@router.get("/plans", response_model=list[PlanInfo])
async def list_plans(
    service: ISubscriptionService = Depends(get_subscription_service),
) -> list[PlanInfo]:
    """List the available plans. No authentication required."""
    return await service.list_plans()


@router.get("/my-subscription", response_model=Subscription)
async def get_my_subscription(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISubscriptionService = Depends(get_subscription_service),
) -> Subscription:
    return await service.get_active_subscription(user.id)


@router.post("/subscribe", response_model=Subscription, status_code=201)
async def subscribe(
    request: PlanRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISubscriptionService = Depends(get_subscription_service),
) -> Subscription:
    """
    Start a subscription. Fails if one is already active.
    """
    return await service.subscribe(user.id, request.plan)


@router.put("/cancel", response_model=SubscriptionChangeResponse)
async def cancel(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISubscriptionService = Depends(get_subscription_service),
) -> SubscriptionChangeResponse:
    subscription = await service.cancel(user.id)
    return SubscriptionChangeResponse(
        message="Subscription cancelled successfully",
        subscription=subscription,
    )


@router.put("/upgrade", response_model=SubscriptionChangeResponse)
async def upgrade(
    request: PlanRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISubscriptionService = Depends(get_subscription_service),
) -> SubscriptionChangeResponse:
    """
    Move to a higher plan. The new quota starts from zero usage.

    Downgrades are done by cancelling and subscribing again.
    """
    subscription = await service.upgrade(user.id, request.plan)
    return SubscriptionChangeResponse(
        message="Subscription upgraded successfully",
        subscription=subscription,
    )


@router.get("/usage", response_model=UsageReport)
async def get_usage(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISubscriptionService = Depends(get_subscription_service),
) -> UsageReport:
    return await service.get_usage(user.id)


@router.get("/quota", response_model=RemainingQuota)
async def get_remaining_quota(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISubscriptionService = Depends(get_subscription_service),
) -> RemainingQuota:
    return RemainingQuota(remaining=await service.get_remaining_quota(user.id))
