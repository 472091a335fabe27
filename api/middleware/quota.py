"""
Quota guard for metered routes.

Runs after authentication and hands the caller's active subscription to
the route. The check does not reserve anything; the route takes the unit
through ISubscriptionService.consume_quota, which is atomic.
"""

from fastapi import Depends

from api.dependencies import get_subscription_service
from modules.subscriptions import ISubscriptionService, Subscription
from shared.models import AuthenticatedUser

from .auth import get_current_user


async def require_quota(
    user: AuthenticatedUser = Depends(get_current_user),
    subscriptions: ISubscriptionService = Depends(get_subscription_service),
) -> Subscription:
    """
    Dependency that requires an active subscription with quota left.

    Raises:
        NoActiveSubscriptionError: 403 when there is no active subscription
        QuotaExceededError: 429 when the monthly quota is used up
    """
    return await subscriptions.check_quota(user.id)

