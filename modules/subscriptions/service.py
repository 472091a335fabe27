"""
Subscription service implementation.

Manages plan changes and the monthly quota that meters AI queries.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from modules.audit import IAuditLog, record_event

from .exceptions import (
    ActiveSubscriptionExistsError,
    InvalidPlanChangeError,
    NoActiveSubscriptionError,
    QuotaExceededError,
    SubscriptionNotFoundError,
)
from .interfaces import ISubscriptionRepository, ISubscriptionService
from .models import (
    DEFAULT_PLANS,
    PlanInfo,
    Subscription,
    SubscriptionPlan,
    SubscriptionStatus,
    UsageReport,
)

logger = logging.getLogger(__name__)


class SubscriptionService(ISubscriptionService):
    """
    Implementation of the subscription service.

    At most one subscription per user is active. Subscribing checks for an
    active one first; the repository rejects a concurrent duplicate.
    """

    def __init__(
        self,
        repository: ISubscriptionRepository,
        audit: Optional[IAuditLog] = None,
        plans: Optional[list[PlanInfo]] = None,
    ):
        self._repository = repository
        self._audit = audit
        self._plans = plans or DEFAULT_PLANS

    async def list_plans(self) -> list[PlanInfo]:
        return list(self._plans)

    async def get_active_subscription(self, user_id: str) -> Subscription:
        subscription = await self._repository.get_active(user_id)
        if subscription is None:
            raise SubscriptionNotFoundError(user_id)
        return subscription

    async def subscribe(self, user_id: str, plan: SubscriptionPlan) -> Subscription:
        plan = SubscriptionPlan(plan)
        if await self._repository.get_active(user_id) is not None:
            raise ActiveSubscriptionExistsError()

        subscription = await self._repository.create(
            Subscription(
                id=str(uuid.uuid4()),
                user_id=user_id,
                plan=plan,
                status=SubscriptionStatus.ACTIVE,
                monthly_quota=plan.monthly_quota,
            )
        )
        logger.info(f"User {user_id} subscribed to {plan.value}")
        await record_event(
            self._audit,
            user_id,
            f"New subscription created: {plan.value}",
            metadata={"subscription_id": subscription.id, "plan": plan.value},
        )
        return subscription

    async def cancel(self, user_id: str) -> Subscription:
        subscription = await self.get_active_subscription(user_id)
        subscription = await self._repository.cancel(subscription.id, datetime.now(timezone.utc))
        if subscription is None:
            raise SubscriptionNotFoundError(user_id)

        await record_event(
            self._audit,
            user_id,
            "Subscription cancelled",
            metadata={"subscription_id": subscription.id},
        )
        return subscription

    async def upgrade(self, user_id: str, plan: SubscriptionPlan) -> Subscription:
        plan = SubscriptionPlan(plan)
        subscription = await self.get_active_subscription(user_id)
        old_plan = subscription.plan

        if plan.rank <= old_plan.rank:
            raise InvalidPlanChangeError(old_plan.value, plan.value)

        subscription.plan = plan
        subscription.monthly_quota = plan.monthly_quota
        subscription.quota_used = 0
        subscription = await self._repository.update(subscription)

        logger.info(f"User {user_id} upgraded from {old_plan.value} to {plan.value}")
        await record_event(
            self._audit,
            user_id,
            f"Subscription upgraded to {plan.value}",
            metadata={
                "subscription_id": subscription.id,
                "old_plan": old_plan.value,
                "new_plan": plan.value,
            },
        )
        return subscription

    async def get_usage(self, user_id: str) -> UsageReport:
        subscription = await self.get_active_subscription(user_id)
        return UsageReport.from_subscription(subscription)

    async def get_remaining_quota(self, user_id: str) -> int | str:
        """Calls left this month, or "unlimited"."""
        return (await self.get_usage(user_id)).remaining

    async def check_quota(self, user_id: str) -> Subscription:
        subscription = await self._repository.get_active(user_id)
        if subscription is None:
            raise NoActiveSubscriptionError(user_id)
        if not subscription.has_quota_remaining:
            raise QuotaExceededError(subscription.monthly_quota, subscription.quota_used)
        return subscription

    async def consume_quota(self, subscription: Subscription) -> Subscription:
        updated = await self._repository.consume_quota(subscription.id)
        if updated is None:
            # Lost the race for the last unit, or the subscription was
            # cancelled since the check.
            current = await self._repository.get_active(subscription.user_id)
            if current is None:
                raise NoActiveSubscriptionError(subscription.user_id)
            raise QuotaExceededError(current.monthly_quota, current.quota_used)
        return updated

    async def release_quota(self, subscription: Subscription) -> None:
        await self._repository.release_quota(subscription.id)
