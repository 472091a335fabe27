"""
Subscription module interfaces.

Other modules should depend on ISubscriptionService, not the concrete
implementation. The AI proxy uses it to meter queries without knowing how
subscriptions are stored.
"""

from datetime import datetime
from typing import Protocol, Optional, runtime_checkable

from .models import PlanInfo, Subscription, SubscriptionPlan, UsageReport


@runtime_checkable
class ISubscriptionRepository(Protocol):
    """
    Storage contract for subscriptions (the quota ledger).

    ``consume_quota`` must be atomic: the check against the ceiling and the
    increment happen in one operation, so two concurrent callers can never
    both take the last unit.
    """

    async def get_active(self, user_id: str) -> Optional[Subscription]:
        ...

    async def create(self, subscription: Subscription) -> Subscription:
        """
        Persist a new subscription.

        Raises:
            ActiveSubscriptionExistsError: If the user already has an active one
        """
        ...

    async def update(self, subscription: Subscription) -> Subscription:
        ...

    async def cancel(self, subscription_id: str, end_date: datetime) -> Optional[Subscription]:
        """
        Mark an active subscription cancelled. Only ``status`` and
        ``end_date`` are written, so a concurrent quota change is kept.

        Returns:
            The cancelled subscription, or None if it was not active
        """
        ...

    async def consume_quota(self, subscription_id: str) -> Optional[Subscription]:
        """
        Increment ``quota_used`` by one if the subscription is active and
        below its ceiling (or unlimited).

        Returns:
            The updated subscription, or None if nothing was incremented
        """
        ...

    async def release_quota(self, subscription_id: str) -> Optional[Subscription]:
        """Give back one unit taken by consume_quota (never below zero)."""
        ...


@runtime_checkable
class ISubscriptionService(Protocol):
    """
    Interface for subscription and quota operations.

    This protocol defines the contract that the subscriptions module
    exposes to the API layer and to other modules.
    """

    async def list_plans(self) -> list[PlanInfo]:
        ...

    async def get_active_subscription(self, user_id: str) -> Subscription:
        """
        Raises:
            SubscriptionNotFoundError: If the user has no active subscription
        """
        ...

    async def subscribe(self, user_id: str, plan: SubscriptionPlan) -> Subscription:
        """
        Raises:
            ActiveSubscriptionExistsError: If one is already active
        """
        ...

    async def cancel(self, user_id: str) -> Subscription:
        ...

    async def upgrade(self, user_id: str, plan: SubscriptionPlan) -> Subscription:
        """
        Raises:
            SubscriptionNotFoundError: If the user has no active subscription
            InvalidPlanChangeError: If ``plan`` is not strictly higher
        """
        ...

    async def get_usage(self, user_id: str) -> UsageReport:
        ...

    async def get_remaining_quota(self, user_id: str) -> int | str:
        ...

    async def check_quota(self, user_id: str) -> Subscription:
        """
        Check that the user may make a metered call.

        This is a non-reserving check, used to fail fast before any work.

        Raises:
            NoActiveSubscriptionError: If the user has no active subscription
            QuotaExceededError: If the monthly quota is used up
        """
        ...

    async def consume_quota(self, subscription: Subscription) -> Subscription:
        """
        Atomically take one unit of quota.

        Raises:
            QuotaExceededError: If the ceiling was reached in the meantime
        """
        ...

    async def release_quota(self, subscription: Subscription) -> None:
        ...
