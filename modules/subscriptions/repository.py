"""
Subscription storage (the quota ledger).

Two implementations of ISubscriptionRepository:
- InMemorySubscriptionRepository: for development and tests
- SupabaseSubscriptionRepository: the ``subscriptions`` table plus the
  ``consume_quota`` / ``release_quota`` SQL functions
  (see migrations/002_create_subscriptions.sql)
"""

from datetime import datetime
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.repository import BaseRepository, UNIQUE_VIOLATION

from .exceptions import ActiveSubscriptionExistsError
from .models import PaymentStatus, Subscription, SubscriptionPlan, SubscriptionStatus


class InMemorySubscriptionRepository:
    """
    Subscription storage kept in process memory.

    The quota methods contain no ``await``, so on a single event loop the
    check and the increment cannot interleave with another request.
    """

    def __init__(self) -> None:
        self._subscriptions: dict[str, Subscription] = {}

    async def get_active(self, user_id: str) -> Optional[Subscription]:
        for subscription in self._subscriptions.values():
            if subscription.user_id == user_id and subscription.status == SubscriptionStatus.ACTIVE:
                return subscription.model_copy()
        return None

    async def create(self, subscription: Subscription) -> Subscription:
        if subscription.status == SubscriptionStatus.ACTIVE and any(
            s.user_id == subscription.user_id and s.status == SubscriptionStatus.ACTIVE
            for s in self._subscriptions.values()
        ):
            raise ActiveSubscriptionExistsError()
        self._subscriptions[subscription.id] = subscription.model_copy()
        return subscription.model_copy()

    async def update(self, subscription: Subscription) -> Subscription:
        self._subscriptions[subscription.id] = subscription.model_copy()
        return subscription.model_copy()

    async def cancel(self, subscription_id: str, end_date: datetime) -> Optional[Subscription]:
        subscription = self._subscriptions.get(subscription_id)
        if subscription is None or subscription.status != SubscriptionStatus.ACTIVE:
            return None
        subscription.status = SubscriptionStatus.CANCELLED
        subscription.end_date = end_date
        return subscription.model_copy()

    async def consume_quota(self, subscription_id: str) -> Optional[Subscription]:
        subscription = self._subscriptions.get(subscription_id)
        if subscription is None or subscription.status != SubscriptionStatus.ACTIVE:
            return None
        if not subscription.has_quota_remaining:
            return None
        subscription.quota_used += 1
        return subscription.model_copy()

    async def release_quota(self, subscription_id: str) -> Optional[Subscription]:
        subscription = self._subscriptions.get(subscription_id)
        if subscription is None:
            return None
        subscription.quota_used = max(subscription.quota_used - 1, 0)
        return subscription.model_copy()


class SupabaseSubscriptionRepository(BaseRepository[Subscription]):
    """
    Subscription storage in the Supabase ``subscriptions`` table.

    A partial unique index allows one active row per user; quota changes
    go through SQL functions so the ceiling check and the write are one
    statement.
    """

    TABLE = "subscriptions"

    async def get_active(self, user_id: str) -> Optional[Subscription]:
        result = (
            self._db.table(self.TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("status", SubscriptionStatus.ACTIVE.value)
            .execute()
        )
        row = self._first(result.data)
        return self._map_to_subscription(row) if row else None

    async def create(self, subscription: Subscription) -> Subscription:
        try:
            result = self._db.table(self.TABLE).insert(self._to_row(subscription)).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise ActiveSubscriptionExistsError() from e
            raise
        return self._map_to_subscription(result.data[0])

    async def update(self, subscription: Subscription) -> Subscription:
        row = self._to_row(subscription)
        del row["id"]
        result = self._db.table(self.TABLE).update(row).eq("id", subscription.id).execute()
        return self._map_to_subscription(result.data[0])

    async def cancel(self, subscription_id: str, end_date: datetime) -> Optional[Subscription]:
        result = (
            self._db.table(self.TABLE)
            .update({
                "status": SubscriptionStatus.CANCELLED.value,
                "end_date": end_date.isoformat(),
            })
            .eq("id", subscription_id)
            .eq("status", SubscriptionStatus.ACTIVE.value)
            .execute()
        )
        row = self._first(result.data)
        return self._map_to_subscription(row) if row else None

    async def consume_quota(self, subscription_id: str) -> Optional[Subscription]:
        result = self._db.rpc("consume_quota", {"p_subscription_id": subscription_id}).execute()
        row = self._first(result.data)
        return self._map_to_subscription(row) if row else None

    async def release_quota(self, subscription_id: str) -> Optional[Subscription]:
        result = self._db.rpc("release_quota", {"p_subscription_id": subscription_id}).execute()
        row = self._first(result.data)
        return self._map_to_subscription(row) if row else None

    @staticmethod
    def _to_row(subscription: Subscription) -> dict[str, Any]:
        return {
            "id": subscription.id,
            "user_id": subscription.user_id,
            "plan": subscription.plan.value,
            "status": subscription.status.value,
            "monthly_quota": subscription.monthly_quota,
            "quota_used": subscription.quota_used,
            "payment_status": subscription.payment_status.value,
            "start_date": subscription.start_date.isoformat(),
            "end_date": subscription.end_date.isoformat() if subscription.end_date else None,
        }

    def _map_to_subscription(self, row: dict[str, Any]) -> Subscription:
        return Subscription(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            plan=SubscriptionPlan(row["plan"]),
            status=SubscriptionStatus(row["status"]),
            monthly_quota=row["monthly_quota"],
            quota_used=row.get("quota_used", 0),
            payment_status=PaymentStatus(row.get("payment_status") or PaymentStatus.PENDING.value),
            start_date=self._parse_datetime(row["start_date"]),
            end_date=self._parse_datetime(row.get("end_date")),
        )
