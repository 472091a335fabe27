"""
Subscription module data models.

These models define the data structures used by the subscriptions module
and exposed to other modules through the interface.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_serializer, field_validator

# Sentinel quota meaning "no ceiling"
UNLIMITED_QUOTA = -1


class SubscriptionPlan(str, Enum):
    """Plans, in ascending order of tier."""

    FREE = "free"
    BASIC = "basic"
    PREMIUM = "premium"

    @property
    def rank(self) -> int:
        return _PLAN_ORDER.index(self)

    @property
    def monthly_quota(self) -> int:
        return PLAN_QUOTAS[self]


_PLAN_ORDER = [SubscriptionPlan.FREE, SubscriptionPlan.BASIC, SubscriptionPlan.PREMIUM]

PLAN_QUOTAS: dict[SubscriptionPlan, int] = {
    SubscriptionPlan.FREE: 100,
    SubscriptionPlan.BASIC: 1000,
    SubscriptionPlan.PREMIUM: UNLIMITED_QUOTA,
}


class SubscriptionStatus(str, Enum):
    """Subscription lifecycle states."""

    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    PENDING = "pending"


class PaymentStatus(str, Enum):
    """Placeholder payment state. Nothing validates or settles payments."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class Subscription(BaseModel):
    """
    A user's subscription and its metering counter.

    ``quota_used`` only grows, except for the reset on upgrade.
    """

    id: str = Field(..., description="Subscription ID (UUID)")
    user_id: str = Field(..., description="Owning user")
    plan: SubscriptionPlan = Field(default=SubscriptionPlan.FREE)
    status: SubscriptionStatus = Field(default=SubscriptionStatus.ACTIVE)
    monthly_quota: int = Field(
        default=PLAN_QUOTAS[SubscriptionPlan.FREE],
        description="Metered calls allowed per month; -1 for unlimited",
    )
    quota_used: int = Field(default=0, ge=0, description="Metered calls consumed")
    payment_status: PaymentStatus = Field(default=PaymentStatus.PENDING)
    start_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    end_date: Optional[datetime] = Field(None, description="Set when no longer active")

    @property
    def is_unlimited(self) -> bool:
        return self.monthly_quota == UNLIMITED_QUOTA

    @property
    def has_quota_remaining(self) -> bool:
        return self.is_unlimited or self.quota_used < self.monthly_quota

    @property
    def remaining(self) -> Optional[int]:
        """Calls left this month, or None when unlimited."""
        if self.is_unlimited:
            return None
        return max(self.monthly_quota - self.quota_used, 0)


class PlanInfo(BaseModel):
    """A plan as advertised to clients."""

    name: SubscriptionPlan = Field(..., description="Plan identifier")
    price: Decimal = Field(..., description="Monthly price in USD")
    features: list[str] = Field(default_factory=list)
    monthly_quota: int = Field(..., description="Metered calls per month; -1 for unlimited")

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> float:
        return float(price)


DEFAULT_PLANS = [
    PlanInfo(
        name=SubscriptionPlan.FREE,
        price=Decimal("0.00"),
        features=["Limited AI queries", "Basic support"],
        monthly_quota=PLAN_QUOTAS[SubscriptionPlan.FREE],
    ),
    PlanInfo(
        name=SubscriptionPlan.BASIC,
        price=Decimal("9.99"),
        features=["1000 AI queries/month", "Priority support", "Advanced analytics"],
        monthly_quota=PLAN_QUOTAS[SubscriptionPlan.BASIC],
    ),
    PlanInfo(
        name=SubscriptionPlan.PREMIUM,
        price=Decimal("29.99"),
        features=["Unlimited AI queries", "24/7 support", "Custom solutions"],
        monthly_quota=PLAN_QUOTAS[SubscriptionPlan.PREMIUM],
    ),
]


class UsageReport(BaseModel):
    """Quota usage for the active subscription."""

    quota: int
    used: int
    remaining: Union[int, str] = Field(..., description="Calls left, or 'unlimited'")

    @classmethod
    def from_subscription(cls, subscription: Subscription) -> "UsageReport":
        remaining = subscription.remaining
        return cls(
            quota=subscription.monthly_quota,
            used=subscription.quota_used,
            remaining="unlimited" if remaining is None else remaining,
        )


class RemainingQuota(BaseModel):
    remaining: Union[int, str] = Field(..., description="Calls left, or 'unlimited'")


class PlanRequest(BaseModel):
    """Body of subscribe and upgrade."""

    plan: SubscriptionPlan

    @field_validator("plan", mode="before")
    @classmethod
    def check_plan(cls, value: Any) -> Any:
        if value is None or value == "":
            raise ValueError("Subscription plan is required")
        valid = [plan.value for plan in SubscriptionPlan]
        if value not in valid:
            raise ValueError(f"Invalid subscription plan. Valid plans are: {', '.join(valid)}")
        return value


class SubscriptionChangeResponse(BaseModel):
    message: str
    subscription: Subscription
