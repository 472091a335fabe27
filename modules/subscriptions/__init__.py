"""
Subscriptions module.

Handles plans, the active subscription per user, and the monthly quota
that meters AI queries.

Public API:
- ISubscriptionService: Interface for subscription and quota operations
- Subscription, SubscriptionPlan, PlanInfo, UsageReport: Data models
- Subscription exceptions: QuotaExceededError, NoActiveSubscriptionError, etc.
"""

from .interfaces import ISubscriptionService, ISubscriptionRepository
from .models import (
    Subscription,
    SubscriptionPlan,
    SubscriptionStatus,
    PaymentStatus,
    PlanInfo,
    PlanRequest,
    RemainingQuota,
    SubscriptionChangeResponse,
    UsageReport,
    DEFAULT_PLANS,
    UNLIMITED_QUOTA,
)
from .exceptions import (
    SubscriptionNotFoundError,
    NoActiveSubscriptionError,
    ActiveSubscriptionExistsError,
    InvalidPlanChangeError,
    QuotaExceededError,
)

__all__ = [
    # Interfaces
    "ISubscriptionService",
    "ISubscriptionRepository",
    # Models
    "Subscription",
    "SubscriptionPlan",
    "SubscriptionStatus",
    "PaymentStatus",
    "PlanInfo",
    "PlanRequest",
    "RemainingQuota",
    "SubscriptionChangeResponse",
    "UsageReport",
    "DEFAULT_PLANS",
    "UNLIMITED_QUOTA",
    # Exceptions
    "SubscriptionNotFoundError",
    "NoActiveSubscriptionError",
    "ActiveSubscriptionExistsError",
    "InvalidPlanChangeError",
    "QuotaExceededError",
]
