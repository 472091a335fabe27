"""
Subscription module exceptions.

These exceptions are raised by the subscriptions module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthorizationError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)


class SubscriptionNotFoundError(NotFoundError):
    """Raised when a subscription endpoint finds no active subscription."""

    def __init__(self, user_id: str):
        super().__init__("No active subscription found", code="SUBSCRIPTION_NOT_FOUND")
        self.user_id = user_id


class NoActiveSubscriptionError(AuthorizationError):
    """
    Raised by the quota guard when the caller has no active subscription.

    Same condition as SubscriptionNotFoundError, but on a metered route it
    means "not entitled" rather than "nothing to show".
    """

    def __init__(self, user_id: str):
        super().__init__("No active subscription found", code="NO_SUBSCRIPTION")
        self.user_id = user_id


class ActiveSubscriptionExistsError(ValidationError):
    """Raised when subscribing while another subscription is active."""

    def __init__(self):
        super().__init__(
            "Active subscription already exists",
            code="ACTIVE_SUBSCRIPTION_EXISTS",
        )


class InvalidPlanChangeError(ValidationError):
    """Raised when an upgrade targets the same or a lower plan."""

    def __init__(self, current_plan: str, requested_plan: str):
        super().__init__(
            "Cannot downgrade or set same plan. Use cancel and resubscribe for downgrades.",
            code="INVALID_PLAN_CHANGE",
            details={"current_plan": current_plan, "requested_plan": requested_plan},
        )


class QuotaExceededError(RateLimitedError):
    """
    Raised when the monthly quota is used up.

    The UI should prompt the user to upgrade.
    """

    def __init__(self, quota: int, used: int):
        super().__init__(
            "Monthly quota exceeded. Please upgrade your plan or wait for next month.",
            code="QUOTA_EXCEEDED",
            details={"quota": quota, "used": used},
        )
