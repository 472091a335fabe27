"""Request guards and HTTP middleware."""

from .auth import get_current_user
from .quota import require_quota
from .rate_limit import ai_rate_limit, api_rate_limit, auth_rate_limit

__all__ = [
    "get_current_user",
    "require_quota",
    "api_rate_limit",
    "auth_rate_limit",
    "ai_rate_limit",
]
