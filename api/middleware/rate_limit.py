"""
Request rate limiting.

Fixed-window counters kept in process memory, keyed by route group and
client IP. Three groups are configured:
- api: every route (100 requests per 15 minutes by default)
- auth: login, register and forgot-password (5 per 15 minutes)
- ai: AI queries (50 per hour)

Counters are per process; run one worker or put a shared limiter in front
of the API when scaling out.
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Request

from api.dependencies import get_container
from shared.config import Settings
from shared.exceptions import RateLimitedError

logger = logging.getLogger(__name__)

API = "api"
AUTH = "auth"
AI = "ai"

LIMIT_MESSAGES = {
    API: "Too many requests, please try again later.",
    AUTH: "Too many login attempts, please try again after 15 minutes",
    AI: "AI query limit reached, please try again later",
}


@dataclass
class _Window:
    started_at: float
    count: int


class FixedWindowRateLimiter:
    """Allows ``limit`` hits per key in each window of ``window_seconds``."""

    def __init__(
        self,
        limit: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    def hit(self, key: str) -> Optional[int]:
        """
        Count one request for ``key``.

        Returns:
            None if allowed, otherwise the seconds until the window resets
        """
        now = self._clock()
        window = self._windows.get(key)

        if window is None or now - window.started_at >= self.window_seconds:
            self._prune(now)
            self._windows[key] = _Window(started_at=now, count=1)
            return None

        if window.count >= self.limit:
            return max(math.ceil(window.started_at + self.window_seconds - now), 1)

        window.count += 1
        return None

    def _prune(self, now: float) -> None:
        expired = [
            key for key, window in self._windows.items()
            if now - window.started_at >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]


def build_limiters(settings: Settings) -> dict[str, FixedWindowRateLimiter]:
    return {
        API: FixedWindowRateLimiter(settings.rate_limit_requests, settings.rate_limit_window),
        AUTH: FixedWindowRateLimiter(settings.auth_rate_limit_requests, settings.auth_rate_limit_window),
        AI: FixedWindowRateLimiter(settings.ai_rate_limit_requests, settings.ai_rate_limit_window),
    }


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RateLimit:
    """
    FastAPI dependency enforcing one limiter group.

    Usage:
        @router.post("/login", dependencies=[Depends(auth_rate_limit)])
    """

    def __init__(self, group: str):
        self.group = group

    async def __call__(self, request: Request) -> None:
        container = get_container()
        if not container.settings.rate_limit_enabled:
            return

        retry_after = container.rate_limiters[self.group].hit(client_key(request))
        if retry_after is not None:
            logger.warning(f"Rate limit '{self.group}' hit by {client_key(request)}")
            raise RateLimitedError(
                LIMIT_MESSAGES[self.group],
                code="RATE_LIMITED",
                retry_after=retry_after,
            )


api_rate_limit = RateLimit(API)
auth_rate_limit = RateLimit(AUTH)
ai_rate_limit = RateLimit(AI)
