"""
Supabase access for the storage backend.

STORAGE_BACKEND=supabase puts users, subscriptions and audit entries in
Postgres through a single service-role client. The tables are owned by
the backend, so row level security is not involved.
"""

import logging
from typing import Optional

from supabase import Client, create_client

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

_client: Optional[Client] = None


def supabase_configured(settings: Settings) -> bool:
    """Whether the URL and service-role key are both set."""
    return bool(settings.supabase_url and settings.supabase_service_role_key)


def create_service_client(settings: Settings) -> Client:
    """
    Build a new service-role client.

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is missing
    """
    if not supabase_configured(settings):
        raise RuntimeError(
            "Supabase storage selected but not configured. "
            "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY, or STORAGE_BACKEND=memory."
        )
    logger.info(f"Connecting to Supabase at {settings.supabase_url}")
    return create_client(settings.supabase_url, settings.supabase_service_role_key)


def get_supabase_client(settings: Optional[Settings] = None) -> Client:
    """The process-wide client, created on first use."""
    global _client
    if _client is None:
        _client = create_service_client(settings or get_settings())
    return _client


def reset_client_cache() -> None:
    """Drop the cached client so the next call reconnects."""
    global _client
    _client = None
