"""
Audit log implementations.

Provides both in-memory (for testing) and Supabase-backed (for production)
implementations of the audit log.
"""

import logging
import uuid
from typing import Any, Optional

from shared.repository import BaseRepository

from .interfaces import IAuditLog
from .models import AuditEntry, AuditEventType

logger = logging.getLogger(__name__)


class AuditLog:
    """
    Audit log with in-memory storage.

    For testing and development. Use SupabaseAuditLog for production.
    """

    def __init__(self) -> None:
        self._entries: list[AuditEntry] = []

    async def record(self, entry: AuditEntry) -> AuditEntry:
        stored = entry.model_copy(update={"id": entry.id or str(uuid.uuid4())})
        self._entries.insert(0, stored)
        return stored

    async def list_entries(
        self,
        user_id: str,
        event_type: Optional[AuditEventType] = None,
        min_severity: int = 1,
        limit: int = 100,
    ) -> list[AuditEntry]:
        matches = [
            e for e in self._entries
            if e.user_id == user_id
            and (event_type is None or e.type == event_type)
            and e.severity >= min_severity
        ]
        return matches[:limit]


class SupabaseAuditLog(BaseRepository[AuditEntry]):
    """Audit log stored in the Supabase ``audit_logs`` table."""

    TABLE = "audit_logs"

    async def record(self, entry: AuditEntry) -> AuditEntry:
        entry_id = entry.id or str(uuid.uuid4())
        self._db.table(self.TABLE).insert({
            "id": entry_id,
            "user_id": entry.user_id,
            "type": entry.type.value,
            "message": entry.message,
            "metadata": entry.metadata,
            "severity": entry.severity,
            "created_at": entry.created_at.isoformat(),
        }).execute()
        return entry.model_copy(update={"id": entry_id})

    async def list_entries(
        self,
        user_id: str,
        event_type: Optional[AuditEventType] = None,
        min_severity: int = 1,
        limit: int = 100,
    ) -> list[AuditEntry]:
        query = self._db.table(self.TABLE).select("*").eq("user_id", user_id)

        if event_type:
            query = query.eq("type", event_type.value)
        if min_severity > 1:
            query = query.gte("severity", min_severity)

        result = query.order("created_at", desc=True).limit(limit).execute()
        return [self._map_to_entry(row) for row in result.data]

    def _map_to_entry(self, row: dict[str, Any]) -> AuditEntry:
        return AuditEntry(
            id=str(row["id"]),
            user_id=row.get("user_id"),
            type=AuditEventType(row["type"]),
            message=row["message"],
            metadata=row.get("metadata") or {},
            severity=row.get("severity", 1),
            created_at=self._parse_datetime(row["created_at"]),
        )


async def record_event(
    audit: Optional[IAuditLog],
    user_id: Optional[str],
    message: str,
    event_type: AuditEventType = AuditEventType.INFO,
    metadata: Optional[dict[str, Any]] = None,
    severity: int = 1,
) -> None:
    """
    Write an audit entry without letting a logging failure break the caller.

    Audit writes are a side channel: a store outage is logged and the
    request carries on.
    """
    if audit is None:
        return
    try:
        await audit.record(
            AuditEntry(
                user_id=user_id,
                type=event_type,
                message=message,
                metadata=metadata or {},
                severity=severity,
            )
        )
    except Exception:
        logger.exception(f"Failed to write audit entry: {message}")
