"""
Audit log interface.

Other modules record events through IAuditLog without knowing where
entries are stored.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import AuditEntry, AuditEventType


@runtime_checkable
class IAuditLog(Protocol):
    """Append-only event log."""

    async def record(self, entry: AuditEntry) -> AuditEntry:
        """
        Append an entry.

        Returns:
            The stored entry with its ID assigned
        """
        ...

    async def list_entries(
        self,
        user_id: str,
        event_type: Optional[AuditEventType] = None,
        min_severity: int = 1,
        limit: int = 100,
    ) -> list[AuditEntry]:
        """
        List a user's entries, most recent first.

        Args:
            user_id: Owning user
            event_type: Only entries of this type
            min_severity: Only entries at or above this severity
            limit: Maximum entries to return
        """
        ...
