"""
Audit module.

Append-only record of account, subscription and AI-query events.

Public API:
- IAuditLog: Interface for writing and listing entries
- AuditEntry, AuditEventType: Data models
- record_event: Fire-and-forget helper used by other modules
"""

from .interfaces import IAuditLog
from .models import AuditEntry, AuditEventType
from .service import record_event

__all__ = [
    "IAuditLog",
    "AuditEntry",
    "AuditEventType",
    "record_event",
]
