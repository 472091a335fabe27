"""
Audit log data models.

Audit entries are append-only. The core writes them but never reads them
back to make an access decision.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Kinds of audit event."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    AI_QUERY = "ai_query"


class AuditEntry(BaseModel):
    """
    A single audit log record.

    ``user_id`` is None for system-wide events.
    """

    id: Optional[str] = Field(None, description="Entry ID, assigned on write")
    user_id: Optional[str] = Field(None, description="Owning user, if any")
    type: AuditEventType = Field(default=AuditEventType.INFO)
    message: str = Field(..., description="Human-readable event description")
    metadata: dict[str, Any] = Field(default_factory=dict)
    severity: int = Field(default=1, ge=1, description="1 = routine, higher = worse")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
