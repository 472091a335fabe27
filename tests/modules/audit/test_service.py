"""Tests for the audit log."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from modules.audit import AuditEntry, AuditEventType, IAuditLog, record_event
from modules.audit.service import AuditLog, SupabaseAuditLog


class TestAuditLog:
    @pytest.fixture
    def audit(self):
        return AuditLog()

    def test_implements_interface(self, audit):
        assert isinstance(audit, IAuditLog)

    @pytest.mark.asyncio
    async def test_record_assigns_id(self, audit):
        stored = await audit.record(AuditEntry(user_id="user-1", message="hello"))
        assert stored.id is not None

    @pytest.mark.asyncio
    async def test_most_recent_first(self, audit):
        await audit.record(AuditEntry(user_id="user-1", message="first"))
        await audit.record(AuditEntry(user_id="user-1", message="second"))

        entries = await audit.list_entries("user-1")
        assert [e.message for e in entries] == ["second", "first"]

    @pytest.mark.asyncio
    async def test_filters(self, audit):
        await audit.record(AuditEntry(user_id="user-1", message="q", type=AuditEventType.AI_QUERY))
        await audit.record(
            AuditEntry(user_id="user-1", message="boom", type=AuditEventType.ERROR, severity=2)
        )
        await audit.record(AuditEntry(user_id="user-2", message="other", type=AuditEventType.AI_QUERY))

        queries = await audit.list_entries("user-1", event_type=AuditEventType.AI_QUERY)
        incidents = await audit.list_entries("user-1", min_severity=2)

        assert [e.message for e in queries] == ["q"]
        assert [e.message for e in incidents] == ["boom"]

    @pytest.mark.asyncio
    async def test_limit(self, audit):
        for i in range(5):
            await audit.record(AuditEntry(user_id="user-1", message=str(i)))
        assert len(await audit.list_entries("user-1", limit=3)) == 3


class TestSupabaseAuditLog:
    @pytest.mark.asyncio
    async def test_record_inserts_row(self):
        mock_db = MagicMock()
        audit = SupabaseAuditLog(mock_db)

        stored = await audit.record(
            AuditEntry(user_id="user-1", message="hello", metadata={"a": 1})
        )

        row = mock_db.table.return_value.insert.call_args[0][0]
        mock_db.table.assert_called_with("audit_logs")
        assert row["id"] == stored.id
        assert row["type"] == "info"
        assert row["metadata"] == {"a": 1}

    @pytest.mark.asyncio
    async def test_list_maps_rows(self):
        mock_db = MagicMock()
        audit = SupabaseAuditLog(mock_db)
        query = mock_db.table.return_value.select.return_value.eq.return_value
        query.order.return_value.limit.return_value.execute.return_value.data = [
            {
                "id": "entry-1",
                "user_id": "user-1",
                "type": "ai_query",
                "message": "What is 2+2?",
                "metadata": {"usage": {"total_tokens": 12}},
                "severity": 1,
                "created_at": "2026-03-01T12:00:00Z",
            }
        ]

        entries = await audit.list_entries("user-1")

        assert entries[0].type == AuditEventType.AI_QUERY
        assert entries[0].created_at.tzinfo is not None
        query.order.assert_called_with("created_at", desc=True)


class TestRecordEvent:
    @pytest.mark.asyncio
    async def test_no_audit_is_noop(self):
        await record_event(None, "user-1", "ignored")

    @pytest.mark.asyncio
    async def test_writes_entry(self):
        audit = AuditLog()
        await record_event(
            audit, "user-1", "failed", event_type=AuditEventType.ERROR, severity=2
        )
        entry = (await audit.list_entries("user-1"))[0]
        assert (entry.type, entry.severity) == (AuditEventType.ERROR, 2)

    @pytest.mark.asyncio
    async def test_store_failure_is_swallowed(self):
        audit = MagicMock()
        audit.record = AsyncMock(side_effect=RuntimeError("store down"))

        await record_event(audit, "user-1", "still fine")

        audit.record.assert_awaited_once()
