"""Tests for shared/repository.py."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

from shared.repository import BaseRepository


class TestBaseRepository:
    def test_init_stores_db_client(self):
        mock_db = MagicMock()
        assert BaseRepository(mock_db)._db is mock_db

    def test_parse_datetime_with_z_suffix(self):
        parsed = BaseRepository._parse_datetime("2026-03-01T12:30:00Z")
        assert parsed == datetime(2026, 3, 1, 12, 30, tzinfo=timezone.utc)

    def test_parse_datetime_passthrough(self):
        now = datetime.now(timezone.utc)
        assert BaseRepository._parse_datetime(now) is now
        assert BaseRepository._parse_datetime(None) is None

    def test_first(self):
        assert BaseRepository._first([{"id": "1"}, {"id": "2"}]) == {"id": "1"}
        assert BaseRepository._first([]) is None
        assert BaseRepository._first(None) is None
