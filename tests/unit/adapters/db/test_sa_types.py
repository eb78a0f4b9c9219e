"""Unit tests for attune.adapters.db.sa_types.UTCDateTime.

These tests exercise the type decorator directly, without creating tables
or running against a real database engine.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sqlalchemy.dialects.postgresql import dialect as PostgresDialect
from sqlalchemy.dialects.sqlite import dialect as SQLiteDialect

from attune.adapters.db.sa_types import UTCDateTime

from tests.helpers.time_asserts import assert_strict_utc


def test_utcdatetime_python_type():
    """UTCDateTime.python_type should be datetime."""
    assert UTCDateTime().python_type is datetime


def test_bind_none_returns_none():
    """Binding None should return None."""
    assert UTCDateTime().process_bind_param(None, SQLiteDialect()) is None


def test_bind_aware_stores_naive_utc_on_sqlite():
    """Tz-aware datetimes are stored as naive UTC wall time on SQLite."""
    aware = datetime(2024, 1, 1, 5, 0, 0, tzinfo=timezone(timedelta(hours=-7)))
    out = UTCDateTime().process_bind_param(aware, SQLiteDialect())
    assert out.tzinfo is None
    assert out == datetime(2024, 1, 1, 12, 0, 0)


def test_bind_naive_is_treated_as_utc_elsewhere():
    """Naive datetimes are declared UTC for time-zone aware backends."""
    out = UTCDateTime().process_bind_param(datetime(2024, 1, 1, 12), PostgresDialect())
    assert out == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)


def test_result_naive_is_declared_utc():
    """Naive values read back from SQLite come out as aware UTC."""
    out = UTCDateTime().process_result_value(datetime(2024, 1, 1, 12), SQLiteDialect())
    assert_strict_utc(out)
    assert out.hour == 12


def test_process_result_value_non_datetime_fallback():
    """Non-datetime values passed to process_result_value are returned unchanged."""
    assert (
        UTCDateTime().process_result_value("not-a-datetime", SQLiteDialect())
        == "not-a-datetime"
    )
