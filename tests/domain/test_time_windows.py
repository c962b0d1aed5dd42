from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from daylink.domain.time_windows import Clock, TimeWindow


def _make_clock(reference: datetime) -> Clock:
    def _clock() -> datetime:
        return reference

    return _clock


def test_time_window_with_lookback_produces_start() -> None:
    now = datetime(2025, 1, 1, 12, tzinfo=UTC)
    window = TimeWindow(lookback=timedelta(hours=24))

    assert window.resolve(clock=_make_clock(now)) == datetime(2024, 12, 31, 12, tzinfo=UTC)


def test_time_window_normalises_clock_to_utc() -> None:
    now = datetime(2025, 1, 1, 8, tzinfo=timezone(timedelta(hours=8)))
    window = TimeWindow(lookback=timedelta(hours=1))

    start = window.resolve(clock=_make_clock(now))

    assert start == datetime(2024, 12, 31, 23, tzinfo=UTC)
    assert start.tzinfo is UTC


def test_time_window_treats_naive_clock_as_utc() -> None:
    now = datetime(2025, 1, 1, 12)  # noqa: DTZ001
    window = TimeWindow(lookback=timedelta(0))

    assert window.resolve(clock=_make_clock(now)) == datetime(2025, 1, 1, 12, tzinfo=UTC)


def test_time_window_rejects_negative_lookback() -> None:
    window = TimeWindow(lookback=timedelta(hours=-1))

    with pytest.raises(ValueError, match="non-negative"):
        window.resolve()
