"""Utilities for constraining reconciliation runs to a recent-activity window."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class TimeWindow:
    """Describe how far back from "now" a run looks."""

    lookback: timedelta

    def resolve(self, *, clock: Clock = utcnow) -> datetime:
        """Resolve the window into the UTC timestamp it starts at."""

        if self.lookback < timedelta(0):
            raise ValueError("Lookback duration must be non-negative")
        anchor = clock()
        if anchor.tzinfo is None:
            anchor = anchor.replace(tzinfo=UTC)
        return anchor.astimezone(UTC) - self.lookback


__all__ = ["Clock", "TimeWindow", "utcnow"]
