"""Reconciliation core linking source records to per-day target records.

Stages, applied to each candidate in turn:
1) select unlinked source records created inside the lookback window
2) normalize the accounting date into a calendar-day key
3) resolve the target record for that day
4) append the source id to the target's references unless already present
"""

from __future__ import annotations

from .apply import LinkApplier, LinkResult, LinkStatus
from .contracts import LinkOutcome, ReconciliationResult, RecordOutcome
from .engine import ReconciliationDriver
from .normalize import DayNormalizer, InvalidDateError
from .resolve import TargetResolution, TargetResolver
from .select import CandidateSelector

__all__ = [
    "CandidateSelector",
    "DayNormalizer",
    "InvalidDateError",
    "LinkApplier",
    "LinkOutcome",
    "LinkResult",
    "LinkStatus",
    "ReconciliationDriver",
    "ReconciliationResult",
    "RecordOutcome",
    "TargetResolution",
    "TargetResolver",
]
