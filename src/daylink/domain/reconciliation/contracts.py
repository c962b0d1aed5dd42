"""Per-record outcomes and the run summary produced by the driver."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum


class LinkOutcome(StrEnum):
    """Terminal state of one candidate within a run."""

    LINKED = "linked"
    SKIPPED_MISSING_DATE = "skipped-missing-date"
    SKIPPED_NO_TARGET = "skipped-no-target"
    SKIPPED_AMBIGUOUS_TARGET = "skipped-ambiguous-target"
    SKIPPED_ALREADY_LINKED = "skipped-already-linked"
    SKIPPED_ERROR = "skipped-error"


@dataclass(frozen=True, slots=True, kw_only=True)
class RecordOutcome:
    source_id: str
    outcome: LinkOutcome
    day_key: str | None = None
    target_id: str | None = None
    detail: str | None = None


@dataclass(slots=True)
class ReconciliationResult:
    outcomes: list[RecordOutcome] = field(default_factory=list)
    dry_run: bool = False

    @property
    def candidates(self) -> int:
        return len(self.outcomes)

    def counts(self) -> dict[LinkOutcome, int]:
        tally = Counter(item.outcome for item in self.outcomes)
        return {outcome: tally.get(outcome, 0) for outcome in LinkOutcome}

    def by_outcome(self, outcome: LinkOutcome) -> list[RecordOutcome]:
        return [item for item in self.outcomes if item.outcome is outcome]

    def summary(self) -> str:
        counts = ", ".join(f"{outcome}={count}" for outcome, count in self.counts().items())
        prefix = "dry-run " if self.dry_run else ""
        return f"{prefix}candidates={self.candidates}, {counts}"
