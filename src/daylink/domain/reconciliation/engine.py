"""Reconciliation driver.

Candidates are processed one at a time in the order the store returned them. Each
record ends in exactly one ``LinkOutcome``. Store errors scoped to one record are
logged and recorded as ``skipped-error``; selection failures and store errors
flagged ``fatal`` abort the run.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from daylink.domain.ports.store import StoreError

from .apply import LinkStatus
from .contracts import LinkOutcome, ReconciliationResult, RecordOutcome
from .normalize import DayNormalizer, InvalidDateError

if TYPE_CHECKING:
    from daylink.domain.model import SourceRecord

    from .apply import LinkApplier
    from .resolve import TargetResolver
    from .select import CandidateSelector

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationDriver:
    select: CandidateSelector
    normalize: DayNormalizer
    resolve: TargetResolver
    apply: LinkApplier
    link_ambiguous: bool = False

    def run(self) -> ReconciliationResult:
        """Link every selected source record to the target of its accounting day."""

        candidates = self.select()
        result = ReconciliationResult(dry_run=self.apply.dry_run)
        if not candidates:
            log.info("No unlinked source records to reconcile")
            return result

        for candidate in candidates:
            outcome = self._reconcile_one(candidate)
            self._log_outcome(outcome)
            result.outcomes.append(outcome)

        log.info("Reconciliation finished: %s", result.summary())
        return result

    def _reconcile_one(self, candidate: SourceRecord) -> RecordOutcome:
        if not candidate.accounting_date:
            return RecordOutcome(
                source_id=candidate.id,
                outcome=LinkOutcome.SKIPPED_MISSING_DATE,
            )

        day_key: str | None = None
        try:
            day_key = self.normalize(candidate.accounting_date)
            resolution = self.resolve(day_key)
            if resolution.target is None:
                return RecordOutcome(
                    source_id=candidate.id,
                    outcome=LinkOutcome.SKIPPED_NO_TARGET,
                    day_key=day_key,
                )
            if resolution.ambiguous and not self.link_ambiguous:
                return RecordOutcome(
                    source_id=candidate.id,
                    outcome=LinkOutcome.SKIPPED_AMBIGUOUS_TARGET,
                    day_key=day_key,
                    detail=f"{resolution.match_count} targets",
                )

            link = self.apply(resolution.target.id, candidate.id)
        except StoreError as exc:
            if exc.fatal:
                raise
            log.exception("Store error while reconciling source %s", candidate.id)
            return RecordOutcome(
                source_id=candidate.id,
                outcome=LinkOutcome.SKIPPED_ERROR,
                day_key=day_key,
                detail=str(exc),
            )
        except InvalidDateError as exc:
            return RecordOutcome(
                source_id=candidate.id,
                outcome=LinkOutcome.SKIPPED_ERROR,
                detail=str(exc),
            )

        if link.status is LinkStatus.ALREADY_LINKED:
            return RecordOutcome(
                source_id=candidate.id,
                outcome=LinkOutcome.SKIPPED_ALREADY_LINKED,
                day_key=day_key,
                target_id=link.target_id,
            )
        return RecordOutcome(
            source_id=candidate.id,
            outcome=LinkOutcome.LINKED,
            day_key=day_key,
            target_id=link.target_id,
            detail=None if link.written else "dry-run",
        )

    def _log_outcome(self, item: RecordOutcome) -> None:
        match item.outcome:
            case LinkOutcome.LINKED:
                log.info(
                    "Linked source %s to target %s (%s)%s",
                    item.source_id,
                    item.target_id,
                    item.day_key,
                    " [dry-run]" if item.detail == "dry-run" else "",
                )
            case LinkOutcome.SKIPPED_ALREADY_LINKED:
                log.info(
                    "Source %s already referenced by target %s, skipping",
                    item.source_id,
                    item.target_id,
                )
            case LinkOutcome.SKIPPED_MISSING_DATE:
                log.warning("Source %s has no accounting date, skipping", item.source_id)
            case LinkOutcome.SKIPPED_NO_TARGET:
                log.warning(
                    "No target record for %s, skipping source %s",
                    item.day_key,
                    item.source_id,
                )
            case LinkOutcome.SKIPPED_AMBIGUOUS_TARGET:
                log.warning(
                    "Ambiguous target for %s (%s), skipping source %s",
                    item.day_key,
                    item.detail,
                    item.source_id,
                )
            case LinkOutcome.SKIPPED_ERROR:
                log.warning("Source %s not reconciled: %s", item.source_id, item.detail)
