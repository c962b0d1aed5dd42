"""Lookup of the target record for a calendar day."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from daylink.domain.model import TargetRecord
from daylink.domain.ports.store import DateEquals

from .normalize import DayNormalizer, InvalidDateError

if TYPE_CHECKING:
    from daylink.domain.ports.store import RecordStore

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TargetResolution:
    day_key: str
    target: TargetRecord | None
    match_count: int = 0

    @property
    def found(self) -> bool:
        return self.target is not None

    @property
    def ambiguous(self) -> bool:
        return self.match_count > 1


@dataclass(slots=True)
class TargetResolver:
    """Find the single target whose calendar date equals a day key.

    Matches reported by the store are re-checked with the shared normalizer, so a
    store that interprets day equality differently never yields a target for the
    wrong day. Resolutions are memoised for the lifetime of the resolver.
    """

    store: RecordStore
    collection_id: str
    date_field: str
    reference_field: str
    normalizer: DayNormalizer = field(default_factory=DayNormalizer)
    _resolved: dict[str, TargetResolution] = field(default_factory=dict, init=False, repr=False)

    def __call__(self, day_key: str) -> TargetResolution:
        cached = self._resolved.get(day_key)
        if cached is not None:
            return cached

        page = self.store.query_page(self.collection_id, DateEquals(self.date_field, day_key))
        matches = [
            target
            for target in (
                TargetRecord.from_stored(
                    stored,
                    date_field=self.date_field,
                    reference_field=self.reference_field,
                )
                for stored in page.records
            )
            if self._falls_on(target, day_key)
        ]
        match_count = len(matches)
        if page.next_cursor:
            log.warning("More target records for %s exist beyond the first page", day_key)

        if match_count > 1:
            log.warning(
                "Data quality: %s target records share calendar date %s (%s); "
                "expected at most one",
                match_count,
                day_key,
                ", ".join(target.id for target in matches),
            )

        resolution = TargetResolution(
            day_key=day_key,
            target=matches[0] if matches else None,
            match_count=match_count,
        )
        self._resolved[day_key] = resolution
        return resolution

    def _falls_on(self, target: TargetRecord, day_key: str) -> bool:
        if target.calendar_date is None:
            log.warning("Target %s matched %s but has no calendar date", target.id, day_key)
            return False
        try:
            actual = self.normalizer(target.calendar_date)
        except InvalidDateError:
            log.warning(
                "Target %s has an unreadable calendar date %r",
                target.id,
                target.calendar_date,
            )
            return False
        if actual != day_key:
            log.warning(
                "Target %s matched %s but its calendar date normalizes to %s",
                target.id,
                day_key,
                actual,
            )
            return False
        return True
