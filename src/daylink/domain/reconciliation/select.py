"""Selection of unlinked, recently created source records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from logging import getLogger
from typing import TYPE_CHECKING

from daylink.domain.model import SourceRecord
from daylink.domain.ports.store import (
    AllOf,
    CreatedAfter,
    RecordFilter,
    ReferencesEmpty,
    StoreError,
)
from daylink.domain.time_windows import Clock, TimeWindow, utcnow

if TYPE_CHECKING:
    from datetime import datetime

    from daylink.domain.ports.store import RecordStore

log = getLogger(__name__)

DEFAULT_LOOKBACK = timedelta(hours=24)


@dataclass(slots=True)
class CandidateSelector:
    """Drain every page of source records that are unlinked and inside the window.

    Store errors propagate: a failed selection aborts the run.
    """

    store: RecordStore
    collection_id: str
    date_field: str
    reference_field: str
    window: TimeWindow = field(default_factory=lambda: TimeWindow(lookback=DEFAULT_LOOKBACK))
    page_size: int | None = None
    clock: Clock = utcnow

    def build_filter(self, created_after: datetime) -> RecordFilter:
        return AllOf((ReferencesEmpty(self.reference_field), CreatedAfter(created_after)))

    def __call__(self) -> list[SourceRecord]:
        created_after = self.window.resolve(clock=self.clock)
        record_filter = self.build_filter(created_after)
        log.info(
            "Selecting unlinked source records from %s created after %s",
            self.collection_id,
            created_after,
        )

        candidates: list[SourceRecord] = []
        seen_ids: set[str] = set()
        seen_cursors: set[str] = set()
        cursor: str | None = None
        pages = 0
        while True:
            page = self.store.query_page(
                self.collection_id,
                record_filter,
                cursor=cursor,
                page_size=self.page_size,
            )
            pages += 1
            for stored in page.records:
                if stored.id in seen_ids:
                    log.debug("Source %s returned on more than one page", stored.id)
                    continue
                seen_ids.add(stored.id)
                record = SourceRecord.from_stored(
                    stored,
                    date_field=self.date_field,
                    reference_field=self.reference_field,
                )
                if record.linked:
                    log.debug("Skipping %s: already references a target", record.id)
                    continue
                candidates.append(record)

            cursor = page.next_cursor
            if not cursor:
                break
            if cursor in seen_cursors:
                raise StoreError(f"Pagination cursor {cursor} repeated; aborting selection")
            seen_cursors.add(cursor)

        log.info("Selected %s candidate(s) across %s page(s)", len(candidates), pages)
        return candidates
