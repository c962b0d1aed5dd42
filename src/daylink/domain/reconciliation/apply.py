"""Idempotent append of a source id to a target's reference list."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from daylink.domain.ports.store import RecordStore

log = getLogger(__name__)


class LinkStatus(StrEnum):
    LINKED = "linked"
    ALREADY_LINKED = "already-linked"


@dataclass(frozen=True, slots=True)
class LinkResult:
    target_id: str
    source_id: str
    status: LinkStatus
    references: tuple[str, ...]
    written: bool


@dataclass(slots=True)
class LinkApplier:
    """Read the target's references, append the source if absent, write the whole list.

    The read and the write are not isolated from other writers; a concurrent
    update between them is overwritten. Failures propagate to the caller.
    """

    store: RecordStore
    reference_field: str
    dry_run: bool = False

    def __call__(self, target_id: str, source_id: str) -> LinkResult:
        target = self.store.get_record(target_id)
        current = target.references_for(self.reference_field)

        if source_id in current:
            return LinkResult(
                target_id=target_id,
                source_id=source_id,
                status=LinkStatus.ALREADY_LINKED,
                references=current,
                written=False,
            )

        updated = (*current, source_id)
        if self.dry_run:
            log.debug("Dry run: would write %s reference(s) to %s", len(updated), target_id)
        else:
            self.store.update_record(target_id, {self.reference_field: list(updated)})

        return LinkResult(
            target_id=target_id,
            source_id=source_id,
            status=LinkStatus.LINKED,
            references=updated,
            written=not self.dry_run,
        )
