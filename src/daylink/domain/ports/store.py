"""Port for the remote record store holding both collections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from datetime import datetime

    from daylink.domain.model import RecordPage, StoredRecord


class StoreError(RuntimeError):
    """Raised by store adapters when a remote call fails.

    ``fatal`` marks failures that are not scoped to a single record (for example
    rejected credentials); the reconciliation driver never recovers from those.
    """

    def __init__(self, message: str, *, fatal: bool = False) -> None:
        super().__init__(message)
        self.fatal = fatal


@dataclass(frozen=True, slots=True)
class DateEquals:
    """Date field falls on the given calendar day (``YYYY-MM-DD``)."""

    field: str
    day: str


@dataclass(frozen=True, slots=True)
class ReferencesEmpty:
    field: str


@dataclass(frozen=True, slots=True)
class CreatedAfter:
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class AllOf:
    clauses: tuple[RecordFilter, ...]


type RecordFilter = DateEquals | ReferencesEmpty | CreatedAfter | AllOf


@runtime_checkable
class RecordStore(Protocol):
    """Paginated queries and whole-list reference updates against remote collections."""

    def query_page(
        self,
        collection_id: str,
        record_filter: RecordFilter,
        *,
        cursor: str | None = None,
        page_size: int | None = None,
    ) -> RecordPage: ...

    def get_record(self, record_id: str) -> StoredRecord: ...

    def update_record(self, record_id: str, patch: Mapping[str, Sequence[str]]) -> None:
        """Replace each named reference field with the given id list."""
        ...


__all__ = [
    "AllOf",
    "CreatedAfter",
    "DateEquals",
    "RecordFilter",
    "RecordStore",
    "ReferencesEmpty",
    "StoreError",
]
