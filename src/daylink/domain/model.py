"""Records exchanged between the remote store and the reconciliation core."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class StoredRecord:
    """Store-neutral view of a remote record.

    ``dates`` holds the raw ISO start value of each date field (``None`` when the
    field is empty) and ``references`` the complete id list of each reference field.
    """

    id: str
    created_at: datetime | None = None
    dates: Mapping[str, str | None] = field(default_factory=dict)
    references: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def date(self, name: str) -> str | None:
        return self.dates.get(name)

    def references_for(self, name: str) -> tuple[str, ...]:
        return tuple(self.references.get(name, ()))


@dataclass(frozen=True, slots=True)
class RecordPage:
    records: tuple[StoredRecord, ...]
    next_cursor: str | None = None


@dataclass(frozen=True, slots=True)
class SourceRecord:
    """A record that must end up referenced from the target of its accounting day."""

    id: str
    created_at: datetime | None
    accounting_date: str | None
    references: tuple[str, ...] = ()

    @property
    def linked(self) -> bool:
        return bool(self.references)

    @classmethod
    def from_stored(
        cls,
        record: StoredRecord,
        *,
        date_field: str,
        reference_field: str,
    ) -> SourceRecord:
        return cls(
            id=record.id,
            created_at=record.created_at,
            accounting_date=record.date(date_field),
            references=record.references_for(reference_field),
        )


@dataclass(frozen=True, slots=True)
class TargetRecord:
    """A per-day record holding the ordered list of sources it references."""

    id: str
    calendar_date: str | None
    references: tuple[str, ...] = ()

    def references_source(self, source_id: str) -> bool:
        return source_id in self.references

    @classmethod
    def from_stored(
        cls,
        record: StoredRecord,
        *,
        date_field: str,
        reference_field: str,
    ) -> TargetRecord:
        return cls(
            id=record.id,
            calendar_date=record.date(date_field),
            references=record.references_for(reference_field),
        )


__all__ = ["RecordPage", "SourceRecord", "StoredRecord", "TargetRecord"]
