"""Translate between Notion payloads and store-neutral records."""

from __future__ import annotations

import re
from datetime import UTC
from typing import TYPE_CHECKING

from daylink.domain.model import StoredRecord
from daylink.domain.ports.store import AllOf, CreatedAfter, DateEquals, ReferencesEmpty

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from daylink.domain.ports.store import RecordFilter

    from .schema import Page

_HEX_ID = re.compile(r"^[0-9a-f]{32}$")


def canonical_id(raw: str) -> str:
    """Return the dashed lower-case form of a Notion id.

    Notion accepts ids with or without dashes but always returns them dashed, so
    membership checks compare the canonical form.
    """

    compact = raw.strip().replace("-", "").lower()
    if not _HEX_ID.match(compact):
        return raw.strip()
    return f"{compact[:8]}-{compact[8:12]}-{compact[12:16]}-{compact[16:20]}-{compact[20:]}"


def truncated_relations(page: Page) -> dict[str, str]:
    """Map relation property names whose value was cut short to their property ids."""

    return {
        name: value.id
        for name, value in page.properties.items()
        if value.type == "relation" and value.has_more
    }


def to_stored_record(
    page: Page,
    *,
    complete_relations: Mapping[str, Iterable[str]] | None = None,
) -> StoredRecord:
    dates: dict[str, str | None] = {}
    references: dict[str, tuple[str, ...]] = {}
    overrides = complete_relations or {}
    for name, value in page.properties.items():
        if value.type == "date":
            dates[name] = value.date.start if value.date else None
        elif value.type == "relation":
            ids = overrides.get(name)
            if ids is None:
                ids = (ref.id for ref in value.relation or ())
            references[name] = tuple(canonical_id(ref_id) for ref_id in ids)
    return StoredRecord(
        id=canonical_id(page.id),
        created_at=page.created_time,
        dates=dates,
        references=references,
    )


def build_filter(record_filter: RecordFilter) -> dict[str, object]:
    match record_filter:
        case DateEquals(field=name, day=day):
            return {"property": name, "date": {"equals": day}}
        case ReferencesEmpty(field=name):
            return {"property": name, "relation": {"is_empty": True}}
        case CreatedAfter(timestamp=timestamp):
            if timestamp.tzinfo is None:
                timestamp = timestamp.replace(tzinfo=UTC)
            return {
                "timestamp": "created_time",
                "created_time": {"after": timestamp.astimezone(UTC).isoformat()},
            }
        case AllOf(clauses=clauses):
            flattened = [build_filter(clause) for clause in clauses]
            if len(flattened) == 1:
                return flattened[0]
            return {"and": flattened}
        case _:
            raise TypeError(f"Unsupported record filter: {record_filter!r}")


def relation_patch(name: str, ids: Iterable[str]) -> dict[str, object]:
    return {name: {"relation": [{"id": ref_id} for ref_id in ids]}}
