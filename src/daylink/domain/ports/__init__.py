"""Domain port definitions for adapters."""

from __future__ import annotations

from .store import (
    AllOf,
    CreatedAfter,
    DateEquals,
    RecordFilter,
    RecordStore,
    ReferencesEmpty,
    StoreError,
)

__all__ = [
    "AllOf",
    "CreatedAfter",
    "DateEquals",
    "RecordFilter",
    "RecordStore",
    "ReferencesEmpty",
    "StoreError",
]
