"""Public interface for the Notion adapter."""

from __future__ import annotations

from .client import NotionAPIError, NotionAuthenticationError, NotionClient
from .schema import Page, QueryResponse
from .translator import build_filter, canonical_id, to_stored_record

__all__ = [
    "NotionAPIError",
    "NotionAuthenticationError",
    "NotionClient",
    "Page",
    "QueryResponse",
    "build_filter",
    "canonical_id",
    "to_stored_record",
]
