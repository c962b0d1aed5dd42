"""Pydantic models describing the Notion API payloads."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class NotionBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class DateValue(NotionBaseModel):
    start: str
    end: str | None = None
    time_zone: str | None = None


class RelationRef(NotionBaseModel):
    id: str


class PropertyValue(NotionBaseModel):
    """One entry of ``page.properties``; only date and relation values are modelled."""

    id: str
    type: str
    date: DateValue | None = None
    relation: list[RelationRef] | None = None
    has_more: bool = False


class Page(NotionBaseModel):
    object: Literal["page"] = "page"
    id: str
    created_time: datetime
    last_edited_time: datetime | None = None
    archived: bool = False
    properties: dict[str, PropertyValue] = Field(default_factory=dict)


class QueryResponse(NotionBaseModel):
    results: list[Page]
    next_cursor: str | None = None
    has_more: bool = False

    @property
    def cursor(self) -> str | None:
        return self.next_cursor if self.has_more else None


class RelationPropertyItem(NotionBaseModel):
    type: Literal["relation"] = "relation"
    relation: RelationRef


class PropertyItemList(NotionBaseModel):
    results: list[RelationPropertyItem]
    next_cursor: str | None = None
    has_more: bool = False


class ErrorResponse(NotionBaseModel):
    object: Literal["error"] = "error"
    status: int
    code: str
    message: str
