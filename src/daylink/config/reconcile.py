"""Reconciliation settings: collections, schema labels and run policy."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .env import env_bool, env_float, env_int, optional_env_var, require_env_vars
from .errors import ConfigurationError

SOURCE_COLLECTION_ENV = "NOTION_DB_WALLET_ID"
TARGET_COLLECTION_ENV = "NOTION_DB_DAILY_ID"

DEFAULT_LOOKBACK_HOURS = 24.0
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100

# Property labels must match the Notion database schema byte-for-byte.
REFERENCE_FIELD = "关联"
SOURCE_DATE_FIELD = "记账日期"
TARGET_DATE_FIELD = "日期"


@dataclass(frozen=True, slots=True)
class CollectionSchema:
    source_date_field: str = SOURCE_DATE_FIELD
    source_reference_field: str = REFERENCE_FIELD
    target_date_field: str = TARGET_DATE_FIELD
    target_reference_field: str = REFERENCE_FIELD


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    source_collection_id: str
    target_collection_id: str
    schema: CollectionSchema = field(default_factory=CollectionSchema)
    lookback: timedelta = timedelta(hours=DEFAULT_LOOKBACK_HOURS)
    timezone: tzinfo = UTC
    page_size: int = DEFAULT_PAGE_SIZE
    link_ambiguous: bool = False

    def with_lookback_hours(self, hours: float | None) -> ReconcileConfig:
        if hours is None:
            return self
        if hours < 0:
            raise ConfigurationError("Lookback hours must be non-negative")
        return replace(self, lookback=timedelta(hours=hours))


def _resolve_timezone(name: str | None) -> tzinfo:
    if name is None or name.upper() == "UTC":
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown time zone: {name}") from exc


def get_reconcile_config() -> ReconcileConfig:
    values = require_env_vars((SOURCE_COLLECTION_ENV, TARGET_COLLECTION_ENV))
    lookback_hours = env_float(
        "DAYLINK_LOOKBACK_HOURS", default=DEFAULT_LOOKBACK_HOURS, minimum=0.0
    )
    return ReconcileConfig(
        source_collection_id=values[SOURCE_COLLECTION_ENV],
        target_collection_id=values[TARGET_COLLECTION_ENV],
        lookback=timedelta(hours=lookback_hours),
        timezone=_resolve_timezone(optional_env_var("DAYLINK_TIMEZONE")),
        page_size=env_int(
            "DAYLINK_PAGE_SIZE", default=DEFAULT_PAGE_SIZE, minimum=1, maximum=MAX_PAGE_SIZE
        ),
        link_ambiguous=env_bool("DAYLINK_LINK_AMBIGUOUS"),
    )
