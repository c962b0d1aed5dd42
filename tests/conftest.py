from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from daylink.config import CollectionSchema, ReconcileConfig
from tests.support.store import (
    REFERENCE_FIELD,
    SOURCE_DATE_FIELD,
    SOURCE_DB,
    TARGET_DATE_FIELD,
    TARGET_DB,
    FakeRecordStore,
)

if TYPE_CHECKING:
    from daylink.domain.time_windows import Clock

NOW = datetime(2025, 6, 4, 12, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock(now: datetime) -> Clock:
    def _clock() -> datetime:
        return now

    return _clock


@pytest.fixture
def store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def reconcile_config() -> ReconcileConfig:
    return ReconcileConfig(
        source_collection_id=SOURCE_DB,
        target_collection_id=TARGET_DB,
        schema=CollectionSchema(
            source_date_field=SOURCE_DATE_FIELD,
            source_reference_field=REFERENCE_FIELD,
            target_date_field=TARGET_DATE_FIELD,
            target_reference_field=REFERENCE_FIELD,
        ),
        lookback=timedelta(hours=24),
        page_size=2,
    )
