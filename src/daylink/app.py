"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from daylink.adapters.notion import NotionClient
from daylink.config import get_app_config
from daylink.domain.reconciliation import (
    CandidateSelector,
    DayNormalizer,
    LinkApplier,
    ReconciliationDriver,
    TargetResolver,
)
from daylink.domain.time_windows import TimeWindow, utcnow

if TYPE_CHECKING:
    from daylink.config import AppConfig, ReconcileConfig
    from daylink.domain.ports.store import RecordStore
    from daylink.domain.reconciliation import ReconciliationResult
    from daylink.domain.time_windows import Clock

log = getLogger(__name__)


def build_driver(
    config: ReconcileConfig,
    store: RecordStore,
    *,
    dry_run: bool = False,
    clock: Clock = utcnow,
) -> ReconciliationDriver:
    """Wire the reconciliation stages against ``store`` using one shared day normalizer."""

    schema = config.schema
    normalizer = DayNormalizer(timezone=config.timezone)
    return ReconciliationDriver(
        select=CandidateSelector(
            store=store,
            collection_id=config.source_collection_id,
            date_field=schema.source_date_field,
            reference_field=schema.source_reference_field,
            window=TimeWindow(lookback=config.lookback),
            page_size=config.page_size,
            clock=clock,
        ),
        normalize=normalizer,
        resolve=TargetResolver(
            store=store,
            collection_id=config.target_collection_id,
            date_field=schema.target_date_field,
            reference_field=schema.target_reference_field,
            normalizer=normalizer,
        ),
        apply=LinkApplier(
            store=store,
            reference_field=schema.target_reference_field,
            dry_run=dry_run,
        ),
        link_ambiguous=config.link_ambiguous,
    )


def reconcile_daily_links(
    *,
    config: AppConfig | None = None,
    store: RecordStore | None = None,
    dry_run: bool = False,
    lookback_hours: float | None = None,
    clock: Clock = utcnow,
) -> ReconciliationResult:
    """Link recent wallet entries to the daily-activity page of their accounting date."""

    effective_config = config or get_app_config()
    reconcile_config = effective_config.reconcile.with_lookback_hours(lookback_hours)
    if store is None:
        with NotionClient(config=effective_config.notion) as client:
            return _run(reconcile_config, client, dry_run=dry_run, clock=clock)
    return _run(reconcile_config, store, dry_run=dry_run, clock=clock)


def _run(
    reconcile_config: ReconcileConfig,
    store: RecordStore,
    *,
    dry_run: bool,
    clock: Clock,
) -> ReconciliationResult:
    log.info(
        "Starting reconciliation: source=%s, target=%s, lookback=%s, timezone=%s, dry_run=%s",
        reconcile_config.source_collection_id,
        reconcile_config.target_collection_id,
        reconcile_config.lookback,
        reconcile_config.timezone,
        dry_run,
    )

    driver = build_driver(reconcile_config, store, dry_run=dry_run, clock=clock)
    return driver.run()
