from __future__ import annotations

from datetime import UTC, timedelta
from zoneinfo import ZoneInfo

import pytest

from daylink.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_app_config,
    get_reconcile_config,
)
from daylink.config.notion import NOTION_API_VERSION
from daylink.config.reconcile import REFERENCE_FIELD, SOURCE_DATE_FIELD, TARGET_DATE_FIELD

REQUIRED = {
    "NOTION_TOKEN": "secret-token",
    "NOTION_DB_WALLET_ID": "wallet-db",
    "NOTION_DB_DAILY_ID": "daily-db",
}
OPTIONAL = (
    "DAYLINK_LOOKBACK_HOURS",
    "DAYLINK_TIMEZONE",
    "DAYLINK_PAGE_SIZE",
    "DAYLINK_LINK_AMBIGUOUS",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (*REQUIRED, *OPTIONAL):
        monkeypatch.delenv(name, raising=False)


def _set_required(monkeypatch: pytest.MonkeyPatch, **overrides: str) -> None:
    for name, value in {**REQUIRED, **overrides}.items():
        monkeypatch.setenv(name, value)


def test_app_config_reads_required_values_and_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    _set_required(monkeypatch)

    config = get_app_config()

    assert config.notion.token == "secret-token"
    headers = config.notion.resilience.default_headers
    assert headers is not None
    assert headers["Authorization"] == "Bearer secret-token"
    assert headers["Notion-Version"] == NOTION_API_VERSION
    assert config.reconcile.source_collection_id == "wallet-db"
    assert config.reconcile.target_collection_id == "daily-db"
    assert config.reconcile.lookback == timedelta(hours=24)
    assert config.reconcile.timezone is UTC
    assert config.reconcile.page_size == 50
    assert config.reconcile.link_ambiguous is False
    assert config.reconcile.schema.source_date_field == SOURCE_DATE_FIELD
    assert config.reconcile.schema.target_date_field == TARGET_DATE_FIELD
    assert config.reconcile.schema.target_reference_field == REFERENCE_FIELD


def test_app_config_reports_all_missing_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NOTION_DB_DAILY_ID", "daily-db")

    with pytest.raises(MissingConfigurationError) as exc:
        get_app_config()

    assert "NOTION_DB_WALLET_ID, NOTION_TOKEN" in str(exc.value)


def test_reconcile_config_reads_optional_values(monkeypatch: pytest.MonkeyPatch) -> None:
    _set_required(monkeypatch)
    monkeypatch.setenv("DAYLINK_LOOKBACK_HOURS", "48")
    monkeypatch.setenv("DAYLINK_TIMEZONE", "Asia/Shanghai")
    monkeypatch.setenv("DAYLINK_PAGE_SIZE", "100")
    monkeypatch.setenv("DAYLINK_LINK_AMBIGUOUS", "yes")

    config = get_reconcile_config()

    assert config.lookback == timedelta(hours=48)
    assert config.timezone == ZoneInfo("Asia/Shanghai")
    assert config.page_size == 100
    assert config.link_ambiguous is True


def test_reconcile_config_rejects_unknown_timezone(monkeypatch: pytest.MonkeyPatch) -> None:
    _set_required(monkeypatch)
    monkeypatch.setenv("DAYLINK_TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(ConfigurationError, match="Unknown time zone"):
        get_reconcile_config()


def test_with_lookback_hours_overrides_window(monkeypatch: pytest.MonkeyPatch) -> None:
    _set_required(monkeypatch)
    config = get_reconcile_config()

    assert config.with_lookback_hours(None) is config
    assert config.with_lookback_hours(6).lookback == timedelta(hours=6)
    with pytest.raises(ConfigurationError):
        config.with_lookback_hours(-1)
