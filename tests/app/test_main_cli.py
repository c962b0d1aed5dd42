from __future__ import annotations

import signal

import pytest

from daylink.config import MissingConfigurationError
from daylink.domain.ports.store import StoreError
from daylink.ui import cli as cli_module


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch) -> dict[str, object]:
    calls: dict[str, object] = {}

    def fake_reconcile(**kwargs: object) -> None:
        calls.update(kwargs)

    monkeypatch.setattr(cli_module, "reconcile_daily_links", fake_reconcile)
    return calls


def test_main_cli_defaults(captured: dict[str, object]) -> None:
    cli_module.main([])

    assert captured == {"dry_run": False, "lookback_hours": None}


def test_main_cli_with_flags(captured: dict[str, object]) -> None:
    cli_module.main(["--lookback-hours", "36", "--dry-run", "--verbose"])

    assert captured == {"dry_run": True, "lookback_hours": 36.0}


def test_main_cli_rejects_negative_lookback(captured: dict[str, object]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["--lookback-hours", "-1"])

    assert excinfo.value.code == 2
    assert captured == {}


def test_main_cli_rejects_invalid_lookback(captured: dict[str, object]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["--lookback-hours", "a day"])

    assert excinfo.value.code == 2
    assert captured == {}


@pytest.mark.parametrize(
    "error",
    [MissingConfigurationError("Missing configuration for: NOTION_TOKEN"), StoreError("boom")],
)
def test_main_cli_exits_non_zero_on_fatal_errors(
    monkeypatch: pytest.MonkeyPatch, error: Exception
) -> None:
    def failing_reconcile(**_: object) -> None:
        raise error

    monkeypatch.setattr(cli_module, "reconcile_daily_links", failing_reconcile)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([])

    assert excinfo.value.code == 1


def test_sigint_reports_an_interrupted_run() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.sigint_handler(signal.SIGINT, None)

    assert excinfo.value.code == 130
