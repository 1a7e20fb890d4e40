"""Tests for the CLI."""

import asyncio
import json
import logging
import signal
from pathlib import Path
from unittest.mock import AsyncMock, Mock, patch

import pytest
from typer.testing import CliRunner

from pathe_monitor.cli import app
from pathe_monitor.core import CheckOutcome, Cinema, WatchRequest

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the root handlers installed by setup_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.setenv("DISCORD_WEBHOOK_URL", "https://discord.com/api/webhooks/test")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("TIMEZONE", raising=False)

    path = tmp_path / "config.yaml"
    path.write_text(f"paths:\n  watch_list: {tmp_path / 'watchlist.json'}\n", encoding="utf-8")
    return path


def test_add_list_remove(config_path: Path) -> None:
    """Test editing the watch list from the command line."""
    watch_list_path = config_path.parent / "watchlist.json"

    result = runner.invoke(app, ["add", "buitenhof", "2024-03-01", "Dune", "-c", str(config_path)])
    assert result.exit_code == 0
    assert "Watching 'Dune' op 2024-03-01 in Pathé Buitenhof" in result.output

    result = runner.invoke(app, ["add", "Buitenhof", "2024-03-01", "Dune", "-c", str(config_path)])
    assert "Already watching" in result.output

    document = json.loads(watch_list_path.read_text(encoding="utf-8"))
    assert document == {"requests": [{"cinema": "Buitenhof", "date": "2024-03-01", "movie": "Dune"}]}

    result = runner.invoke(app, ["list", "-c", str(config_path)])
    assert "1. 'Dune' op 2024-03-01 in Pathé Buitenhof" in result.output

    result = runner.invoke(app, ["remove", "Buitenhof", "2024-03-01", "Dune", "-c", str(config_path)])
    assert result.exit_code == 0
    assert json.loads(watch_list_path.read_text(encoding="utf-8")) == {"requests": []}


def test_add_unknown_cinema(config_path: Path) -> None:
    """Test that unknown cinemas are rejected."""
    result = runner.invoke(app, ["add", "Ypenburg", "2024-03-01", "Dune", "-c", str(config_path)])

    assert result.exit_code != 0


def test_missing_webhook_exits(config_path: Path, monkeypatch) -> None:
    """Test that configuration errors abort with exit code 1."""
    monkeypatch.delenv("DISCORD_WEBHOOK_URL")

    result = runner.invoke(app, ["list", "-c", str(config_path)])

    assert result.exit_code == 1


def test_check_prints_outcomes(config_path: Path) -> None:
    """Test a single check run."""
    request = WatchRequest(cinema=Cinema.DELFT, date="2024-03-01", movie="Dune")
    mock_service = Mock()
    mock_service.check_watch_list = AsyncMock(return_value=[(request, CheckOutcome.NOT_MATCHED)])

    with patch("pathe_monitor.cli.build_service", return_value=mock_service):
        result = runner.invoke(app, ["check", "-c", str(config_path)])

    assert result.exit_code == 0
    assert "not on sale yet" in result.output
    assert "'Dune' op 2024-03-01 in Pathé Delft" in result.output
    mock_service.check_watch_list.assert_called_once()


class FakeMonitorLoop:
    """Stand-in loop that sends itself SIGTERM and waits for the token."""

    instances: list["FakeMonitorLoop"] = []

    def __init__(self, job, **kwargs) -> None:
        self.job = job
        self.kwargs = kwargs
        self.cancelled = False
        FakeMonitorLoop.instances.append(self)

    async def run(self, token) -> None:
        signal.raise_signal(signal.SIGTERM)
        for _ in range(100):
            if token.cancelled:
                break
            await asyncio.sleep(0.01)
        self.cancelled = token.cancelled


def test_run_stops_on_sigterm(config_path: Path) -> None:
    """Test that `run` wires the loop from settings and stops on SIGTERM."""
    FakeMonitorLoop.instances.clear()

    with patch("pathe_monitor.cli.MonitorLoop", FakeMonitorLoop):
        result = runner.invoke(app, ["run", "-c", str(config_path)])

    assert result.exit_code == 0
    assert (config_path.parent / "watchlist.json").exists()

    [monitor_loop] = FakeMonitorLoop.instances
    assert monitor_loop.cancelled is True
    assert monitor_loop.kwargs["interval_minutes"] == 30
    assert monitor_loop.kwargs["run_on_startup"] is False


def test_check_reports_unexpected_error(config_path: Path) -> None:
    """Test that unexpected errors get their own label."""
    request = WatchRequest(cinema=Cinema.DELFT, date="2024-03-01", movie="Dune")
    mock_service = Mock()
    mock_service.check_watch_list = AsyncMock(return_value=[(request, CheckOutcome.ERROR)])

    with patch("pathe_monitor.cli.build_service", return_value=mock_service):
        result = runner.invoke(app, ["check", "-c", str(config_path)])

    assert result.exit_code == 0
    assert "unexpected error" in result.output
    assert "fetch failed" not in result.output
