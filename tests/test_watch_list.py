"""Tests for the watch-list document store."""

import json
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from pathe_monitor.core import Cinema, ConfigError, WatchList, WatchListStore, WatchRequest


def test_missing_document_is_created() -> None:
    """Test that a missing document yields an empty list and is persisted."""
    with TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "data" / "watchlist.json"
        store = WatchListStore(path)

        watch_list = store.load()

        assert watch_list.requests == []
        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == {"requests": []}


def test_save_and_load() -> None:
    """Test that saved requests are loaded back in order."""
    with TemporaryDirectory() as tmpdir:
        store = WatchListStore(Path(tmpdir) / "watchlist.json")
        requests = [
            WatchRequest(cinema=Cinema.BUITENHOF, date="2024-03-01", movie="Dune"),
            WatchRequest(cinema=Cinema.DELFT, date="2024-03-02", movie="Poor Things"),
        ]

        store.save(WatchList(requests=requests))

        assert store.load().requests == requests
        # Load from new store instance
        assert WatchListStore(store.path).load().requests == requests


def test_invalid_json_is_config_error() -> None:
    """Test that a malformed document is fatal."""
    with TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "watchlist.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError, match="not valid JSON"):
            WatchListStore(path).load()


@pytest.mark.parametrize(
    "document",
    [
        {},
        {"requests": [{"cinema": "Ypenburg", "date": "2024-03-01", "movie": "Dune"}]},
        {"requests": [{"cinema": "Delft", "movie": "Dune"}]},
        {"requests": [{"cinema": "Delft", "date": "2024-03-01", "movie": 123}]},
        {"requests": [{"cinema": "Delft", "date": 20240301, "movie": "Dune"}]},
        [],
    ],
)
def test_invalid_request_is_config_error(document) -> None:
    """Test that structurally invalid documents are fatal."""
    with TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "watchlist.json"
        path.write_text(json.dumps(document), encoding="utf-8")

        with pytest.raises(ConfigError, match="invalid watch request"):
            WatchListStore(path).load()
