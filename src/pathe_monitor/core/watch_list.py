"""Persistence of the watch-list document."""

import json
import logging
from pathlib import Path

from pathe_monitor.core.entities import WatchList
from pathe_monitor.core.errors import ConfigError

logger = logging.getLogger(__name__)


class WatchListStore:
    """Read and write the JSON watch-list document.

    The document looks like::

        {"requests": [{"cinema": "Buitenhof", "date": "2024-03-01", "movie": "Dune"}]}
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> WatchList:
        """Load the watch list, creating an empty document if it is missing.

        Raises:
            ConfigError: if the document exists but cannot be parsed
        """
        logger.debug(f"reading watch list from `{self.path}`")

        if not self.path.exists():
            logger.warning(f"`{self.path}` not found, generating a fresh one")
            watch_list = WatchList()
            self.save(watch_list)
            return watch_list

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return WatchList.from_dict(data)
        except json.JSONDecodeError as e:
            raise ConfigError(f"`{self.path}` is not valid JSON: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"`{self.path}` has an invalid watch request: {e}") from e

    def save(self, watch_list: WatchList) -> None:
        """Write the watch list as pretty-printed JSON."""
        logger.debug(f"writing watch list to `{self.path}`")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(watch_list.to_dict(), indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
