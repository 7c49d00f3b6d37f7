"""Persistent store of profile layouts between runs."""

import json
import logging
from pathlib import Path

from filelock import FileLock

from .layout import Layout, layout_from_dict, layout_to_dict
from .screen import ScreenManager

logger = logging.getLogger(__name__)

DEFAULT_STORE_DIR = Path.home() / ".cache" / "panekit"
LAYOUTS_FILENAME = "layouts.json"


class LayoutStore:
    """Saved profile layouts, shared between front-end processes with file locking."""

    def __init__(self, store_dir: Path | None = None):
        self._store_dir = store_dir or DEFAULT_STORE_DIR
        self._store_file = self._store_dir / LAYOUTS_FILENAME
        self._lock_file = self._store_dir / f"{LAYOUTS_FILENAME}.lock"

    def _read_from_disk(self) -> dict[str, dict]:
        """Read saved layouts without locking."""
        if not self._store_file.exists():
            return {}
        try:
            with open(self._store_file, "r") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Failed to read layout store: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring layout store: top level is not an object")
            return {}
        return data

    def _write_to_disk(self, data: dict[str, dict]) -> None:
        """Write saved layouts without locking."""
        try:
            with open(self._store_file, "w") as f:
                json.dump(data, f, indent=2)
        except IOError as e:
            logger.warning(f"Failed to write layout store: {e}")

    def load(self) -> dict[str, Layout]:
        """Load saved layouts, skipping entries that no longer parse."""
        self._store_dir.mkdir(parents=True, exist_ok=True)
        with FileLock(self._lock_file):
            data = self._read_from_disk()

        layouts: dict[str, Layout] = {}
        for name, entry in data.items():
            try:
                layouts[name] = layout_from_dict(entry)
            except ValueError as e:
                logger.warning(f"Skipping saved layout {name!r}: {e}")
        if layouts:
            logger.debug(f"Loaded {len(layouts)} saved layouts")
        return layouts

    def save(self, layouts: dict[str, Layout]) -> None:
        """Save layouts, keeping profiles saved by other instances."""
        self._store_dir.mkdir(parents=True, exist_ok=True)
        with FileLock(self._lock_file):
            # Re-read to get any changes from other instances
            merged = self._read_from_disk()
            merged.update({name: layout_to_dict(layout) for name, layout in layouts.items()})
            self._write_to_disk(merged)

    def save_screen(self, screen: ScreenManager) -> None:
        """Save the current layout of every profile of ``screen``."""
        self.save({name: manager.to_layout() for name, manager in screen.panes.items()})
