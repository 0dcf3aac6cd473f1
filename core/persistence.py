"""Local key-value store persisted as a single JSON file."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from core.errors import PersistenceError

logger = logging.getLogger(__name__)

# Keys of the persisted state layout
SAVED_VISION_BOARDS_KEY = "savedVisionBoards"
CURRENT_USER_KEY = "currentUser"
ONBOARDING_KEY = "hasCompletedOnboarding"

STORE_VERSION = "1.0"


class JsonKeyValueStore:
    """
    Minimal key-value store backed by one JSON document.

    Every write rewrites the whole document through a temporary file, so a
    crash mid-write leaves the previous version intact.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._data: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            logger.info(f"No store file at {self.path}. Starting empty.")
            self._data = {}
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read store file {self.path}: {e}. Starting empty.")
            self._data = {}
            return
        if not isinstance(data, dict):
            logger.warning(f"Store file {self.path} does not hold an object. Starting empty.")
            self._data = {}
            return
        data.pop("_metadata", None)
        self._data = data
        logger.info(f"Loaded store with {len(self._data)} keys from {self.path}")

    def _save(self, data: dict[str, Any]) -> None:
        payload = dict(data)
        payload["_metadata"] = {
            "saved_at": datetime.now().isoformat(),
            "version": STORE_VERSION,
        }
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Could not write {self.path}: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def get_bool(self, key: str) -> bool:
        return bool(self._data.get(key, False))

    def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value. Raises PersistenceError on failure."""
        updated = dict(self._data)
        updated[key] = value
        self._save(updated)
        self._data = updated

    def remove(self, key: str) -> None:
        if key not in self._data:
            return
        updated = dict(self._data)
        del updated[key]
        self._save(updated)
        self._data = updated

    def keys(self) -> list[str]:
        return list(self._data)

    def __contains__(self, key: str) -> bool:
        return key in self._data


def open_store(path: Optional[str | Path] = None) -> JsonKeyValueStore:
    """Open the store at `path`, or at the configured STORE_FILE."""
    if path is None:
        from config import STORE_FILE
        path = STORE_FILE
    return JsonKeyValueStore(path)
