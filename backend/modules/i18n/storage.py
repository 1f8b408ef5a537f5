"""
Preference store implementations.

FilePreferenceStore keeps preferences in a small JSON document so they
survive restarts. InMemoryPreferenceStore is for tests and development.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from .interfaces import IPreferenceStore

logger = logging.getLogger(__name__)


class InMemoryPreferenceStore(IPreferenceStore):
    """Process-local preference storage."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class FilePreferenceStore(IPreferenceStore):
    """
    JSON-file backed preference storage.

    The whole document is rewritten on every write; it holds a handful
    of keys at most.
    """

    def __init__(self, path: Path | str):
        self._path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Preference file is not a JSON object: {self._path}")
        return data

    def get_item(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except ValueError:
            logger.warning(f"Overwriting unreadable preference file {self._path}")
            data = {}
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
