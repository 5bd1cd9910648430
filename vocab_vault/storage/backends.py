"""
Key-value stores for sealed records and exported keys.

The vault only hands out strings; where they are kept is up to the
store. Both stores here follow the browser localStorage contract:
string names, string values, missing names read as None.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get_item(self, name: str) -> Optional[str]: ...

    def set_item(self, name: str, value: str) -> None: ...

    def remove_item(self, name: str) -> None: ...


class MemoryStore:
    """Process-local store, mainly for tests and short-lived tools."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items = dict(initial or {})

    def get_item(self, name: str) -> Optional[str]:
        return self._items.get(name)

    def set_item(self, name: str, value: str) -> None:
        self._items[name] = value

    def remove_item(self, name: str) -> None:
        self._items.pop(name, None)

    def __len__(self):
        return len(self._items)

    def __contains__(self, name):
        return name in self._items


class JsonFileStore:
    """
    One JSON object on disk, rewritten atomically on every change.
    The file is created with mode 0600 since it may hold key material.
    """

    def __init__(self, path):
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object.")
        return data

    def _dump(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, sort_keys=True)
            os.chmod(tmp, 0o600)
            os.replace(tmp, self.path)
        except BaseException:
            os.unlink(tmp)
            raise
        logger.debug(f"Wrote {len(items)} item(s) to {self.path}")

    def get_item(self, name: str) -> Optional[str]:
        return self._load().get(name)

    def set_item(self, name: str, value: str) -> None:
        items = self._load()
        items[name] = value
        self._dump(items)

    def remove_item(self, name: str) -> None:
        items = self._load()
        if items.pop(name, None) is not None:
            self._dump(items)
