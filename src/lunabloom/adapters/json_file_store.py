"""JSON file implementation of the key-value store."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from lunabloom.services.storage import KeyValueStore

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Keeps every key in one JSON object on disk, written through on change."""

    path: Path
    _items: dict[str, str] = field(default_factory=dict)

    @classmethod
    def open(cls, path: str | Path) -> "JsonFileKeyValueStore":
        """Load the store from disk, starting empty when the file is missing."""
        resolved = Path(path)
        if not resolved.exists():
            return cls(path=resolved)
        data = json.loads(resolved.read_text(encoding="utf-8") or "{}")
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {resolved} does not hold a JSON object")
        items = {}
        for key, value in data.items():
            if isinstance(value, str):
                items[key] = value
            else:
                _logger.warning("Skipping non-string stored value for %s", key)
        return cls(path=resolved, _items=items)

    def get_item(self, key: str) -> str | None:
        """Return the stored value for a key."""
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store a value and flush the file."""
        self._items[key] = value
        self._flush()

    def remove_item(self, key: str) -> None:
        """Remove a key and flush the file if it existed."""
        if self._items.pop(key, None) is not None:
            self._flush()

    def keys(self) -> list[str]:
        """Return all stored keys."""
        return list(self._items)

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(self._items, handle, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
