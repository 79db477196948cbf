"""Key-value storage abstraction."""

from typing import Protocol


class KeyValueStore(Protocol):
    """String key-value persistence, shaped like browser local storage."""

    def get_item(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""

    def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    def remove_item(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""

    def keys(self) -> list[str]:
        """Return all stored keys."""
