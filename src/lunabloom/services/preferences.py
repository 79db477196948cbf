"""App preference storage."""

import json
import logging
from dataclasses import dataclass

from lunabloom.domain.preferences import Preferences
from lunabloom.services.security import PinLock
from lunabloom.services.storage import KeyValueStore

THEMES = ("light", "dark")
ACCENT_COLORS = ("coral", "gold")
LANGUAGES = ("en", "hu", "de")

_CHOICE_KEYS = {
    "theme": ("theme", THEMES),
    "accent_color": ("accentColor", ACCENT_COLORS),
    "language": ("language", LANGUAGES),
}
_FLAG_KEYS = {
    "period_reminder": "periodReminder",
    "fertile_reminder": "fertileReminder",
    "app_lock": "appLock",
}

_logger = logging.getLogger(__name__)


class InvalidPreferenceError(ValueError):
    """Raised for unknown preference names or unsupported values."""


@dataclass
class PreferencesService:
    """Reads and writes preferences, falling back to defaults."""

    store: KeyValueStore
    pin_lock: PinLock

    def get(self) -> Preferences:
        """Return the stored preferences."""
        defaults = Preferences()
        values: dict[str, object] = {}
        for name, (key, allowed) in _CHOICE_KEYS.items():
            raw = self.store.get_item(key)
            values[name] = raw if raw in allowed else getattr(defaults, name)
        for name, key in _FLAG_KEYS.items():
            values[name] = self._read_flag(key, getattr(defaults, name))
        return Preferences(**values)

    def update(self, **changes: object) -> Preferences:
        """Validate and persist preference changes."""
        for name, value in changes.items():
            if name in _CHOICE_KEYS:
                key, allowed = _CHOICE_KEYS[name]
                if value not in allowed:
                    raise InvalidPreferenceError(f"Unsupported {name}: {value!r}")
            elif name in _FLAG_KEYS:
                if not isinstance(value, bool):
                    raise InvalidPreferenceError(f"{name} must be a boolean")
            else:
                raise InvalidPreferenceError(f"Unknown preference: {name}")

        for name, value in changes.items():
            if name in _CHOICE_KEYS:
                self.store.set_item(_CHOICE_KEYS[name][0], str(value))
            else:
                self.store.set_item(_FLAG_KEYS[name], json.dumps(value))

        if changes.get("app_lock") is False:
            self.pin_lock.clear_status()
        return self.get()

    def _read_flag(self, key: str, default: bool) -> bool:
        raw = self.store.get_item(key)
        if raw is None:
            return default
        try:
            value = json.loads(raw)
        except ValueError:
            _logger.warning("Ignoring malformed preference %s=%r", key, raw)
            return default
        return value if isinstance(value, bool) else default
