"""Local PIN lock.

The PIN is stored as an unsalted SHA-256 digest. That only keeps the digits
out of plain sight and is not a substitute for real credential storage.
"""

import hashlib
import hmac
import json
import logging
import re
from dataclasses import dataclass

from lunabloom.services.storage import KeyValueStore

PIN_HASH_KEY = "appPinHash"
PIN_STATUS_KEY = "appPinStatus"

_PIN_PATTERN = re.compile(r"[0-9]{4}")

_logger = logging.getLogger(__name__)


class InvalidPinError(ValueError):
    """Raised when a PIN is not exactly four digits."""


def is_valid_pin(pin: str) -> bool:
    """Return True for a four digit PIN."""
    return bool(_PIN_PATTERN.fullmatch(pin or ""))


def hash_pin(pin: str) -> str:
    """Return the hex digest stored for a PIN."""
    return hashlib.sha256(pin.encode("utf-8")).hexdigest()


@dataclass
class PinLock:
    """Stores and checks the app lock PIN."""

    store: KeyValueStore

    def set_credential(self, pin: str) -> None:
        """Store a new PIN and mark the lock as configured."""
        if not is_valid_pin(pin):
            raise InvalidPinError("Invalid PIN format. Must be 4 digits.")
        self.store.set_item(PIN_HASH_KEY, hash_pin(pin))
        self._set_status(True)

    def verify(self, pin: str) -> bool:
        """Return True when the PIN matches the stored one."""
        if not is_valid_pin(pin):
            return False
        stored = self.store.get_item(PIN_HASH_KEY)
        if not stored:
            return False
        return hmac.compare_digest(hash_pin(pin), stored)

    def get_status(self) -> bool:
        """Return True when a PIN is marked as set and actually stored."""
        raw = self.store.get_item(PIN_STATUS_KEY)
        if raw is None:
            return False
        try:
            status = json.loads(raw)
        except ValueError:
            _logger.warning("Ignoring malformed PIN status %r", raw)
            return False
        return status is True and bool(self.store.get_item(PIN_HASH_KEY))

    def clear_status(self) -> None:
        """Forget the status flag, keeping the stored hash."""
        self.store.remove_item(PIN_STATUS_KEY)

    def clear_credential(self) -> None:
        """Remove the stored PIN."""
        self.store.remove_item(PIN_HASH_KEY)
        self._set_status(False)

    def _set_status(self, is_set: bool) -> None:
        self.store.set_item(PIN_STATUS_KEY, json.dumps(is_set))
