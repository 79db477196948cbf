"""Change notifications for cycle log mutations."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogChange:
    """A change to the stored logs; no date means everything may have changed."""

    day: date | None = None

    @property
    def is_bulk(self) -> bool:
        """Return True for a bulk invalidation."""
        return self.day is None


BULK_CHANGE = LogChange()

ChangeListener = Callable[[LogChange], None]


@dataclass
class ChangeNotifier:
    """Synchronous observer registry."""

    _listeners: list[ChangeListener] = field(default_factory=list)

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a listener and return a callable that removes it."""
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        """Remove a listener if it is registered."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify(self, change: LogChange) -> None:
        """Call every listener in subscription order."""
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                _logger.exception("Change listener failed for %s", change)
