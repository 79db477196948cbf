"""In-memory mirror of the stored cycle logs."""

import calendar
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from lunabloom.domain.calendar import CycleSnapshot
from lunabloom.domain.logs import LogRecord
from lunabloom.services.logs import LogStore
from lunabloom.services.notifications import LogChange
from lunabloom.services.phases import build_snapshot

_logger = logging.getLogger(__name__)


def month_bounds(anchor: date) -> tuple[date, date]:
    """Return the first and last day of the anchor's month."""
    last_day = calendar.monthrange(anchor.year, anchor.month)[1]
    return anchor.replace(day=1), anchor.replace(day=last_day)


@dataclass
class CycleDataAggregator:
    """Date-keyed view of every stored record, rebuilt on each change.

    The snapshot is replaced as a whole, so readers see either the previous
    or the new state.
    """

    log_store: LogStore
    _snapshot: CycleSnapshot = field(default_factory=CycleSnapshot, init=False)
    _unsubscribe: Callable[[], None] | None = field(default=None, init=False)

    @property
    def snapshot(self) -> CycleSnapshot:
        """Return the current snapshot."""
        return self._snapshot

    @property
    def is_subscribed(self) -> bool:
        """Return True while change notifications are being followed."""
        return self._unsubscribe is not None

    def start(self) -> None:
        """Load everything and follow log store changes."""
        if self._unsubscribe is not None:
            return
        self.reload()
        self._unsubscribe = self.log_store.notifier.subscribe(self._on_change)

    def close(self) -> None:
        """Stop following log store changes."""
        if self._unsubscribe is None:
            return
        self._unsubscribe()
        self._unsubscribe = None

    def reload(self) -> None:
        """Re-read every record from the log store."""
        self._snapshot = build_snapshot(self.log_store.list_all())

    def get_for_date(self, day: date) -> LogRecord | None:
        """Return the record for a day, if any."""
        return self._snapshot.records.get(day)

    def get_for_month(self, anchor: date) -> dict[date, LogRecord]:
        """Return the records within the anchor's month, inclusive."""
        first, last = month_bounds(anchor)
        return {
            day: record
            for day, record in self._snapshot.records.items()
            if first <= day <= last
        }

    def _on_change(self, change: LogChange) -> None:
        _logger.debug("Reloading cycle data after change %s", change)
        self.reload()
