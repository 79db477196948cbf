"""Persistence of daily cycle logs on top of a key-value store."""

import json
import logging
from dataclasses import dataclass, replace
from datetime import date

from pydantic import ValidationError

from lunabloom.domain.logs import FLOW_NONE, LogRecord, StoredLogEntry
from lunabloom.services.notifications import BULK_CHANGE, ChangeNotifier, LogChange
from lunabloom.services.storage import KeyValueStore

STORAGE_KEY_PREFIX = "cycleLog_"
DEFAULT_END_FLOW = "light"

_logger = logging.getLogger(__name__)


def storage_key(day: date) -> str:
    """Return the storage key for a day, e.g. cycleLog_2024-07-28."""
    return f"{STORAGE_KEY_PREFIX}{day.isoformat()}"


def is_log_key(key: str) -> bool:
    """Return True when the key holds a cycle log entry."""
    return key.startswith(STORAGE_KEY_PREFIX)


def parse_log_entry(key: str, raw: str) -> LogRecord | None:
    """Parse a stored entry, returning None for anything unreadable."""
    try:
        fallback_day = date.fromisoformat(key.removeprefix(STORAGE_KEY_PREFIX))
    except ValueError:
        _logger.warning("Skipping log entry with malformed key %s", key)
        return None
    try:
        entry = StoredLogEntry.model_validate_json(raw)
    except ValidationError as exc:
        _logger.warning(
            "Skipping malformed log entry %s (%s errors)", key, exc.error_count()
        )
        return None
    return entry.to_record(fallback_day)


@dataclass
class LogStore:
    """One log record per calendar day, with change notifications."""

    store: KeyValueStore
    notifier: ChangeNotifier

    def get(self, day: date) -> LogRecord | None:
        """Return the record stored for a day."""
        key = storage_key(day)
        raw = self.store.get_item(key)
        if raw is None:
            return None
        return parse_log_entry(key, raw)

    def list_all(self) -> list[LogRecord]:
        """Return every readable record, skipping malformed ones."""
        records = []
        for key in self.store.keys():
            if not is_log_key(key):
                continue
            raw = self.store.get_item(key)
            if raw is None:
                continue
            record = parse_log_entry(key, raw)
            if record is not None:
                records.append(record)
        return records

    def set(self, record: LogRecord) -> LogRecord | None:
        """Replace the record for its day.

        The record is normalized first. A record without any data removes
        the stored entry instead, in which case None is returned.
        """
        key = storage_key(record.day)
        normalized = self._normalize(record)
        if normalized.has_data():
            self.store.set_item(key, _dump(normalized))
            self.notifier.notify(LogChange(record.day))
            return normalized
        if self.store.get_item(key) is not None:
            self.store.remove_item(key)
            self.notifier.notify(LogChange(record.day))
        return None

    def delete(self, day: date) -> None:
        """Delete the record for a day."""
        self.store.remove_item(storage_key(day))
        self.notifier.notify(LogChange(day))

    def delete_all(self) -> int:
        """Delete every stored record and return how many were removed."""
        keys = [key for key in self.store.keys() if is_log_key(key)]
        for key in keys:
            self.store.remove_item(key)
        _logger.info("Deleted %s cycle log entries", len(keys))
        self.notifier.notify(BULK_CHANGE)
        return len(keys)

    def _normalize(self, record: LogRecord) -> LogRecord:
        flow = record.period_flow
        if flow == FLOW_NONE and record.is_period_end:
            existing = self.get(record.day)
            flow = (
                existing.period_flow
                if existing and existing.is_period_day
                else DEFAULT_END_FLOW
            )
        activity_count = max(0, record.sexual_activity_count)
        active = activity_count > 0
        return replace(
            record,
            period_flow=flow,
            is_period_end=record.is_period_end and flow != FLOW_NONE,
            sexual_activity_count=activity_count,
            protection_used=record.protection_used if active else None,
            orgasm=record.orgasm if active else None,
        )


def _dump(record: LogRecord) -> str:
    return json.dumps(record.to_payload())
