"""Backup, restore and CSV export of stored data."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

from lunabloom.domain.logs import LogRecord
from lunabloom.services.logs import LogStore, is_log_key
from lunabloom.services.notifications import BULK_CHANGE
from lunabloom.services.storage import KeyValueStore

SETTING_KEYS: tuple[str, ...] = (
    "theme",
    "accentColor",
    "language",
    "periodReminder",
    "fertileReminder",
    "appLock",
    "appPinStatus",
)
CSV_HEADER: tuple[str, ...] = (
    "date",
    "periodFlow",
    "isPeriodEnd",
    "symptoms",
    "mood",
    "sexualActivityCount",
    "protectionUsed",
    "orgasm",
    "tookPill",
    "notes",
)

_logger = logging.getLogger(__name__)


def is_backup_key(key: str) -> bool:
    """Return True for keys included in backups."""
    return is_log_key(key) or key in SETTING_KEYS


def backup_filename(now: datetime) -> str:
    """Return the download name for a backup file."""
    return f"lunabloom_backup_{now:%Y%m%d_%H%M%S}.json"


def export_filename(now: datetime) -> str:
    """Return the download name for a CSV export."""
    return f"lunabloom_export_{now:%Y%m%d_%H%M%S}.csv"


@dataclass
class BackupService:
    """Moves raw stored values in and out of the key-value store."""

    store: KeyValueStore
    log_store: LogStore

    def create_backup(self) -> dict[str, str]:
        """Return every backed-up key mapped to its raw stored value."""
        backup: dict[str, str] = {}
        for key in sorted(self.store.keys()):
            if not is_backup_key(key):
                continue
            value = self.store.get_item(key)
            if value is not None:
                backup[key] = value
        return backup

    def restore_backup(self, payload: Mapping[str, object]) -> int:
        """Replace stored logs and settings with the backup's contents.

        Returns the number of keys written.
        """
        entries: dict[str, str] = {}
        for key, value in payload.items():
            if not is_backup_key(key):
                _logger.warning("Ignoring unrecognized backup key %s", key)
                continue
            if not isinstance(value, str):
                _logger.warning("Ignoring non-string backup value for %s", key)
                continue
            entries[key] = value
        if not entries:
            raise ValueError("Backup contains no recognized entries")

        for key in self.store.keys():
            if is_log_key(key):
                self.store.remove_item(key)
        for key, value in entries.items():
            self.store.set_item(key, value)
        _logger.info("Restored %s entries from backup", len(entries))
        self.log_store.notifier.notify(BULK_CHANGE)
        return len(entries)

    def export_csv(self) -> str:
        """Return all records as CSV, one row per day in date order."""
        records = sorted(self.log_store.list_all(), key=lambda record: record.day)
        rows = [",".join(CSV_HEADER)]
        rows.extend(",".join(_csv_row(record)) for record in records)
        return "\n".join(rows)


def _csv_row(record: LogRecord) -> list[str]:
    return [
        record.day.isoformat(),
        record.period_flow,
        _csv_bool(record.is_period_end),
        _quote("; ".join(record.symptoms)),
        record.mood or "",
        str(record.sexual_activity_count),
        _csv_bool(record.protection_used),
        _csv_bool(record.orgasm),
        _csv_bool(record.took_pill),
        _quote(record.notes or ""),
    ]


def _csv_bool(value: bool | None) -> str:
    if value is None:
        return ""
    return "true" if value else "false"


def _quote(text: str) -> str:
    escaped = text.replace('"', '""')
    return f'"{escaped}"'
