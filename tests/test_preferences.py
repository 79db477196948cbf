"""Tests for app preferences."""

import pytest

from lunabloom.domain.preferences import Preferences
from lunabloom.services.preferences import InvalidPreferenceError, PreferencesService
from lunabloom.services.security import PinLock
from tests.conftest import InMemoryKeyValueStore


def _service(store: InMemoryKeyValueStore) -> PreferencesService:
    return PreferencesService(store=store, pin_lock=PinLock(store))


def test_defaults_when_nothing_stored() -> None:
    assert _service(InMemoryKeyValueStore()).get() == Preferences()


def test_unknown_stored_values_fall_back_to_defaults() -> None:
    store = InMemoryKeyValueStore(
        items={"theme": "neon", "language": "hu", "periodReminder": "nope"}
    )

    preferences = _service(store).get()

    assert preferences.theme == "light"
    assert preferences.language == "hu"
    assert preferences.period_reminder is True


def test_update_persists_values() -> None:
    store = InMemoryKeyValueStore()

    updated = _service(store).update(
        theme="dark", accent_color="gold", fertile_reminder=False
    )

    assert updated.theme == "dark"
    assert updated.accent_color == "gold"
    assert updated.fertile_reminder is False
    assert store.items == {
        "theme": "dark",
        "accentColor": "gold",
        "fertileReminder": "false",
    }


def test_update_rejects_invalid_values_without_writing() -> None:
    store = InMemoryKeyValueStore()
    service = _service(store)

    with pytest.raises(InvalidPreferenceError):
        service.update(theme="dark", language="fr")
    with pytest.raises(InvalidPreferenceError):
        service.update(app_lock="yes")
    with pytest.raises(InvalidPreferenceError):
        service.update(font_size="large")

    assert store.items == {}


def test_disabling_app_lock_clears_pin_status() -> None:
    store = InMemoryKeyValueStore()
    service = _service(store)
    service.pin_lock.set_credential("1234")
    service.update(app_lock=True)

    service.update(app_lock=False)

    assert not service.pin_lock.get_status()
    assert service.pin_lock.verify("1234")
    assert service.get().app_lock is False
