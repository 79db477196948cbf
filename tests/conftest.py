"""Shared test fixtures."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date

import pytest

from lunabloom.config import Settings
from lunabloom.containers import AppContainer
from lunabloom.domain.logs import LogRecord
from lunabloom.services.advice import AdviceService, TextGenerationClient
from lunabloom.services.aggregator import CycleDataAggregator
from lunabloom.services.backup import BackupService
from lunabloom.services.calendar import CalendarService
from lunabloom.services.insights import InsightsService
from lunabloom.services.logs import LogStore
from lunabloom.services.notifications import ChangeNotifier
from lunabloom.services.preferences import PreferencesService
from lunabloom.services.security import PinLock
from lunabloom.services.storage import KeyValueStore


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for tests."""

    items: dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self.items)


@dataclass
class FakeTextGenerationClient(TextGenerationClient):
    """Fake text client returning a fixed reply and recording prompts."""

    reply: str = "Stay hydrated and rest when you can."
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        prompt: str,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "reasoning_effort": reasoning_effort,
                "store": store,
                "instructions": instructions,
                "prompt": prompt,
            }
        )
        return self.reply


@dataclass
class FailingTextGenerationClient(TextGenerationClient):
    """Fake text client that always raises."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        prompt: str,
    ) -> str:
        raise RuntimeError("model unavailable")


def period(day: date, flow: str = "medium", *, end: bool = False) -> LogRecord:
    """Build a period day record."""
    return LogRecord(day=day, period_flow=flow, is_period_end=end)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        openai_api_key="openai-key",
        storage_path=str(tmp_path / "lunabloom_data.json"),
    )


@pytest.fixture
def key_value_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def log_store(key_value_store: InMemoryKeyValueStore) -> LogStore:
    return LogStore(store=key_value_store, notifier=ChangeNotifier())


@pytest.fixture
def aggregator(log_store: LogStore) -> Iterator[CycleDataAggregator]:
    aggregator = CycleDataAggregator(log_store)
    aggregator.start()
    yield aggregator
    aggregator.close()


@pytest.fixture
def text_client() -> FakeTextGenerationClient:
    return FakeTextGenerationClient()


@pytest.fixture
def container(
    settings: Settings,
    key_value_store: InMemoryKeyValueStore,
    log_store: LogStore,
    text_client: FakeTextGenerationClient,
) -> AppContainer:
    aggregator = CycleDataAggregator(log_store)
    pin_lock = PinLock(key_value_store)
    advice_service = AdviceService(
        client=text_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )

    async def close_resources() -> None:
        aggregator.close()

    return AppContainer(
        settings=settings,
        key_value_store=key_value_store,
        log_store=log_store,
        aggregator=aggregator,
        calendar_service=CalendarService(aggregator),
        insights_service=InsightsService(aggregator),
        backup_service=BackupService(store=key_value_store, log_store=log_store),
        pin_lock=pin_lock,
        preferences_service=PreferencesService(
            store=key_value_store, pin_lock=pin_lock
        ),
        advice_service=advice_service,
        close_resources=close_resources,
    )
