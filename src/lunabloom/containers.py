"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from lunabloom.adapters.json_file_store import JsonFileKeyValueStore
from lunabloom.adapters.openai_text_client import OpenAITextClient
from lunabloom.adapters.supabase_key_value_store import SupabaseKeyValueStore
from lunabloom.config import Settings, resolve_storage_backend
from lunabloom.services.advice import AdviceService
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
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    key_value_store: KeyValueStore
    log_store: LogStore
    aggregator: CycleDataAggregator
    calendar_service: CalendarService
    insights_service: InsightsService
    backup_service: BackupService
    pin_lock: PinLock
    preferences_service: PreferencesService
    advice_service: AdviceService
    close_resources: Callable[[], Awaitable[None]]


def build_key_value_store(settings: Settings) -> KeyValueStore:
    """Create the configured key-value store."""
    if resolve_storage_backend(settings) == "supabase":
        supabase_client = create_client(
            settings.supabase_url, settings.supabase_service_key
        )
        return SupabaseKeyValueStore(supabase_client, table=settings.supabase_table)
    return JsonFileKeyValueStore.open(settings.storage_path)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    key_value_store = build_key_value_store(resolved_settings)
    log_store = LogStore(store=key_value_store, notifier=ChangeNotifier())
    aggregator = CycleDataAggregator(log_store)
    pin_lock = PinLock(key_value_store)
    openai_client = OpenAITextClient.create(resolved_settings.openai_api_key)
    advice_service = AdviceService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )

    async def close_resources() -> None:
        aggregator.close()
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
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
