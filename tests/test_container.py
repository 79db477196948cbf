"""Tests for container wiring."""

import asyncio
from datetime import date

import pytest

from lunabloom.config import Settings, resolve_storage_backend
from lunabloom.containers import build_container
from lunabloom.domain.logs import LogRecord


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.calendar_service is not None
    assert container.advice_service.model == settings.openai_model
    asyncio.run(container.close_resources())


def test_file_backed_container_persists_logs(settings) -> None:
    container = build_container(settings)
    container.aggregator.start()
    container.log_store.set(LogRecord(day=date(2024, 1, 1), period_flow="light"))
    asyncio.run(container.close_resources())

    reopened = build_container(settings)
    reopened.aggregator.start()

    assert reopened.aggregator.get_for_date(date(2024, 1, 1)) is not None
    assert not container.aggregator.is_subscribed
    asyncio.run(reopened.close_resources())


def test_resolve_storage_backend() -> None:
    assert resolve_storage_backend(
        Settings(openai_api_key="key", storage_backend=" File ")
    ) == "file"
    with pytest.raises(ValueError):
        resolve_storage_backend(Settings(openai_api_key="key", storage_backend="s3"))
    with pytest.raises(ValueError):
        resolve_storage_backend(
            Settings(
                openai_api_key="key",
                storage_backend="supabase",
                supabase_url=None,
                supabase_service_key=None,
            )
        )
