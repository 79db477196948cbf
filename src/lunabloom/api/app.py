"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime, timedelta
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Path, Request, Response, status
from fastapi.responses import JSONResponse

from lunabloom.api.models import LogEntryPayload, PinPayload, PreferencesPatch
from lunabloom.app_logging import configure_logging
from lunabloom.containers import AppContainer
from lunabloom.domain.advice import (
    ChatRequest,
    LifestylePlanRequest,
    MealPlanRequest,
    MenstrualTipsRequest,
)
from lunabloom.domain.calendar import DayInfo
from lunabloom.domain.insights import CycleInsights
from lunabloom.domain.logs import LogRecord
from lunabloom.domain.preferences import Preferences
from lunabloom.services.backup import backup_filename, export_filename
from lunabloom.services.preferences import InvalidPreferenceError
from lunabloom.services.security import InvalidPinError

DELETE_CONFIRMATION = "DELETE"
RECENT_SYMPTOM_DAYS = 3


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    container.aggregator.start()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.aggregator.start()
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/logs")
    async def list_logs(request: Request, month: date | None = None) -> dict:
        """Return all logs, or the logs of the month containing `month`."""
        state_container: AppContainer = request.app.state.container
        aggregator = state_container.aggregator
        if month is not None:
            records = aggregator.get_for_month(month)
        else:
            records = dict(aggregator.snapshot.records)
        return {
            "logs": [_serialize_record(records[day]) for day in sorted(records)],
        }

    @app.get("/logs/{day}")
    async def get_log(day: date, request: Request) -> dict[str, object]:
        """Return the log for a day."""
        state_container: AppContainer = request.app.state.container
        record = state_container.aggregator.get_for_date(day)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return _serialize_record(record)

    @app.put("/logs/{day}")
    async def put_log(
        day: date, payload: LogEntryPayload, request: Request
    ) -> dict[str, object]:
        """Replace the log for a day."""
        state_container: AppContainer = request.app.state.container
        saved = state_container.log_store.set(payload.to_record(day))
        if saved is None:
            return {"status": "deleted", "date": day.isoformat()}
        return {"status": "saved", "log": _serialize_record(saved)}

    @app.delete("/logs/{day}")
    async def delete_log(day: date, request: Request) -> dict[str, str]:
        """Delete the log for a day."""
        state_container: AppContainer = request.app.state.container
        state_container.log_store.delete(day)
        return {"status": "deleted", "date": day.isoformat()}

    @app.delete("/logs")
    async def delete_all_logs(request: Request, confirm: str = "") -> dict[str, object]:
        """Delete every log; requires confirm=DELETE."""
        if confirm != DELETE_CONFIRMATION:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Pass confirm={DELETE_CONFIRMATION} to delete all logs.",
            )
        state_container: AppContainer = request.app.state.container
        deleted = state_container.log_store.delete_all()
        return {"status": "deleted", "count": deleted}

    @app.get("/calendar/{year}/{month}")
    async def calendar_month(
        request: Request,
        year: int = Path(ge=1, le=9999),
        month: int = Path(ge=1, le=12),
    ) -> dict[str, object]:
        """Return the classification of every day in a month."""
        state_container: AppContainer = request.app.state.container
        days = state_container.calendar_service.month(date(year, month, 1))
        return {"days": [_serialize_day(info) for info in days]}

    @app.get("/calendar/days/{day}")
    async def calendar_day(day: date, request: Request) -> dict[str, object]:
        """Return the classification of a single day."""
        state_container: AppContainer = request.app.state.container
        info = state_container.calendar_service.day(day)
        result = _serialize_day(info)
        result["phase"] = state_container.calendar_service.phase_for(day)
        return result

    @app.get("/insights")
    async def insights(request: Request) -> dict[str, object]:
        """Return cycle averages and the next period estimate."""
        state_container: AppContainer = request.app.state.container
        return _serialize_insights(state_container.insights_service.get())

    @app.get("/backup")
    async def backup(request: Request) -> JSONResponse:
        """Download every stored log and setting."""
        state_container: AppContainer = request.app.state.container
        filename = backup_filename(datetime.now(tz=UTC))
        return JSONResponse(
            state_container.backup_service.create_backup(),
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.post("/backup/restore")
    async def restore(
        request: Request, payload: dict[str, Any] = Body(...)
    ) -> dict[str, object]:
        """Replace stored data with a previously downloaded backup."""
        state_container: AppContainer = request.app.state.container
        try:
            restored = state_container.backup_service.restore_backup(payload)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return {"status": "restored", "count": restored}

    @app.get("/export")
    async def export(request: Request) -> Response:
        """Download all logs as CSV."""
        state_container: AppContainer = request.app.state.container
        filename = export_filename(datetime.now(tz=UTC))
        return Response(
            content=state_container.backup_service.export_csv(),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/security/pin")
    async def pin_status(request: Request) -> dict[str, bool]:
        """Return whether a PIN is configured."""
        state_container: AppContainer = request.app.state.container
        return {"is_set": state_container.pin_lock.get_status()}

    @app.put("/security/pin")
    async def set_pin(payload: PinPayload, request: Request) -> dict[str, bool]:
        """Store a new PIN."""
        state_container: AppContainer = request.app.state.container
        try:
            state_container.pin_lock.set_credential(payload.pin)
        except InvalidPinError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return {"is_set": True}

    @app.post("/security/pin/verify")
    async def verify_pin(payload: PinPayload, request: Request) -> dict[str, bool]:
        """Check a PIN against the stored one."""
        state_container: AppContainer = request.app.state.container
        return {"valid": state_container.pin_lock.verify(payload.pin)}

    @app.delete("/security/pin")
    async def clear_pin(request: Request) -> dict[str, bool]:
        """Remove the stored PIN."""
        state_container: AppContainer = request.app.state.container
        state_container.pin_lock.clear_credential()
        return {"is_set": False}

    @app.get("/preferences")
    async def get_preferences(request: Request) -> dict[str, object]:
        """Return the app preferences."""
        state_container: AppContainer = request.app.state.container
        return _serialize_preferences(state_container.preferences_service.get())

    @app.patch("/preferences")
    async def update_preferences(
        payload: PreferencesPatch, request: Request
    ) -> dict[str, object]:
        """Update some of the app preferences."""
        state_container: AppContainer = request.app.state.container
        changes = payload.model_dump(exclude_none=True)
        try:
            updated = state_container.preferences_service.update(**changes)
        except InvalidPreferenceError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return _serialize_preferences(updated)

    @app.post("/ai/chat")
    async def ai_chat(payload: ChatRequest, request: Request) -> dict[str, str]:
        """Answer a message from the health visitor chat."""
        state_container: AppContainer = request.app.state.container
        return {"response": await state_container.advice_service.chat(payload)}

    @app.post("/ai/lifestyle-plan")
    async def ai_lifestyle_plan(
        payload: LifestylePlanRequest, request: Request
    ) -> dict[str, str]:
        """Generate a weekly lifestyle plan."""
        state_container: AppContainer = request.app.state.container
        plan = await state_container.advice_service.lifestyle_plan(payload)
        return {"lifestyle_plan": plan}

    @app.post("/ai/meal-plan")
    async def ai_meal_plan(
        payload: MealPlanRequest, request: Request
    ) -> dict[str, str]:
        """Generate a weekly meal and vitamin plan."""
        state_container: AppContainer = request.app.state.container
        return {"plan": await state_container.advice_service.meal_plan(payload)}

    @app.post("/ai/menstrual-tips")
    async def ai_menstrual_tips(
        payload: MenstrualTipsRequest, request: Request
    ) -> dict[str, object]:
        """Generate menstrual health tips, filling gaps from today's logs."""
        state_container: AppContainer = request.app.state.container
        today = date.today()
        updates: dict[str, object] = {}
        if payload.current_phase is None:
            updates["current_phase"] = state_container.calendar_service.phase_for(
                today
            )
        if not payload.recent_symptoms:
            updates["recent_symptoms"] = _recent_symptoms(state_container, today)
        resolved = payload.model_copy(update=updates)
        logger.info(
            "Generating menstrual tips: phase=%s symptoms=%s",
            resolved.current_phase,
            len(resolved.recent_symptoms),
        )
        tips = await state_container.advice_service.menstrual_tips(resolved)
        return {"tips": tips, "current_phase": resolved.current_phase}

    return app


def _recent_symptoms(state_container: AppContainer, today: date) -> list[str]:
    """Collect distinct symptoms logged over the last few days."""
    symptoms: dict[str, None] = {}
    for offset in range(RECENT_SYMPTOM_DAYS - 1, -1, -1):
        record = state_container.aggregator.get_for_date(today - timedelta(days=offset))
        if record:
            symptoms.update(dict.fromkeys(record.symptoms))
    return list(symptoms)


def _serialize_record(record: LogRecord) -> dict[str, object]:
    return record.to_payload()


def _serialize_day(info: DayInfo) -> dict[str, object]:
    return {
        "date": info.day.isoformat(),
        "log": _serialize_record(info.record) if info.record else None,
        "period_intensity": info.period_intensity,
        "is_period": info.is_period,
        "is_period_start": info.is_period_start,
        "is_period_end": info.is_period_end,
        "is_in_period_range": info.is_in_period_range,
        "is_predicted_period": info.is_predicted_period,
        "is_fertile": info.is_fertile,
        "is_ovulation": info.is_ovulation,
    }


def _serialize_insights(insights: CycleInsights) -> dict[str, object]:
    predicted = insights.predicted_next_period
    return {
        "avg_cycle_length": insights.avg_cycle_length,
        "avg_period_length": insights.avg_period_length,
        "predicted_next_period": {
            "start": predicted[0].isoformat(),
            "end": predicted[1].isoformat(),
        }
        if predicted
        else None,
        "cycle_lengths": insights.cycle_lengths,
        "period_lengths": insights.period_lengths,
    }


def _serialize_preferences(preferences: Preferences) -> dict[str, object]:
    return {
        "theme": preferences.theme,
        "accent_color": preferences.accent_color,
        "language": preferences.language,
        "period_reminder": preferences.period_reminder,
        "fertile_reminder": preferences.fertile_reminder,
        "app_lock": preferences.app_lock,
    }
