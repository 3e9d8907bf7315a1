"""Entry history endpoints scoped by the caller's user id."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import PlainTextResponse, StreamingResponse

from body_tracker.api.models import EntryForm
from body_tracker.domain.units import UnitSystem
from body_tracker.services.calculator import parse_measurement_input
from body_tracker.services.export import export_entries_csv
from body_tracker.services.trends import build_trend, summarize_trend

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from body_tracker.containers import AppContainer
    from body_tracker.domain.measurements import Entry
    from body_tracker.services.entries import EntrySubscription

router = APIRouter(prefix="/entries", tags=["entries"])

_logger = logging.getLogger(__name__)


async def require_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Return the opaque user id supplied by the identity provider."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return x_user_id.strip()


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _display_unit_system(container: AppContainer, raw: str | None) -> UnitSystem:
    if raw is None:
        return container.settings.default_unit_system
    return UnitSystem.parse(raw)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_entry(
    form: EntryForm,
    request: Request,
    user_id: str = Depends(require_user_id),
) -> dict[str, object]:
    """Validate, calculate and persist a new entry."""
    container = _container(request)
    measurements = parse_measurement_input(form.model_dump())
    entry = container.entry_service.save_entry(
        user_id=user_id,
        measurements=measurements,
        unit_system=_display_unit_system(container, form.unit_system),
        entry_date=form.date,
        notes=form.notes,
    )
    return {"entry": asdict(entry)}


@router.get("")
async def list_entries(
    request: Request, user_id: str = Depends(require_user_id)
) -> dict[str, object]:
    """Return the user's entries, newest first."""
    entries = _container(request).entry_service.list_history(user_id)
    return {"entries": [asdict(entry) for entry in entries]}


@router.get("/trend")
async def entry_trend(
    request: Request,
    unit_system: str | None = None,
    user_id: str = Depends(require_user_id),
) -> dict[str, object]:
    """Return chart points and a first-to-last summary."""
    container = _container(request)
    display = _display_unit_system(container, unit_system)
    points = build_trend(container.entry_service.list_history(user_id), display)
    return {
        "unit_system": display,
        "mass_unit": display.mass_unit,
        "points": [asdict(point) for point in points],
        "summary": asdict(summarize_trend(points)),
    }


@router.get("/export.csv")
async def export_entries(
    request: Request,
    unit_system: str | None = None,
    user_id: str = Depends(require_user_id),
) -> PlainTextResponse:
    """Return the user's entries as a CSV download."""
    container = _container(request)
    display = _display_unit_system(container, unit_system)
    entries = container.entry_service.list_history(user_id)
    _logger.info("Exporting entries", extra={"user_id": user_id, "count": len(entries)})
    return PlainTextResponse(
        export_entries_csv(entries, display),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="body-entries.csv"'},
    )


@router.get("/stream")
async def stream_entries(
    request: Request, user_id: str = Depends(require_user_id)
) -> StreamingResponse:
    """Stream history snapshots as newline-delimited JSON."""
    subscription = _container(request).entry_service.subscribe(user_id)

    async def snapshots() -> AsyncIterator[str]:
        watcher = asyncio.create_task(_cancel_on_disconnect(request, subscription))
        try:
            async with subscription:
                async for entries in subscription:
                    yield _snapshot_line(entries)
        finally:
            watcher.cancel()

    return StreamingResponse(snapshots(), media_type="application/x-ndjson")


async def _cancel_on_disconnect(
    request: Request, subscription: EntrySubscription
) -> None:
    while not subscription.cancelled:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            _logger.info("History stream client disconnected")
            subscription.cancel()
            return


def _snapshot_line(entries: list[Entry]) -> str:
    payload = jsonable_encoder({"entries": [asdict(entry) for entry in entries]})
    return json.dumps(payload) + "\n"
