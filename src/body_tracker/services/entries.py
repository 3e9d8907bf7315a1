"""Entry persistence and history subscription."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol, Self

from body_tracker.domain.errors import MeasurementValidationError
from body_tracker.domain.measurements import Entry, EntryDraft, MeasurementInput
from body_tracker.domain.units import UnitSystem
from body_tracker.services.calculator import calculate

_logger = logging.getLogger(__name__)


class EntryRepository(Protocol):
    """Persistence interface for measurement entries."""

    def create_entry(self, draft: EntryDraft) -> Entry:
        """Persist a new entry and return it."""

    def list_entries(self, user_id: str, limit: int) -> list[Entry]:
        """Return a user's entries, newest date first."""


@dataclass
class EntryService:
    """Service for saving entries and reading a user's history."""

    repository: EntryRepository
    poll_interval_seconds: float = 2.0
    history_limit: int = 365

    def save_entry(  # noqa: PLR0913
        self,
        user_id: str,
        measurements: MeasurementInput,
        unit_system: UnitSystem | str,
        entry_date: str,
        notes: str = "",
    ) -> Entry:
        """Compute metrics for the measurements and persist a new entry."""
        system = UnitSystem.parse(unit_system)
        normalized_date = _normalize_date(entry_date)
        result = calculate(measurements, system)
        entry = self.repository.create_entry(
            EntryDraft(
                user_id=user_id,
                entry_date=normalized_date,
                notes=notes,
                unit_system=system,
                measurements=measurements,
                result=result,
            )
        )
        _logger.info(
            "Saved entry", extra={"user_id": user_id, "entry_id": str(entry.id)}
        )
        return entry

    def list_history(self, user_id: str) -> list[Entry]:
        """Return entries newest first."""
        return self.repository.list_entries(user_id, self.history_limit)

    def subscribe(self, user_id: str) -> "EntrySubscription":
        """Return a cancellable stream of history snapshots."""
        return EntrySubscription(
            service=self,
            user_id=user_id,
            poll_interval_seconds=self.poll_interval_seconds,
        )


class EntrySubscription:
    """Async iterator yielding the full history whenever it changes.

    The current snapshot is delivered first. Later snapshots are delivered
    only when the set of entry ids differs from the last one delivered.
    """

    def __init__(
        self, service: EntryService, user_id: str, poll_interval_seconds: float
    ) -> None:
        self._service = service
        self._user_id = user_id
        self._poll_interval_seconds = poll_interval_seconds
        self._cancelled = asyncio.Event()
        self._last_ids: list[str] | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Stop the subscription; pending iteration ends promptly."""
        self._cancelled.set()

    def __aiter__(self) -> Self:
        return self

    async def __anext__(self) -> list[Entry]:
        while not self.cancelled:
            entries = await asyncio.to_thread(
                self._service.list_history, self._user_id
            )
            if self.cancelled:
                break
            ids = [str(entry.id) for entry in entries]
            if ids != self._last_ids:
                self._last_ids = ids
                return entries
            await self._wait()
        raise StopAsyncIteration

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.cancel()

    async def _wait(self) -> None:
        try:
            await asyncio.wait_for(
                self._cancelled.wait(), timeout=self._poll_interval_seconds
            )
        except TimeoutError:
            return


def _normalize_date(raw: str) -> str:
    value = (raw or "").strip()
    if not value:
        raise MeasurementValidationError("Date is required.")
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError as exc:
        raise MeasurementValidationError(
            f"Date must be in YYYY-MM-DD format, got {raw!r}."
        ) from exc
