"""Start, stop and status operations over the persisted store.

No state is kept between invocations: every operation loads the event
log and totals from a ``TrackerStore``, applies one transition and
writes the result back while holding the store lock.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from tracktime.errors import NoActiveTimerError
from tracktime.models import Event, TotalsEntry, validate_category
from tracktime.storage import TrackerStore
from tracktime.totals import TotalsTable

logger = logging.getLogger(__name__)


def _now() -> int:
    return int(time.time())


@dataclass
class StopResult:
    """Outcome of a stop.

    Attributes:
        category: Category that was stopped.
        duration: Length of the closed session in seconds.
        total: Updated cumulative entry of the category.
    """

    category: str
    duration: int
    total: TotalsEntry


@dataclass
class RunningTimer:
    """A session that is open right now."""

    category: str
    started_at: int
    elapsed: int


@dataclass
class StatusReport:
    """Snapshot of the totals table plus the currently running timers."""

    totals: TotalsTable
    running: list[RunningTimer] = field(default_factory=list)


class TimeTracker:
    """Command handlers for the time tracker.

    Args:
        store: Storage holding the event log and totals.
        clock: Returns the current time in whole seconds since the epoch.
    """

    def __init__(self, store: TrackerStore, clock: Callable[[], int] = _now) -> None:
        self.store = store
        self._clock = clock

    def start(self, category: str) -> Event:
        """Open a session for a category.

        Returns:
            The START event that was recorded.

        Raises:
            InvalidCategoryError: If the category name is invalid.
            ConflictError: If a session is already open for the category.
        """
        validate_category(category)
        with self.store.locked():
            log = self.store.load_event_log()
            event = log.append_start(category, self._clock())
            self.store.save_event_log(log)
        return event

    def stop(self, category: str) -> StopResult:
        """Close the most recently opened session of a category.

        The event log is written first, then the totals table.

        Raises:
            InvalidCategoryError: If the category name is invalid.
            NoActiveTimerError: If no session is open for the category.
        """
        validate_category(category)
        with self.store.locked():
            log = self.store.load_event_log()
            totals = self.store.load_totals()

            start_event = log.find_last_open_start(category)
            if start_event is None:
                raise NoActiveTimerError(category)

            duration = log.close_session(category, start_event, self._clock())
            self.store.save_event_log(log)

            total = totals.record_session(category, duration)
            self.store.save_totals(totals)

        return StopResult(category=category, duration=duration, total=total)

    def status(self) -> StatusReport:
        """Read the totals and running timers without writing anything."""
        with self.store.locked():
            totals = self.store.load_totals()
            log = self.store.load_event_log()

        now = self._clock()
        running = [
            RunningTimer(category=e.category, started_at=e.timestamp, elapsed=now - e.timestamp)
            for e in log.open_sessions()
        ]
        return StatusReport(totals=totals, running=running)

    def rebuild(self) -> TotalsTable:
        """Recompute the totals table from the event log and save it."""
        with self.store.locked():
            log = self.store.load_event_log()
            totals = TotalsTable.from_event_log(log)
            self.store.save_totals(totals)

        logger.info(f"Rebuilt totals for {len(totals)} categories from {len(log)} events")
        return totals
