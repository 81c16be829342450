"""The event log: an append-only sequence of START/STOP events.

Each stop mutates exactly one earlier entry in place (its START is
marked ``matched``) and appends a STOP carrying the session duration.
"""

import logging
from typing import Iterable, Iterator

from tracktime.errors import ConflictError
from tracktime.models import Event

logger = logging.getLogger(__name__)


class EventLog:
    """In-memory view of the persisted event log.

    Example:
        log = EventLog()
        start = log.append_start("work", 1700000000)
        duration = log.close_session("work", start, 1700000060)
    """

    def __init__(self, events: Iterable[Event] | None = None) -> None:
        self._events: list[Event] = list(events or [])

    @property
    def events(self) -> list[Event]:
        """Events in log order."""
        return self._events

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def _open_starts(self, category: str) -> list[Event]:
        return [e for e in self._events if e.category == category and e.is_open]

    def open_sessions(self) -> list[Event]:
        """Get every unmatched START event, in log order."""
        return [e for e in self._events if e.is_open]

    def has_open_session(self, category: str) -> bool:
        """Check whether a session is currently open for a category."""
        return bool(self._open_starts(category))

    def find_last_open_start(self, category: str) -> Event | None:
        """Find the START a stop for this category should close.

        Among the unmatched STARTs of the category, the one with the
        greatest timestamp wins; on equal timestamps the later log entry
        wins.

        Args:
            category: Category to look up.

        Returns:
            The START event, or None if no session is open.
        """
        latest: Event | None = None
        for event in self._open_starts(category):
            if latest is None or event.timestamp >= latest.timestamp:
                latest = event
        return latest

    def append_start(self, category: str, timestamp: int) -> Event:
        """Open a new session.

        Args:
            category: Category to start.
            timestamp: Start time in seconds since the epoch.

        Returns:
            The appended START event.

        Raises:
            ConflictError: If a session is already open for the category.
        """
        if self.has_open_session(category):
            raise ConflictError(category)

        event = Event.start(category, timestamp)
        self._events.append(event)
        logger.info(f"Opened session for '{category}' at {timestamp}")
        return event

    def close_session(self, category: str, start_event: Event, stop_timestamp: int) -> int:
        """Close an open session and append the matching STOP.

        Args:
            category: Category being stopped.
            start_event: The START returned by ``find_last_open_start``.
            stop_timestamp: Stop time in seconds since the epoch.

        Returns:
            Session duration in seconds. A negative value (clock went
            backwards) is kept as-is.

        Raises:
            ValueError: If ``start_event`` is not an open START of the category.
        """
        if start_event.category != category or not start_event.is_open:
            raise ValueError(f"Event is not an open START for '{category}'")

        start_event.matched = True
        duration = stop_timestamp - start_event.timestamp
        if duration < 0:
            logger.warning(
                f"Negative duration {duration}s for '{category}'; the clock went backwards"
            )

        self._events.append(Event.stop(category, stop_timestamp, duration))
        logger.info(f"Closed session for '{category}' after {duration}s")
        return duration
