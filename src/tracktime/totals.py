"""Per-category totals derived from closed sessions."""

from typing import ItemsView, Mapping

from tracktime.event_log import EventLog
from tracktime.models import EventKind, TotalsEntry


class TotalsTable:
    """Cumulative time and session count per category.

    A cache of the STOP events in the event log; ``from_event_log``
    rebuilds it from scratch. Categories keep the order in which they
    were first recorded.
    """

    def __init__(self, entries: Mapping[str, TotalsEntry] | None = None) -> None:
        self._entries: dict[str, TotalsEntry] = dict(entries or {})

    @classmethod
    def from_event_log(cls, log: EventLog) -> "TotalsTable":
        """Rebuild the table from the STOP events of a log."""
        table = cls()
        for event in log:
            if event.kind == EventKind.STOP and event.duration is not None:
                table.record_session(event.category, event.duration)
        return table

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, category: object) -> bool:
        return category in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TotalsTable):
            return NotImplemented
        return list(self._entries.items()) == list(other._entries.items())

    def items(self) -> ItemsView[str, TotalsEntry]:
        return self._entries.items()

    def get(self, category: str) -> TotalsEntry:
        """Get the entry for a category, zeroed if it was never recorded."""
        entry = self._entries.get(category)
        return entry.model_copy() if entry else TotalsEntry()

    def record_session(self, category: str, duration: int) -> TotalsEntry:
        """Add one completed session to a category.

        Args:
            category: Category the session belongs to.
            duration: Session length in seconds.

        Returns:
            The updated entry.
        """
        current = self.get(category)
        updated = TotalsEntry(time=current.time + duration, sessions=current.sessions + 1)
        self._entries[category] = updated
        return updated
