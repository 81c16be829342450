"""Tests for the totals table."""

from tracktime.event_log import EventLog
from tracktime.models import TotalsEntry
from tracktime.totals import TotalsTable


class TestRecordSession:
    """Tests for adding completed sessions."""

    def test_first_session_starts_from_zero(self):
        """An unknown category starts at zero time and zero sessions."""
        table = TotalsTable()
        entry = table.record_session("work", 60)

        assert entry == TotalsEntry(time=60, sessions=1)
        assert table.get("work") == entry

    def test_accumulates(self):
        """Time and session count add up on an existing entry."""
        table = TotalsTable({"work": TotalsEntry(time=100, sessions=2)})
        table.record_session("work", 50)

        assert table.get("work") == TotalsEntry(time=150, sessions=3)

    def test_keeps_first_seen_order(self):
        """Categories stay in the order they were first recorded."""
        table = TotalsTable()
        table.record_session("zeta", 1)
        table.record_session("alpha", 1)
        table.record_session("zeta", 1)

        assert [c for c, _ in table.items()] == ["zeta", "alpha"]

    def test_get_unknown_category_is_zeroed(self):
        """get() does not insert a missing category."""
        table = TotalsTable()

        assert table.get("work") == TotalsEntry()
        assert "work" not in table
        assert len(table) == 0


class TestFromEventLog:
    """Tests for rebuilding totals from the event log."""

    def test_rebuilds_from_stop_events(self):
        """Only STOP events count; open sessions are ignored."""
        log = EventLog()
        log.close_session("work", log.append_start("work", 0), 10)
        log.close_session("play", log.append_start("play", 20), 25)
        log.close_session("work", log.append_start("work", 30), 60)
        log.append_start("work", 70)

        table = TotalsTable.from_event_log(log)

        assert list(table.items()) == [
            ("work", TotalsEntry(time=40, sessions=2)),
            ("play", TotalsEntry(time=5, sessions=1)),
        ]

    def test_empty_log(self):
        """An empty log gives an empty table."""
        assert len(TotalsTable.from_event_log(EventLog())) == 0
