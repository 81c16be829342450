"""Tests for event and totals models."""

import pytest
from pydantic import ValidationError

from tracktime.errors import InvalidCategoryError
from tracktime.models import Event, EventKind, TotalsEntry, validate_category


class TestValidateCategory:
    """Tests for the category name rule."""

    @pytest.mark.parametrize("name", ["work-1_2", "a", "ABC", "2024", "_-_"])
    def test_accepts_valid_names(self, name):
        """Letters, digits, hyphens and underscores are allowed."""
        assert validate_category(name) == name

    @pytest.mark.parametrize("name", ["work 1", "", "wörk", "a/b", "work\n", None])
    def test_rejects_invalid_names(self, name):
        """Empty names, spaces, non-ASCII and trailing newlines are rejected."""
        with pytest.raises(InvalidCategoryError):
            validate_category(name)


class TestEvent:
    """Tests for the Event model."""

    def test_start_serializes_matched_not_duration(self):
        """A START is written with matched and without duration."""
        event = Event.start("work", 1700000000)

        assert event.to_json() == {
            "event": "START",
            "category": "work",
            "timestamp": 1700000000,
            "matched": False,
        }

    def test_stop_serializes_duration_not_matched(self):
        """A STOP is written with duration and without matched."""
        event = Event.stop("work", 1700000060, 60)

        assert event.to_json() == {
            "event": "STOP",
            "category": "work",
            "timestamp": 1700000060,
            "duration": 60,
        }

    def test_parses_on_disk_format(self):
        """The event key maps onto the kind field."""
        event = Event.model_validate(
            {"event": "START", "category": "work", "timestamp": 5, "matched": True}
        )

        assert event.kind == EventKind.START
        assert event.matched is True
        assert not event.is_open

    def test_start_without_matched_defaults_to_open(self):
        """A START missing matched is treated as open."""
        event = Event.model_validate({"event": "START", "category": "work", "timestamp": 5})
        assert event.is_open

    def test_stop_requires_duration(self):
        """A STOP without duration is invalid."""
        with pytest.raises(ValidationError):
            Event.model_validate({"event": "STOP", "category": "work", "timestamp": 5})

    def test_start_rejects_duration(self):
        """A START carrying a duration is invalid."""
        with pytest.raises(ValidationError):
            Event.model_validate(
                {"event": "START", "category": "work", "timestamp": 5, "duration": 3}
            )

    def test_rejects_bad_category(self):
        """Events enforce the category pattern too."""
        with pytest.raises(ValidationError):
            Event.start("wörk", 5)

    def test_negative_duration_is_allowed(self):
        """Negative durations from clock skew are stored."""
        assert Event.stop("work", 5, -10).duration == -10


class TestTotalsEntry:
    """Tests for the TotalsEntry model."""

    def test_defaults_to_zero(self):
        """A new entry has no time and no sessions."""
        entry = TotalsEntry()
        assert entry.time == 0
        assert entry.sessions == 0
