"""Tests for duration formatting."""

import pytest

from tracktime.formatting import format_duration


class TestFormatDuration:
    """Tests for format_duration()."""

    @pytest.mark.parametrize(
        "seconds, expected",
        [
            (0, "0 seconds"),
            (1, "1 seconds"),
            (59, "59 seconds"),
            (60, "1 minutes and 0 seconds"),
            (61, "1 minutes and 1 seconds"),
            (3599, "59 minutes and 59 seconds"),
            (3600, "1 hours, 0 minutes, and 0 seconds"),
            (3661, "1 hours, 1 minutes, and 1 seconds"),
            (90061, "25 hours, 1 minutes, and 1 seconds"),
        ],
    )
    def test_boundaries(self, seconds, expected):
        """Seconds, minutes and hours switch at 60 and 3600."""
        assert format_duration(seconds) == expected

    def test_negative_keeps_sign(self):
        """Clock skew can produce negative totals; they are shown with a minus sign."""
        assert format_duration(-5) == "-5 seconds"
        assert format_duration(-65) == "-1 minutes and 5 seconds"
