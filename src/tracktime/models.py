"""Type definitions for the time tracker.

This module defines the Pydantic models stored in the event log and the
totals table, plus the category name rule shared by every command.
"""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tracktime.errors import InvalidCategoryError

CATEGORY_PATTERN = r"^[a-zA-Z0-9_-]+$"

_CATEGORY_RE = re.compile(r"[a-zA-Z0-9_-]+")


def validate_category(category: str | None) -> str:
    """Check a category name and return it unchanged.

    Args:
        category: Name given on the command line.

    Returns:
        The validated category.

    Raises:
        InvalidCategoryError: If the name is empty or has characters
            outside ``[a-zA-Z0-9_-]``.
    """
    if not category or not _CATEGORY_RE.fullmatch(category):
        raise InvalidCategoryError(category)
    return category


class EventKind(str, Enum):
    """Kind of timer event.

    Attributes:
        START: A session was opened.
        STOP: The most recently opened session was closed.
    """

    START = "START"
    STOP = "STOP"


class Event(BaseModel):
    """A single entry of the event log.

    START events carry ``matched``; STOP events carry ``duration``.

    Attributes:
        kind: START or STOP (stored under the ``event`` key).
        category: Category the event belongs to.
        timestamp: Seconds since the epoch.
        matched: Whether a STOP has closed this START.
        duration: Seconds between the closed START and this STOP.
    """

    model_config = ConfigDict(populate_by_name=True)

    kind: EventKind = Field(..., alias="event", description="START or STOP")
    category: str = Field(..., pattern=CATEGORY_PATTERN, description="Category name")
    timestamp: int = Field(..., description="Seconds since the epoch")
    matched: bool | None = Field(
        default=None,
        description="START only: true once a STOP closed this session"
    )
    duration: int | None = Field(
        default=None,
        description="STOP only: length of the closed session in seconds"
    )

    @model_validator(mode="after")
    def _check_kind_fields(self) -> "Event":
        if self.kind == EventKind.START:
            if self.duration is not None:
                raise ValueError("START events do not carry a duration")
            if self.matched is None:
                self.matched = False
        else:
            if self.matched is not None:
                raise ValueError("STOP events do not carry a matched flag")
            if self.duration is None:
                raise ValueError("duration is required for STOP events")
        return self

    @classmethod
    def start(cls, category: str, timestamp: int) -> "Event":
        """Build an unmatched START event."""
        return cls(kind=EventKind.START, category=category, timestamp=timestamp, matched=False)

    @classmethod
    def stop(cls, category: str, timestamp: int, duration: int) -> "Event":
        """Build a STOP event closing a session of ``duration`` seconds."""
        return cls(kind=EventKind.STOP, category=category, timestamp=timestamp, duration=duration)

    @property
    def is_open(self) -> bool:
        """True for a START event that no STOP has closed yet."""
        return self.kind == EventKind.START and not self.matched

    def to_json(self) -> dict:
        """Serialize in the on-disk format (``event`` key, no unused fields)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TotalsEntry(BaseModel):
    """Cumulative statistics of a category.

    Attributes:
        time: Sum of all completed session durations in seconds.
        sessions: Number of completed sessions.
    """

    time: int = Field(default=0, description="Total tracked seconds")
    sessions: int = Field(default=0, description="Completed session count")
