"""tracktime - start/stop timers for named categories with persistent totals."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("tracktime")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from tracktime.errors import (
    ConfigError,
    ConflictError,
    InvalidCategoryError,
    NoActiveTimerError,
    StorageError,
    TrackerError,
    UsageError,
)
from tracktime.event_log import EventLog
from tracktime.formatting import format_duration
from tracktime.models import Event, EventKind, TotalsEntry, validate_category
from tracktime.storage import TrackerStore
from tracktime.totals import TotalsTable
from tracktime.tracker import TimeTracker

__all__ = [
    "TimeTracker",
    "TrackerStore",
    "EventLog",
    "TotalsTable",
    "Event",
    "EventKind",
    "TotalsEntry",
    "validate_category",
    "format_duration",
    "TrackerError",
    "UsageError",
    "InvalidCategoryError",
    "ConflictError",
    "NoActiveTimerError",
    "StorageError",
    "ConfigError",
]
