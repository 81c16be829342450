"""JSON file persistence for the event log and the totals table.

Both files are read in full at the start of a command and replaced in
full at the end. Writes go to a temporary file in the same directory
which is then renamed over the target, so a crash never leaves a
truncated file behind. A file lock serializes read-modify-write cycles
of concurrent invocations.
"""

import json
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Any, Iterator

from filelock import FileLock, Timeout
from pydantic import StringConstraints, TypeAdapter, ValidationError

from tracktime.config import LOCK_FILE_NAME, TIMESTAMPS_FILE_NAME, TOTALS_FILE_NAME
from tracktime.errors import StorageError
from tracktime.event_log import EventLog
from tracktime.models import CATEGORY_PATTERN, Event, TotalsEntry
from tracktime.totals import TotalsTable

logger = logging.getLogger(__name__)

CategoryKey = Annotated[str, StringConstraints(pattern=CATEGORY_PATTERN)]

_events_adapter = TypeAdapter(list[Event])
_totals_adapter = TypeAdapter(dict[CategoryKey, TotalsEntry])


class TrackerStore:
    """File-based storage for the event log and totals table.

    Example:
        store = TrackerStore("/path/to/data")
        with store.locked():
            log = store.load_event_log()
            log.append_start("work", 1700000000)
            store.save_event_log(log)
    """

    def __init__(self, data_dir: str | Path, lock_timeout: float = 10.0) -> None:
        """Initialize the store.

        Args:
            data_dir: Directory holding both files. Created if missing.
            lock_timeout: Seconds to wait for the lock before failing.
        """
        self._data_dir = Path(data_dir).expanduser()
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._lock = FileLock(str(self._data_dir / LOCK_FILE_NAME))
        self._lock_timeout = lock_timeout

    @property
    def timestamps_path(self) -> Path:
        """Get the event log file path."""
        return self._data_dir / TIMESTAMPS_FILE_NAME

    @property
    def totals_path(self) -> Path:
        """Get the totals file path."""
        return self._data_dir / TOTALS_FILE_NAME

    @contextmanager
    def locked(self) -> Iterator["TrackerStore"]:
        """Hold the storage lock for a whole read-modify-write cycle.

        Both storage files exist once the lock is held.

        Raises:
            StorageError: If the lock is not acquired within the timeout.
        """
        try:
            self._lock.acquire(timeout=self._lock_timeout)
        except Timeout as exc:
            raise StorageError(
                f"Timed out after {self._lock_timeout}s waiting for {self._lock.lock_file}"
            ) from exc
        try:
            self.ensure_files()
            yield self
        finally:
            self._lock.release()

    def ensure_files(self) -> None:
        """Create missing storage files as an empty log and an empty totals table."""
        self._ensure_file_exists(self.timestamps_path, [])
        self._ensure_file_exists(self.totals_path, {})

    def _ensure_file_exists(self, path: Path, empty: Any) -> None:
        """Create a storage file holding an empty collection if it is missing."""
        if not path.exists():
            self._write_json(path, empty)
            logger.info(f"Created storage file: {path}")

    def _read_json(self, path: Path, empty: Any) -> Any:
        """Read a storage file, creating it first if needed.

        Raises:
            StorageError: If the file does not contain valid JSON.
        """
        self._ensure_file_exists(path, empty)

        content = path.read_text(encoding="utf-8")
        if not content.strip():
            return empty

        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise StorageError(f"{path} is not valid JSON: {exc}") from exc

    def _write_json(self, path: Path, data: Any) -> None:
        """Replace a storage file atomically.

        Args:
            path: Target file.
            data: JSON-serializable content.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps(data, indent=2) + "\n"

        tmp = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        )
        try:
            with tmp:
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp.name, path)
        except BaseException:
            if os.path.exists(tmp.name):
                os.remove(tmp.name)
            raise

    def load_event_log(self) -> EventLog:
        """Load the event log.

        Returns:
            The log, empty if the file did not exist.

        Raises:
            StorageError: If the file is malformed.
        """
        data = self._read_json(self.timestamps_path, [])
        try:
            events = _events_adapter.validate_python(data)
        except ValidationError as exc:
            raise StorageError(f"{self.timestamps_path} has invalid events: {exc}") from exc

        logger.debug(f"Loaded {len(events)} events from {self.timestamps_path}")
        return EventLog(events)

    def save_event_log(self, log: EventLog) -> None:
        """Write the whole event log back to disk."""
        self._write_json(self.timestamps_path, [e.to_json() for e in log])
        logger.debug(f"Saved {len(log)} events to {self.timestamps_path}")

    def load_totals(self) -> TotalsTable:
        """Load the totals table.

        Returns:
            The table, empty if the file did not exist.

        Raises:
            StorageError: If the file is malformed.
        """
        data = self._read_json(self.totals_path, {})
        try:
            entries = _totals_adapter.validate_python(data)
        except ValidationError as exc:
            raise StorageError(f"{self.totals_path} has invalid totals: {exc}") from exc

        logger.debug(f"Loaded totals for {len(entries)} categories from {self.totals_path}")
        return TotalsTable(entries)

    def save_totals(self, totals: TotalsTable) -> None:
        """Write the whole totals table back to disk."""
        data = {category: entry.model_dump(mode="json") for category, entry in totals.items()}
        self._write_json(self.totals_path, data)
        logger.debug(f"Saved totals for {len(totals)} categories to {self.totals_path}")
