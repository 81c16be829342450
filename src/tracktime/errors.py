"""Exceptions raised by the time tracker.

Every error is terminal for a single invocation: the CLI catches
``TrackerError`` once, prints the message and exits with status 1.
"""


class TrackerError(Exception):
    """Base class for all time tracker errors."""
    pass


class UsageError(TrackerError):
    """Raised for a wrong argument count or an unrecognized command."""
    pass


class InvalidCategoryError(TrackerError):
    """Raised when a category name is missing or contains disallowed characters."""

    def __init__(self, category: str | None) -> None:
        self.category = category
        super().__init__(
            "Invalid category name. Use alphanumeric characters, hyphens, or underscores."
        )


class ConflictError(TrackerError):
    """Raised when a timer is started while one is already running for the category."""

    def __init__(self, category: str) -> None:
        self.category = category
        super().__init__(
            f"There's already an active timer for '{category}'. "
            "Stop it before starting a new session."
        )


class NoActiveTimerError(TrackerError):
    """Raised when a timer is stopped but none is running for the category."""

    def __init__(self, category: str) -> None:
        self.category = category
        super().__init__(f"No active timer for category '{category}'.")


class StorageError(TrackerError):
    """Raised when a persisted file cannot be read, parsed or locked."""
    pass


class ConfigError(TrackerError):
    """Raised when a setting from the environment or a .env file is invalid."""
    pass
