"""Configuration management for tracktime."""

from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from tracktime.errors import ConfigError

# tracktime config directory
TRACKTIME_DIR = Path.home() / ".tracktime"
TRACKTIME_ENV_FILE = TRACKTIME_DIR / ".env"

# Where the event log and totals live unless configured otherwise
DEFAULT_DATA_DIR = Path.home() / "apps" / "time_tracker"

TIMESTAMPS_FILE_NAME = "timestamps.json"
TOTALS_FILE_NAME = "totals.json"
LOCK_FILE_NAME = "tracktime.lock"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRACKTIME_",
        # Later files override earlier ones
        env_file=(str(TRACKTIME_ENV_FILE), ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path | None = Field(
        default=None,
        description="Directory holding timestamps.json and totals.json (default: ~/apps/time_tracker)",
    )
    lock_timeout: float = Field(
        default=10.0,
        description="Seconds to wait for the storage lock before giving up",
    )

    def get_data_dir(self) -> Path:
        """Get the data directory, using default if not set."""
        if self.data_dir:
            return self.data_dir.expanduser()
        return DEFAULT_DATA_DIR


# Module-level singleton
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the singleton Settings instance.

    Returns:
        Settings instance

    Raises:
        ConfigError: If an environment variable or .env value is invalid
    """
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc
    return _settings
