"""Global Settings - Loads configuration from environment variables.

Holds the fixed file and directory names of the application data directory
and the few knobs an operator may override through the environment.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

APP_DATA_DIR_NAME = "gcalTimeTracker"
CREDENTIALS_FILE_NAME = "credentials.json"
TOKEN_FILE_NAME = "token.json"

CALENDAR_SCOPE = "https://www.googleapis.com/auth/calendar"


@dataclass
class Settings:
    """Application-wide settings loaded from environment variables."""

    # Explicit application directory; None means the per-OS default
    app_dir: Path | None = None

    scopes: list[str] = field(default_factory=lambda: [CALENDAR_SCOPE])

    log_level: str = "WARNING"


def load_settings() -> Settings:
    """Load settings from environment variables with sensible defaults.

    Environment variables:
        GCAL_TIME_TRACKER_DIR: Application data directory override
        GCAL_SCOPES: Comma-separated OAuth scopes (default: full calendar scope)
        LOG_LEVEL: Logging level name (default and fallback: WARNING)

    Returns:
        A populated Settings instance.
    """
    app_dir = os.getenv("GCAL_TIME_TRACKER_DIR", "").strip()

    scopes = [
        scope.strip()
        for scope in os.getenv("GCAL_SCOPES", CALENDAR_SCOPE).split(",")
        if scope.strip()
    ]

    return Settings(
        app_dir=Path(app_dir).expanduser() if app_dir else None,
        scopes=scopes or [CALENDAR_SCOPE],
        log_level=_log_level(os.getenv("LOG_LEVEL", "WARNING")),
    )


def _log_level(name: str) -> str:
    """Normalize a level name, falling back to WARNING when it is unknown."""
    level = name.strip().upper()
    if isinstance(logging.getLevelName(level), int):
        return level
    return "WARNING"
