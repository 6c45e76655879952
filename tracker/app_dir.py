"""Application data directory handling.

Resolves the per-user directory that holds credentials.json and token.json,
creates it on first run, and reads the OAuth client secret from it.
"""

import json
import logging
import platform as platform_module
from enum import Enum
from pathlib import Path
from typing import Any

from config.settings import APP_DATA_DIR_NAME, CREDENTIALS_FILE_NAME
from tracker.errors import (
    AppDirectoryError,
    CredentialsFormatError,
    CredentialsReadError,
    HomeDirectoryError,
)

logger = logging.getLogger(__name__)

CLIENT_TYPES = ("installed", "web")
REQUIRED_CLIENT_KEYS = ("client_id", "auth_uri", "token_uri")


class DirectoryState(str, Enum):
    """Outcome of inspecting the application directory."""

    CREATED = "created"
    MISSING_CREDENTIALS = "missing_credentials"
    READY = "ready"


def app_data_dir(home: Path | None = None, platform: str | None = None) -> Path:
    """Compute the application directory for the current user.

    Args:
        home: Home directory to build on. Defaults to the current user's.
        platform: Value of platform.system(). Defaults to the running OS.

    Returns:
        <home>/AppData/Local/gcalTimeTracker on Windows,
        <home>/.gcalTimeTracker elsewhere.

    Raises:
        HomeDirectoryError: If the home directory cannot be resolved.
    """
    if home is None:
        try:
            home = Path.home()
        except (RuntimeError, KeyError) as e:
            raise HomeDirectoryError(f"Unable to resolve home directory: {e}") from e

    system = platform if platform is not None else platform_module.system()
    if system == "Windows":
        return Path(home) / "AppData" / "Local" / APP_DATA_DIR_NAME
    return Path(home) / f".{APP_DATA_DIR_NAME}"


def locate(app_dir: Path) -> DirectoryState:
    """Check the application directory, creating it when it is missing.

    Args:
        app_dir: The application directory.

    Returns:
        CREATED if the directory was just made, MISSING_CREDENTIALS if it
        exists without a credentials file, READY otherwise.

    Raises:
        AppDirectoryError: If the directory or credentials file cannot be checked,
            or the directory cannot be created.
    """
    try:
        app_dir.stat()
    except FileNotFoundError:
        try:
            app_dir.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as e:
            raise AppDirectoryError(f"Error creating directory: {e}") from e
        logger.info("Created application directory %s", app_dir)
        return DirectoryState.CREATED
    except OSError as e:
        raise AppDirectoryError(f"Error checking directory: {e}") from e

    if not app_dir.is_dir():
        raise AppDirectoryError(f"Error checking directory: {app_dir} is not a directory")

    try:
        (app_dir / CREDENTIALS_FILE_NAME).stat()
    except FileNotFoundError:
        return DirectoryState.MISSING_CREDENTIALS
    except OSError as e:
        raise AppDirectoryError(f"Error: {e}") from e

    return DirectoryState.READY


def load_client_config(app_dir: Path) -> dict[str, Any]:
    """Read the OAuth client secret stored in the application directory.

    The file uses Google's client secret format: a single top-level
    "installed" or "web" object with client_id, auth_uri, token_uri and at
    least one redirect URI.

    Raises:
        CredentialsReadError: If the file cannot be read.
        CredentialsFormatError: If the content is not a client secret.
    """
    path = app_dir / CREDENTIALS_FILE_NAME
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CredentialsReadError(f"Error opening file: {e}") from e

    try:
        client_config = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CredentialsFormatError(
            f"Unable to parse client secret file to config: {e}"
        ) from e

    client = client_section(client_config)
    if client is None:
        raise CredentialsFormatError(
            "Unable to parse client secret file to config: "
            "client secrets must be for a web or installed app"
        )

    missing = [key for key in REQUIRED_CLIENT_KEYS if not client.get(key)]
    redirect_uris = client.get("redirect_uris")
    if not isinstance(redirect_uris, list) or not redirect_uris:
        missing.append("redirect_uris")
    if missing:
        raise CredentialsFormatError(
            "Unable to parse client secret file to config: "
            f"missing {', '.join(missing)}"
        )

    logger.debug("Loaded client config from %s", path)
    return client_config


def client_section(client_config: Any) -> dict[str, Any] | None:
    """Return the "installed" or "web" object of a client secret, if any."""
    if not isinstance(client_config, dict):
        return None
    for kind in CLIENT_TYPES:
        section = client_config.get(kind)
        if isinstance(section, dict):
            return section
    return None
