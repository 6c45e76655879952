"""gcal Time Tracker - Entry Point.

Prepares the application data directory, authenticates against Google
Calendar (reusing the cached token when there is one), and prints the
user's calendars.

Usage:
    python main.py                  # Use the per-user application directory
    python main.py --app-dir PATH   # Use PATH instead
    python main.py -v               # Log progress to stderr
"""

import argparse
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from config.settings import CREDENTIALS_FILE_NAME, Settings, load_settings
from tracker.app_dir import DirectoryState, app_data_dir, load_client_config, locate
from tracker.errors import TrackerError
from tracker.google_client import format_calendar, list_calendars
from tracker.token_manager import obtain_token

logger = logging.getLogger("main")

EXIT_OK = 0
EXIT_FATAL = 1


def run(settings: Settings, prompt: Callable[[str], str] = input) -> int:
    """Run the whole flow and return the process exit code.

    Reported errors print their message and stop the run with EXIT_OK.
    Fatal errors are logged with their cause and return EXIT_FATAL.
    """
    try:
        return _run(settings, prompt)
    except TrackerError as e:
        if e.fatal:
            logger.critical("%s", e, exc_info=e.__cause__ is not None)
            return EXIT_FATAL
        print(e)
        return EXIT_OK


def _run(settings: Settings, prompt: Callable[[str], str]) -> int:
    app_dir = settings.app_dir or app_data_dir()
    state = locate(app_dir)

    if state is DirectoryState.CREATED:
        print("Directory created successfully")
        print(f"Copy your app {CREDENTIALS_FILE_NAME} file to app directory: {app_dir}")
        return EXIT_OK

    print("Directory already exists")
    if state is DirectoryState.MISSING_CREDENTIALS:
        print("Credentials file does not exist.")
        return EXIT_OK

    client_config = load_client_config(app_dir)
    creds = obtain_token(app_dir, client_config, settings.scopes, prompt=prompt)

    calendars = list_calendars(creds)
    if calendars:
        print("Calendars:")
        for item in calendars:
            print(format_calendar(item))
    else:
        print("No calendars found.")

    return EXIT_OK


def main() -> None:
    """Parse arguments, configure logging and run."""
    parser = argparse.ArgumentParser(description="List your Google calendars.")
    parser.add_argument(
        "--app-dir",
        type=Path,
        default=None,
        help="Application directory holding credentials.json and token.json.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress messages.",
    )
    args = parser.parse_args()

    settings = load_settings()
    if args.app_dir is not None:
        settings.app_dir = args.app_dir.expanduser()

    logging.basicConfig(
        level=logging.INFO if args.verbose else settings.log_level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    sys.exit(run(settings))


if __name__ == "__main__":
    main()
