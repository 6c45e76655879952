"""Google Calendar API wrapper.

Builds the Calendar client from a token and lists the user's calendars.
"""

import logging
from typing import Any

from google.auth.exceptions import GoogleAuthError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from tracker.errors import CalendarApiError

logger = logging.getLogger(__name__)


def build_service(creds: Credentials):
    """Create a Calendar v3 client authorized with the given token."""
    try:
        return build("calendar", "v3", credentials=creds, cache_discovery=False)
    except (HttpError, GoogleAuthError) as e:
        raise CalendarApiError(f"Unable to create Calendar service: {e}") from e


def list_calendars(creds: Credentials) -> list[dict[str, Any]]:
    """Fetch the user's calendar list.

    Args:
        creds: Token to authorize the request with. An expired token is
            refreshed by google-auth before the request when it carries a
            refresh token.

    Returns:
        Raw calendarList entries; empty when the user has none.

    Raises:
        CalendarApiError: If the request or an implicit refresh fails.
    """
    service = build_service(creds)
    try:
        result = service.calendarList().list().execute()
    except (HttpError, GoogleAuthError) as e:
        raise CalendarApiError(f"Unable to retrieve calendars: {e}") from e

    items = result.get("items", [])
    logger.info("Retrieved %d calendars", len(items))
    return items


def format_calendar(item: dict[str, Any]) -> str:
    """Render one calendar as "- summary (id)"."""
    return f"- {item.get('summary', '')} ({item.get('id', '')})"
