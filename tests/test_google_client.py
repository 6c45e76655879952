"""Tests for the Calendar API wrapper."""

from unittest.mock import MagicMock, patch

import pytest
from google.auth.exceptions import RefreshError

from tracker.errors import CalendarApiError
from tracker.google_client import format_calendar, list_calendars


def _service_returning(result=None, error=None) -> MagicMock:
    service = MagicMock()
    request = service.calendarList.return_value.list.return_value
    if error is not None:
        request.execute.side_effect = error
    else:
        request.execute.return_value = result
    return service


class TestListCalendars:
    @patch("tracker.google_client.build")
    def test_returns_items(self, mock_build) -> None:
        items = [
            {"id": "primary@example.com", "summary": "Work"},
            {"id": "en.usa#holiday@group.v.calendar.google.com", "summary": "Holidays"},
        ]
        mock_build.return_value = _service_returning({"items": items})
        creds = MagicMock()

        assert list_calendars(creds) == items
        mock_build.assert_called_once_with(
            "calendar", "v3", credentials=creds, cache_discovery=False
        )

    @patch("tracker.google_client.build")
    def test_single_request(self, mock_build) -> None:
        service = _service_returning({"items": [], "nextPageToken": "more"})
        mock_build.return_value = service

        list_calendars(MagicMock())

        service.calendarList.return_value.list.assert_called_once_with()

    @patch("tracker.google_client.build")
    def test_missing_items_is_empty(self, mock_build) -> None:
        mock_build.return_value = _service_returning({"kind": "calendar#calendarList"})

        assert list_calendars(MagicMock()) == []

    @patch("tracker.google_client.build")
    def test_refresh_failure_is_fatal(self, mock_build) -> None:
        mock_build.return_value = _service_returning(error=RefreshError("invalid_grant"))

        with pytest.raises(CalendarApiError) as exc_info:
            list_calendars(MagicMock())
        assert exc_info.value.fatal is True


class TestFormatCalendar:
    def test_summary_and_id(self) -> None:
        item = {"id": "team@group.calendar.google.com", "summary": "Team"}
        assert format_calendar(item) == "- Team (team@group.calendar.google.com)"

    def test_missing_summary(self) -> None:
        assert format_calendar({"id": "x"}) == "-  (x)"
