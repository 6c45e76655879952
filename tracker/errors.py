"""Error types raised by the tracker.

Every error carries a ``fatal`` flag. Reported errors stop the run with a
short message and a clean exit; fatal ones abort it and are logged with
their cause.
"""


class TrackerError(RuntimeError):
    """Base class for all tracker failures."""

    fatal = False


# Reported


class AppDirectoryError(TrackerError):
    """Raised when the application directory cannot be checked or created."""


class CredentialsReadError(TrackerError):
    """Raised when an existing credentials file cannot be read."""


# Fatal


class HomeDirectoryError(TrackerError):
    """Raised when the user's home directory cannot be resolved."""

    fatal = True


class CredentialsFormatError(TrackerError):
    """Raised when the credentials file is not a valid OAuth client secret."""

    fatal = True


class TokenCheckError(TrackerError):
    """Raised when checking for the cached token fails for a reason other than absence."""

    fatal = True


class TokenReadError(TrackerError):
    """Raised when the cached token file cannot be read."""

    fatal = True


class TokenFormatError(TrackerError):
    """Raised when the cached token file cannot be deserialized."""

    fatal = True


class AuthorizationError(TrackerError):
    """Raised when the authorization code cannot be read or exchanged."""

    fatal = True


class TokenWriteError(TrackerError):
    """Raised when a freshly issued token cannot be persisted."""

    fatal = True


class CalendarApiError(TrackerError):
    """Raised when the Calendar API request fails."""

    fatal = True
