"""OAuth token bootstrap.

Returns the cached token from token.json when one exists, otherwise walks
the operator through the authorization-code flow on the console and caches
the result.

The cached token is returned exactly as stored: expiry is not checked and
nothing is refreshed here. google-auth refreshes an expired token in memory
when the Calendar client sends its first request.
"""

import json
import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from config.settings import TOKEN_FILE_NAME
from tracker.app_dir import client_section
from tracker.errors import (
    AuthorizationError,
    CredentialsFormatError,
    TokenCheckError,
    TokenFormatError,
    TokenReadError,
    TokenWriteError,
)

logger = logging.getLogger(__name__)

AUTH_STATE = "state-token"


def obtain_token(
    app_dir: Path,
    client_config: dict[str, Any],
    scopes: list[str],
    prompt: Callable[[str], str] = input,
) -> Credentials:
    """Load the cached token or run the console authorization flow.

    Args:
        app_dir: Application directory holding token.json.
        client_config: Parsed client secret ("installed" or "web" object).
        scopes: OAuth scopes to request.
        prompt: Reads one line from the operator. Defaults to input().

    Returns:
        Credentials built from the cached or freshly issued token.

    Raises:
        TokenCheckError: If token.json cannot be checked.
        TokenReadError, TokenFormatError: If the cached token is unusable.
        AuthorizationError, TokenWriteError: If the first-run flow fails.
        CredentialsFormatError: If the client secret is rejected by the flow.
    """
    token_path = app_dir / TOKEN_FILE_NAME
    try:
        token_path.stat()
    except FileNotFoundError:
        creds = authorize(client_config, scopes, prompt)
        save_token(token_path, creds)
        return creds
    except OSError as e:
        raise TokenCheckError("error checking token file") from e

    return load_token(token_path, scopes, client_config)


def authorize(
    client_config: dict[str, Any],
    scopes: list[str],
    prompt: Callable[[str], str] = input,
) -> Credentials:
    """Exchange an operator-supplied authorization code for a token."""
    try:
        flow = InstalledAppFlow.from_client_config(
            client_config, scopes=scopes, redirect_uri=_redirect_uri(client_config)
        )
    except ValueError as e:
        raise CredentialsFormatError(
            f"Unable to parse client secret file to config: {e}"
        ) from e
    auth_url, _ = flow.authorization_url(access_type="offline", state=AUTH_STATE)

    print("Go to the following link in your browser then type the authorization code:")
    print(auth_url)

    try:
        code = prompt("Authorization code: ").strip()
    except EOFError as e:
        raise AuthorizationError("Unable to read authorization code") from e
    if not code:
        raise AuthorizationError("Unable to read authorization code: empty input")

    try:
        flow.fetch_token(code=code)
    except Exception as e:
        raise AuthorizationError(f"Unable to retrieve token from web: {e}") from e

    logger.info("Authorization code exchanged for a new token")
    return flow.credentials


def save_token(token_path: Path, creds: Credentials) -> None:
    """Serialize the token to JSON and overwrite token.json."""
    try:
        token_path.write_text(creds.to_json(), encoding="utf-8")
    except OSError as e:
        raise TokenWriteError(f"Error writing to file: {e}") from e
    logger.info("Token saved to %s", token_path)


def load_token(
    token_path: Path,
    scopes: list[str],
    client_config: dict[str, Any] | None = None,
) -> Credentials:
    """Read token.json back into Credentials without validating expiry."""
    try:
        raw = token_path.read_text(encoding="utf-8")
    except OSError as e:
        raise TokenReadError("error reading token from file") from e

    try:
        info = json.loads(raw)
    except json.JSONDecodeError as e:
        raise TokenFormatError("error deserializing token from file") from e

    creds = credentials_from_info(info, scopes, client_config)
    logger.debug("Loaded cached token from %s", token_path)
    return creds


def credentials_from_info(
    info: Any,
    scopes: list[str],
    client_config: dict[str, Any] | None = None,
) -> Credentials:
    """Rebuild Credentials from the dict written by Credentials.to_json().

    Only the access token is required. Unlike
    Credentials.from_authorized_user_info, a token without a refresh token
    or client secret is accepted, and a missing expiry stays unset.

    When a client config is given, its client id, secret and token URI take
    precedence over the ones stored with the token.

    Raises:
        TokenFormatError: If the access token is missing or a field is malformed.
    """
    if not isinstance(info, dict) or not isinstance(info.get("token"), str):
        raise TokenFormatError("error deserializing token from file: missing access token")

    expiry = info.get("expiry")
    if expiry:
        try:
            # Credentials.to_json writes naive UTC with a trailing "Z"
            expiry = datetime.fromisoformat(str(expiry).rstrip("Z"))
        except ValueError as e:
            raise TokenFormatError(f"error deserializing token from file: {e}") from e
    else:
        expiry = None

    client = client_section(client_config) or {}

    return Credentials(
        token=info["token"],
        refresh_token=info.get("refresh_token"),
        token_uri=client.get("token_uri") or info.get("token_uri"),
        client_id=client.get("client_id") or info.get("client_id"),
        client_secret=client.get("client_secret") or info.get("client_secret"),
        scopes=info.get("scopes") or scopes,
        expiry=expiry,
    )


def _redirect_uri(client_config: dict[str, Any]) -> str | None:
    """First redirect URI registered for the client."""
    client = client_section(client_config) or {}
    redirect_uris = client.get("redirect_uris") or [None]
    return redirect_uris[0]
