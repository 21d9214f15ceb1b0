"""Low-level HTTP client for the Identity Toolkit API.

Handles authentication headers, JSON encoding and error mapping.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from .credentials import EmulatorCredentials, ServiceAccountCredentials, StaticTokenCredentials
from .exceptions import (
    IdentityToolkitAPIError,
    InsufficientPermissionsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

ID_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"
REQUEST_TIMEOUT = 10

_ERROR_CODES = {
    "USER_NOT_FOUND": UserNotFoundError,
    "DUPLICATE_LOCAL_ID": UserAlreadyExistsError,
    "EMAIL_EXISTS": UserAlreadyExistsError,
    "PHONE_NUMBER_EXISTS": UserAlreadyExistsError,
    "INSUFFICIENT_PERMISSION": InsufficientPermissionsError,
}


@dataclass(frozen=True)
class ApiResponse:
    """Response returned by ``IdentityToolkitClient.post``.

    Attributes:
        status_code: HTTP status code
        body: Parsed JSON body, raw text for non-JSON bodies, or None when empty
    """
    status_code: int
    body: Any


class IdentityToolkitClient:
    """HTTP client for the Identity Toolkit API.

    Usage:
        client = IdentityToolkitClient(credentials=ServiceAccountCredentials.from_file(path))
        response = client.post("projects/demo/accounts:lookup", {"localId": ["alice"]})
    """

    def __init__(self, base_url: Optional[str] = None, credentials=None, timeout: float = REQUEST_TIMEOUT):
        """Initialize the client.

        Args:
            base_url: API base URL (defaults to ID_TOOLKIT_URL)
            credentials: Object exposing get_access_token()
            timeout: Per-request timeout in seconds
        """
        self.base_url = (base_url or ID_TOOLKIT_URL).rstrip("/")
        self.credentials = credentials
        self.timeout = timeout

    def post(self, path: str, payload: Optional[Dict[str, Any]] = None) -> ApiResponse:
        """Execute POST request with a JSON payload.

        Args:
            path: Path relative to the base URL (e.g. "projects/demo/accounts")
            payload: JSON payload

        Returns:
            ApiResponse

        Raises:
            IdentityToolkitAPIError: On HTTP error
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = {"Content-Type": "application/json"}
        if self.credentials is not None:
            headers["Authorization"] = f"Bearer {self.credentials.get_access_token()}"

        logger.debug("[toolkit] POST %s", url)
        resp = requests.post(url, json=payload, headers=headers, timeout=self.timeout)
        self._handle_error(resp)
        return ApiResponse(status_code=resp.status_code, body=self._parse_body(resp))

    @staticmethod
    def _parse_body(resp: requests.Response) -> Any:
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return resp.text

    def _handle_error(self, resp: requests.Response) -> None:
        """Raise a typed error when the response status indicates failure.

        Google APIs report failures as ``{"error": {"message": "CODE : detail"}}``;
        known codes map to subclasses of IdentityToolkitAPIError.
        """
        if resp.status_code < 400:
            return

        message = resp.text
        code = None
        try:
            error = resp.json().get("error") or {}
            if isinstance(error, dict) and error.get("message"):
                message = error["message"]
                code = message.split(":", 1)[0].strip()
        except (ValueError, AttributeError):
            pass

        logger.warning("[toolkit] %s returned %s: %s", resp.url, resp.status_code, message)
        error_cls = _ERROR_CODES.get(code, IdentityToolkitAPIError)
        raise error_cls(resp.status_code, message, resp.url)


# ─────────────────────────────────────────────────────────────────────────────
# Construction from settings
# ─────────────────────────────────────────────────────────────────────────────
def create_client_with_token(token: str, base_url: Optional[str] = None, timeout: float = REQUEST_TIMEOUT) -> IdentityToolkitClient:
    """Create a client authenticated with a pre-obtained access token."""
    return IdentityToolkitClient(base_url, StaticTokenCredentials(token), timeout)


def create_client_from_settings(settings) -> IdentityToolkitClient:
    """Create a client from an AppConfig.

    Credential priority:
    1. Auth emulator (FIREBASE_AUTH_EMULATOR_HOST)
    2. Static access token (/run/secrets/identity_access_token or IDENTITY_ACCESS_TOKEN)
    3. Service-account key file (GOOGLE_APPLICATION_CREDENTIALS)

    Raises:
        RuntimeError: If no credentials are configured
    """
    if settings.use_emulator:
        logger.info("[toolkit] Using Auth emulator at %s", settings.emulator_host)
        credentials = EmulatorCredentials()
    elif settings.access_token:
        credentials = StaticTokenCredentials(settings.access_token)
    elif settings.credentials_file:
        credentials = ServiceAccountCredentials.from_file(settings.credentials_file)
    else:
        raise RuntimeError(
            "No credentials configured. Set GOOGLE_APPLICATION_CREDENTIALS, "
            "IDENTITY_ACCESS_TOKEN or FIREBASE_AUTH_EMULATOR_HOST."
        )
    return IdentityToolkitClient(settings.resolved_base_url, credentials, settings.request_timeout)
