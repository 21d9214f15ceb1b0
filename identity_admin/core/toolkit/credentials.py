"""Access token providers for the Identity Toolkit client.

Each provider exposes ``get_access_token()``; the HTTP client calls it before
every request and attaches the result as a Bearer token.
"""
from __future__ import annotations
import json
import logging
import time
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import jwt
import requests

from .exceptions import CredentialsError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10
TOKEN_LIFETIME = 3600
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"
SCOPES = (
    "https://www.googleapis.com/auth/cloud-platform",
    "https://www.googleapis.com/auth/datastore",
    "https://www.googleapis.com/auth/identitytoolkit",
    "https://www.googleapis.com/auth/userinfo.email",
)


class StaticTokenCredentials:
    """Credentials wrapping a pre-obtained access token."""

    def __init__(self, token: str):
        if not token:
            raise CredentialsError("Access token must be a non-empty string")
        self._token = token

    def get_access_token(self) -> str:
        return self._token


class EmulatorCredentials:
    """Credentials accepted by the Auth emulator."""

    def get_access_token(self) -> str:
        return "owner"


class ServiceAccountCredentials:
    """Service-account credentials exchanged for OAuth2 access tokens.

    A signed RS256 JWT assertion is posted to the key's ``token_uri``
    (JWT-bearer grant). The resulting token is cached and refreshed shortly
    before it expires.

    Usage:
        creds = ServiceAccountCredentials.from_file("service-account.json")
        token = creds.get_access_token()
    """

    def __init__(
        self,
        client_email: str,
        private_key: str,
        project_id: Optional[str] = None,
        private_key_id: Optional[str] = None,
        token_uri: str = GOOGLE_TOKEN_URI,
        scopes: Sequence[str] = SCOPES,
    ):
        self.client_email = client_email
        self.project_id = project_id
        self.token_uri = token_uri
        self.scopes = tuple(scopes)
        self._private_key = private_key
        self._private_key_id = private_key_id
        self._token: Optional[str] = None
        self._token_expires_at: Optional[datetime] = None

    @classmethod
    def from_info(cls, info: Dict[str, Any]) -> "ServiceAccountCredentials":
        """Build credentials from a parsed service-account key.

        Raises:
            CredentialsError: If the key is not a service-account key
        """
        if info.get("type") != "service_account":
            raise CredentialsError(
                f"Invalid service account credentials: type must be 'service_account', got {info.get('type')!r}"
            )
        missing = [key for key in ("client_email", "private_key") if not info.get(key)]
        if missing:
            raise CredentialsError(f"Invalid service account credentials: missing {', '.join(missing)}")
        return cls(
            client_email=info["client_email"],
            private_key=info["private_key"],
            project_id=info.get("project_id"),
            private_key_id=info.get("private_key_id"),
            token_uri=info.get("token_uri") or GOOGLE_TOKEN_URI,
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "ServiceAccountCredentials":
        """Load credentials from a service-account JSON key file."""
        try:
            info = json.loads(Path(path).read_text())
        except (OSError, ValueError) as exc:
            raise CredentialsError(f"Failed to read service account file {path}: {exc}") from exc
        return cls.from_info(info)

    def get_access_token(self) -> str:
        """Return a valid access token, refreshing if expired or expiring soon."""
        if (
            self._token is None
            or self._token_expires_at is None
            or datetime.now() >= self._token_expires_at - timedelta(seconds=60)
        ):
            self._refresh()
        return self._token

    def _assertion(self) -> str:
        now = int(time.time())
        claims = {
            "iss": self.client_email,
            "scope": " ".join(self.scopes),
            "aud": self.token_uri,
            "iat": now,
            "exp": now + TOKEN_LIFETIME,
        }
        headers = {"kid": self._private_key_id} if self._private_key_id else None
        return jwt.encode(claims, self._private_key, algorithm="RS256", headers=headers)

    def _refresh(self) -> None:
        logger.debug("[credentials] Refreshing access token for %s", self.client_email)
        resp = requests.post(
            self.token_uri,
            data={"grant_type": JWT_BEARER_GRANT, "assertion": self._assertion()},
            timeout=REQUEST_TIMEOUT,
        )
        if resp.status_code != 200:
            raise CredentialsError(f"Token exchange failed [{resp.status_code}]: {resp.text}")
        try:
            body = resp.json()
            token = body["access_token"]
            expires_in = int(body.get("expires_in", TOKEN_LIFETIME))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise CredentialsError(f"Malformed token response: {resp.text}") from exc
        self._token = token
        self._token_expires_at = datetime.now() + timedelta(seconds=expires_in)
