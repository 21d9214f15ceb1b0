"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"
DEFAULT_REQUEST_TIMEOUT = 10.0


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                logger.info("[settings] Loaded %s from /run/secrets", secret_name)
                return secret_value
        except OSError as e:
            logger.warning("[settings] Failed to read /run/secrets/%s: %s", secret_name, e)

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.info("[settings] Loaded %s from environment (fallback)", env_var)
            return secret_value

    return None


@dataclass
class AppConfig:
    """Client configuration container."""
    project_id: str = ""
    credentials_file: str = ""
    access_token: str = ""
    base_url: str = DEFAULT_TOOLKIT_URL
    emulator_host: str = ""
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def use_emulator(self) -> bool:
        return bool(self.emulator_host)

    @property
    def resolved_base_url(self) -> str:
        """Base URL for requests; the Auth emulator takes precedence when configured."""
        if self.emulator_host:
            return f"http://{self.emulator_host}/identitytoolkit.googleapis.com/v1"
        return self.base_url


def _parse_timeout(raw: str | None) -> float:
    if not raw:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"IDENTITY_REQUEST_TIMEOUT must be a number, got {raw!r}") from exc
    if timeout <= 0:
        raise RuntimeError(f"IDENTITY_REQUEST_TIMEOUT must be positive, got {raw!r}")
    return timeout


def load_settings() -> AppConfig:
    """Load client settings from environment and /run/secrets.

    The project id is optional here: when missing, it is taken from the
    service-account key at client construction time.
    """
    return AppConfig(
        project_id=os.environ.get("IDENTITY_PROJECT_ID") or os.environ.get("GOOGLE_CLOUD_PROJECT", ""),
        credentials_file=os.environ.get("GOOGLE_APPLICATION_CREDENTIALS", ""),
        access_token=_load_secret_from_file("identity_access_token", "IDENTITY_ACCESS_TOKEN") or "",
        base_url=(os.environ.get("IDENTITY_TOOLKIT_URL") or DEFAULT_TOOLKIT_URL).rstrip("/"),
        emulator_host=os.environ.get("FIREBASE_AUTH_EMULATOR_HOST", ""),
        request_timeout=_parse_timeout(os.environ.get("IDENTITY_REQUEST_TIMEOUT")),
    )
