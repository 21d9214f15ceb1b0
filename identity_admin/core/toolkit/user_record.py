"""Immutable views of Identity Toolkit account representations."""
from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .exceptions import MalformedResponseError


def _to_int(value: Any, key: str) -> Optional[int]:
    # The API encodes timestamps as decimal strings.
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(f"{key} must be an integer, got {value!r}") from exc


def _parse_custom_claims(raw: Any) -> Optional[Dict[str, Any]]:
    if raw is None:
        return None
    if isinstance(raw, dict):
        return raw or None
    if not raw or raw == "{}":
        return None
    try:
        claims = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(f"customAttributes is not valid JSON: {raw!r}") from exc
    if not isinstance(claims, dict):
        raise MalformedResponseError(f"customAttributes must encode a JSON object, got {raw!r}")
    return claims or None


@dataclass(frozen=True)
class ProviderUserInfo:
    """Identity linked to an account by a sign-in provider (password, google.com, phone, ...)."""
    uid: Optional[str]
    provider_id: Optional[str]
    email: Optional[str] = None
    phone_number: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ProviderUserInfo":
        return cls(
            uid=data.get("rawId"),
            provider_id=data.get("providerId"),
            email=data.get("email"),
            phone_number=data.get("phoneNumber"),
            display_name=data.get("displayName"),
            photo_url=data.get("photoUrl"),
        )


@dataclass(frozen=True)
class UserMetadata:
    """Account timestamps in milliseconds since the epoch."""
    creation_timestamp: Optional[int] = None
    last_sign_in_timestamp: Optional[int] = None


@dataclass(frozen=True)
class UserRecord:
    """A single account as returned by ``accounts:lookup``.

    Build instances with :meth:`from_api`; the raw response map is the only
    supported source.
    """
    uid: str
    email: Optional[str] = None
    phone_number: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    disabled: bool = False
    email_verified: bool = False
    custom_claims: Optional[Dict[str, Any]] = None
    provider_data: Tuple[ProviderUserInfo, ...] = ()
    user_metadata: UserMetadata = field(default_factory=UserMetadata)
    tokens_valid_after_timestamp: Optional[int] = None
    password_hash: Optional[str] = None
    password_salt: Optional[str] = None
    tenant_id: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "UserRecord":
        """Build a record from a raw user map.

        Args:
            data: One entry of the ``users`` list of a lookup response

        Returns:
            UserRecord

        Raises:
            MalformedResponseError: If data is not a map carrying a ``localId``,
                or carries malformed claims or timestamps
        """
        if not isinstance(data, dict) or not data.get("localId"):
            raise MalformedResponseError(f"User record must be a map with a localId, got {data!r}")

        valid_since = _to_int(data.get("validSince"), "validSince")
        return cls(
            uid=data["localId"],
            email=data.get("email"),
            phone_number=data.get("phoneNumber"),
            display_name=data.get("displayName"),
            photo_url=data.get("photoUrl"),
            disabled=bool(data.get("disabled", False)),
            email_verified=bool(data.get("emailVerified", False)),
            custom_claims=_parse_custom_claims(data.get("customAttributes")),
            provider_data=tuple(
                ProviderUserInfo.from_api(entry) for entry in data.get("providerUserInfo") or []
            ),
            user_metadata=UserMetadata(
                creation_timestamp=_to_int(data.get("createdAt"), "createdAt"),
                last_sign_in_timestamp=_to_int(data.get("lastLoginAt"), "lastLoginAt"),
            ),
            tokens_valid_after_timestamp=valid_since * 1000 if valid_since is not None else None,
            password_hash=data.get("passwordHash"),
            password_salt=data.get("salt"),
            tenant_id=data.get("tenantId"),
        )
