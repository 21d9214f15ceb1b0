"""Input validation helpers for account fields.

Every validator returns the value ready for the wire, returns ``None`` when the
value is absent and not required, and raises ``InvalidArgumentError`` otherwise.
"""
from __future__ import annotations
import json
import re
from typing import Any, Optional
from urllib.parse import urlparse

from .toolkit.exceptions import InvalidArgumentError

MAX_UID_LENGTH = 128
MIN_PASSWORD_LENGTH = 6
MAX_CLAIMS_PAYLOAD_SIZE = 1000
MIN_SESSION_DURATION = 5 * 60
MAX_SESSION_DURATION = 14 * 24 * 60 * 60

RESERVED_CLAIMS = frozenset({
    "acr", "amr", "at_hash", "aud", "auth_time", "azp", "cnf", "c_hash",
    "exp", "firebase", "iat", "iss", "jti", "nbf", "nonce", "sub",
})

_EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+")
_PHONE_PATTERN = re.compile(r"\+[1-9]\d{1,14}")


def _check_required(value: Any, field: str, required: bool) -> bool:
    """Return True when validation should continue with a present value."""
    if value is None:
        if required:
            raise InvalidArgumentError(f"{field} is required")
        return False
    return True


def validate_uid(uid: Any, required: bool = False) -> Optional[str]:
    """Validate a user id.

    Args:
        uid: User id
        required: Reject a missing value

    Returns:
        The uid, or None when absent

    Raises:
        InvalidArgumentError: If uid is invalid
    """
    if not _check_required(uid, "uid", required):
        return None
    if not isinstance(uid, str) or not uid:
        raise InvalidArgumentError(f"uid must be a non-empty string, got {uid!r}")
    if len(uid) > MAX_UID_LENGTH:
        raise InvalidArgumentError(f"uid must not exceed {MAX_UID_LENGTH} characters")
    return uid


def validate_display_name(display_name: Any, required: bool = False) -> Optional[str]:
    """Validate a display name (any non-empty string)."""
    if not _check_required(display_name, "display name", required):
        return None
    if not isinstance(display_name, str) or not display_name:
        raise InvalidArgumentError(f"display name must be a non-empty string, got {display_name!r}")
    return display_name


def validate_email(email: Any, required: bool = False) -> Optional[str]:
    """Validate an email address.

    Args:
        email: Email address
        required: Reject a missing value

    Returns:
        The email, or None when absent

    Raises:
        InvalidArgumentError: If email is not a string of the form local@domain
    """
    if not _check_required(email, "email", required):
        return None
    if not isinstance(email, str) or not email:
        raise InvalidArgumentError(f"email must be a non-empty string, got {email!r}")
    if not _EMAIL_PATTERN.fullmatch(email):
        raise InvalidArgumentError(f"Malformed email address: {email!r}")
    return email


def validate_phone_number(phone_number: Any, required: bool = False) -> Optional[str]:
    """Validate an E.164 phone number (e.g. +15005550100).

    Raises:
        InvalidArgumentError: If phone number is not E.164 compliant
    """
    if not _check_required(phone_number, "phone number", required):
        return None
    if not isinstance(phone_number, str) or not phone_number:
        raise InvalidArgumentError(f"phone number must be a non-empty string, got {phone_number!r}")
    if not _PHONE_PATTERN.fullmatch(phone_number):
        raise InvalidArgumentError(
            f"phone number must be a valid, E.164 compliant identifier, got {phone_number!r}"
        )
    return phone_number


def validate_photo_url(photo_url: Any, required: bool = False) -> Optional[str]:
    """Validate a photo URL (absolute http or https URL)."""
    if not _check_required(photo_url, "photo URL", required):
        return None
    if not isinstance(photo_url, str) or not photo_url:
        raise InvalidArgumentError(f"photo URL must be a non-empty string, got {photo_url!r}")
    try:
        parsed = urlparse(photo_url)
    except ValueError as exc:
        raise InvalidArgumentError(f"Malformed photo URL: {photo_url!r}") from exc
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidArgumentError(f"Malformed photo URL: {photo_url!r}")
    return photo_url


def validate_password(password: Any, required: bool = False) -> Optional[str]:
    """Validate a raw password.

    Raises:
        InvalidArgumentError: If password is shorter than MIN_PASSWORD_LENGTH
    """
    if not _check_required(password, "password", required):
        return None
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidArgumentError(
            f"password must be a string at least {MIN_PASSWORD_LENGTH} characters long"
        )
    return password


def to_boolean(value: Any) -> Optional[bool]:
    """Coerce a flag to a strict bool, keeping None as None."""
    if value is None:
        return None
    return bool(value)


def validate_custom_claims(custom_claims: Any) -> Optional[str]:
    """Validate custom claims and return their JSON encoding.

    Args:
        custom_claims: Mapping of claim names to JSON-serializable values, or None

    Returns:
        JSON string, or None when claims are None

    Raises:
        InvalidArgumentError: If claims are not a dict, use reserved names,
            or exceed MAX_CLAIMS_PAYLOAD_SIZE once encoded
    """
    if custom_claims is None:
        return None
    if not isinstance(custom_claims, dict):
        raise InvalidArgumentError(f"custom claims must be a dict, got {type(custom_claims).__name__}")
    reserved = sorted(RESERVED_CLAIMS.intersection(custom_claims))
    if reserved:
        raise InvalidArgumentError(f"Claims {', '.join(reserved)} are reserved and cannot be set")
    try:
        payload = json.dumps(custom_claims)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"custom claims must be JSON serializable: {exc}") from exc
    if len(payload) > MAX_CLAIMS_PAYLOAD_SIZE:
        raise InvalidArgumentError(
            f"custom claims payload must not exceed {MAX_CLAIMS_PAYLOAD_SIZE} characters"
        )
    return payload


def validate_id_token(id_token: Any) -> str:
    if not isinstance(id_token, str) or not id_token:
        raise InvalidArgumentError("id token must be a non-empty string")
    return id_token


def validate_session_duration(valid_duration: Any) -> int:
    """Validate a session cookie duration in seconds (5 minutes to 14 days)."""
    if isinstance(valid_duration, bool) or not isinstance(valid_duration, int):
        raise InvalidArgumentError(f"session duration must be an int, got {valid_duration!r}")
    if not MIN_SESSION_DURATION <= valid_duration <= MAX_SESSION_DURATION:
        raise InvalidArgumentError(
            f"session duration must be between {MIN_SESSION_DURATION} and {MAX_SESSION_DURATION} seconds"
        )
    return valid_duration
