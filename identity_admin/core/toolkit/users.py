"""Identity Toolkit account management operations."""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .. import validators
from .exceptions import (
    CreateUserError,
    InvalidArgumentError,
    SetCustomUserClaimsError,
    UpdateUserError,
)
from .user_record import UserRecord

logger = logging.getLogger(__name__)

DEFAULT_SESSION_DURATION = 432000


class _Unset:
    """Marker for a keyword argument the caller did not supply."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()


class PayloadBuilder:
    """Assemble a request payload, emitting only the fields that were supplied.

    ``add`` skips UNSET values and values that validate to None, so an absent
    field never reaches the wire. ``add_nullable`` emits an explicit null when
    the caller passed None, which the API reads as "clear this value".
    """

    def __init__(self):
        self._payload: Dict[str, Any] = {}

    def add(self, key: str, value: Any, validator: Callable[[Any], Any]) -> "PayloadBuilder":
        if value is UNSET:
            return self
        normalized = validator(value)
        if normalized is not None:
            self._payload[key] = normalized
        return self

    def add_nullable(self, key: str, value: Any, validator: Callable[[Any], Any]) -> "PayloadBuilder":
        if value is UNSET:
            return self
        self._payload[key] = None if value is None else validator(value)
        return self

    def build(self) -> Dict[str, Any]:
        return dict(self._payload)


@dataclass(frozen=True)
class UserQuery:
    """Lookup selector holding exactly one of uid, email or phone number.

    Usage:
        UserQuery.by_email("alice@example.com")
        UserQuery.from_kwargs(uid="alice")
    """
    kind: str
    value: str

    _FIELDS = {
        "uid": ("localId", "validate_uid"),
        "email": ("email", "validate_email"),
        "phone_number": ("phoneNumber", "validate_phone_number"),
    }

    def __post_init__(self):
        if self.kind not in self._FIELDS:
            raise InvalidArgumentError(f"Unsupported query: {self.kind!r}")
        _, validator_name = self._FIELDS[self.kind]
        getattr(validators, validator_name)(self.value, required=True)

    @classmethod
    def by_uid(cls, uid: str) -> "UserQuery":
        return cls("uid", uid)

    @classmethod
    def by_email(cls, email: str) -> "UserQuery":
        return cls("email", email)

    @classmethod
    def by_phone_number(cls, phone_number: str) -> "UserQuery":
        return cls("phone_number", phone_number)

    @classmethod
    def from_kwargs(cls, **query: Any) -> "UserQuery":
        """Build a selector from exactly one keyword argument.

        Raises:
            InvalidArgumentError: If zero or several keys are given, or the key is unsupported
        """
        if len(query) != 1:
            raise InvalidArgumentError(
                f"Unsupported query: {query!r} (expected exactly one of uid, email, phone_number)"
            )
        (kind, value), = query.items()
        return cls(kind, value)

    def to_payload(self) -> Dict[str, list]:
        wire_key, _ = self._FIELDS[self.kind]
        return {wire_key: [self.value]}


class UserManager:
    """Account operations against the Identity Toolkit API.

    Holds only the project id and the injected transport; any object with a
    ``post(path, payload)`` method returning a response with a ``body``
    attribute can serve as transport.
    """

    def __init__(self, project_id: str, client):
        """Initialize the user manager.

        Args:
            project_id: Project that owns the accounts
            client: Authenticated transport (e.g. IdentityToolkitClient)
        """
        if not project_id or not isinstance(project_id, str):
            raise InvalidArgumentError("project id must be a non-empty string")
        self.project_id = project_id
        self.client = client

    def create_user(
        self,
        uid: Any = UNSET,
        display_name: Any = UNSET,
        email: Any = UNSET,
        email_verified: Any = UNSET,
        phone_number: Any = UNSET,
        photo_url: Any = UNSET,
        password: Any = UNSET,
        disabled: Any = UNSET,
    ) -> UserRecord:
        """Create a new user account with the specified properties.

        Args:
            uid: Id to assign to the new user (generated by the API when omitted)
            display_name: Display name
            email: Primary email
            email_verified: Whether the primary email is verified
            phone_number: Primary phone number (E.164)
            photo_url: Photo URL
            password: Raw, unhashed password
            disabled: Whether the account is disabled

        Returns:
            The created user, as returned by a follow-up lookup

        Raises:
            InvalidArgumentError: If a supplied field is invalid
            CreateUserError: If the response does not carry the new user id
        """
        payload = (
            PayloadBuilder()
            .add("localId", uid, validators.validate_uid)
            .add("displayName", display_name, validators.validate_display_name)
            .add("email", email, validators.validate_email)
            .add("phoneNumber", phone_number, validators.validate_phone_number)
            .add("photoUrl", photo_url, validators.validate_photo_url)
            .add("password", password, validators.validate_password)
            .add("emailVerified", email_verified, validators.to_boolean)
            .add("disabled", disabled, validators.to_boolean)
            .build()
        )
        res = self.client.post(self._with_path("accounts"), payload).body
        new_uid = res.get("localId") if isinstance(res, dict) else None
        if new_uid is None:
            logger.warning("[users] Create user returned no localId: %s", res)
            raise CreateUserError(f"failed to create user {res}")
        logger.info("[users] Created user (uid=%s)", new_uid)
        return self.get_user_by(uid=new_uid)

    def get_user_by(self, query: Optional[UserQuery] = None, **kwargs: Any) -> Optional[UserRecord]:
        """Get the user matching a uid, email or phone number.

        Args:
            query: Selector; alternatively pass exactly one of uid=, email=, phone_number=

        Returns:
            UserRecord, or None if no user matches

        Raises:
            InvalidArgumentError: If the selector is missing, ambiguous or invalid
            MalformedResponseError: If the matching user entry cannot be mapped to a record
        """
        if query is None:
            query = UserQuery.from_kwargs(**kwargs)
        elif kwargs:
            raise InvalidArgumentError("Pass either a UserQuery or keyword selectors, not both")

        res = self.client.post(self._with_path("accounts:lookup"), query.to_payload()).body
        users = res.get("users") if isinstance(res, dict) else None
        if isinstance(users, list) and users:
            return UserRecord.from_api(users[0])
        logger.debug("[users] No user found for %s=%s", query.kind, query.value)
        return None

    def get_user(self, uid: str) -> Optional[UserRecord]:
        return self.get_user_by(UserQuery.by_uid(uid))

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        return self.get_user_by(UserQuery.by_email(email))

    def get_user_by_phone_number(self, phone_number: str) -> Optional[UserRecord]:
        return self.get_user_by(UserQuery.by_phone_number(phone_number))

    def delete_user(self, uid: str) -> None:
        """Delete the user with the given id.

        Success means the transport did not raise; the response body is ignored.
        """
        payload = {"localId": validators.validate_uid(uid, required=True)}
        self.client.post(self._with_path("accounts:delete"), payload)
        logger.info("[users] Deleted user (uid=%s)", uid)

    def create_session_cookie(self, id_token: str, valid_duration: int = DEFAULT_SESSION_DURATION) -> Any:
        """Mint a session cookie from an ID token.

        Args:
            id_token: ID token issued to the signed-in user
            valid_duration: Cookie lifetime in seconds (5 minutes to 14 days)

        Returns:
            The raw response body
        """
        payload = {
            "idToken": validators.validate_id_token(id_token),
            "validDuration": validators.validate_session_duration(valid_duration),
        }
        return self.client.post(f"projects/{self.project_id}:createSessionCookie", payload).body

    def set_custom_user_claims(self, uid: str, custom_claims: Optional[Dict[str, Any]]) -> UserRecord:
        """Set custom claims for a user.

        Args:
            uid: Id of the user
            custom_claims: Claims to set; None removes all custom claims

        Returns:
            The updated user

        Raises:
            InvalidArgumentError: If uid or claims are invalid
            SetCustomUserClaimsError: If the response does not carry the user id
        """
        payload = (
            PayloadBuilder()
            .add("localId", uid, lambda value: validators.validate_uid(value, required=True))
            .add_nullable("customAttributes", custom_claims, validators.validate_custom_claims)
            .build()
        )
        res = self.client.post(self._with_path("accounts:update"), payload).body
        if not isinstance(res, dict) or res.get("localId") is None:
            logger.warning("[users] Set custom claims returned no localId: %s", res)
            raise SetCustomUserClaimsError(f"failed to set custom claims: {res}")
        logger.info("[users] Custom claims %s (uid=%s)", "cleared" if custom_claims is None else "set", uid)
        return self.get_user_by(uid=uid)

    def update_user(
        self,
        uid: str,
        display_name: Any = UNSET,
        email: Any = UNSET,
        email_verified: Any = UNSET,
        phone_number: Any = UNSET,
        photo_url: Any = UNSET,
        password: Any = UNSET,
        disabled: Any = UNSET,
        custom_claims: Any = UNSET,
    ) -> UserRecord:
        """Update an existing user account with the specified properties.

        Only supplied fields are sent. ``custom_claims=None`` clears all custom
        claims, like :meth:`set_custom_user_claims`.

        Returns:
            The updated user

        Raises:
            InvalidArgumentError: If uid or a supplied field is invalid
            UpdateUserError: If the response does not carry the user id
        """
        payload = (
            PayloadBuilder()
            .add("localId", uid, lambda value: validators.validate_uid(value, required=True))
            .add("email", email, validators.validate_email)
            .add("displayName", display_name, validators.validate_display_name)
            .add("phoneNumber", phone_number, validators.validate_phone_number)
            .add("photoUrl", photo_url, validators.validate_photo_url)
            .add("password", password, validators.validate_password)
            .add("emailVerified", email_verified, validators.to_boolean)
            .add("disabled", disabled, validators.to_boolean)
            .add_nullable("customAttributes", custom_claims, validators.validate_custom_claims)
            .build()
        )
        res = self.client.post(self._with_path("accounts:update"), payload).body
        if not isinstance(res, dict) or res.get("localId") is None:
            logger.warning("[users] Update user returned no localId: %s", res)
            raise UpdateUserError(f"failed to update user {res}")
        logger.info("[users] Updated user (uid=%s)", uid)
        return self.get_user_by(uid=uid)

    def _with_path(self, path: str) -> str:
        return f"projects/{self.project_id}/{path}"


def create_user_manager(settings=None) -> UserManager:
    """Build a UserManager from settings (loaded from the environment by default).

    The project id falls back to the one recorded in the service-account key.

    Raises:
        RuntimeError: If no credentials or no project id are configured
    """
    from ...config import load_settings
    from .client import create_client_from_settings

    settings = settings or load_settings()
    client = create_client_from_settings(settings)
    project_id = settings.project_id or getattr(client.credentials, "project_id", None)
    if not project_id:
        raise RuntimeError(
            "Project id not configured. Set IDENTITY_PROJECT_ID or GOOGLE_CLOUD_PROJECT, "
            "or use a service account key that records its project_id."
        )
    return UserManager(project_id, client)
