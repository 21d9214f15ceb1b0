"""Identity Toolkit account-management client library.

Architecture:
- client.py: HTTP transport with bearer authentication and error mapping
- credentials.py: Access token providers (service account, static token, emulator)
- users.py: Account operations (create, lookup, update, delete, claims, session cookies)
- user_record.py: Immutable user record value objects
- exceptions.py: Typed exceptions for error handling

Usage:
    from identity_admin.core.toolkit import create_user_manager

    users = create_user_manager()
    user = users.create_user(email="alice@example.com", password="s3cret!")
    users.set_custom_user_claims(user.uid, {"admin": True})
"""
from .client import (
    ApiResponse,
    IdentityToolkitClient,
    create_client_from_settings,
    create_client_with_token,
    ID_TOOLKIT_URL,
    REQUEST_TIMEOUT,
)
from .credentials import (
    EmulatorCredentials,
    ServiceAccountCredentials,
    StaticTokenCredentials,
)
from .exceptions import (
    IdentityToolkitError,
    IdentityToolkitAPIError,
    InvalidArgumentError,
    CreateUserError,
    UpdateUserError,
    SetCustomUserClaimsError,
    CredentialsError,
    MalformedResponseError,
    UserNotFoundError,
    UserAlreadyExistsError,
    InsufficientPermissionsError,
)
from .user_record import (
    ProviderUserInfo,
    UserMetadata,
    UserRecord,
)
from .users import (
    UNSET,
    PayloadBuilder,
    UserQuery,
    UserManager,
    create_user_manager,
)

__all__ = [
    # Client
    "ApiResponse",
    "IdentityToolkitClient",
    "create_client_from_settings",
    "create_client_with_token",
    "ID_TOOLKIT_URL",
    "REQUEST_TIMEOUT",

    # Credentials
    "EmulatorCredentials",
    "ServiceAccountCredentials",
    "StaticTokenCredentials",

    # Exceptions
    "IdentityToolkitError",
    "IdentityToolkitAPIError",
    "InvalidArgumentError",
    "CreateUserError",
    "UpdateUserError",
    "SetCustomUserClaimsError",
    "CredentialsError",
    "MalformedResponseError",
    "UserNotFoundError",
    "UserAlreadyExistsError",
    "InsufficientPermissionsError",

    # Records
    "ProviderUserInfo",
    "UserMetadata",
    "UserRecord",

    # Users
    "UNSET",
    "PayloadBuilder",
    "UserQuery",
    "UserManager",
    "create_user_manager",
]
