"""Identity Toolkit exceptions for error handling."""


class IdentityToolkitError(Exception):
    """Base exception for all Identity Toolkit operations."""
    pass


class InvalidArgumentError(IdentityToolkitError, ValueError):
    """A caller-supplied field failed local validation (no request was sent)."""
    pass


class CreateUserError(IdentityToolkitError):
    """User creation response did not carry the new user id."""
    pass


class UpdateUserError(IdentityToolkitError):
    """User update response did not carry the user id."""
    pass


class SetCustomUserClaimsError(IdentityToolkitError):
    """Custom claims update response did not carry the user id."""
    pass


class MalformedResponseError(IdentityToolkitError, ValueError):
    """API response could not be mapped onto a user record."""
    pass


class CredentialsError(IdentityToolkitError):
    """Access token could not be obtained."""
    pass


class IdentityToolkitAPIError(IdentityToolkitError):
    """HTTP error from the Identity Toolkit API.

    Attributes:
        status_code: HTTP status code
        message: Error message from response
        endpoint: API endpoint that failed
    """

    def __init__(self, status_code: int, message: str, endpoint: str):
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        super().__init__(f"[{status_code}] {endpoint}: {message}")


class UserNotFoundError(IdentityToolkitAPIError):
    """No user record matches the given identifier."""
    pass


class UserAlreadyExistsError(IdentityToolkitAPIError):
    """User creation failed - uid, email or phone number already in use."""
    pass


class InsufficientPermissionsError(IdentityToolkitAPIError):
    """Credentials lack the permissions required by the operation."""
    pass
