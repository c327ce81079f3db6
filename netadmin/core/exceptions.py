"""Custom exception classes for NetAdmin.

Every error carries the HTTP status it is rendered with. The handler in
``netadmin.main`` turns them into short plain-text responses.
"""


class NetAdminError(Exception):
    """Base exception for NetAdmin."""

    status_code = 500

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)

    @property
    def public_message(self) -> str:
        """Text sent to the client."""
        return self.message


class ConfigurationError(NetAdminError):
    """Raised when required configuration (e.g. the signing secret) is missing."""
    status_code = 500


class TokenInvalid(NetAdminError):
    """Raised when the bearer token is missing, malformed, forged or expired.

    The client always sees the same body whatever the sub-cause;
    ``message`` keeps the detail for the logs.
    """
    status_code = 403

    @property
    def public_message(self) -> str:
        return "Invalid token"


class TokenExpired(TokenInvalid):
    """Raised when a correctly signed token is past its expiry."""
    pass


class AuthenticationError(NetAdminError):
    """Raised when login credentials are rejected."""
    status_code = 403


class IdentityNotFound(NetAdminError):
    """Raised when a token refers to a missing or soft-deleted account."""
    status_code = 403


class Forbidden(NetAdminError):
    """Raised when the resolved identity lacks the required access."""
    status_code = 403


class ResourceNotFoundError(NetAdminError):
    """Raised when a requested resource is not found or soft-deleted."""
    status_code = 404


class StoreFault(NetAdminError):
    """Raised when the database fails during an authorization lookup."""
    status_code = 500

    @property
    def public_message(self) -> str:
        return "Internal Server Error"


class ValidationError(NetAdminError):
    """Raised when input validation fails."""
    status_code = 400


class ResourceConflictError(NetAdminError):
    """Raised when a resource already exists."""
    status_code = 409
