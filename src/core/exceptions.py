"""Centralized, structured exception hierarchy for SessionGuard.

Each exception carries a machine-readable `code` for programmatic handling and
a human-readable `message` for logging and user feedback.

Only two families are allowed to escape the token lifecycle service:

- `ConfigurationError`: the process cannot sign or verify tokens at all.
- `DatabaseError`: the refresh token store could not honor its contract.

Every other failure (bad credentials, replayed refresh token, ...) is
returned to the caller as a structured result, see
`src.domain.value_objects.auth_result`. The authentication exceptions below are
raised inside the domain and translated into results at the service boundary.
"""

from __future__ import annotations

from typing import Final

__all__: Final = [
    "SessionGuardError",
    "ConfigurationError",
    "AuthenticationError",
    "InvalidTokenError",
    "DatabaseError",
    "ValidationError",
]


class SessionGuardError(Exception):
    """Base exception class for all custom errors in the SessionGuard application.

    Attributes:
        message (str): A human-readable error message, suitable for logging.
        code (str): A unique, machine-readable error code for identifying
                    the type of error programmatically.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    # A concise, structured representation used by loggers & FastAPI handlers.
    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Fatal errors (propagated, typically map to 5xx)
# ---------------------------------------------------------------------------


class ConfigurationError(SessionGuardError):
    """Raised when signing material or token lifetimes are missing or invalid.

    This is a startup condition, not a per-request error. It maps to a
    `500 Internal Server Error` if it ever surfaces during a request.
    """

    def __init__(self, message: str, code: str = "configuration_error"):
        super().__init__(message, code)


class DatabaseError(SessionGuardError):
    """Raised for storage-layer faults.

    This exception wraps underlying database driver errors, abstracting away
    implementation details. It is never masked as a business failure and
    typically maps to a `503 Service Unavailable` HTTP status. Retrying is
    the caller's responsibility.
    """

    def __init__(self, message: str, code: str = "database_error"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Auth-related errors
# ---------------------------------------------------------------------------


class AuthenticationError(SessionGuardError):
    """Raised for general authentication failures.

    Maps to a `401 Unauthorized` HTTP status code when it reaches the API layer.
    """

    def __init__(self, message: str, code: str = "authentication_error"):
        super().__init__(message, code)


class InvalidTokenError(AuthenticationError):
    """Raised when an access token is malformed, badly signed or uses a
    forbidden algorithm."""

    def __init__(self, message: str = "Invalid token.", code: str = "invalid_token"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Validation errors (typically map to 400 Bad Request)
# ---------------------------------------------------------------------------


class ValidationError(SessionGuardError):
    """Raised for general data validation failures."""

    def __init__(self, message: str, code: str = "validation_error"):
        super().__init__(message, code)

