import pytest

from src.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    DatabaseError,
    InvalidTokenError,
    SessionGuardError,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc_class, code",
    [
        (ConfigurationError, "configuration_error"),
        (DatabaseError, "database_error"),
        (AuthenticationError, "authentication_error"),
        (ValidationError, "validation_error"),
    ],
)
def test_default_codes(exc_class, code):
    exc = exc_class("message")

    assert exc.code == code
    assert str(exc) == "message"
    assert isinstance(exc, SessionGuardError)


def test_invalid_token_defaults():
    exc = InvalidTokenError()

    assert isinstance(exc, AuthenticationError)
    assert exc.message == "Invalid token."
    assert exc.code == "invalid_token"
