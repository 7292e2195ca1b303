"""Security utilities for password hashing.

Passwords are hashed with bcrypt through passlib. The work factor comes from
``BCRYPT_WORK_FACTOR`` so test runs can lower it.
"""

from passlib.context import CryptContext

from src.core.config.settings import BCRYPT_WORK_FACTOR

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_WORK_FACTOR,
)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password to hash

    Returns:
        str: Bcrypt-hashed password
    """
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Uses passlib's constant-time comparison. A malformed or unknown hash
    verifies as False instead of raising.

    Args:
        password: Plain text password to verify
        hashed_password: Bcrypt hash to verify against

    Returns:
        bool: True if password matches hash
    """
    if not password or not hashed_password:
        return False
    try:
        return pwd_context.verify(password, hashed_password)
    except ValueError:
        return False
