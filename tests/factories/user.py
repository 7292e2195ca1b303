"""Factory for generating fake user data for testing."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from faker import Faker

from src.domain.entities.user import User

fake = Faker()


def create_fake_user(
    id: Optional[int] = None,
    email: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    hashed_password: Optional[str] = None,
    is_active: bool = True,
    created_at: Optional[datetime] = None,
) -> User:
    """Create a fake User entity for testing.

    Args:
        id (Optional[int]): User ID, defaults to a random integer.
        email (Optional[str]): Email, defaults to a fake (lowercase) email.
        first_name (Optional[str]): Given name, defaults to a fake first name.
        last_name (Optional[str]): Family name, defaults to a fake last name.
        hashed_password (Optional[str]): Stored hash, defaults to None.
        is_active (bool): Whether the user is active, defaults to True.
        created_at (Optional[datetime]): Creation timestamp, defaults to now.

    Returns:
        User: A fake User entity.
    """
    return User(
        id=id if id is not None else fake.random_int(min=1, max=10000),
        email=email if email is not None else fake.unique.email().lower(),
        first_name=first_name if first_name is not None else fake.first_name(),
        last_name=last_name if last_name is not None else fake.last_name(),
        hashed_password=hashed_password,
        is_active=is_active,
        created_at=created_at if created_at is not None else datetime.now(timezone.utc),
    )
