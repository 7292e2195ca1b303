"""Service interfaces for the collaborators of the token lifecycle.

The identity store (lookup, account creation, role membership and password
verification) is deliberately outside the token lifecycle: the lifecycle
service only talks to it through `IUserManager`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from src.domain.entities.user import User

# Failure code of `IdentityResult` when the email is already registered.
DUPLICATE_EMAIL = "duplicate_email"


@dataclass(frozen=True)
class IdentityResult:
    """Outcome of an identity store write.

    Attributes:
        succeeded: Whether the write was applied.
        errors: Human-readable reasons when it was not (for example every
            unmet password rule).
        code: Machine-readable failure category, such as `DUPLICATE_EMAIL`.
    """

    succeeded: bool
    errors: List[str] = field(default_factory=list)
    code: Optional[str] = None

    @classmethod
    def success(cls) -> "IdentityResult":
        return cls(succeeded=True)

    @classmethod
    def failed(cls, *errors: str, code: Optional[str] = None) -> "IdentityResult":
        return cls(succeeded=False, errors=list(errors), code=code)


class IUserManager(ABC):
    """Interface for the identity store consumed by the token lifecycle."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Looks a user up by email, case-insensitively."""
        raise NotImplementedError

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Looks a user up by primary key."""
        raise NotImplementedError

    @abstractmethod
    async def create(self, user: User, password: str) -> IdentityResult:
        """Validates ``password``, hashes it onto ``user`` and persists the user.

        Returns:
            A failed `IdentityResult` carrying every reason when the password
            or the user data is rejected. Storage faults are raised, not
            reported.
        """
        raise NotImplementedError

    @abstractmethod
    async def add_to_role(self, user: User, role: str) -> IdentityResult:
        """Adds ``user`` to ``role``."""
        raise NotImplementedError

    @abstractmethod
    async def get_roles(self, user: User) -> List[str]:
        """Returns the names of the roles ``user`` belongs to."""
        raise NotImplementedError

    @abstractmethod
    async def check_password(self, user: User, password: str) -> bool:
        """Verifies ``password`` against the stored hash in constant time."""
        raise NotImplementedError
