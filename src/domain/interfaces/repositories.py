"""Repository interfaces for abstracting data persistence in the domain layer.

This module defines the abstract base classes (interfaces) for repositories,
which act as "ports" in the context of Hexagonal Architecture. The token
lifecycle service uses these interfaces to interact with persistence without
being coupled to any specific technology.

The concrete implementations reside in the `infrastructure` layer.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities.refresh_token import RefreshToken
from src.domain.entities.user import User


class IUserRepository(ABC):
    """An interface defining the contract for user persistence operations."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Retrieves a user by their unique identifier.

        Returns:
            An optional `User` entity. Returns `None` if no user is found.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Retrieves a user by their email address (case-insensitively)."""
        raise NotImplementedError

    @abstractmethod
    async def save(self, user: User) -> User:
        """Persists a new user or updates an existing one.

        Returns:
            The persisted `User` entity, with its database-assigned ID.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_roles(self, user_id: int) -> List[str]:
        """Returns the role names the user is a member of."""
        raise NotImplementedError

    @abstractmethod
    async def add_role(self, user_id: int, role: str) -> None:
        """Adds the user to ``role``. Adding an existing membership is a no-op."""
        raise NotImplementedError


class IRefreshTokenRepository(ABC):
    """An interface defining the contract for refresh token persistence.

    Rows are append-only apart from the ``is_used`` and ``is_revoked`` flags,
    which only ever move from False to True.

    Every method raises `DatabaseError` on storage faults; none of them masks a
    fault as a missing row.
    """

    @abstractmethod
    async def add(self, token: RefreshToken) -> RefreshToken:
        """Persists a new refresh token record."""
        raise NotImplementedError

    @abstractmethod
    async def get_by_value_and_user(self, value: str, user_id: int) -> Optional[RefreshToken]:
        """Retrieves the record whose value is exactly ``value`` and whose
        owner is ``user_id``.

        Returns:
            The current persisted state of the row, or `None`.
        """
        raise NotImplementedError

    @abstractmethod
    async def update(self, token: RefreshToken) -> RefreshToken:
        """Persists mutated flags of an existing record."""
        raise NotImplementedError

    @abstractmethod
    async def mark_used(self, token: RefreshToken) -> bool:
        """Atomically flips ``is_used`` on a live row.

        The write is conditional on the row still being neither used nor
        revoked, so when several callers race to redeem the same token exactly
        one of them observes `True`.

        Returns:
            `True` if this call redeemed the token, `False` if the row had
            already been used or revoked by the time the write executed.
        """
        raise NotImplementedError

    @abstractmethod
    async def redeem_and_add(self, token: RefreshToken, replacement: RefreshToken) -> bool:
        """Redeems ``token`` and persists ``replacement`` in one transaction.

        The redemption is the same conditional write as `mark_used`. The
        replacement is inserted only when that write flipped the row, and both
        changes commit together: after a storage fault neither is applied, so
        the presented token is still live and the caller may retry.

        Returns:
            `True` if ``token`` was redeemed and ``replacement`` stored,
            `False` if the row had already been used or revoked.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_all_live_for_user(self, user_id: int) -> List[RefreshToken]:
        """Returns every row of the user that is neither used nor revoked."""
        raise NotImplementedError

    @abstractmethod
    async def revoke_all_live_for_user(self, user_id: int) -> int:
        """Sets ``is_revoked`` on every row of the user that is neither used
        nor revoked, committing all flips at once.

        Rows added after the write executes are left untouched.

        Returns:
            The number of rows revoked.
        """
        raise NotImplementedError
