"""User Repository implementation using SQLAlchemy.

This module provides the repository pattern implementation for the identity
tables (`users` and `user_roles`), abstracting database access for the
identity collaborator of the token lifecycle.

Driver errors are logged with masked identifiers and re-raised as
`DatabaseError`, so callers never see SQLAlchemy types.
"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from src.core.exceptions import DatabaseError, ValidationError
from src.domain.entities.user import User, UserRole
from src.domain.interfaces.repositories import IUserRepository
from src.domain.interfaces.services import DUPLICATE_EMAIL

logger = get_logger(__name__)


def _mask_email(email: Optional[str]) -> Optional[str]:
    if not email:
        return email
    return email[:3] + "***" if len(email) > 3 else email


class UserRepository(IUserRepository):
    """SQLAlchemy implementation of `IUserRepository`.

    Responsibilities:
    - User entity persistence and lookup
    - Role membership rows
    - Transaction management (commit, rollback on failure)
    - Secure logging with sensitive data masking
    """

    def __init__(self, db_session: AsyncSession):
        """Initialize repository with database session.

        Args:
            db_session: SQLAlchemy async session for database operations
        """
        self.db_session = db_session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID.

        Non-positive ids cannot exist and resolve to None without a query.
        """
        if user_id is None or user_id <= 0:
            logger.debug("Skipping lookup for non-positive user id", user_id=user_id)
            return None

        try:
            statement = select(User).where(User.id == user_id)
            result = await self.db_session.execute(statement)
            user = result.scalars().first()

            logger.debug(
                "User lookup by ID completed",
                user_id=user_id,
                found=user is not None,
                operation="get_by_id",
            )
            return user

        except SQLAlchemyError as e:
            logger.error(
                "Error retrieving user by ID",
                user_id=user_id,
                error=str(e),
                error_type=type(e).__name__,
                operation="get_by_id",
            )
            raise DatabaseError("Failed to retrieve user.") from e

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address with case-insensitive search.

        Args:
            email: Email address to search for

        Returns:
            User entity if found, None otherwise
        """
        if not email or not email.strip():
            return None
        email_value = email.lower().strip()

        try:
            statement = select(User).where(func.lower(User.email) == email_value)
            result = await self.db_session.execute(statement)
            user = result.scalars().first()

            logger.debug(
                "User lookup by email completed",
                email=_mask_email(email_value),
                found=user is not None,
                operation="get_by_email",
            )
            return user

        except SQLAlchemyError as e:
            logger.error(
                "Error retrieving user by email",
                email=_mask_email(email_value),
                error=str(e),
                error_type=type(e).__name__,
                operation="get_by_email",
            )
            raise DatabaseError("Failed to retrieve user.") from e

    async def save(self, user: User) -> User:
        """Save or update user entity with proper transaction management.

        Args:
            user: User entity to save or update

        Returns:
            Saved user entity with updated attributes

        Raises:
            ValueError: If user is None
            ValidationError: If the email is already taken
            DatabaseError: If the write fails; the transaction is rolled back
        """
        if not user:
            raise ValueError("User entity cannot be None")

        try:
            self.db_session.add(user)
            await self.db_session.commit()
            await self.db_session.refresh(user)

            logger.info(
                "User saved successfully",
                user_id=user.id,
                email=_mask_email(user.email),
                operation="save_completed",
            )
            return user

        except IntegrityError as e:
            await self.db_session.rollback()
            logger.info("User save rejected by unique constraint", email=_mask_email(user.email))
            raise ValidationError(
                "User with this email already exists.", code=DUPLICATE_EMAIL
            ) from e

        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(
                "Error saving user",
                user_id=user.id,
                email=_mask_email(user.email),
                error=str(e),
                error_type=type(e).__name__,
                operation="save_failed",
            )
            raise DatabaseError("Failed to save user.") from e

    async def get_roles(self, user_id: int) -> List[str]:
        try:
            statement = (
                select(UserRole.role).where(UserRole.user_id == user_id).order_by(UserRole.id)
            )
            result = await self.db_session.execute(statement)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Error retrieving roles", user_id=user_id, error=str(e))
            raise DatabaseError("Failed to retrieve user roles.") from e

    async def add_role(self, user_id: int, role: str) -> None:
        """Adds a role membership; an existing membership is left as is."""
        try:
            statement = select(UserRole).where(
                UserRole.user_id == user_id, UserRole.role == role
            )
            result = await self.db_session.execute(statement)
            if result.scalars().first() is not None:
                logger.debug("Role membership already present", user_id=user_id, role=role)
                return

            self.db_session.add(UserRole(user_id=user_id, role=role))
            await self.db_session.commit()
            logger.info("Role membership added", user_id=user_id, role=role)

        except IntegrityError:
            # Lost a race against an identical insert: the membership exists.
            await self.db_session.rollback()
            logger.debug(
                "Role membership inserted concurrently",
                user_id=user_id,
                role=role,
            )
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error("Error adding role", user_id=user_id, role=role, error=str(e))
            raise DatabaseError("Failed to add user role.") from e
