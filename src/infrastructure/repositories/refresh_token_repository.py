"""Refresh token repository implementation using SQLAlchemy.

Redemption and bulk revocation are single conditional ``UPDATE`` statements,
so their read-decide-write happens inside the database and concurrent
requests cannot both act on the same row.
"""

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col
from structlog import get_logger

from src.core.exceptions import DatabaseError
from src.core.logging import mask_secret
from src.domain.entities.refresh_token import RefreshToken
from src.domain.interfaces.repositories import IRefreshTokenRepository

logger = get_logger(__name__)


def _live_rows():
    return (col(RefreshToken.is_used).is_(False), col(RefreshToken.is_revoked).is_(False))


def _redeem_statement(token: RefreshToken):
    return (
        update(RefreshToken)
        .where(col(RefreshToken.id) == token.id, *_live_rows())
        .values(is_used=True)
        .execution_options(synchronize_session=False)
    )


class RefreshTokenRepository(IRefreshTokenRepository):
    """SQLAlchemy implementation of `IRefreshTokenRepository`.

    Each write commits its own transaction. Driver errors roll the session
    back and surface as `DatabaseError`.
    """

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def add(self, token: RefreshToken) -> RefreshToken:
        try:
            self.db_session.add(token)
            await self.db_session.commit()
            await self.db_session.refresh(token)
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(
                "Error persisting refresh token",
                user_id=token.user_id,
                jti=mask_secret(token.jwt_id, visible=8),
                error=str(e),
                error_type=type(e).__name__,
                operation="add",
            )
            raise DatabaseError("Failed to persist refresh token.") from e

        logger.debug(
            "Refresh token persisted",
            token_id=token.id,
            user_id=token.user_id,
            jti=mask_secret(token.jwt_id, visible=8),
            expires_at=token.expires_at.isoformat(),
        )
        return token

    async def get_by_value_and_user(self, value: str, user_id: int) -> Optional[RefreshToken]:
        """Exact lookup on the opaque value, scoped to the owner.

        A value issued to another user is reported as missing.
        """
        try:
            statement = select(RefreshToken).where(
                RefreshToken.token == value, RefreshToken.user_id == user_id
            )
            result = await self.db_session.execute(statement)
            token = result.scalars().first()
        except SQLAlchemyError as e:
            logger.error(
                "Error retrieving refresh token",
                user_id=user_id,
                token=mask_secret(value),
                error=str(e),
                error_type=type(e).__name__,
                operation="get_by_value_and_user",
            )
            raise DatabaseError("Failed to retrieve refresh token.") from e

        logger.debug(
            "Refresh token lookup completed",
            user_id=user_id,
            token=mask_secret(value),
            found=token is not None,
        )
        return token

    async def update(self, token: RefreshToken) -> RefreshToken:
        try:
            self.db_session.add(token)
            await self.db_session.commit()
            await self.db_session.refresh(token)
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(
                "Error updating refresh token",
                token_id=token.id,
                error=str(e),
                error_type=type(e).__name__,
                operation="update",
            )
            raise DatabaseError("Failed to update refresh token.") from e
        return token

    async def mark_used(self, token: RefreshToken) -> bool:
        try:
            result = await self.db_session.execute(_redeem_statement(token))
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(
                "Error redeeming refresh token",
                token_id=token.id,
                error=str(e),
                error_type=type(e).__name__,
                operation="mark_used",
            )
            raise DatabaseError("Failed to redeem refresh token.") from e

        redeemed = result.rowcount == 1
        if redeemed:
            token.is_used = True
        logger.debug("Refresh token redemption attempted", token_id=token.id, redeemed=redeemed)
        return redeemed

    async def redeem_and_add(self, token: RefreshToken, replacement: RefreshToken) -> bool:
        try:
            result = await self.db_session.execute(_redeem_statement(token))
            if result.rowcount != 1:
                await self.db_session.rollback()
                logger.debug("Refresh token already redeemed or revoked", token_id=token.id)
                return False

            self.db_session.add(replacement)
            await self.db_session.commit()
            await self.db_session.refresh(replacement)
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(
                "Error rotating refresh token",
                token_id=token.id,
                user_id=token.user_id,
                error=str(e),
                error_type=type(e).__name__,
                operation="redeem_and_add",
            )
            raise DatabaseError("Failed to rotate refresh token.") from e

        token.is_used = True
        logger.debug(
            "Refresh token rotated",
            token_id=token.id,
            replacement_id=replacement.id,
            jti=mask_secret(replacement.jwt_id, visible=8),
        )
        return True

    async def get_all_live_for_user(self, user_id: int) -> List[RefreshToken]:
        try:
            statement = (
                select(RefreshToken)
                .where(RefreshToken.user_id == user_id, *_live_rows())
                .order_by(col(RefreshToken.added_at))
            )
            result = await self.db_session.execute(statement)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(
                "Error listing live refresh tokens",
                user_id=user_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise DatabaseError("Failed to list refresh tokens.") from e

    async def revoke_all_live_for_user(self, user_id: int) -> int:
        statement = (
            update(RefreshToken)
            .where(col(RefreshToken.user_id) == user_id, *_live_rows())
            .values(is_revoked=True)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.db_session.execute(statement)
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(
                "Error revoking refresh tokens",
                user_id=user_id,
                error=str(e),
                error_type=type(e).__name__,
                operation="revoke_all_live_for_user",
            )
            raise DatabaseError("Failed to revoke refresh tokens.") from e

        revoked = result.rowcount or 0
        logger.debug("Live refresh tokens revoked", user_id=user_id, revoked=revoked)
        return revoked
