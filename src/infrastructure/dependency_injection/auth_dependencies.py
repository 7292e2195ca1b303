"""Dependencies for the token lifecycle.

FastAPI factories wiring the infrastructure implementations to the domain
interfaces. Routes depend on the `Annotated` aliases at the bottom of this
module; tests replace any factory through ``app.dependency_overrides``.

Per request: one database session, shared by both repositories.
Per process: the signing key provider, the issuer and the extractor.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config.settings import settings
from src.domain.interfaces.repositories import IRefreshTokenRepository, IUserRepository
from src.domain.interfaces.services import IUserManager
from src.domain.interfaces.token_management import (
    IAccessTokenIssuer,
    IExpiredTokenClaimsExtractor,
    ITokenLifecycleService,
)
from src.domain.services.auth.access_token import AccessTokenIssuer
from src.domain.services.auth.expired_token import ExpiredTokenClaimsExtractor
from src.domain.services.auth.signing_keys import SigningKeyProvider
from src.domain.services.auth.token_lifecycle import TokenLifecycleService
from src.infrastructure.database.async_db import get_async_db
from src.infrastructure.repositories.refresh_token_repository import RefreshTokenRepository
from src.infrastructure.repositories.user_repository import UserRepository
from src.infrastructure.services.user_manager import UserManager

# ---------------------------------------------------------------------------
# Type aliases for dependency injection
# ---------------------------------------------------------------------------

AsyncDB = Annotated[AsyncSession, Depends(get_async_db)]

# ---------------------------------------------------------------------------
# Process-wide signing components
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_signing_key_provider() -> SigningKeyProvider:
    """Builds the signing configuration once per process."""
    return SigningKeyProvider.from_settings(settings)


def get_access_token_issuer(
    keys: SigningKeyProvider = Depends(get_signing_key_provider),
) -> IAccessTokenIssuer:
    return AccessTokenIssuer(keys)


def get_expired_token_claims_extractor(
    keys: SigningKeyProvider = Depends(get_signing_key_provider),
) -> IExpiredTokenClaimsExtractor:
    return ExpiredTokenClaimsExtractor(keys)


# ---------------------------------------------------------------------------
# Infrastructure Layer Dependencies
# ---------------------------------------------------------------------------


def get_user_repository(db: AsyncDB) -> IUserRepository:
    """Factory that returns the user repository implementation.

    Args:
        db: Database session dependency from FastAPI

    Returns:
        IUserRepository: SQLAlchemy user repository bound to the request session
    """
    return UserRepository(db)


def get_refresh_token_repository(db: AsyncDB) -> IRefreshTokenRepository:
    """Factory that returns the refresh token repository implementation."""
    return RefreshTokenRepository(db)


def get_user_manager(
    user_repository: IUserRepository = Depends(get_user_repository),
) -> IUserManager:
    return UserManager(user_repository)


# ---------------------------------------------------------------------------
# Domain service dependencies
# ---------------------------------------------------------------------------


def get_token_lifecycle_service(
    user_manager: IUserManager = Depends(get_user_manager),
    refresh_tokens: IRefreshTokenRepository = Depends(get_refresh_token_repository),
    issuer: IAccessTokenIssuer = Depends(get_access_token_issuer),
    claims_extractor: IExpiredTokenClaimsExtractor = Depends(get_expired_token_claims_extractor),
    keys: SigningKeyProvider = Depends(get_signing_key_provider),
) -> ITokenLifecycleService:
    """Factory that returns the token lifecycle service.

    Behavior switches (default role, login error detail, family revocation on
    reuse) are read from settings here so the domain service stays free of
    configuration lookups.
    """
    return TokenLifecycleService(
        user_manager=user_manager,
        refresh_tokens=refresh_tokens,
        issuer=issuer,
        claims_extractor=claims_extractor,
        keys=keys,
        default_role=settings.DEFAULT_USER_ROLE,
        distinguish_login_errors=settings.AUTH_DISTINGUISH_LOGIN_ERRORS,
        revoke_family_on_reuse=settings.AUTH_REVOKE_FAMILY_ON_REUSE,
    )


# ---------------------------------------------------------------------------
# Convenience Aliases
# ---------------------------------------------------------------------------

UserManagerDep = Annotated[IUserManager, Depends(get_user_manager)]
TokenLifecycleServiceDep = Annotated[ITokenLifecycleService, Depends(get_token_lifecycle_service)]
