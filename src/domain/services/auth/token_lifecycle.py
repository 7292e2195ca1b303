"""Token lifecycle domain service.

Orchestrates the register, login, refresh and revoke flows by composing the
access token issuer, the expired-token claims extractor, the identity store
and the refresh token store.

Refresh token chain state machine::

    none --issue--> live --redeem--> used      (terminal)
                         \\--revoke--> revoked  (terminal)

A login revokes every live token of the user before issuing a new pair, so
at most one live chain exists per user. Redemption is decided by a
conditional write in the store, which makes concurrent redemptions of the
same row safe: only one of them succeeds.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional, Tuple

import structlog

from src.core.exceptions import InvalidTokenError
from src.core.logging import mask_secret
from src.domain.entities.refresh_token import RefreshToken
from src.domain.entities.user import Role, User
from src.domain.interfaces.repositories import IRefreshTokenRepository
from src.domain.interfaces.services import DUPLICATE_EMAIL, IUserManager
from src.domain.interfaces.token_management import (
    IAccessTokenIssuer,
    IExpiredTokenClaimsExtractor,
    ITokenLifecycleService,
)
from src.domain.services.auth.signing_keys import SigningKeyProvider
from src.domain.value_objects.auth_result import AuthErrorCode, AuthResult
from src.domain.value_objects.jwt_token import AccessToken, RefreshTokenValue

logger = structlog.get_logger(__name__)


class TokenLifecycleService(ITokenLifecycleService):
    """Domain service issuing, rotating and revoking session credentials.

    Every business-rule failure comes back as a failed `AuthResult`. Storage
    faults (`DatabaseError`) and signing faults (`ConfigurationError`) are not
    caught here: they mean the service cannot honor its contract and must
    reach the caller, who owns any retry.

    Args:
        user_manager: Identity store collaborator.
        refresh_tokens: Refresh token store.
        issuer: Access token issuer.
        claims_extractor: Expired-token claims extractor, used by refresh only.
        keys: Signing configuration (refresh token lifetime).
        default_role: Role granted on registration.
        distinguish_login_errors: Report "User does not exist." and "User
            account is inactive." instead of the generic "Invalid credentials.".
        revoke_family_on_reuse: On refresh token reuse, also revoke every
            live refresh token of the user.
    """

    def __init__(
        self,
        user_manager: IUserManager,
        refresh_tokens: IRefreshTokenRepository,
        issuer: IAccessTokenIssuer,
        claims_extractor: IExpiredTokenClaimsExtractor,
        keys: SigningKeyProvider,
        default_role: str = Role.USER.value,
        distinguish_login_errors: bool = False,
        revoke_family_on_reuse: bool = False,
    ):
        self._user_manager = user_manager
        self._refresh_tokens = refresh_tokens
        self._issuer = issuer
        self._claims_extractor = claims_extractor
        self._keys = keys
        self._default_role = default_role
        self._distinguish_login_errors = distinguish_login_errors
        self._revoke_family_on_reuse = revoke_family_on_reuse

    async def register(
        self, email: str, password: str, first_name: str, last_name: str
    ) -> AuthResult:
        """Create an account with the default role and return its first token pair.

        Returns:
            AuthResult: Success with both tokens, or `DUPLICATE_USER` /
            `REGISTRATION_REJECTED` (carrying the identity store's reasons).
        """
        if await self._user_manager.find_by_email(email) is not None:
            logger.info("Registration rejected - duplicate email")
            return AuthResult.failed(AuthErrorCode.DUPLICATE_USER)

        user = User(
            email=email.strip().lower(),
            first_name=first_name,
            last_name=last_name,
            is_active=True,
        )
        created = await self._user_manager.create(user, password)
        if not created.succeeded:
            logger.info("Registration rejected by identity store", reasons=len(created.errors))
            if created.code == DUPLICATE_EMAIL:
                return AuthResult.failed(AuthErrorCode.DUPLICATE_USER)
            return AuthResult.failed(AuthErrorCode.REGISTRATION_REJECTED, created.errors)

        await self._user_manager.add_to_role(user, self._default_role)

        result = await self._issue_token_pair(user)
        logger.info("User registered", user_id=user.id, role=self._default_role)
        return result

    async def login(self, email: str, password: str) -> AuthResult:
        """Authenticate and return a new token pair.

        Every refresh token still live for the user is revoked before the new
        pair is issued, so a successful login ends all previous refresh chains
        (device exclusivity).
        """
        user = await self._user_manager.find_by_email(email)
        if user is None:
            logger.info("Login failed", reason="unknown_email")
            return self._login_failure(AuthErrorCode.USER_NOT_FOUND)

        if not user.is_active:
            logger.info("Login failed", reason="inactive_account", user_id=user.id)
            return self._login_failure(AuthErrorCode.INACTIVE_ACCOUNT)

        if not await self._user_manager.check_password(user, password):
            logger.info("Login failed", reason="wrong_password", user_id=user.id)
            return AuthResult.failed(AuthErrorCode.INVALID_CREDENTIALS)

        revoked = await self._refresh_tokens.revoke_all_live_for_user(user.id)
        result = await self._issue_token_pair(user)
        logger.info("User logged in", user_id=user.id, revoked_refresh_tokens=revoked)
        return result

    async def refresh(self, access_token: str, refresh_token: str) -> AuthResult:
        """Redeem ``refresh_token`` once and rotate the pair.

        Args:
            access_token: The (usually expired) access token issued with the
                refresh token. Its signature is verified, its lifetime is not.
            refresh_token: Opaque refresh token value.

        Returns:
            AuthResult: A new pair, or one of `INVALID_TOKEN`,
            `USER_NOT_FOUND_OR_INACTIVE`, `REFRESH_TOKEN_NOT_FOUND`,
            `REFRESH_TOKEN_EXPIRED`, `REFRESH_TOKEN_REUSED`.
        """
        try:
            claims = self._claims_extractor.extract_claims(access_token)
        except InvalidTokenError:
            return AuthResult.failed(AuthErrorCode.INVALID_TOKEN)

        user_id = self._subject_id(claims)
        if user_id is None:
            logger.warning("Refresh rejected - access token has no usable subject")
            return AuthResult.failed(AuthErrorCode.INVALID_TOKEN)

        user = await self._user_manager.find_by_id(user_id)
        if user is None or not user.is_active:
            logger.warning("Refresh rejected - user not found or inactive", user_id=user_id)
            return AuthResult.failed(AuthErrorCode.USER_NOT_FOUND_OR_INACTIVE)

        stored = None
        if refresh_token:
            stored = await self._refresh_tokens.get_by_value_and_user(refresh_token, user_id)
        if stored is None:
            logger.warning("Refresh rejected - refresh token not found", user_id=user_id)
            return AuthResult.failed(AuthErrorCode.REFRESH_TOKEN_NOT_FOUND)

        if stored.is_expired():
            logger.info("Refresh rejected - refresh token expired", user_id=user_id)
            return AuthResult.failed(AuthErrorCode.REFRESH_TOKEN_EXPIRED)

        if stored.is_used or stored.is_revoked:
            return await self._reject_reuse(user, stored)

        access_token, replacement = await self._build_token_pair(user)

        # The row is re-checked by the conditional write; a concurrent
        # redemption may have flipped it since it was read above. The
        # replacement commits with the redemption or not at all.
        if not await self._refresh_tokens.redeem_and_add(stored, replacement):
            return await self._reject_reuse(user, stored)

        logger.info(
            "Tokens refreshed",
            user_id=user.id,
            redeemed_jti=mask_secret(stored.jwt_id, visible=8),
        )
        return AuthResult.succeeded(access_token.token, replacement.token)

    async def revoke(self, user_id: int) -> bool:
        """Revoke every live refresh token of the user.

        Returns True once the write has committed, whether or not any token
        was live.
        """
        revoked = await self._refresh_tokens.revoke_all_live_for_user(user_id)
        logger.info("Refresh tokens revoked", user_id=user_id, revoked=revoked)
        return True

    async def _issue_token_pair(self, user: User) -> AuthResult:
        access_token, record = await self._build_token_pair(user)
        record = await self._refresh_tokens.add(record)
        return AuthResult.succeeded(access_token.token, record.token)

    async def _build_token_pair(self, user: User) -> Tuple[AccessToken, RefreshToken]:
        """Signs an access token and prepares its unsaved refresh token record."""
        roles = await self._user_manager.get_roles(user)
        access_token = self._issuer.issue(user, roles)

        now = datetime.now(timezone.utc)
        record = RefreshToken(
            user_id=user.id,
            token=RefreshTokenValue.generate().value,
            jwt_id=access_token.jti,
            is_used=False,
            is_revoked=False,
            added_at=now,
            expires_at=now + timedelta(days=self._keys.refresh_token_lifetime_days),
        )
        return access_token, record

    async def _reject_reuse(self, user: User, stored: RefreshToken) -> AuthResult:
        logger.warning(
            "Refresh token reuse detected",
            user_id=user.id,
            jti=mask_secret(stored.jwt_id, visible=8),
            used=stored.is_used,
            revoked=stored.is_revoked,
        )
        if self._revoke_family_on_reuse:
            revoked = await self._refresh_tokens.revoke_all_live_for_user(user.id)
            logger.warning("Refresh token family revoked after reuse", user_id=user.id, revoked=revoked)
        return AuthResult.failed(AuthErrorCode.REFRESH_TOKEN_REUSED)

    def _login_failure(self, code: AuthErrorCode) -> AuthResult:
        if self._distinguish_login_errors:
            return AuthResult.failed(code)
        return AuthResult.failed(AuthErrorCode.INVALID_CREDENTIALS)

    @staticmethod
    def _subject_id(claims: Mapping[str, Any]) -> Optional[int]:
        subject = claims.get("sub")
        if subject is None:
            return None
        try:
            return int(subject)
        except (TypeError, ValueError):
            return None
