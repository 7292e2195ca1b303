from typing import Any, Dict

import jwt
from jwt import PyJWTError
from structlog import get_logger

from src.core.exceptions import InvalidTokenError
from src.domain.interfaces.token_management import IExpiredTokenClaimsExtractor
from src.domain.services.auth.signing_keys import SigningKeyProvider

logger = get_logger(__name__)


class ExpiredTokenClaimsExtractor(IExpiredTokenClaimsExtractor):
    """Recovers the claims of a correctly signed, possibly expired access token.

    Validation is deliberately relaxed: the lifetime, issuer and audience are
    not checked. The signature and the algorithm are. This makes the output
    unfit for authorization decisions; its only caller is the refresh flow,
    where the claims merely name the user whose stored refresh token is about
    to be checked.

    Only HMAC-SHA-256 is accepted. The header algorithm is compared before any
    verification so ``none`` and asymmetric algorithms (algorithm confusion)
    are refused outright.
    """

    def __init__(self, keys: SigningKeyProvider):
        self.keys = keys

    def extract_claims(self, token: str) -> Dict[str, Any]:
        """Decode ``token`` without enforcing its expiry.

        Args:
            token (str): Compact encoded access token.

        Returns:
            Dict[str, Any]: The full claim set.

        Raises:
            InvalidTokenError: If the token is malformed, signed with another
                algorithm, or its signature does not verify.
        """
        if not token:
            raise InvalidTokenError()

        try:
            header = jwt.get_unverified_header(token)
        except PyJWTError as e:
            logger.warning("Malformed access token presented for refresh", error=str(e))
            raise InvalidTokenError() from e

        algorithm = str(header.get("alg", ""))
        if algorithm.upper() != self.keys.algorithm:
            logger.warning("Access token signed with a forbidden algorithm", alg=algorithm)
            raise InvalidTokenError()

        try:
            return jwt.decode(
                token,
                self.keys.key,
                algorithms=[self.keys.algorithm],
                options={
                    "verify_signature": True,
                    "verify_exp": False,
                    "verify_iss": False,
                    "verify_aud": False,
                },
            )
        except PyJWTError as e:
            logger.warning("Access token signature verification failed", error=str(e))
            raise InvalidTokenError() from e
