from .access_token import AccessTokenIssuer, AccessTokenValidator
from .expired_token import ExpiredTokenClaimsExtractor
from .password_policy import PasswordPolicyValidator
from .signing_keys import SigningKeyProvider
from .token_lifecycle import TokenLifecycleService

__all__ = [
    "AccessTokenIssuer",
    "AccessTokenValidator",
    "ExpiredTokenClaimsExtractor",
    "PasswordPolicyValidator",
    "SigningKeyProvider",
    "TokenLifecycleService",
]
