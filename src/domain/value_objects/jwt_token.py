"""Token value objects for domain modeling.

These value objects carry the credentials handed to clients: the signed access
token and the opaque refresh token value.
"""

import base64
import secrets
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, ClassVar, Mapping


@dataclass(frozen=True)
class TokenId:
    """Value object for the ``jti`` claim.

    A random UUID4 string. The same identifier is stored on the refresh token
    record issued alongside the access token, linking the two.
    """

    value: str

    def __post_init__(self):
        """Validate token ID after initialization."""
        if not self.value:
            raise ValueError("Token ID cannot be empty")
        try:
            uuid.UUID(self.value)
        except ValueError as exc:
            raise ValueError("Token ID must be a UUID") from exc

    @classmethod
    def generate(cls) -> "TokenId":
        """Generate a new random token ID."""
        return cls(str(uuid.uuid4()))

    def mask_for_logging(self) -> str:
        """Return masked token ID for safe logging."""
        return self.value[:8] + "*" * (len(self.value) - 8)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AccessToken:
    """A signed, self-contained, time-bounded assertion of identity and roles.

    Access tokens are never persisted; their validity is established purely by
    signature and expiry when presented.

    Attributes:
        token: The compact three-part encoded token.
        token_id: The ``jti`` claim.
        expires_at: Expiry instant (``exp`` claim).
        claims: Read-only view of the full claim set.
    """

    token: str
    token_id: TokenId
    expires_at: datetime
    claims: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate the encoded structure and freeze the claim set."""
        if not self.token:
            raise ValueError("Access token cannot be empty")
        if len(self.token.split(".")) != 3:
            raise ValueError("Invalid JWT token format")
        object.__setattr__(self, "claims", MappingProxyType(dict(self.claims)))

    @property
    def jti(self) -> str:
        return str(self.token_id)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if token is expired."""
        now = now or datetime.now(timezone.utc)
        return now > self.expires_at

    def mask_for_logging(self) -> str:
        """Return masked token for safe logging (first 10 chars + asterisks)."""
        if len(self.token) <= 10:
            return "*" * len(self.token)
        return self.token[:10] + "*" * (len(self.token) - 10)

    def __str__(self) -> str:
        return self.token


@dataclass(frozen=True)
class RefreshTokenValue:
    """The opaque secret a client exchanges for a new token pair.

    Base64 encoding of 64 bytes from the operating system CSPRNG. The value is
    a lookup key only; it carries no structure.
    """

    value: str

    BYTE_LENGTH: ClassVar[int] = 64

    def __post_init__(self):
        if not self.value:
            raise ValueError("Refresh token cannot be empty")

    @classmethod
    def generate(cls) -> "RefreshTokenValue":
        """Generate a new refresh token value (512 bits of entropy)."""
        raw_bytes = secrets.token_bytes(cls.BYTE_LENGTH)
        return cls(base64.b64encode(raw_bytes).decode("ascii"))

    def mask_for_logging(self) -> str:
        """Return masked value for safe logging."""
        return self.value[:6] + "*" * (len(self.value) - 6)

    def __str__(self) -> str:
        return self.value
