from datetime import datetime, timezone  # For timestamp fields
from typing import Optional  # For optional fields

from sqlalchemy import DateTime  # Explicit timezone-aware DateTime type
from sqlmodel import Column, Field, Index, SQLModel, String  # For ORM and table definition


class RefreshToken(SQLModel, table=True):
    """A persisted refresh token, one link of a user's rotation chain.

    The opaque ``token`` value is what the client holds; it is looked up
    exactly and never parsed. Each row is paired with the access token it was
    issued alongside through ``jwt_id``.

    State machine: a row starts *live*; it becomes *used* once when redeemed
    and *revoked* only through an explicit (individual or bulk) revoke. Both
    flags are terminal and never revert. Rows are never deleted so the full
    chain remains available for audit.

    Attributes:
        id: Surrogate primary key.
        user_id: Owner of the token.
        token: Base64 encoding of 64 cryptographically random bytes.
        jwt_id: ``jti`` of the paired access token.
        is_used: Set when the token has been exchanged for a new pair.
        is_revoked: Set by login (device exclusivity) or by an explicit revoke.
        added_at: Issue timestamp.
        expires_at: Presentation deadline.
    """

    __tablename__ = "refresh_tokens"  # Explicit table name for clarity

    id: Optional[int] = Field(
        default=None,  # Auto-incremented by database
        primary_key=True,
        description="Surrogate identifier of the refresh token record.",
    )
    user_id: int = Field(
        foreign_key="users.id",  # References users table
        index=True,
        nullable=False,
        description="Foreign key linking the refresh token to its owner.",
    )
    token: str = Field(
        sa_column=Column(String(128), unique=True, index=True, nullable=False),
        description="Opaque refresh token value (lookup key).",
    )
    jwt_id: str = Field(
        max_length=64,
        nullable=False,
        description="jti of the access token issued together with this refresh token.",
    )
    is_used: bool = Field(default=False, nullable=False)
    is_revoked: bool = Field(default=False, nullable=False)
    added_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="The timestamp when the refresh token was issued.",
    )
    expires_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="The timestamp after which the refresh token is rejected.",
    )

    __table_args__ = (
        Index(
            "ix_refresh_tokens_user_id_live", "user_id", "is_used", "is_revoked"
        ),  # Index for bulk revocation
        {"extend_existing": True},
    )

    def _expires_at_utc(self) -> datetime:
        if self.expires_at.tzinfo is None:
            return self.expires_at.replace(tzinfo=timezone.utc)
        return self.expires_at

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Return True once ``now`` is past the expiry timestamp."""
        now = now or datetime.now(timezone.utc)
        return now > self._expires_at_utc()

    def is_live(self, now: Optional[datetime] = None) -> bool:
        """Return True if the token may still be presented.

        Live means strictly before the deadline: at ``expires_at`` itself the
        token is neither live nor yet expired.
        """
        now = now or datetime.now(timezone.utc)
        return not self.is_used and not self.is_revoked and now < self._expires_at_utc()
