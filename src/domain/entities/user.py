from datetime import datetime  # For timestamp fields
from enum import Enum  # For type-safe role enumeration
from typing import Optional  # For optional fields

from pydantic import EmailStr, field_validator  # For email validation and custom validation
from sqlalchemy import DateTime, UniqueConstraint, text  # For SQL expressions and explicit DateTime type
from sqlmodel import Column, Field, Index, SQLModel, String  # For ORM and table definition


class Role(str, Enum):
    """Represents the roles a user can be a member of (RBAC).

    Role names travel verbatim inside access tokens, one entry per role, so
    their spelling is part of the wire format.

    Attributes:
        ADMIN: Confers administrative privileges for system management.
        USER: Default membership granted on self-registration.
    """

    ADMIN = "Admin"
    USER = "User"


class User(SQLModel, table=True):
    """Represents the identity a session is issued for.

    The token lifecycle manager only reads this entity: it is created and
    updated through the `IUserManager` collaborator and never mutated by the
    token code itself.

    Attributes:
        id: The unique identifier for the user (primary key). Carried as the
            ``sub`` claim of every access token.
        email: A unique, case-insensitive email address used to log in.
        hashed_password: The bcrypt-hashed password.
        first_name: Given name, carried in the access token.
        last_name: Family name, carried in the access token.
        is_active: Inactive users can neither log in nor refresh.
        created_at: The timestamp of when the user account was created.
        updated_at: The timestamp of the last update to the user's record.
    """

    __tablename__ = "users"  # Explicit table name for clarity

    id: Optional[int] = Field(
        default=None,  # Auto-incremented by database
        primary_key=True,  # Primary key constraint
        description="The unique identifier for the user.",
    )
    email: EmailStr = Field(
        sa_column=Column(String, unique=True, index=True, nullable=False),  # Unique, indexed column
        description="Unique, case-insensitive email address used to log in.",
    )
    hashed_password: Optional[str] = Field(
        default=None,
        max_length=255,  # Sufficient for bcrypt hashes
        description="Bcrypt-hashed password.",
    )
    first_name: str = Field(default="", max_length=100, description="Given name.")
    last_name: str = Field(default="", max_length=100, description="Family name.")
    is_active: bool = Field(
        default=True,  # Active by default
        description="Indicates if the user's account is active. Inactive users cannot log in.",
    )
    created_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True),
            server_default=text("CURRENT_TIMESTAMP"),  # Database timestamp
            nullable=False,
        ),
        description="The timestamp of when the user account was created.",
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True),
            server_onupdate=text("CURRENT_TIMESTAMP"),  # Update on modification
            nullable=True,
        ),
        description="The timestamp of the last update to the user's record.",
    )

    __table_args__ = (
        Index("ix_users_email_lower", text("lower(email)")),  # Case-insensitive index
        {"extend_existing": True},
    )

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: EmailStr) -> str:
        """Normalizes the email address to lowercase."""
        return value.lower()


class UserRole(SQLModel, table=True):
    """Membership of a user in a named role.

    Stored as plain strings so roles created outside the `Role` enum (by an
    administrator, for instance) still flow into access tokens.
    """

    __tablename__ = "user_roles"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(
        foreign_key="users.id",
        index=True,
        nullable=False,
        description="Member of the role.",
    )
    role: str = Field(max_length=50, nullable=False, description="Role name.")

    __table_args__ = (
        UniqueConstraint("user_id", "role", name="uq_user_roles_user_id_role"),
        {"extend_existing": True},
    )
