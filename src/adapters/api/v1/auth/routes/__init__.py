"""Subpackage aggregating individual auth route modules."""

__all__ = [
    "register",
    "login",
    "refresh_token",
    "revoke_token",
]
