"""Miscellaneous utility schemas used by the auth API."""

from __future__ import annotations

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Simple envelope used for acknowledgments."""

    detail: str
