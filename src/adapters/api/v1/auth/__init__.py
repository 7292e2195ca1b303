"""Authentication router package: bundles the token lifecycle endpoints."""

from fastapi import APIRouter

from .routes import login as login_route
from .routes import refresh_token as refresh_token_route
from .routes import register as register_route
from .routes import revoke_token as revoke_token_route

router = APIRouter(prefix="/auth", tags=["auth"])

# Delegate to sub-routers ----------------------------------------------------

router.include_router(register_route.router, prefix="/register")
router.include_router(login_route.router, prefix="/login")
router.include_router(refresh_token_route.router, prefix="/refresh-token")
router.include_router(revoke_token_route.router, prefix="/revoke-token")

__all__ = ["router"]
