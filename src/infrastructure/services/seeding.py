"""Initial data seeding.

Creates the administrator account configured through ``SEED_ADMIN_EMAIL``
and ``SEED_ADMIN_PASSWORD``. Running it again is a no-op.
"""

from typing import Optional

from structlog import get_logger

from src.core.config.settings import settings
from src.domain.entities.user import Role, User
from src.domain.interfaces.services import IUserManager

logger = get_logger(__name__)


async def seed_initial_data(
    user_manager: IUserManager,
    admin_email: Optional[str] = None,
    admin_password: Optional[str] = None,
) -> bool:
    """Ensures the seeded administrator exists and holds the ``Admin`` role.

    Args:
        user_manager: Identity store to write through.
        admin_email: Overrides ``SEED_ADMIN_EMAIL``.
        admin_password: Overrides ``SEED_ADMIN_PASSWORD``.

    Returns:
        bool: True if an account was created.
    """
    email = admin_email if admin_email is not None else settings.SEED_ADMIN_EMAIL
    password = (
        admin_password
        if admin_password is not None
        else settings.SEED_ADMIN_PASSWORD.get_secret_value()
    )
    if not email or not password:
        logger.debug("Admin seeding skipped, no credentials configured")
        return False

    existing = await user_manager.find_by_email(email)
    if existing is not None:
        await user_manager.add_to_role(existing, Role.ADMIN.value)
        logger.debug("Admin account already present", user_id=existing.id)
        return False

    admin = User(email=email, first_name="Admin", last_name="User", is_active=True)
    created = await user_manager.create(admin, password)
    if not created.succeeded:
        logger.error("Admin seeding rejected", reasons=created.errors)
        return False

    await user_manager.add_to_role(admin, Role.ADMIN.value)
    logger.info("Admin account seeded", user_id=admin.id)
    return True
