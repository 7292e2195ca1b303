import pytest

from src.infrastructure.services.seeding import seed_initial_data

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Adm1n!Passw0rd"


@pytest.mark.asyncio
async def test_seed_creates_admin(user_manager):
    # Act
    created = await seed_initial_data(user_manager, ADMIN_EMAIL, ADMIN_PASSWORD)

    # Assert
    assert created is True
    admin = await user_manager.find_by_email(ADMIN_EMAIL)
    assert admin.first_name == "Admin"
    assert await user_manager.get_roles(admin) == ["Admin"]


@pytest.mark.asyncio
async def test_seed_is_idempotent(user_manager):
    await seed_initial_data(user_manager, ADMIN_EMAIL, ADMIN_PASSWORD)

    created = await seed_initial_data(user_manager, ADMIN_EMAIL, ADMIN_PASSWORD)

    assert created is False
    assert len(user_manager.users) == 1
    admin = await user_manager.find_by_email(ADMIN_EMAIL)
    assert await user_manager.get_roles(admin) == ["Admin"]


@pytest.mark.asyncio
async def test_seed_grants_admin_to_existing_account(user_manager, lifecycle):
    await lifecycle.register(ADMIN_EMAIL, ADMIN_PASSWORD, "Ada", "Admin")

    await seed_initial_data(user_manager, ADMIN_EMAIL, ADMIN_PASSWORD)

    admin = await user_manager.find_by_email(ADMIN_EMAIL)
    assert await user_manager.get_roles(admin) == ["User", "Admin"]


@pytest.mark.asyncio
@pytest.mark.parametrize("email, password", [("", ADMIN_PASSWORD), (ADMIN_EMAIL, "")])
async def test_seed_skipped_without_credentials(user_manager, email, password):
    assert await seed_initial_data(user_manager, email, password) is False
    assert user_manager.users == {}


@pytest.mark.asyncio
async def test_seed_with_weak_password_creates_nothing(user_manager):
    assert await seed_initial_data(user_manager, ADMIN_EMAIL, "weak") is False
    assert user_manager.users == {}
