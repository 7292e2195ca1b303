from unittest.mock import AsyncMock

import pytest

from src.core.exceptions import DatabaseError, ValidationError
from src.domain.entities.user import User
from src.domain.interfaces.repositories import IUserRepository
from src.domain.interfaces.services import DUPLICATE_EMAIL
from src.infrastructure.services.user_manager import UserManager
from src.utils.security import hash_password, pwd_context
from tests.factories import create_fake_user


@pytest.fixture
def user_repository():
    repository = AsyncMock(spec=IUserRepository)
    repository.get_by_email.return_value = None
    return repository


@pytest.fixture
def manager(user_repository):
    return UserManager(user_repository)


def _new_user(email="Alice@Example.com"):
    return User(email=email, first_name="Alice", last_name="Liddell")


@pytest.mark.asyncio
async def test_create_hashes_password_and_saves(manager, user_repository):
    # Arrange
    user = _new_user()

    # Act
    result = await manager.create(user, "P@ssw0rd!")

    # Assert
    assert result.succeeded
    assert user.email == "alice@example.com"
    assert user.hashed_password != "P@ssw0rd!"
    assert pwd_context.verify("P@ssw0rd!", user.hashed_password)
    user_repository.save.assert_awaited_once_with(user)


@pytest.mark.asyncio
async def test_create_reports_every_policy_violation(manager, user_repository):
    result = await manager.create(_new_user(), "weak")

    assert not result.succeeded
    assert len(result.errors) == 4
    user_repository.save.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_rejects_taken_email(manager, user_repository):
    user_repository.get_by_email.return_value = create_fake_user(email="alice@example.com")

    result = await manager.create(_new_user(), "P@ssw0rd!")

    assert result.errors == ["User with this email already exists."]
    assert result.code == DUPLICATE_EMAIL
    user_repository.save.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_reports_unique_constraint_race(manager, user_repository):
    user_repository.save.side_effect = ValidationError(
        "User with this email already exists.", code=DUPLICATE_EMAIL
    )

    result = await manager.create(_new_user(), "P@ssw0rd!")

    assert not result.succeeded
    assert result.errors == ["User with this email already exists."]
    assert result.code == DUPLICATE_EMAIL


@pytest.mark.asyncio
async def test_create_propagates_storage_faults(manager, user_repository):
    user_repository.save.side_effect = DatabaseError("Failed to save user.")

    with pytest.raises(DatabaseError):
        await manager.create(_new_user(), "P@ssw0rd!")


@pytest.mark.asyncio
async def test_add_to_role_requires_saved_user(manager, user_repository):
    result = await manager.add_to_role(_new_user(), "User")

    assert not result.succeeded
    user_repository.add_role.assert_not_awaited()


@pytest.mark.asyncio
async def test_add_to_role_rejects_blank_role(manager, user_repository):
    result = await manager.add_to_role(create_fake_user(id=1), "  ")

    assert result.errors == ["Role name cannot be empty."]


@pytest.mark.asyncio
async def test_add_to_role_writes_membership(manager, user_repository):
    result = await manager.add_to_role(create_fake_user(id=1), "Admin")

    assert result.succeeded
    user_repository.add_role.assert_awaited_once_with(1, "Admin")


@pytest.mark.asyncio
async def test_get_roles_of_unsaved_user_is_empty(manager, user_repository):
    assert await manager.get_roles(_new_user()) == []
    user_repository.get_roles.assert_not_awaited()


@pytest.mark.asyncio
async def test_check_password(manager):
    user = create_fake_user(hashed_password=hash_password("P@ssw0rd!"))

    assert await manager.check_password(user, "P@ssw0rd!") is True
    assert await manager.check_password(user, "wrong") is False


@pytest.mark.asyncio
@pytest.mark.parametrize("stored", [None, "", "not-a-bcrypt-hash"])
async def test_check_password_without_usable_hash(manager, stored):
    user = create_fake_user(hashed_password=stored)

    assert await manager.check_password(user, "P@ssw0rd!") is False
