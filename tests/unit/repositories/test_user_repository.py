from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import DatabaseError, ValidationError
from src.domain.entities.user import UserRole
from src.infrastructure.repositories.user_repository import UserRepository
from tests.factories import create_fake_user


@pytest.fixture
def mock_db_session():
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def repository(mock_db_session):
    return UserRepository(mock_db_session)


def _first(value):
    result = MagicMock()
    result.scalars.return_value.first.return_value = value
    return result


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", [0, -1, None])
async def test_get_by_id_skips_impossible_ids(repository, mock_db_session, user_id):
    assert await repository.get_by_id(user_id) is None
    mock_db_session.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_by_id_returns_user(repository, mock_db_session):
    user = create_fake_user(id=1)
    mock_db_session.execute.return_value = _first(user)

    assert await repository.get_by_id(1) is user


@pytest.mark.asyncio
async def test_get_by_email_is_case_insensitive(repository, mock_db_session):
    # Arrange
    user = create_fake_user(email="alice@example.com")
    mock_db_session.execute.return_value = _first(user)

    # Act
    found = await repository.get_by_email("  Alice@Example.COM ")

    # Assert
    assert found is user
    statement = mock_db_session.execute.await_args.args[0]
    sql = str(statement.compile(compile_kwargs={"literal_binds": True}))
    assert "lower(users.email) = 'alice@example.com'" in sql


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["", "   "])
async def test_get_by_email_blank_returns_none(repository, mock_db_session, email):
    assert await repository.get_by_email(email) is None
    mock_db_session.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_lookup_driver_error_is_wrapped(repository, mock_db_session):
    mock_db_session.execute.side_effect = SQLAlchemyError("down")

    with pytest.raises(DatabaseError, match="Failed to retrieve user."):
        await repository.get_by_email("alice@example.com")


@pytest.mark.asyncio
async def test_save_commits_and_refreshes(repository, mock_db_session):
    user = create_fake_user()

    saved = await repository.save(user)

    assert saved is user
    mock_db_session.add.assert_called_once_with(user)
    mock_db_session.commit.assert_awaited_once()
    mock_db_session.refresh.assert_awaited_once_with(user)


@pytest.mark.asyncio
async def test_save_duplicate_email_is_a_validation_error(repository, mock_db_session):
    mock_db_session.commit.side_effect = IntegrityError("INSERT", {}, Exception("unique"))

    with pytest.raises(ValidationError) as exc_info:
        await repository.save(create_fake_user())

    assert exc_info.value.code == "duplicate_email"
    mock_db_session.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_save_driver_error_rolls_back(repository, mock_db_session):
    mock_db_session.commit.side_effect = SQLAlchemyError("boom")

    with pytest.raises(DatabaseError):
        await repository.save(create_fake_user())

    mock_db_session.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_save_none_is_rejected(repository):
    with pytest.raises(ValueError):
        await repository.save(None)


@pytest.mark.asyncio
async def test_get_roles(repository, mock_db_session):
    result = MagicMock()
    result.scalars.return_value.all.return_value = ["User", "Admin"]
    mock_db_session.execute.return_value = result

    assert await repository.get_roles(1) == ["User", "Admin"]


@pytest.mark.asyncio
async def test_add_role_inserts_new_membership(repository, mock_db_session):
    mock_db_session.execute.return_value = _first(None)

    await repository.add_role(1, "User")

    [membership] = mock_db_session.add.call_args.args
    assert isinstance(membership, UserRole)
    assert (membership.user_id, membership.role) == (1, "User")
    mock_db_session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_add_role_existing_membership_is_noop(repository, mock_db_session):
    mock_db_session.execute.return_value = _first(UserRole(id=1, user_id=1, role="User"))

    await repository.add_role(1, "User")

    mock_db_session.add.assert_not_called()
    mock_db_session.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_add_role_concurrent_insert_is_ignored(repository, mock_db_session):
    mock_db_session.execute.return_value = _first(None)
    mock_db_session.commit.side_effect = IntegrityError("INSERT", {}, Exception("unique"))

    await repository.add_role(1, "User")

    mock_db_session.rollback.assert_awaited_once()
