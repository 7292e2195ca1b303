"""Unit tests for the SQLAlchemy refresh token repository.

The session is mocked; these tests pin the transaction handling and the
translation of driver errors, not the SQL itself.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import DatabaseError
from src.infrastructure.repositories.refresh_token_repository import RefreshTokenRepository
from tests.factories import create_fake_refresh_token


@pytest.fixture
def mock_db_session():
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def repository(mock_db_session):
    return RefreshTokenRepository(mock_db_session)


def _rowcount(count):
    result = MagicMock()
    result.rowcount = count
    return result


class TestAdd:
    @pytest.mark.asyncio
    async def test_add_commits_and_refreshes(self, repository, mock_db_session):
        # Arrange
        token = create_fake_refresh_token()

        # Act
        stored = await repository.add(token)

        # Assert
        assert stored is token
        mock_db_session.add.assert_called_once_with(token)
        mock_db_session.commit.assert_awaited_once()
        mock_db_session.refresh.assert_awaited_once_with(token)

    @pytest.mark.asyncio
    async def test_add_failure_rolls_back(self, repository, mock_db_session):
        mock_db_session.commit.side_effect = SQLAlchemyError("boom")

        with pytest.raises(DatabaseError, match="Failed to persist refresh token."):
            await repository.add(create_fake_refresh_token())

        mock_db_session.rollback.assert_awaited_once()


class TestLookup:
    @pytest.mark.asyncio
    async def test_returns_first_match(self, repository, mock_db_session):
        token = create_fake_refresh_token(id=5)
        result = MagicMock()
        result.scalars.return_value.first.return_value = token
        mock_db_session.execute.return_value = result

        found = await repository.get_by_value_and_user(token.token, token.user_id)

        assert found is token

    @pytest.mark.asyncio
    async def test_missing_row_returns_none(self, repository, mock_db_session):
        result = MagicMock()
        result.scalars.return_value.first.return_value = None
        mock_db_session.execute.return_value = result

        assert await repository.get_by_value_and_user("unknown", 1) is None

    @pytest.mark.asyncio
    async def test_driver_error_is_wrapped(self, repository, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(DatabaseError):
            await repository.get_by_value_and_user("value", 1)

    @pytest.mark.asyncio
    async def test_live_listing(self, repository, mock_db_session):
        tokens = [create_fake_refresh_token(id=1), create_fake_refresh_token(id=2)]
        result = MagicMock()
        result.scalars.return_value.all.return_value = tokens
        mock_db_session.execute.return_value = result

        assert await repository.get_all_live_for_user(1) == tokens


class TestMarkUsed:
    @pytest.mark.asyncio
    async def test_single_row_updated_means_redeemed(self, repository, mock_db_session):
        # Arrange
        token = create_fake_refresh_token(id=3)
        mock_db_session.execute.return_value = _rowcount(1)

        # Act
        redeemed = await repository.mark_used(token)

        # Assert
        assert redeemed is True
        assert token.is_used
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_row_updated_means_lost_race(self, repository, mock_db_session):
        token = create_fake_refresh_token(id=3)
        mock_db_session.execute.return_value = _rowcount(0)

        redeemed = await repository.mark_used(token)

        assert redeemed is False
        assert not token.is_used

    @pytest.mark.asyncio
    async def test_statement_is_conditional_on_live_state(self, repository, mock_db_session):
        mock_db_session.execute.return_value = _rowcount(1)

        await repository.mark_used(create_fake_refresh_token(id=3))

        statement = mock_db_session.execute.await_args.args[0]
        sql = str(statement.compile(compile_kwargs={"literal_binds": True}))
        where_clause = sql.split("WHERE", 1)[1]
        assert "is_used IS" in where_clause
        assert "is_revoked IS" in where_clause

    @pytest.mark.asyncio
    async def test_failure_rolls_back_and_raises(self, repository, mock_db_session):
        mock_db_session.execute.side_effect = SQLAlchemyError("deadlock")

        with pytest.raises(DatabaseError, match="Failed to redeem refresh token."):
            await repository.mark_used(create_fake_refresh_token(id=3))

        mock_db_session.rollback.assert_awaited_once()


class TestRevokeAll:
    @pytest.mark.asyncio
    async def test_returns_number_of_revoked_rows(self, repository, mock_db_session):
        mock_db_session.execute.return_value = _rowcount(3)

        assert await repository.revoke_all_live_for_user(1) == 3
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_rowcount_counts_as_zero(self, repository, mock_db_session):
        mock_db_session.execute.return_value = _rowcount(None)

        assert await repository.revoke_all_live_for_user(1) == 0

    @pytest.mark.asyncio
    async def test_failure_rolls_back_and_raises(self, repository, mock_db_session):
        mock_db_session.commit.side_effect = SQLAlchemyError("boom")

        with pytest.raises(DatabaseError):
            await repository.revoke_all_live_for_user(1)

        mock_db_session.rollback.assert_awaited_once()


class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_commits_and_refreshes(self, repository, mock_db_session):
        # Arrange
        token = create_fake_refresh_token(id=4)
        token.is_revoked = True

        # Act
        stored = await repository.update(token)

        # Assert
        assert stored is token
        mock_db_session.add.assert_called_once_with(token)
        mock_db_session.commit.assert_awaited_once()
        mock_db_session.refresh.assert_awaited_once_with(token)

    @pytest.mark.asyncio
    async def test_update_failure_rolls_back(self, repository, mock_db_session):
        mock_db_session.commit.side_effect = SQLAlchemyError("boom")

        with pytest.raises(DatabaseError, match="Failed to update refresh token."):
            await repository.update(create_fake_refresh_token(id=4))

        mock_db_session.rollback.assert_awaited_once()


class TestRedeemAndAdd:
    @pytest.mark.asyncio
    async def test_redeem_and_insert_commit_together(self, repository, mock_db_session):
        # Arrange
        token = create_fake_refresh_token(id=3)
        replacement = create_fake_refresh_token()
        mock_db_session.execute.return_value = _rowcount(1)

        # Act
        rotated = await repository.redeem_and_add(token, replacement)

        # Assert
        assert rotated is True
        assert token.is_used
        mock_db_session.add.assert_called_once_with(replacement)
        mock_db_session.commit.assert_awaited_once()
        mock_db_session.refresh.assert_awaited_once_with(replacement)

    @pytest.mark.asyncio
    async def test_lost_race_inserts_nothing(self, repository, mock_db_session):
        token = create_fake_refresh_token(id=3)
        mock_db_session.execute.return_value = _rowcount(0)

        rotated = await repository.redeem_and_add(token, create_fake_refresh_token())

        assert rotated is False
        assert not token.is_used
        mock_db_session.add.assert_not_called()
        mock_db_session.commit.assert_not_awaited()
        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_insert_rolls_back_the_redemption(self, repository, mock_db_session):
        token = create_fake_refresh_token(id=3)
        mock_db_session.execute.return_value = _rowcount(1)
        mock_db_session.commit.side_effect = SQLAlchemyError("unique violation")

        with pytest.raises(DatabaseError, match="Failed to rotate refresh token."):
            await repository.redeem_and_add(token, create_fake_refresh_token())

        assert not token.is_used
        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_redemption_is_conditional_on_live_state(self, repository, mock_db_session):
        mock_db_session.execute.return_value = _rowcount(1)

        await repository.redeem_and_add(create_fake_refresh_token(id=3), create_fake_refresh_token())

        statement = mock_db_session.execute.await_args.args[0]
        sql = str(statement.compile(compile_kwargs={"literal_binds": True}))
        assert sql.startswith("UPDATE refresh_tokens")
        where_clause = sql.split("WHERE", 1)[1]
        assert "is_used IS" in where_clause
        assert "is_revoked IS" in where_clause
