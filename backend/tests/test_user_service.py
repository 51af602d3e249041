"""
TurtleWatch Backend - User Service Unit Tests
==============================================

What:  UserService register/login rules against a mocked session.

What we test:
    ✅ Required fields are checked before touching the database
    ✅ Password is stored hashed, role defaults to volunteer
    ✅ Duplicate email → ConflictError; other IntegrityErrors → InternalError
    ✅ Unknown email and wrong password raise the same AuthError
    ✅ Inactive account → ForbiddenError
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from turtlewatch.exceptions import (
    AuthError,
    ConflictError,
    ForbiddenError,
    InternalError,
    ValidationError,
)
from turtlewatch.schemas.user import LoginRequest, RegisterRequest
from turtlewatch.security import hash_password, verify_password
from turtlewatch.services.user_service import UserService


class FakeDriverError(Exception):
    def __init__(self, sqlstate, constraint_name=None):
        super().__init__("driver error")
        self.sqlstate = sqlstate
        self.constraint_name = constraint_name


def registration(**overrides):
    data = {
        "first_name": "Ada",
        "last_name": "Caretta",
        "email": "ada@example.org",
        "password": "s3cret",
    }
    data.update(overrides)
    return RegisterRequest(**data)


async def assign_identity(user):
    """Simulate the database filling in generated columns on refresh."""
    now = datetime.now(timezone.utc)
    user.id = 1
    user.created_at = now
    user.updated_at = now


def stored_user(password="s3cret", is_active=True):
    user = MagicMock()
    user.id = 7
    user.first_name = "Ada"
    user.last_name = "Caretta"
    user.email = "ada@example.org"
    user.password_hash = hash_password(password, rounds=4)
    user.role = "volunteer"
    user.is_email_verified = False
    user.is_active = is_active
    user.created_at = datetime.now(timezone.utc)
    user.updated_at = datetime.now(timezone.utc)
    return user


def lookup_returns(session, user):
    result = MagicMock()
    result.scalar_one_or_none.return_value = user
    session.execute.return_value = result


class TestRegister:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_missing_fields(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.register(mock_db_session, RegisterRequest(email="a@b.c"))

        assert exc_info.value.message == (
            "Missing required fields: first_name, last_name, password"
        )
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_success_hashes_password(self, mock_db_session):
        mock_db_session.refresh = AsyncMock(side_effect=assign_identity)

        result = await self.service.register(mock_db_session, registration(), bcrypt_rounds=4)

        stored = mock_db_session.add.call_args.args[0]
        assert stored.password_hash != "s3cret"
        assert verify_password("s3cret", stored.password_hash)
        assert result.role == "volunteer"
        assert result.is_active is True
        assert result.is_email_verified is False
        assert not hasattr(result, "password_hash")

    @pytest.mark.asyncio
    async def test_password_over_72_bytes(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.register(
                mock_db_session, registration(password="x" * 80), bcrypt_rounds=4
            )

        assert exc_info.value.field == "password"
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_explicit_role(self, mock_db_session):
        mock_db_session.refresh = AsyncMock(side_effect=assign_identity)

        result = await self.service.register(
            mock_db_session, registration(role="coordinator"), bcrypt_rounds=4
        )

        assert result.role == "coordinator"

    @pytest.mark.asyncio
    async def test_duplicate_email(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, FakeDriverError("23505", "uq_users_email"))
        )

        with pytest.raises(ConflictError) as exc_info:
            await self.service.register(mock_db_session, registration(), bcrypt_rounds=4)

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "A user with this email already exists"

    @pytest.mark.asyncio
    async def test_other_integrity_error_is_internal(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, FakeDriverError("23502"))
        )

        with pytest.raises(InternalError):
            await self.service.register(mock_db_session, registration(), bcrypt_rounds=4)


class TestLogin:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_success(self, mock_db_session):
        lookup_returns(mock_db_session, stored_user())

        result = await self.service.login(
            mock_db_session, LoginRequest(email="ada@example.org", password="s3cret")
        )

        assert result.id == 7
        assert result.email == "ada@example.org"

    @pytest.mark.asyncio
    async def test_missing_password(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.login(mock_db_session, LoginRequest(email="ada@example.org"))
        mock_db_session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_are_indistinguishable(
        self, mock_db_session
    ):
        lookup_returns(mock_db_session, None)
        with pytest.raises(AuthError) as unknown:
            await self.service.login(
                mock_db_session, LoginRequest(email="nobody@example.org", password="x")
            )

        lookup_returns(mock_db_session, stored_user())
        with pytest.raises(AuthError) as wrong:
            await self.service.login(
                mock_db_session, LoginRequest(email="ada@example.org", password="x")
            )

        assert unknown.value.message == wrong.value.message
        assert unknown.value.status_code == wrong.value.status_code == 401

    @pytest.mark.asyncio
    async def test_inactive_account(self, mock_db_session):
        lookup_returns(mock_db_session, stored_user(is_active=False))

        with pytest.raises(ForbiddenError) as exc_info:
            await self.service.login(
                mock_db_session, LoginRequest(email="ada@example.org", password="s3cret")
            )

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_inactive_account_with_wrong_password_is_401(self, mock_db_session):
        lookup_returns(mock_db_session, stored_user(is_active=False))

        with pytest.raises(AuthError):
            await self.service.login(
                mock_db_session, LoginRequest(email="ada@example.org", password="nope")
            )
