"""
TurtleWatch Backend - User Service (Account Management)
========================================================

What:  Registration, login check and user listing.
Who:   Called by the /api/users route handlers.

Login Contract:
    ┌──────────────┐   not found / bad hash   ┌───────────────┐
    │ lookup email │ ───────────────────────▶ │ AuthError 401 │
    └──────┬───────┘                          └───────────────┘
           │ match
           ▼
    ┌──────────────┐   is_active = false      ┌────────────────────┐
    │ check active │ ───────────────────────▶ │ ForbiddenError 403 │
    └──────┬───────┘                          └────────────────────┘
           ▼
      public fields

    Unknown email and wrong password raise the same AuthError so the
    response does not reveal which accounts exist.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from turtlewatch.exceptions import AuthError, ConflictError, ForbiddenError, ValidationError
from turtlewatch.models.user import User
from turtlewatch.schemas.user import LoginRequest, RegisterRequest, UserPublic
from turtlewatch.security import (
    MAX_PASSWORD_BYTES,
    hash_password_async,
    password_too_long,
    verify_password_async,
)
from turtlewatch.services.db_errors import error_boundary, is_unique_violation
from turtlewatch.services.validation import is_missing, require_fields

logger = logging.getLogger(__name__)

REGISTER_REQUIRED_FIELDS = ("first_name", "last_name", "email", "password")


class UserService:
    """
    Account operations. Stateless; the session is passed to every call.
    """

    async def register(
        self,
        db: AsyncSession,
        payload: RegisterRequest,
        bcrypt_rounds: int = 12,
        default_role: str = "volunteer",
    ) -> UserPublic:
        """
        Create an account and return its public fields.

        Raises:
            ValidationError: first_name, last_name, email or password missing
                or password longer than bcrypt accepts
            ConflictError: email already registered
            InternalError: any other database failure
        """
        require_fields(payload, REGISTER_REQUIRED_FIELDS)
        if password_too_long(payload.password):
            raise ValidationError(
                message=f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
                field="password",
            )

        with error_boundary("registering user", email=payload.email):
            password_hash = await hash_password_async(payload.password, bcrypt_rounds)
            user = User(
                first_name=payload.first_name,
                last_name=payload.last_name,
                email=payload.email,
                password_hash=password_hash,
                role=default_role if is_missing(payload.role) else payload.role,
                is_email_verified=False,
                is_active=True,
            )
            db.add(user)
            try:
                await db.flush()
            except IntegrityError as e:
                if is_unique_violation(e, "uq_users_email"):
                    logger.info("Registration rejected: email already exists")
                    raise ConflictError(
                        message="A user with this email already exists",
                        context={"email": payload.email},
                    )
                raise
            await db.refresh(user)
            logger.info("User registered: id=%s role=%s", user.id, user.role)
            return UserPublic.model_validate(user)

    async def login(self, db: AsyncSession, payload: LoginRequest) -> UserPublic:
        """
        Check credentials and return the account's public fields.

        Raises:
            ValidationError: email or password missing
            AuthError: unknown email or wrong password (indistinguishable)
            ForbiddenError: account deactivated
        """
        require_fields(payload, ("email", "password"))

        with error_boundary("logging in"):
            result = await db.execute(select(User).where(User.email == payload.email))
            user = result.scalar_one_or_none()

            if user is None or not await verify_password_async(
                payload.password, user.password_hash
            ):
                logger.info("Login failed: invalid credentials")
                raise AuthError()

            if not user.is_active:
                logger.info("Login refused: account %s is inactive", user.id)
                raise ForbiddenError(
                    message="Account is inactive. Contact an administrator.",
                    context={"user_id": user.id},
                )

            return UserPublic.model_validate(user)

    async def list_users(self, db: AsyncSession) -> List[UserPublic]:
        """All users, ascending id."""
        with error_boundary("listing users"):
            result = await db.execute(select(User).order_by(User.id.asc()))
            return [UserPublic.model_validate(u) for u in result.scalars().all()]


user_service = UserService()
