"""
TurtleWatch Backend - User Route Handlers
==========================================

What:  POST /api/users/register, POST /api/users/login, GET /api/users.
How:   Thin handlers: extract the body, call UserService, wrap the result in
       the `{message, user(s)}` envelope.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from turtlewatch.database import get_db_session
from turtlewatch.schemas.common import ErrorResponse
from turtlewatch.schemas.user import (
    LoginRequest,
    RegisterRequest,
    UserEnvelope,
    UserListEnvelope,
)
from turtlewatch.services.user_service import user_service

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post(
    "/register",
    response_model=UserEnvelope,
    responses={
        400: {"description": "Missing fields or email already registered", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a user account",
)
async def register_user(
    payload: RegisterRequest,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> UserEnvelope:
    settings = request.app.state.settings
    user = await user_service.register(
        db,
        payload,
        bcrypt_rounds=settings.bcrypt_rounds,
        default_role=settings.default_user_role,
    )
    return UserEnvelope(message="User registered successfully", user=user)


@router.post(
    "/login",
    response_model=UserEnvelope,
    responses={
        400: {"description": "Missing credentials", "model": ErrorResponse},
        401: {"description": "Invalid email or password", "model": ErrorResponse},
        403: {"description": "Account inactive", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Check login credentials",
    description="Verifies email and password. No token or session is issued.",
)
async def login_user(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> UserEnvelope:
    user = await user_service.login(db, payload)
    return UserEnvelope(message="Login successful", user=user)


@router.get(
    "",
    response_model=UserListEnvelope,
    summary="List all users",
)
async def list_users(db: AsyncSession = Depends(get_db_session)) -> UserListEnvelope:
    users = await user_service.list_users(db)
    return UserListEnvelope(message="Users retrieved successfully", users=users)
