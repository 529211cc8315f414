"""Local account registration and password login."""

import logging

from fastapi import APIRouter, status
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import JSONResponse

from leadtrack.api.deps import DbSession, Settings
from leadtrack.api.schemas import (
    CredentialsPayload,
    RegisterPayload,
    SessionResponse,
    UserResponse,
)
from leadtrack.crypto.password import hash_password
from leadtrack.crypto.session import SessionTokenManager
from leadtrack.db.repo_user import UserCreateData, create_user, verify_credentials

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=None
)
async def register(
    payload: RegisterPayload,
    db: DbSession,
) -> UserResponse | JSONResponse:
    """POST /api/auth/register -- create a local account."""
    data = UserCreateData(
        name=payload.name,
        email=payload.email,
        password_hash=hash_password(payload.password),
    )
    try:
        async with db.begin_nested():
            user = await create_user(db, data)
    except SQLAlchemyError:
        logger.exception("Registration failed for %s", payload.email)
        return JSONResponse(
            {"error": "Error registering user"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return UserResponse.model_validate(user)


@router.post("/login", response_model=None)
async def login(
    payload: CredentialsPayload,
    db: DbSession,
    settings: Settings,
) -> SessionResponse | JSONResponse:
    """POST /api/auth/login -- exchange email and password for a session."""
    try:
        user = await verify_credentials(db, payload.email, payload.password)
    except SQLAlchemyError:
        logger.exception("Login lookup failed for %s", payload.email)
        await db.rollback()
        return JSONResponse(
            {"error": "Error logging in"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    if user is None:
        return JSONResponse(
            {"error": "Invalid credentials"},
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    token = SessionTokenManager(settings.jwt_secret).create_token(user.id, user.name)
    return SessionResponse(token=token, user=UserResponse.model_validate(user))
