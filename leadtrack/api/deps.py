"""FastAPI dependencies shared by the HTTP routers."""

from typing import Annotated

import jwt
import pydantic
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from leadtrack.core.settings import AuthSettings
from leadtrack.crypto.session import SessionTokenManager
from leadtrack.crypto.types import SessionClaims
from leadtrack.db.engine import get_session

_security = HTTPBearer(auto_error=False)


def load_settings() -> AuthSettings:
    return AuthSettings()


Settings = Annotated[AuthSettings, Depends(load_settings)]
DbSession = Annotated[AsyncSession, Depends(get_session)]


async def require_session(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_security)],
    settings: Settings,
) -> SessionClaims:
    """Decode the Bearer session token.

    A missing token is 401; a token that does not verify is 403.
    """
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        return SessionTokenManager(settings.jwt_secret).verify_token(
            credentials.credentials
        )
    except (jwt.PyJWTError, pydantic.ValidationError) as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN) from exc


CurrentUser = Annotated[SessionClaims, Depends(require_session)]
