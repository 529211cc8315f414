"""SSO sign-in endpoint and the development token issuer."""

import logging

from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import JSONResponse

from leadtrack.api.deps import DbSession, Settings
from leadtrack.api.schemas import (
    DevTokenPayload,
    DevTokenResponse,
    SessionResponse,
    SSOLoginPayload,
    UserResponse,
)
from leadtrack.sso.errors import SSOError
from leadtrack.sso.service import issue_sso_token, verify_sso_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["sso"])
dev_router = APIRouter(prefix="/api/dev", tags=["dev"])

HTTP_UNAUTHORIZED = 401
HTTP_SERVER_ERROR = 500


@router.post("/sso", response_model=None)
async def sso_login(
    payload: SSOLoginPayload,
    db: DbSession,
    settings: Settings,
) -> SessionResponse | JSONResponse:
    """POST /api/auth/sso -- exchange an SSO token for a session token.

    Configuration, key, signature and claim failures all answer 401 with
    the same message prefix.
    """
    try:
        result = await verify_sso_token(db, payload.token, settings)
    except SSOError as exc:
        logger.warning("SSO sign-in rejected: %s", exc)
        return JSONResponse(
            {"error": f"Invalid SSO token: {exc}"}, status_code=HTTP_UNAUTHORIZED
        )
    except SQLAlchemyError as exc:
        logger.exception("SSO sign-in failed on the user store")
        await db.rollback()
        return JSONResponse(
            {"error": f"Invalid SSO token: {exc.__class__.__name__}"},
            status_code=HTTP_UNAUTHORIZED,
        )

    return SessionResponse(
        token=result.session_token,
        user=UserResponse.model_validate(result.user),
    )


@dev_router.post("/sso-token", response_model=None)
async def dev_sso_token(
    payload: DevTokenPayload,
    settings: Settings,
) -> DevTokenResponse | JSONResponse:
    """POST /api/dev/sso-token -- sign a test SSO token with the private key."""
    try:
        token = issue_sso_token(payload.email, payload.name, settings)
    except SSOError as exc:
        logger.error("SSO token generation failed: %s", exc)
        return JSONResponse(
            {"error": f"Error generating token: {exc}"},
            status_code=HTTP_SERVER_ERROR,
        )
    return DevTokenResponse(token=token)
