"""SSO sign-in: verify externally issued RS256 tokens and provision users.

Both entry points read key material lazily from ``AuthSettings`` and share
the PEM normalization in ``leadtrack.crypto.pem``:

- ``verify_sso_token`` checks an inbound token against the configured public
  key, creates the user on first sign-in and returns a local session token.
- ``issue_sso_token`` signs a short-lived token with the configured private
  key. It stands in for the external identity provider during development.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from leadtrack.core.settings import AuthSettings
from leadtrack.crypto.keys import load_private_key, load_public_key
from leadtrack.crypto.password import placeholder_password_hash
from leadtrack.crypto.session import SessionTokenManager
from leadtrack.crypto.types import SSOClaims
from leadtrack.db.models_user import UserEntity
from leadtrack.db.repo_user import (
    UserCreateData,
    get_user_by_email,
    insert_user_if_absent,
)
from leadtrack.sso.errors import (
    CryptoVerificationError,
    KeyFormatError,
    ValidationError,
)

logger = logging.getLogger(__name__)

SSO_ALGORITHM = "RS256"


class SSOLoginResult(BaseModel):
    """Outcome of a successful SSO sign-in."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    user: UserEntity
    claims: SSOClaims
    is_new_user: bool
    session_token: str


def default_display_name(email: str) -> str:
    """Use the local part of an email address as a display name."""
    return email.split("@")[0]


def decode_sso_token(token: str, raw_public_key: str | None) -> SSOClaims:
    """Verify an RS256 token and extract its identity claims."""
    public_key = load_public_key(raw_public_key)
    try:
        payload: dict[str, Any] = jwt.decode(
            token, public_key, algorithms=[SSO_ALGORITHM]
        )
    except jwt.PyJWTError as exc:
        raise CryptoVerificationError(str(exc)) from exc

    email = payload.get("email")
    if not email or not isinstance(email, str):
        raise ValidationError("missing email")
    name = payload.get("name")
    return SSOClaims.model_validate(
        {**payload, "email": email, "name": name if isinstance(name, str) else None}
    )


async def verify_sso_token(
    session: AsyncSession, token: str, settings: AuthSettings
) -> SSOLoginResult:
    """Sign a user in from an SSO token, creating the account if needed."""
    claims = decode_sso_token(token, settings.sso_public_key)

    user = await get_user_by_email(session, claims.email)
    is_new = False
    if user is None:
        data = UserCreateData(
            name=claims.name or default_display_name(claims.email),
            email=claims.email,
            password_hash=placeholder_password_hash(),
        )
        user, is_new = await insert_user_if_absent(session, data)

    if is_new:
        logger.info("Provisioned new user: %s", user.email)
    else:
        logger.info("Logged in user: %s", user.email)

    session_token = SessionTokenManager(settings.jwt_secret).create_token(
        user.id, user.name
    )
    return SSOLoginResult(
        user=user, claims=claims, is_new_user=is_new, session_token=session_token
    )


def issue_sso_token(email: str, name: str | None, settings: AuthSettings) -> str:
    """Sign ``{email, name}`` with the configured private key for one TTL."""
    private_key = load_private_key(settings.sso_private_key)
    payload = {
        "email": email,
        "name": name,
        "exp": datetime.now(UTC) + timedelta(seconds=settings.sso_token_ttl),
    }
    try:
        return jwt.encode(payload, private_key, algorithm=SSO_ALGORITHM)
    except (jwt.PyJWTError, TypeError, ValueError) as exc:
        raise KeyFormatError(f"cannot sign with configured key: {exc}") from exc
