"""Local session tokens signed with the service's shared HS256 secret."""

import jwt

from leadtrack.crypto.types import SessionClaims

SESSION_ALGORITHM = "HS256"


class SessionTokenManager:
    """Creates and verifies HS256 session tokens.

    Session tokens carry ``id`` and ``name`` only and have no expiry.
    """

    def __init__(self, secret: str) -> None:
        self._secret = secret

    def create_token(self, user_id: str, name: str | None) -> str:
        """Sign a session token for a user."""
        payload = {"id": user_id, "name": name}
        return jwt.encode(payload, self._secret, algorithm=SESSION_ALGORITHM)

    def verify_token(self, token: str) -> SessionClaims:
        """Verify and decode a session token."""
        raw = jwt.decode(token, self._secret, algorithms=[SESSION_ALGORITHM])
        return SessionClaims.model_validate(raw)
