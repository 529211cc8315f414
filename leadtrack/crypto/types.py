"""Type definitions for key material, SSO claims and session tokens."""

from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes
from pydantic import BaseModel, ConfigDict


class KeyPairData(BaseModel):
    """A PEM-encoded RSA keypair."""

    private_key_pem: str
    public_key_pem: str


class KeyLoadResult(BaseModel):
    """Outcome of one private key construction attempt.

    Exactly one of ``key`` and ``error`` is set.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    pem: str
    key: PrivateKeyTypes | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.key is not None


class SSOClaims(BaseModel):
    """Identity claims carried by an externally issued SSO token."""

    model_config = ConfigDict(extra="allow")

    email: str = ""
    name: str | None = None


class SessionClaims(BaseModel):
    """Claims of a locally issued session token."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str | None = None
