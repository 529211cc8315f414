"""Key construction from normalized PEM text, plus RSA keypair generation."""

import logging

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.types import (
    PrivateKeyTypes,
    PublicKeyTypes,
)

from leadtrack.crypto.pem import KeyRole, normalize_pem
from leadtrack.crypto.types import KeyLoadResult, KeyPairData
from leadtrack.sso.errors import KeyFormatError

logger = logging.getLogger(__name__)

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537

_PARSE_ERRORS = (ValueError, TypeError, UnsupportedAlgorithm)


def generate_rsa_keypair(*, legacy: bool = False) -> KeyPairData:
    """Generate an RSA-2048 keypair.

    ``legacy`` selects PKCS#1 (``RSA PRIVATE KEY`` / ``RSA PUBLIC KEY``)
    encodings instead of PKCS#8 / SubjectPublicKeyInfo.
    """
    private_key = rsa.generate_private_key(
        public_exponent=RSA_PUBLIC_EXPONENT,
        key_size=RSA_KEY_SIZE,
    )
    private_format = (
        serialization.PrivateFormat.TraditionalOpenSSL
        if legacy
        else serialization.PrivateFormat.PKCS8
    )
    public_format = (
        serialization.PublicFormat.PKCS1
        if legacy
        else serialization.PublicFormat.SubjectPublicKeyInfo
    )
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=private_format,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = (
        private_key.public_key()
        .public_bytes(encoding=serialization.Encoding.PEM, format=public_format)
        .decode()
    )
    return KeyPairData(private_key_pem=private_pem, public_key_pem=public_pem)


def _require_rsa(
    key: PrivateKeyTypes | PublicKeyTypes, kind: str
) -> PrivateKeyTypes | PublicKeyTypes:
    """RS256 only accepts RSA keys."""
    if not isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
        raise KeyFormatError(
            f"invalid {kind} key: expected RSA, got {type(key).__name__}"
        )
    return key


def _attempt_private(pem: str) -> KeyLoadResult:
    """Try to parse one private key PEM without raising."""
    try:
        key = serialization.load_pem_private_key(pem.encode(), password=None)
    except _PARSE_ERRORS as exc:
        return KeyLoadResult(pem=pem, error=exc)
    return KeyLoadResult(pem=pem, key=key)


def load_private_key(raw: str | None) -> PrivateKeyTypes:
    """Build a private key from raw PEM text.

    The first attempt uses the label detected from ``raw``. If that fails
    the body is retried once under a forced ``RSA PRIVATE KEY`` label. When
    both fail, the first attempt's error is the one reported.
    """
    first = _attempt_private(normalize_pem(raw, KeyRole.PRIVATE))
    if first.ok:
        return _require_rsa(first.key, "private")

    logger.info("Failed to parse with default header, trying RSA header")
    retry = _attempt_private(normalize_pem(raw, KeyRole.PRIVATE, force_rsa=True))
    if retry.ok:
        return _require_rsa(retry.key, "private")

    raise KeyFormatError(f"invalid private key: {first.error}") from first.error


def load_public_key(raw: str | None) -> PublicKeyTypes:
    """Build a public key from raw PEM text; no fallback."""
    pem = normalize_pem(raw, KeyRole.PUBLIC)
    try:
        key = serialization.load_pem_public_key(pem.encode())
    except _PARSE_ERRORS as exc:
        raise KeyFormatError(f"invalid public key: {exc}") from exc
    return _require_rsa(key, "public")
