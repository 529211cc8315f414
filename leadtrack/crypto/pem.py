"""Normalization of loosely formatted PEM key text.

Key material usually arrives through environment variables, where line
breaks get flattened into literal ``\\n`` pairs, delimiters are dropped or
mislabelled and whitespace is arbitrary. ``normalize_pem`` rebuilds a
well-formed PEM block from whatever base64 body is left.
"""

import re
from enum import Enum

from leadtrack.sso.errors import ConfigurationError

PEM_LINE_WIDTH = 64
LEGACY_RSA_MARKERS = ("RSA PRIVATE KEY", "RSA PUBLIC KEY")

_ESCAPED_NEWLINE = "\\n"
_WHITESPACE_RE = re.compile(r"\s+")
_BEGIN_RE = re.compile(r"-----BEGIN[A-Z ]+-----")
_END_RE = re.compile(r"-----END[A-Z ]+-----")


class KeyRole(Enum):
    """Which half of a keypair a PEM block holds."""

    PUBLIC = "PUBLIC KEY"
    PRIVATE = "PRIVATE KEY"


def is_legacy_rsa(raw: str) -> bool:
    """Return True if the raw text is labelled as PKCS#1 RSA material."""
    return any(marker in raw for marker in LEGACY_RSA_MARKERS)


def extract_body(raw: str) -> str:
    """Strip escapes, whitespace and any delimiter lines, leaving base64."""
    dense = _WHITESPACE_RE.sub("", raw.replace(_ESCAPED_NEWLINE, ""))
    dense = _BEGIN_RE.sub("", dense)
    return _END_RE.sub("", dense)


def wrap_body(body: str, width: int = PEM_LINE_WIDTH) -> str:
    """Split the body into fixed-width lines."""
    return "\n".join(body[i : i + width] for i in range(0, len(body), width))


def pem_label(role: KeyRole, *, rsa: bool) -> str:
    """Build the label used in the BEGIN/END lines."""
    return f"RSA {role.value}" if rsa else role.value


def normalize_pem(raw: str | None, role: KeyRole, *, force_rsa: bool = False) -> str:
    """Rebuild ``raw`` as a PEM block for ``role``.

    The label gets the ``RSA`` prefix when the raw text mentions a PKCS#1
    label or when ``force_rsa`` is set.
    """
    if not raw:
        raise ConfigurationError(f"SSO {role.name.lower()} key not configured")

    body = extract_body(raw)
    if not body:
        raise ConfigurationError(f"SSO {role.name.lower()} key has no key data")

    label = pem_label(role, rsa=force_rsa or is_legacy_rsa(raw))
    return f"-----BEGIN {label}-----\n{wrap_body(body)}\n-----END {label}-----"
