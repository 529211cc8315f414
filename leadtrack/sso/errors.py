"""Failure taxonomy for key handling and SSO token processing."""


class SSOError(RuntimeError):
    """Base class for every SSO failure surfaced to the HTTP layer."""


class ConfigurationError(SSOError):
    """Key material is missing or empty on the server side."""


class KeyFormatError(SSOError):
    """Normalized PEM could not be turned into a key object."""


class CryptoVerificationError(SSOError):
    """Signature, algorithm, expiry or token structure check failed."""


class ValidationError(SSOError):
    """A verified token lacks a claim the service requires."""
