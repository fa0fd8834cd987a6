"""
Custom exceptions for the jwasig library.

This module defines the exceptions raised while resolving algorithms and
preparing keys. A caller mistake (bad identifier, missing key) raises one of
these; an untrusted signature is reported by ``verify`` returning False.

The three validation errors also derive from TypeError; the key and
signature material errors derive from ValueError.
"""


class JwaError(Exception):
    """Base exception for all jwasig errors."""

    pass


class InvalidAlgorithmError(JwaError, TypeError):
    """
    Raised when an algorithm identifier is not supported.

    Identifiers must match one of HS256/384/512, RS256/384/512,
    PS256/384/512, ES256/384/512 or "none" exactly (case-insensitive).
    """

    def __init__(self, message: str = "Not a valid algorithm"):
        self.message = message
        super().__init__(self.message)


class MissingSecretError(JwaError, TypeError):
    """
    Raised when an HMAC algorithm is used without a usable secret.

    Accepted secrets are str, bytes-like values and SecretKey objects.
    """

    def __init__(self, message: str = "secret must be a string, bytes or a SecretKey"):
        self.message = message
        super().__init__(self.message)


class MissingKeyError(JwaError, TypeError):
    """
    Raised when an RSA, RSA-PSS or ECDSA algorithm is used without a usable key.

    This applies to both signing and verification.
    """

    def __init__(self, message: str = "key must be a string, bytes or a key object"):
        self.message = message
        super().__init__(self.message)


class InvalidKeyError(JwaError, ValueError):
    """
    Raised when key material is present but cannot be used.

    This covers PEM data that cannot be parsed, a wrong passphrase, and, when
    signing, a public key or a key of the wrong type or curve for the
    algorithm.
    """

    def __init__(self, message: str = "Invalid key material"):
        self.message = message
        super().__init__(self.message)


class InvalidSignatureError(JwaError, ValueError):
    """
    Raised when signature bytes are malformed.

    This is distinct from a verification failure - it indicates
    the signature cannot even be parsed, not that it failed to verify.
    """

    def __init__(self, message: str = "Invalid or malformed signature"):
        self.message = message
        super().__init__(self.message)
