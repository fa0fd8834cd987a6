"""
jwasig - JSON Web Algorithms (RFC 7518) signing and verification.

This library signs and verifies payloads with the JWS algorithm family:
HMAC (HS256/384/512), RSA PKCS#1 v1.5 (RS256/384/512), RSA-PSS
(PS256/384/512), ECDSA (ES256/384/512) and the unsecured "none" algorithm.
Signatures are unpadded base64url text and interoperate with other JWS
implementations and with OpenSSL.

It does not parse or build JWTs: header/claims handling, compact
serialization, key generation and JWKS retrieval are left to the caller.

Quick Start:
    >>> from jwasig import jwa
    >>>
    >>> algorithm = jwa("HS256")
    >>> signature = algorithm.sign("payload", "secret")
    >>> algorithm.verify("payload", signature, "secret")
    True

Password-protected private keys:
    >>> signature = jwa("RS256").sign(
    ...     "payload", {"key": encrypted_pem, "passphrase": "hunter2"}
    ... )

See Also:
    - api.py: jwa() and the Algorithm type
    - crypto.py: Per-family signing and verification
    - keys.py: Accepted key shapes and key loading
    - ecdsa_format.py: DER <-> r || s signature conversion
    - exceptions.py: Custom exception types
"""

__version__ = "0.1.0"
__author__ = "jwasig Contributors"

# Public API - main functions
from .api import Algorithm, jwa, sign, verify

# Algorithm registry
from .algorithms import SUPPORTED_ALGORITHMS, AlgorithmFamily

# Exceptions for error handling
from .exceptions import (
    JwaError,
    InvalidAlgorithmError,
    MissingSecretError,
    MissingKeyError,
    InvalidKeyError,
    InvalidSignatureError,
)

# Key shapes (for advanced usage)
from .keys import KeyObject, PassphraseKey, PemKey, SecretKey

# ECDSA signature conversion
from .ecdsa_format import coordinate_length, from_wire_format, to_wire_format

__all__ = [
    # Version
    "__version__",
    # Main API
    "jwa",
    "sign",
    "verify",
    "Algorithm",
    "AlgorithmFamily",
    "SUPPORTED_ALGORITHMS",
    # Exceptions
    "JwaError",
    "InvalidAlgorithmError",
    "MissingSecretError",
    "MissingKeyError",
    "InvalidKeyError",
    "InvalidSignatureError",
    # Key shapes
    "SecretKey",
    "PemKey",
    "KeyObject",
    "PassphraseKey",
    # ECDSA signature conversion
    "coordinate_length",
    "to_wire_format",
    "from_wire_format",
]
