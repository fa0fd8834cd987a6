"""
Public API for JSON Web Algorithms signing and verification.

This module provides the main entry points for the jwasig library:
- jwa(): Resolve an algorithm name to a bound Algorithm
- sign(): Sign a payload with a named algorithm
- verify(): Verify a signature with a named algorithm

Keys are passed in whatever shape the caller has them: a secret string or
bytes for HMAC, PEM text or a cryptography key object for RSA and ECDSA, or
a {"key": pem, "passphrase": pw} mapping for an encrypted private key.

Payloads that are not str or bytes are serialized to compact JSON before
signing, so structured values can be signed and verified directly.

Example:
    >>> hs256 = jwa("HS256")
    >>> signature = hs256.sign("payload", "secret")
    >>> hs256.verify("payload", signature, "secret")
    True
    >>>
    >>> es384 = jwa("es384")
    >>> signature = es384.sign({"sub": "42"}, private_pem)
    >>> es384.verify({"sub": "42"}, signature, public_pem)
    True
"""

from dataclasses import dataclass
from typing import Any

from .algorithms import AlgorithmFamily, canonical_name, digest_params, parse_algorithm
from .crypto import FAMILY_OPERATIONS
from .encoding import normalize_input
from .keys import normalize_key


@dataclass(frozen=True)
class Algorithm:
    """
    A resolved JWA algorithm.

    Instances hold no mutable state and can be shared freely between
    threads. Obtain them through jwa() rather than constructing them.

    Attributes:
        name: Canonical algorithm name, e.g. "RS256" or "none".
        family: Algorithm family.
        bits: Hash bit depth, or None for the none algorithm.

    Example:
        >>> rs256 = jwa("RS256")
        >>> signature = rs256.sign(b"message", private_pem)
        >>> assert rs256.verify(b"message", signature, public_pem)
    """

    name: str
    family: AlgorithmFamily
    bits: int | None

    def sign(self, payload: Any, key: Any = None) -> str:
        """
        Sign a payload.

        Args:
            payload: bytes, str, or any JSON-serializable value.
            key: HMAC secret, or the private key for RSA/ECDSA. Ignored by
                the none algorithm.

        Returns:
            The signature as unpadded base64url text ("" for none).

        Raises:
            MissingSecretError: If an HMAC secret is missing.
            MissingKeyError: If an RSA/ECDSA key is missing.
            InvalidKeyError: If the key cannot be loaded or does not suit
                the algorithm.
        """
        material = normalize_key(key, self.family, private=True)
        signer, _ = FAMILY_OPERATIONS[self.family]
        return signer(normalize_input(payload), material, self._params())

    def verify(self, payload: Any, signature: Any, key: Any = None) -> bool:
        """
        Verify a signature over a payload.

        Args:
            payload: The signed value, in the same form passed to sign().
            signature: Signature text as returned by sign().
            key: HMAC secret, or the public key (or certificate) for
                RSA/ECDSA. Ignored by the none algorithm.

        Returns:
            True if the signature is valid, False otherwise.

        Raises:
            MissingSecretError: If an HMAC secret is missing.
            MissingKeyError: If an RSA/ECDSA key is missing.
            InvalidKeyError: If the key cannot be loaded. A parsed key of another
                family or curve gives False instead.
        """
        material = normalize_key(key, self.family, private=False)
        _, verifier = FAMILY_OPERATIONS[self.family]
        return verifier(normalize_input(payload), signature, material, self._params())

    def _params(self):
        if self.bits is None:
            return None
        return digest_params(self.bits)


def jwa(algorithm: str) -> Algorithm:
    """
    Resolve an algorithm name.

    Args:
        algorithm: One of HS256/384/512, RS256/384/512, PS256/384/512,
            ES256/384/512 or none, in any letter case.

    Returns:
        The Algorithm bound to that name.

    Raises:
        InvalidAlgorithmError: If the name is not exactly a supported
            algorithm ("hs256b" and "rs" are both rejected).
    """
    family, bits = parse_algorithm(algorithm)
    return Algorithm(name=canonical_name(family, bits), family=family, bits=bits)


def sign(algorithm: str, payload: Any, key: Any = None) -> str:
    """
    Sign a payload with the named algorithm.

    See Algorithm.sign() for full documentation.
    """
    return jwa(algorithm).sign(payload, key)


def verify(algorithm: str, payload: Any, signature: Any, key: Any = None) -> bool:
    """
    Verify a signature with the named algorithm.

    See Algorithm.verify() for full documentation.
    """
    return jwa(algorithm).verify(payload, signature, key)
