"""
Key material accepted by the signers.

Callers hand in keys in several shapes: a raw secret, PEM text, a parsed
cryptography key object, or a passphrase-protected private key. Each shape
is classified once by normalize_key() into one of four variants:

    SecretKey      HMAC secret bytes
    PemKey         PEM text (public key, private key or X.509 certificate)
    KeyObject      a parsed cryptography key
    PassphraseKey  encrypted PEM private key plus its passphrase

The signers then only deal with these variants. PEM parsing and passphrase
decryption happen in load_private_key() / load_public_key(), which hand back
cryptography key objects.

Security Note:
    Secrets and passphrases are excluded from repr() and are never logged.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed448, ed25519, rsa

from .algorithms import AlgorithmFamily
from .exceptions import InvalidKeyError, MissingKeyError, MissingSecretError


logger = logging.getLogger(__name__)

_BYTES_LIKE = (bytes, bytearray, memoryview)

_PRIVATE_KEY_TYPES = (
    rsa.RSAPrivateKey,
    ec.EllipticCurvePrivateKey,
    ed25519.Ed25519PrivateKey,
    ed448.Ed448PrivateKey,
)
_PUBLIC_KEY_TYPES = (
    rsa.RSAPublicKey,
    ec.EllipticCurvePublicKey,
    ed25519.Ed25519PublicKey,
    ed448.Ed448PublicKey,
)

_SIGNING_KEY_MESSAGE = (
    "key must be a PEM string, bytes, a private key object "
    "or a {'key': ..., 'passphrase': ...} mapping"
)
_VERIFYING_KEY_MESSAGE = "key must be a PEM string, bytes, a key object or a certificate"


def _to_bytes(value: Union[str, bytes, bytearray, memoryview]) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


@dataclass(frozen=True)
class SecretKey:
    """
    Shared secret for the HS* algorithms.

    Plain str and bytes secrets are wrapped into this type by the
    normalizer; callers can also pass a SecretKey directly. A str value is
    stored UTF-8 encoded.
    """

    value: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.value, (str,) + _BYTES_LIKE):
            object.__setattr__(self, "value", _to_bytes(self.value))
        else:
            raise MissingSecretError(
                f"secret must be a string or bytes, got {type(self.value).__name__}"
            )


@dataclass(frozen=True)
class PemKey:
    """PEM-encoded public key, private key or certificate."""

    data: bytes


@dataclass(frozen=True)
class KeyObject:
    """A key already parsed by the cryptography library."""

    key: Any


@dataclass(frozen=True)
class PassphraseKey:
    """
    Encrypted PEM private key together with the passphrase that unlocks it.

    Only valid for signing. The key is decrypted by load_private_key().
    """

    key: bytes
    passphrase: bytes | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.key, (str,) + _BYTES_LIKE):
            raise MissingKeyError(_SIGNING_KEY_MESSAGE)
        object.__setattr__(self, "key", _to_bytes(self.key))
        if self.passphrase is not None:
            if not isinstance(self.passphrase, (str,) + _BYTES_LIKE):
                raise MissingKeyError("passphrase must be a string or bytes")
            object.__setattr__(self, "passphrase", _to_bytes(self.passphrase))


KeyMaterial = Union[SecretKey, PemKey, KeyObject, PassphraseKey]


def _normalize_secret(raw_key: Any) -> SecretKey:
    if raw_key is None:
        raise MissingSecretError()
    if isinstance(raw_key, SecretKey):
        return raw_key
    if isinstance(raw_key, (str,) + _BYTES_LIKE):
        return SecretKey(raw_key)
    raise MissingSecretError()


def _normalize_asymmetric(raw_key: Any, private: bool) -> KeyMaterial:
    message = _SIGNING_KEY_MESSAGE if private else _VERIFYING_KEY_MESSAGE

    if raw_key is None:
        raise MissingKeyError(message)
    if isinstance(raw_key, (str,) + _BYTES_LIKE):
        return PemKey(_to_bytes(raw_key))
    if isinstance(raw_key, (PemKey, KeyObject)):
        return raw_key
    if isinstance(raw_key, _PRIVATE_KEY_TYPES + _PUBLIC_KEY_TYPES):
        return KeyObject(raw_key)
    if not private and isinstance(raw_key, x509.Certificate):
        return KeyObject(raw_key.public_key())
    if private and isinstance(raw_key, PassphraseKey):
        return raw_key
    if private and isinstance(raw_key, Mapping) and "key" in raw_key:
        return PassphraseKey(raw_key["key"], raw_key.get("passphrase"))
    raise MissingKeyError(message)


def normalize_key(raw_key: Any, family: AlgorithmFamily, *, private: bool) -> KeyMaterial | None:
    """
    Classify a caller-supplied key for an algorithm family.

    Args:
        raw_key: The key as passed to sign() or verify().
        family: Family of the algorithm the key is used with.
        private: True when signing, False when verifying.

    Returns:
        The key as one of the KeyMaterial variants. None for the none
        algorithm, which ignores keys.

    Raises:
        MissingSecretError: If an HMAC secret is absent or of an unusable type.
        MissingKeyError: If an RSA/ECDSA key is absent or of an unusable type,
            or a passphrase-protected key is offered for verification.
    """
    if family is AlgorithmFamily.NONE:
        return None
    if family is AlgorithmFamily.HS:
        return _normalize_secret(raw_key)
    return _normalize_asymmetric(raw_key, private)


def _load_pem_private_key(data: bytes, password: bytes | None):
    try:
        return serialization.load_pem_private_key(data, password=password)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        logger.warning("Failed to load private key: %s", e.__class__.__name__)
        raise InvalidKeyError(f"Failed to load private key: {e}") from e


def load_private_key(material: KeyMaterial):
    """
    Produce a cryptography private key for signing.

    Raises:
        InvalidKeyError: If the PEM cannot be parsed or decrypted, or the
            material holds a public key.
    """
    if isinstance(material, PassphraseKey):
        return _load_pem_private_key(material.key, material.passphrase)
    if isinstance(material, PemKey):
        return _load_pem_private_key(material.data, None)
    if isinstance(material, KeyObject):
        if not isinstance(material.key, _PRIVATE_KEY_TYPES):
            raise InvalidKeyError("A private key is required for signing, got a public key")
        return material.key
    raise InvalidKeyError(f"{type(material).__name__} cannot be used as a private key")


def load_public_key(material: KeyMaterial):
    """
    Produce a cryptography public key for verification.

    PEM input may be a public key, a certificate, or an unencrypted private
    key, in which case its public half is used. Private key objects are
    reduced to their public half as well.

    Raises:
        InvalidKeyError: If the PEM cannot be parsed.
    """
    if isinstance(material, KeyObject):
        key = material.key
        if isinstance(key, _PRIVATE_KEY_TYPES):
            return key.public_key()
        return key
    if not isinstance(material, PemKey):
        raise InvalidKeyError(f"{type(material).__name__} cannot be used as a public key")

    data = material.data
    try:
        if b"-----BEGIN CERTIFICATE-----" in data:
            return x509.load_pem_x509_certificate(data).public_key()
        if b"PRIVATE KEY-----" in data:
            return serialization.load_pem_private_key(data, password=None).public_key()
        return serialization.load_pem_public_key(data)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        logger.warning("Failed to load public key: %s", e.__class__.__name__)
        raise InvalidKeyError(f"Failed to load public key: {e}") from e
