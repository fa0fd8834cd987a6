"""
Algorithm identifiers and per-bit-depth parameters.

JWA identifiers have the shape ``{family}{bits}`` (for example ``HS256`` or
``ES512``) plus the special ``none`` algorithm. This module validates
identifiers and maps each bit depth to the hash function and ECDSA curve
used by every family at that depth.

Identifier matching is case-insensitive but must cover the whole string:
``hs256b`` and ``rs`` are both rejected.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Type

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from .exceptions import InvalidAlgorithmError


class AlgorithmFamily(Enum):
    """The five algorithm families of the JWA signature registry."""

    HS = "HS"
    RS = "RS"
    PS = "PS"
    ES = "ES"
    NONE = "none"

    @property
    def is_asymmetric(self) -> bool:
        return self in (AlgorithmFamily.RS, AlgorithmFamily.PS, AlgorithmFamily.ES)


BIT_DEPTHS = (256, 384, 512)

SUPPORTED_ALGORITHMS = tuple(
    f"{family.value}{bits}"
    for family in (AlgorithmFamily.HS, AlgorithmFamily.RS, AlgorithmFamily.PS, AlgorithmFamily.ES)
    for bits in BIT_DEPTHS
) + (AlgorithmFamily.NONE.value,)

_IDENTIFIER_PATTERN = re.compile(
    r"(?P<family>HS|RS|PS|ES)(?P<bits>256|384|512)|(?P<none>none)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class DigestParams:
    """
    Parameters shared by all families at one bit depth.

    Attributes:
        bits: Hash output size in bits (256, 384 or 512).
        hash_name: hashlib name of the hash, used for HMAC.
        hash_algorithm: cryptography hash class, used for RSA and ECDSA.
        curve: ECDSA curve paired with this depth. ES512 uses P-521,
            not a 512-bit curve.
    """

    bits: int
    hash_name: str
    hash_algorithm: Type[hashes.HashAlgorithm]
    curve: Type[ec.EllipticCurve]

    def __post_init__(self) -> None:
        if self.bits not in BIT_DEPTHS:
            raise ValueError(f"bits must be one of {BIT_DEPTHS}, got {self.bits}")
        if self.hash_algorithm.digest_size * 8 != self.bits:
            raise ValueError("hash_algorithm digest size does not match bits")

    @property
    def digest_size(self) -> int:
        return self.bits // 8


DIGEST_PARAMS = {
    256: DigestParams(256, "sha256", hashes.SHA256, ec.SECP256R1),
    384: DigestParams(384, "sha384", hashes.SHA384, ec.SECP384R1),
    512: DigestParams(512, "sha512", hashes.SHA512, ec.SECP521R1),
}


def _invalid_algorithm_message(identifier: object) -> str:
    supported = ", ".join(f'"{name}"' for name in SUPPORTED_ALGORITHMS)
    return f'"{identifier}" is not a valid algorithm. Supported algorithms are: {supported}.'


def parse_algorithm(identifier: str) -> Tuple[AlgorithmFamily, int | None]:
    """
    Split an algorithm identifier into its family and bit depth.

    Args:
        identifier: Algorithm name such as "HS256", "es384" or "none".

    Returns:
        Tuple of (family, bits). bits is None for the none algorithm.

    Raises:
        InvalidAlgorithmError: If the identifier is not a string or is not
            exactly one of the supported algorithm names.
    """
    if not isinstance(identifier, str):
        raise InvalidAlgorithmError(_invalid_algorithm_message(identifier))

    match = _IDENTIFIER_PATTERN.fullmatch(identifier)
    if match is None:
        raise InvalidAlgorithmError(_invalid_algorithm_message(identifier))

    if match.group("none"):
        return AlgorithmFamily.NONE, None
    return AlgorithmFamily(match.group("family").upper()), int(match.group("bits"))


def canonical_name(family: AlgorithmFamily, bits: int | None) -> str:
    """Return the registry spelling of an algorithm, e.g. "PS384" or "none"."""
    if family is AlgorithmFamily.NONE:
        return family.value
    return f"{family.value}{bits}"


def digest_params(bits: int) -> DigestParams:
    """
    Look up the parameters for a bit depth.

    Raises:
        InvalidAlgorithmError: If bits is not 256, 384 or 512.
    """
    try:
        return DIGEST_PARAMS[bits]
    except KeyError:
        raise InvalidAlgorithmError(
            f"{bits} is not a valid algorithm bit depth, expected one of {BIT_DEPTHS}"
        ) from None
