"""
Conversion between DER and JOSE encodings of ECDSA signatures.

Most ECDSA implementations (OpenSSL, cryptography) produce a DER SEQUENCE
of the two INTEGERs r and s. JWS instead uses the fixed-width
concatenation r || s, each half left-padded to the byte length of the
curve order:

    ES256 (P-256)  32 bytes per half
    ES384 (P-384)  48 bytes per half
    ES512 (P-521)  66 bytes per half

The DER side is handled by python-ecdsa's signature encoders, which only
accept and produce minimal (canonical) INTEGER encodings, so a conversion
round trip reproduces the original bytes exactly.
"""

from ecdsa import NIST256p, NIST384p, NIST521p
from ecdsa.der import UnexpectedDER
from ecdsa.util import orderlen, sigdecode_der, sigdecode_string, sigencode_der, sigencode_string

from .encoding import b64url_decode, b64url_encode
from .exceptions import InvalidAlgorithmError, InvalidSignatureError


# Curve order for each hash bit depth
_CURVES = {
    256: NIST256p,
    384: NIST384p,
    512: NIST521p,
}


def _curve_order(bits: int) -> int:
    try:
        return _CURVES[bits].order
    except KeyError:
        raise InvalidAlgorithmError(
            f"{bits} is not a valid algorithm bit depth for ECDSA"
        ) from None


def coordinate_length(bits: int) -> int:
    """
    Return the byte length of each signature half for a bit depth.

    Args:
        bits: Hash bit depth (256, 384 or 512).

    Returns:
        32, 48 or 66.

    Raises:
        InvalidAlgorithmError: If bits is not a supported depth.
    """
    return orderlen(_curve_order(bits))


def to_wire_format(der_signature: bytes, bits: int) -> str:
    """
    Convert a DER-encoded ECDSA signature to the JWS r || s form.

    Args:
        der_signature: DER SEQUENCE of two INTEGERs, as produced by OpenSSL.
        bits: Hash bit depth selecting the coordinate length.

    Returns:
        Base64url text of the fixed-width concatenation of r and s.

    Raises:
        InvalidSignatureError: If the DER is malformed or either integer
            does not fit the coordinate length.
    """
    order = _curve_order(bits)
    size = orderlen(order)

    try:
        r, s = sigdecode_der(bytes(der_signature), order)
    except UnexpectedDER as e:
        raise InvalidSignatureError(f"Invalid DER signature: {e}") from e

    if r.bit_length() > size * 8 or s.bit_length() > size * 8:
        raise InvalidSignatureError(
            f"Signature integers do not fit in {size} bytes for ES{bits}"
        )

    return b64url_encode(sigencode_string(r, s, order))


def from_wire_format(signature: str | bytes, bits: int) -> bytes:
    """
    Convert a JWS r || s signature to DER.

    Args:
        signature: Base64url text of the concatenated r and s.
        bits: Hash bit depth selecting the coordinate length.

    Returns:
        DER SEQUENCE of two INTEGERs.

    Raises:
        InvalidSignatureError: If the text is not base64url or does not
            decode to exactly two coordinate lengths of bytes.
    """
    order = _curve_order(bits)
    size = orderlen(order)

    raw = b64url_decode(signature)
    if len(raw) != 2 * size:
        raise InvalidSignatureError(
            f"ES{bits} signature must be {2 * size} bytes, got {len(raw)}"
        )

    r, s = sigdecode_string(raw, order)
    return sigencode_der(r, s, order)
