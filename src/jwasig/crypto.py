"""
Signing and verification primitives for each JWA algorithm family.

Every family exposes the same pair of functions:

    sign(payload, key, params) -> signature text
    verify(payload, signature, key, params) -> bool

where payload is already coerced to bytes, key is a normalized KeyMaterial
variant and params are the DigestParams of the algorithm's bit depth.
FAMILY_OPERATIONS maps each AlgorithmFamily to its pair.

HMAC uses the standard library; RSA, RSA-PSS and ECDSA use the
cryptography library. ECDSA signatures come out of OpenSSL as DER and are
converted to the JWS r || s form by ecdsa_format.

Verification never raises for a bad signature: a wrong key, a tampered or
malformed signature, or a signature made with another algorithm all return
False. A valid key of another family or curve also returns False.
Errors are reserved for missing or unparseable keys.
"""

import hmac
import logging
from typing import Callable, Dict, Optional, Tuple

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

from .algorithms import AlgorithmFamily, DigestParams
from .ecdsa_format import from_wire_format, to_wire_format
from .encoding import b64url_decode, b64url_encode
from .exceptions import InvalidKeyError, InvalidSignatureError
from .keys import KeyMaterial, SecretKey, load_private_key, load_public_key


logger = logging.getLogger(__name__)

Signer = Callable[[bytes, Optional[KeyMaterial], Optional[DigestParams]], str]
Verifier = Callable[[bytes, object, Optional[KeyMaterial], Optional[DigestParams]], bool]


def _signature_bytes(signature: object) -> bytes | None:
    if isinstance(signature, str):
        return signature.encode("utf-8")
    if isinstance(signature, (bytes, bytearray, memoryview)):
        return bytes(signature)
    return None


# HMAC


def hmac_sign(payload: bytes, key: SecretKey, params: DigestParams) -> str:
    """Compute the HMAC of payload with the secret, base64url encoded."""
    digest = hmac.new(key.value, payload, params.hash_name).digest()
    return b64url_encode(digest)


def hmac_verify(payload: bytes, signature: object, key: SecretKey, params: DigestParams) -> bool:
    """
    Recompute the HMAC and compare it with the signature text.

    The comparison uses hmac.compare_digest so it takes the same time
    wherever the first difference is.
    """
    candidate = _signature_bytes(signature)
    if candidate is None:
        logger.debug("HS%d signature rejected: not str or bytes", params.bits)
        return False
    expected = hmac_sign(payload, key, params).encode("ascii")
    return hmac.compare_digest(candidate, expected)


# RSA PKCS#1 v1.5 and RSA-PSS


def _pss_padding(params: DigestParams) -> padding.PSS:
    # Salt length equals the digest length (openssl rsa_pss_saltlen:-1)
    return padding.PSS(
        mgf=padding.MGF1(params.hash_algorithm()),
        salt_length=padding.PSS.DIGEST_LENGTH,
    )


def _rsa_padding(family: AlgorithmFamily, params: DigestParams) -> padding.AsymmetricPadding:
    if family is AlgorithmFamily.PS:
        return _pss_padding(params)
    return padding.PKCS1v15()


def _require_rsa(key, family: AlgorithmFamily, params: DigestParams) -> None:
    if not isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
        raise InvalidKeyError(
            f"{family.value}{params.bits} requires an RSA key, got {type(key).__name__}"
        )


def _rsa_sign(family: AlgorithmFamily, payload: bytes, key: KeyMaterial, params: DigestParams) -> str:
    private_key = load_private_key(key)
    _require_rsa(private_key, family, params)
    signature = private_key.sign(payload, _rsa_padding(family, params), params.hash_algorithm())
    return b64url_encode(signature)


def _rsa_verify(
    family: AlgorithmFamily,
    payload: bytes,
    signature: object,
    key: KeyMaterial,
    params: DigestParams,
) -> bool:
    public_key = load_public_key(key)
    try:
        _require_rsa(public_key, family, params)
    except InvalidKeyError as e:
        logger.debug("%s%d signature rejected: %s", family.value, params.bits, e.message)
        return False

    try:
        raw = b64url_decode(signature)
    except InvalidSignatureError as e:
        logger.debug("%s%d signature rejected: %s", family.value, params.bits, e.message)
        return False

    try:
        public_key.verify(raw, payload, _rsa_padding(family, params), params.hash_algorithm())
        return True
    except InvalidSignature:
        logger.debug("%s%d signature rejected: signature does not verify", family.value, params.bits)
        return False


def rsa_sign(payload: bytes, key: KeyMaterial, params: DigestParams) -> str:
    """Sign with RSASSA-PKCS1-v1_5 (RS256/384/512)."""
    return _rsa_sign(AlgorithmFamily.RS, payload, key, params)


def rsa_verify(payload: bytes, signature: object, key: KeyMaterial, params: DigestParams) -> bool:
    """Verify an RSASSA-PKCS1-v1_5 signature."""
    return _rsa_verify(AlgorithmFamily.RS, payload, signature, key, params)


def pss_sign(payload: bytes, key: KeyMaterial, params: DigestParams) -> str:
    """Sign with RSASSA-PSS (PS256/384/512), MGF1 and a digest-length salt."""
    return _rsa_sign(AlgorithmFamily.PS, payload, key, params)


def pss_verify(payload: bytes, signature: object, key: KeyMaterial, params: DigestParams) -> bool:
    """Verify an RSASSA-PSS signature."""
    return _rsa_verify(AlgorithmFamily.PS, payload, signature, key, params)


# ECDSA


def _require_ec(key, params: DigestParams) -> None:
    if not isinstance(key, (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey)):
        raise InvalidKeyError(f"ES{params.bits} requires an EC key, got {type(key).__name__}")
    if not isinstance(key.curve, params.curve):
        raise InvalidKeyError(
            f"ES{params.bits} requires curve {params.curve.name}, got {key.curve.name}"
        )


def ecdsa_sign(payload: bytes, key: KeyMaterial, params: DigestParams) -> str:
    """
    Sign with ECDSA (ES256/384/512).

    OpenSSL returns a DER signature, which is converted to the fixed-width
    r || s form before encoding.
    """
    private_key = load_private_key(key)
    _require_ec(private_key, params)
    der_signature = private_key.sign(payload, ec.ECDSA(params.hash_algorithm()))
    return to_wire_format(der_signature, params.bits)


def ecdsa_verify(payload: bytes, signature: object, key: KeyMaterial, params: DigestParams) -> bool:
    """Verify an r || s ECDSA signature."""
    public_key = load_public_key(key)
    try:
        _require_ec(public_key, params)
    except InvalidKeyError as e:
        logger.debug("ES%d signature rejected: %s", params.bits, e.message)
        return False

    try:
        der_signature = from_wire_format(signature, params.bits)
    except InvalidSignatureError as e:
        logger.debug("ES%d signature rejected: %s", params.bits, e.message)
        return False

    try:
        public_key.verify(der_signature, payload, ec.ECDSA(params.hash_algorithm()))
        return True
    except InvalidSignature:
        logger.debug("ES%d signature rejected: signature does not verify", params.bits)
        return False


# none


def none_sign(payload: bytes, key: object = None, params: object = None) -> str:
    """The unsecured algorithm: the signature is always empty."""
    return ""


def none_verify(payload: bytes, signature: object, key: object = None, params: object = None) -> bool:
    """Accept exactly the empty signature and nothing else."""
    return signature == "" or signature == b""


FAMILY_OPERATIONS: Dict[AlgorithmFamily, Tuple[Signer, Verifier]] = {
    AlgorithmFamily.HS: (hmac_sign, hmac_verify),
    AlgorithmFamily.RS: (rsa_sign, rsa_verify),
    AlgorithmFamily.PS: (pss_sign, pss_verify),
    AlgorithmFamily.ES: (ecdsa_sign, ecdsa_verify),
    AlgorithmFamily.NONE: (none_sign, none_verify),
}
