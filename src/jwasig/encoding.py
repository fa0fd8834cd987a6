"""
Byte-level encodings shared by the signers.

Signatures travel as URL-safe base64 without padding (RFC 7515, section 2).
Decoding is strict: anything outside the base64url alphabet, or any text
that does not re-encode to itself, is rejected. The second rule catches
edits to the unused low bits of the final character, which a lenient
decoder would silently ignore.
"""

import base64
import binascii
import json
import re
from typing import Any

from .exceptions import InvalidSignatureError


_B64URL_TEXT = re.compile(r"[A-Za-z0-9_-]*")


def b64url_encode(data: bytes) -> str:
    """Encode bytes as unpadded base64url text."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(value: str | bytes) -> bytes:
    """
    Decode unpadded (or padded) base64url text.

    Args:
        value: Base64url text, as str or ASCII bytes.

    Returns:
        Decoded bytes.

    Raises:
        InvalidSignatureError: If the text is not canonical base64url.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        try:
            value = bytes(value).decode("ascii")
        except UnicodeDecodeError as e:
            raise InvalidSignatureError("Signature is not ASCII base64url text") from e
    if not isinstance(value, str):
        raise InvalidSignatureError(
            f"Signature must be str or bytes, got {type(value).__name__}"
        )

    text = value.rstrip("=")
    if not _B64URL_TEXT.fullmatch(text) or len(text) % 4 == 1:
        raise InvalidSignatureError("Signature is not valid base64url text")

    try:
        decoded = base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
    except binascii.Error as e:
        raise InvalidSignatureError(f"Signature is not valid base64url text: {e}") from e

    if b64url_encode(decoded) != text:
        raise InvalidSignatureError("Signature is not canonically encoded")
    return decoded


def normalize_input(payload: Any) -> bytes:
    """
    Coerce a payload to the bytes that get signed.

    bytes-like values are used as-is and strings are UTF-8 encoded. Any other
    value is serialized to compact JSON, keeping key order and non-ASCII
    characters, the same way JSON.stringify does.

    Raises:
        TypeError: If the payload is not JSON serializable.
    """
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return bytes(payload)
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
