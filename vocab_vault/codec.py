"""
Byte/Text Codec
===============
UTF-8 text <-> bytes, and bytes <-> padded standard base64 (RFC 4648).

Decoding is strict: characters outside the base64 alphabet, stray
whitespace and bad padding are all rejected rather than skipped.
"""

import base64
import binascii

from .errors import MalformedInput


def encode_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def decode_base64(text) -> bytes:
    """Decode padded standard base64. Raises MalformedInput."""
    if not isinstance(text, (str, bytes, bytearray)):
        raise TypeError(f"expected str or bytes, got {type(text).__name__}")
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        # non-ASCII str input surfaces as a plain ValueError
        raise MalformedInput("Input is not valid base64.") from exc


def utf8_encode(text: str) -> bytes:
    """Encode text as UTF-8. Lone surrogates raise MalformedInput."""
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise MalformedInput("Text is not encodable as UTF-8.") from exc


def utf8_decode(data: bytes) -> str:
    """Decode UTF-8 bytes. Invalid or truncated sequences raise MalformedInput."""
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedInput("Bytes are not valid UTF-8.") from exc
