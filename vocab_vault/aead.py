"""
Authenticated Encryption Engine: AES-256-GCM
============================================
Seals short secret strings (API keys) for local storage.

GCM provides authenticated encryption: besides hiding the plaintext it
produces a 128-bit tag, so any change to the nonce or ciphertext is
detected on decryption and nothing is returned.

Key size: 256 bits (32 bytes).
Nonce:    96 bits (12 bytes), drawn from os.urandom on every call.
Tag:      128 bits (16 bytes).

Sealed record: base64( nonce(12) || ciphertext || tag(16) )

No associated data is used. Both operations are stateless; the key is
borrowed for one call and never cached.

Dependencies: cryptography >= 41.0
"""

import asyncio
import logging
import os

from cryptography.exceptions import InvalidTag

from .codec import decode_base64, encode_base64, utf8_decode, utf8_encode
from .errors import AuthenticationFailed, MalformedInput, UnsupportedEnvironment
from .keys import KEY_SIZE, SymmetricKey

logger = logging.getLogger(__name__)

NONCE_SIZE = 12   # 96-bit nonce (GCM standard)
TAG_SIZE   = 16   # 128-bit authentication tag

__all__ = [
    "KEY_SIZE",
    "NONCE_SIZE",
    "TAG_SIZE",
    "encrypt",
    "decrypt",
    "encrypt_async",
    "decrypt_async",
]


def _check_key(key) -> SymmetricKey:
    if not isinstance(key, SymmetricKey):
        raise TypeError(f"expected SymmetricKey, got {type(key).__name__}")
    return key


def _fresh_nonce() -> bytes:
    try:
        return os.urandom(NONCE_SIZE)
    except NotImplementedError as exc:
        raise UnsupportedEnvironment("No secure random source available.") from exc


def encrypt(plaintext: str, key: SymmetricKey) -> str:
    """
    Encrypt and authenticate a UTF-8 string.
    Returns the sealed record as padded base64 text.
    """
    _check_key(key)
    data   = utf8_encode(plaintext)
    nonce  = _fresh_nonce()
    ct     = key._cipher().encrypt(nonce, data, None)
    sealed = nonce + ct
    logger.debug(f"Sealed: pt={len(data)}B record={len(sealed)}B")
    return encode_base64(sealed)


def decrypt(sealed, key: SymmetricKey) -> str:
    """
    Verify and decrypt a sealed record.

    Raises MalformedInput for bad base64, a record shorter than
    nonce + tag, or plaintext that is not UTF-8; AuthenticationFailed
    when the tag does not verify. Never returns partial output.
    """
    _check_key(key)
    bundle = decode_base64(sealed)
    if len(bundle) < NONCE_SIZE + TAG_SIZE:
        raise MalformedInput(
            f"Sealed record too short: {len(bundle)}B < {NONCE_SIZE + TAG_SIZE}B."
        )
    nonce = bundle[:NONCE_SIZE]
    ct    = bundle[NONCE_SIZE:]
    try:
        data = key._cipher().decrypt(nonce, ct, None)
    except InvalidTag as exc:
        logger.debug(f"Tag check failed: record={len(bundle)}B")
        raise AuthenticationFailed(
            "Decryption failed: wrong key or tampered record."
        ) from exc
    logger.debug(f"Opened: record={len(bundle)}B pt={len(data)}B")
    return utf8_decode(data)


async def encrypt_async(plaintext: str, key: SymmetricKey) -> str:
    """encrypt() on a worker thread; the event loop stays free meanwhile."""
    return await asyncio.to_thread(encrypt, plaintext, key)


async def decrypt_async(sealed, key: SymmetricKey) -> str:
    """decrypt() on a worker thread. Raises the same errors."""
    return await asyncio.to_thread(decrypt, sealed, key)
