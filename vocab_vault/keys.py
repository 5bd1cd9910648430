"""
Key Management
==============
AES-256-GCM keys as opaque handles.

A SymmetricKey wraps 32 bytes of key material. The bytes are reachable
only through export_key(); the handle does not print them, pickle them,
or compare by them. wipe() overwrites the buffer with zeros, and runs
automatically when the handle is used as a context manager or collected.

Key size: 256 bits (32 bytes).

Dependencies: cryptography >= 41.0
"""

import logging
import os

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .errors import InvalidKeyMaterial, UnsupportedEnvironment

logger = logging.getLogger(__name__)

KEY_SIZE = 32   # 256-bit key


class SymmetricKey:
    """Opaque AES-256-GCM key handle."""

    __slots__ = ("_material", "__weakref__")

    def __init__(self, material: bytes):
        """Prefer generate_key() / import_key(); they validate first."""
        if len(material) != KEY_SIZE:
            raise InvalidKeyMaterial(f"AES-256 key must be {KEY_SIZE} bytes.")
        self._material = bytearray(material)

    @property
    def wiped(self) -> bool:
        return not self._material

    def wipe(self) -> None:
        """Zero the key material. The handle is unusable afterwards."""
        for i in range(len(self._material)):
            self._material[i] = 0
        self._material = bytearray()

    def _raw(self) -> bytes:
        if self.wiped:
            raise InvalidKeyMaterial("Key has been wiped.")
        return bytes(self._material)

    def _cipher(self) -> AESGCM:
        """Build the AES-GCM primitive for a single operation."""
        try:
            return AESGCM(self._raw())
        except UnsupportedAlgorithm as exc:
            raise UnsupportedEnvironment("AES-GCM is not available on this platform.") from exc

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.wipe()

    def __del__(self):
        # interpreter shutdown can leave _material unset
        if getattr(self, "_material", None):
            self.wipe()

    def __reduce_ex__(self, protocol):
        raise TypeError("SymmetricKey cannot be pickled or copied; use export_key().")

    def __repr__(self):
        return "SymmetricKey(AES-256-GCM, wiped)" if self.wiped else "SymmetricKey(AES-256-GCM)"


def generate_key() -> SymmetricKey:
    """Fresh 256-bit key from the OS CSPRNG."""
    try:
        material = os.urandom(KEY_SIZE)
    except NotImplementedError as exc:
        raise UnsupportedEnvironment("No secure random source available.") from exc
    key = SymmetricKey(material)
    # fail here rather than on first encrypt if AES-GCM is missing
    key._cipher()
    logger.debug(f"Generated key: {KEY_SIZE * 8} bits")
    return key


def export_key(key: SymmetricKey) -> bytes:
    """Raw 32 key bytes, for calling code to persist separately from records."""
    if not isinstance(key, SymmetricKey):
        raise TypeError(f"expected SymmetricKey, got {type(key).__name__}")
    return key._raw()


def import_key(raw) -> SymmetricKey:
    """
    Restore a key from exported bytes.
    Raises InvalidKeyMaterial unless raw is a 32-byte bytes-like object.
    """
    try:
        material = bytes(memoryview(raw))
    except TypeError as exc:
        raise InvalidKeyMaterial("Key material must be bytes-like.") from exc
    if len(material) != KEY_SIZE:
        raise InvalidKeyMaterial(
            f"AES-256 key must be {KEY_SIZE} bytes, got {len(material)}."
        )
    logger.debug(f"Imported key: {len(material)}B")
    return SymmetricKey(material)
