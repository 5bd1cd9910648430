"""
Errors
======
Every failure the vault reports belongs to one of four kinds, so calling
code can branch on them instead of parsing messages.

    UnsupportedEnvironment  no secure RNG or no AES-GCM backend (fatal)
    InvalidKeyMaterial      key bytes of the wrong length/shape
    MalformedInput          record is not base64, too short, or bad UTF-8
    AuthenticationFailed    GCM tag did not verify (wrong key or tampering)

Messages never include plaintext or key bytes.
"""


class VaultError(Exception):
    """Base class for all vault failures."""

    kind = "vault_error"


class UnsupportedEnvironment(VaultError, RuntimeError):
    """The platform lacks a secure random source or AES-GCM.

    Disable secret storage entirely; never fall back to plaintext.
    """

    kind = "unsupported_environment"


class InvalidKeyMaterial(VaultError, ValueError):
    """Key bytes are not exactly 32 bytes, or the key has been wiped."""

    kind = "invalid_key_material"


class MalformedInput(VaultError, ValueError):
    """A sealed record or text value cannot be decoded."""

    kind = "malformed_input"


class AuthenticationFailed(VaultError):
    """
    The authentication tag did not verify.

    Either the record was sealed under a different key or a byte of it
    was altered. Not transient: retrying with the same inputs fails again.
    """

    kind = "authentication_failed"
