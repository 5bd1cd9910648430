"""
vocab_vault — MyVocab secret storage
====================================
AES-256-GCM sealing of user-supplied API keys before they reach local
storage, plus the settings service that stores them.

Core:
    generate_key / export_key / import_key   256-bit key handles
    encrypt / decrypt                         str <-> sealed record
    encrypt_async / decrypt_async             same, off the event loop

Sealed record: base64( nonce(12) || ciphertext || tag(16) )

Errors:
    UnsupportedEnvironment, InvalidKeyMaterial,
    MalformedInput, AuthenticationFailed   (all subclass VaultError)

License: Apache 2.0
"""

__version__  = "1.0.0"

from .errors   import (
    VaultError,
    UnsupportedEnvironment,
    InvalidKeyMaterial,
    MalformedInput,
    AuthenticationFailed,
)
from .codec    import encode_base64, decode_base64, utf8_encode, utf8_decode
from .keys     import SymmetricKey, generate_key, export_key, import_key
from .aead     import (
    KEY_SIZE,
    NONCE_SIZE,
    TAG_SIZE,
    encrypt,
    decrypt,
    encrypt_async,
    decrypt_async,
)
from .config   import VaultConfig, load_key_from_env
from .storage  import (
    KeyValueStore,
    MemoryStore,
    JsonFileStore,
    AppSettings,
    GptProvider,
    SettingsStorage,
    default_app_settings,
)

__all__ = [
    "VaultError",
    "UnsupportedEnvironment",
    "InvalidKeyMaterial",
    "MalformedInput",
    "AuthenticationFailed",
    "encode_base64",
    "decode_base64",
    "utf8_encode",
    "utf8_decode",
    "SymmetricKey",
    "generate_key",
    "export_key",
    "import_key",
    "KEY_SIZE",
    "NONCE_SIZE",
    "TAG_SIZE",
    "encrypt",
    "decrypt",
    "encrypt_async",
    "decrypt_async",
    "VaultConfig",
    "load_key_from_env",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "AppSettings",
    "GptProvider",
    "SettingsStorage",
    "default_app_settings",
]
