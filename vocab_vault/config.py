"""
Configuration
=============
Environment variables read by scripts and services using the vault:

    VOCAB_VAULT_KEY_B64        base64 of a 32-byte key (optional)
    VOCAB_VAULT_SETTINGS_PATH  JSON file for JsonFileStore
    VOCAB_VAULT_LOG_LEVEL      logging level name, default INFO

Generate a key with:  openssl rand -base64 32
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .codec import decode_base64
from .errors import InvalidKeyMaterial, MalformedInput
from .keys import SymmetricKey, import_key

KEY_ENV           = "VOCAB_VAULT_KEY_B64"
SETTINGS_PATH_ENV = "VOCAB_VAULT_SETTINGS_PATH"
LOG_LEVEL_ENV     = "VOCAB_VAULT_LOG_LEVEL"

DEFAULT_SETTINGS_PATH = Path("~/.myvocab/settings.json")


def load_key_from_env(environ=None) -> Optional[SymmetricKey]:
    """
    Key from VOCAB_VAULT_KEY_B64, or None when unset or empty.
    Raises InvalidKeyMaterial if the value is set but unusable.
    """
    environ = os.environ if environ is None else environ
    raw = environ.get(KEY_ENV, "").strip()
    if not raw:
        return None
    try:
        material = decode_base64(raw)
    except MalformedInput as exc:
        raise InvalidKeyMaterial(f"{KEY_ENV} is not valid base64.") from exc
    return import_key(material)


def _log_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"{LOG_LEVEL_ENV}={name!r} is not a logging level.")
    return level


@dataclass
class VaultConfig:
    settings_path: Path = DEFAULT_SETTINGS_PATH
    log_level: int = logging.INFO
    key: Optional[SymmetricKey] = None

    @classmethod
    def from_env(cls, environ=None) -> "VaultConfig":
        environ = os.environ if environ is None else environ
        path = environ.get(SETTINGS_PATH_ENV) or str(DEFAULT_SETTINGS_PATH)
        return cls(
            settings_path=Path(path).expanduser(),
            log_level=_log_level(environ.get(LOG_LEVEL_ENV) or "INFO"),
            key=load_key_from_env(environ),
        )
