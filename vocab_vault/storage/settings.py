"""
Settings Storage
================
Persists MyVocab app settings through a KeyValueStore, sealing every
provider API key with AES-256-GCM before it is written.

Stored names:
    myvocab_settings        JSON: sealed API keys + non-secret settings
    myvocab_encryption_key  base64 of the 32-byte key

Stored settings layout:
    {
      "encryptedApiKeys": {"<provider id>": "<sealed record>", ...},
      "settings": {
        "providers": [{"id", "name", "isActive"}, ...],
        "activeProviderId", "theme", "defaultLanguage",
        "extraEnrichment", "lastUsedLanguage",
        "lastUsedCategories", "lastUsedExtraEnrichment"
      }
    }

A record that no longer opens (wrong key, corrupted storage) reads back
as an empty API key, which is the cue to ask the user for it again.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..aead import decrypt, encrypt
from ..codec import decode_base64, encode_base64
from ..errors import AuthenticationFailed, InvalidKeyMaterial, MalformedInput
from ..keys import SymmetricKey, export_key, generate_key, import_key
from .backends import KeyValueStore

logger = logging.getLogger(__name__)

SETTINGS_STORAGE_KEY       = "myvocab_settings"
ENCRYPTION_KEY_STORAGE_KEY = "myvocab_encryption_key"

THEMES = ("light", "dark", "system")


@dataclass
class GptProvider:
    id: str
    name: str
    api_key: str = ""
    is_active: bool = False

    def __repr__(self):
        # api_key stays out of reprs and therefore out of logs
        masked = "***" if self.api_key else ""
        return (f"GptProvider(id={self.id!r}, name={self.name!r}, "
                f"api_key={masked!r}, is_active={self.is_active!r})")


@dataclass
class AppSettings:
    providers: List[GptProvider]
    active_provider_id: str = "openai"
    theme: str = "system"
    default_language: str = "en"
    extra_enrichment: Dict[str, str] = field(default_factory=dict)
    last_used_language: str = "en"
    last_used_categories: List[str] = field(default_factory=list)
    last_used_extra_enrichment: Dict[str, str] = field(default_factory=dict)

    def provider(self, provider_id: str) -> GptProvider:
        for p in self.providers:
            if p.id == provider_id:
                return p
        raise KeyError(provider_id)


def default_app_settings() -> AppSettings:
    return AppSettings(
        providers=[
            GptProvider(id="openai", name="OpenAI"),
            GptProvider(id="gemini", name="Gemini"),
        ],
    )


class SettingsStorage:
    """Settings persistence with sealed API keys."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    # ── key ─────────────────────────────────────────────────────────────
    def _stored_key(self) -> Optional[SymmetricKey]:
        stored = self._store.get_item(ENCRYPTION_KEY_STORAGE_KEY)
        if stored is None or stored == "":
            return None
        if not isinstance(stored, str):
            raise InvalidKeyMaterial("Stored encryption key is not a string.")
        try:
            return import_key(decode_base64(stored))
        except MalformedInput as exc:
            raise InvalidKeyMaterial("Stored encryption key is not valid base64.") from exc

    def get_or_create_key(self) -> SymmetricKey:
        """
        Import the stored key, or generate and store a new one.
        Raises InvalidKeyMaterial if the stored key is unusable.
        """
        key = self._stored_key()
        if key is None:
            key = self.reset_key()
        return key

    def reset_key(self) -> SymmetricKey:
        """Store a fresh key. Records sealed under the old one stop opening."""
        key = generate_key()
        self._store.set_item(ENCRYPTION_KEY_STORAGE_KEY, encode_base64(export_key(key)))
        logger.info("Stored new encryption key")
        return key

    # ── settings ────────────────────────────────────────────────────────
    def save_settings(self, settings: AppSettings) -> None:
        if settings.theme not in THEMES:
            raise ValueError(f"theme must be one of {THEMES}, got {settings.theme!r}")
        key = self.get_or_create_key()

        encrypted_api_keys = {}
        for provider in settings.providers:
            if provider.api_key:
                encrypted_api_keys[provider.id] = encrypt(provider.api_key, key)

        stored = {
            "encryptedApiKeys": encrypted_api_keys,
            "settings": {
                "providers": [
                    {"id": p.id, "name": p.name, "isActive": p.is_active}
                    for p in settings.providers
                ],
                "activeProviderId":        settings.active_provider_id,
                "theme":                   settings.theme,
                "defaultLanguage":         settings.default_language,
                "extraEnrichment":         dict(settings.extra_enrichment),
                "lastUsedLanguage":        settings.last_used_language,
                "lastUsedCategories":      list(settings.last_used_categories),
                "lastUsedExtraEnrichment": dict(settings.last_used_extra_enrichment),
            },
        }
        self._store.set_item(SETTINGS_STORAGE_KEY, json.dumps(stored))
        logger.debug(f"Saved settings: {len(encrypted_api_keys)} sealed API key(s)")

    def get_settings(self) -> AppSettings:
        """
        Stored settings with API keys opened.

        Falls back to defaults when nothing usable is stored. Individual
        fields of the wrong type take their default; provider entries
        without a string id and name are dropped.
        """
        raw = self._store.get_item(SETTINGS_STORAGE_KEY)
        if not raw:
            return default_app_settings()
        try:
            stored = json.loads(raw)
            s = stored["settings"]
            if not isinstance(s, dict):
                raise TypeError("settings is not an object")
            sealed_keys = {
                pid: record
                for pid, record in dict(stored.get("encryptedApiKeys") or {}).items()
                if isinstance(record, str)
            }
            providers = [
                GptProvider(id=p["id"], name=p["name"], is_active=bool(p.get("isActive")))
                for p in s["providers"]
                if isinstance(p, dict)
                and isinstance(p.get("id"), str)
                and isinstance(p.get("name"), str)
            ]
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.warning(f"Stored settings unreadable, using defaults: {type(exc).__name__}")
            return default_app_settings()

        key = None
        if sealed_keys:
            # reading never replaces a stored key, even a broken one
            try:
                key = self._stored_key()
            except InvalidKeyMaterial:
                logger.warning("Stored encryption key unusable; API keys must be re-entered")
        for p in providers:
            p.api_key = self._open(p.id, sealed_keys, key)

        defaults = default_app_settings()
        theme = s.get("theme")
        categories = s.get("lastUsedCategories")
        return AppSettings(
            providers=providers,
            active_provider_id=_str_or(s.get("activeProviderId"), defaults.active_provider_id),
            theme=theme if theme in THEMES else defaults.theme,
            default_language=_str_or(s.get("defaultLanguage"), defaults.default_language),
            extra_enrichment=_str_map(s.get("extraEnrichment")),
            last_used_language=_str_or(s.get("lastUsedLanguage"), defaults.last_used_language),
            last_used_categories=[c for c in categories if isinstance(c, str)]
            if isinstance(categories, list) else [],
            # older versions stored a plain string here
            last_used_extra_enrichment=_str_map(s.get("lastUsedExtraEnrichment")),
        )

    def _open(self, provider_id: str, sealed_keys: Dict[str, str], key) -> str:
        sealed = sealed_keys.get(provider_id)
        if not sealed or key is None:
            return ""
        try:
            return decrypt(sealed, key)
        except (AuthenticationFailed, MalformedInput) as exc:
            logger.warning(f"API key for {provider_id!r} could not be opened ({exc.kind}); "
                           f"it must be re-entered")
            return ""

    def clear_settings(self) -> None:
        """Remove stored settings. The encryption key is kept."""
        self._store.remove_item(SETTINGS_STORAGE_KEY)

    def has_settings(self) -> bool:
        # an empty value reads back as defaults, so it does not count
        return bool(self._store.get_item(SETTINGS_STORAGE_KEY))

    # ── async ───────────────────────────────────────────────────────────
    async def get_settings_async(self) -> AppSettings:
        return await asyncio.to_thread(self.get_settings)

    async def save_settings_async(self, settings: AppSettings) -> None:
        await asyncio.to_thread(self.save_settings, settings)


def _str_or(value, default: str) -> str:
    return value if isinstance(value, str) and value else default


def _str_map(value) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {k: v for k, v in value.items() if isinstance(v, str)}
