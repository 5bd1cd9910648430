from .backends import KeyValueStore, MemoryStore, JsonFileStore
from .settings import (
    SETTINGS_STORAGE_KEY,
    ENCRYPTION_KEY_STORAGE_KEY,
    AppSettings,
    GptProvider,
    SettingsStorage,
    default_app_settings,
)

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "SETTINGS_STORAGE_KEY",
    "ENCRYPTION_KEY_STORAGE_KEY",
    "AppSettings",
    "GptProvider",
    "SettingsStorage",
    "default_app_settings",
]
