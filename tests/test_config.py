"""
vocab_vault.config / logging_config
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import base64
import logging
from pathlib import Path

import pytest

from vocab_vault import InvalidKeyMaterial, VaultConfig, decrypt, encrypt, export_key, load_key_from_env
from vocab_vault.config import DEFAULT_SETTINGS_PATH, KEY_ENV, LOG_LEVEL_ENV, SETTINGS_PATH_ENV
from vocab_vault.logging_config import setup_logging

RAW = bytes(range(32))


def test_key_unset_or_blank():
    assert load_key_from_env({}) is None
    assert load_key_from_env({KEY_ENV: "   "}) is None

def test_key_from_env():
    k = load_key_from_env({KEY_ENV: base64.b64encode(RAW).decode()})
    assert export_key(k) == RAW
    assert decrypt(encrypt("sk-env", k), k) == "sk-env"

def test_key_from_process_env(monkeypatch):
    monkeypatch.setenv(KEY_ENV, base64.b64encode(RAW).decode())
    assert export_key(load_key_from_env()) == RAW

@pytest.mark.parametrize("value", ["%%%", base64.b64encode(bytes(16)).decode(), RAW.hex()])
def test_bad_key_from_env(value):
    with pytest.raises(InvalidKeyMaterial):
        load_key_from_env({KEY_ENV: value})

def test_config_defaults():
    cfg = VaultConfig.from_env({})
    assert cfg.settings_path == DEFAULT_SETTINGS_PATH.expanduser()
    assert cfg.log_level == logging.INFO
    assert cfg.key is None

def test_config_from_env(tmp_path):
    cfg = VaultConfig.from_env({
        SETTINGS_PATH_ENV: str(tmp_path / "s.json"),
        LOG_LEVEL_ENV: "debug",
        KEY_ENV: base64.b64encode(RAW).decode(),
    })
    assert cfg.settings_path == Path(tmp_path / "s.json")
    assert cfg.log_level == logging.DEBUG
    assert export_key(cfg.key) == RAW
    assert RAW.hex() not in repr(cfg)

def test_config_bad_log_level():
    with pytest.raises(ValueError):
        VaultConfig.from_env({LOG_LEVEL_ENV: "chatty"})

def test_setup_logging():
    root = logging.getLogger()
    old_level = root.level
    handler = setup_logging(logging.DEBUG)
    try:
        assert handler in root.handlers
        assert root.level == logging.DEBUG
        assert logging.getLogger("cryptography").level == logging.WARNING
    finally:
        root.removeHandler(handler)
        root.setLevel(old_level)

def test_setup_logging_twice_keeps_one_handler():
    root = logging.getLogger()
    old_level = root.level
    first = setup_logging(logging.INFO)
    try:
        second = setup_logging("warning")
        assert second is first
        assert root.handlers.count(first) == 1
        assert root.level == logging.WARNING
    finally:
        root.removeHandler(first)
        root.setLevel(old_level)

def test_setup_logging_rejects_unknown_level_name():
    with pytest.raises(ValueError):
        setup_logging("chatty")
