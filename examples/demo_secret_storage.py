"""
vocab_vault — Live Demo: sealing API keys for local storage
===========================================================
Run:  python examples/demo_secret_storage.py

Walks through key handling, sealing, the failure kinds, and the settings
service, printing timings and record sizes. Secrets are never printed.
"""

import sys, os, time, asyncio, tempfile
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from vocab_vault import (
    AuthenticationFailed,
    JsonFileStore,
    MalformedInput,
    SettingsStorage,
    VaultConfig,
    decode_base64,
    decrypt,
    decrypt_async,
    default_app_settings,
    encode_base64,
    encrypt,
    encrypt_async,
    export_key,
    generate_key,
    import_key,
)
from vocab_vault.logging_config import setup_logging

LINE    = "═" * 70
API_KEY = "sk-test-api-key-12345"

def header(step, name):
    print(f"\n{LINE}")
    print(f"  {step} — {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")

config = VaultConfig.from_env()
setup_logging(config.log_level)

print(f"\n{LINE}")
print("  vocab_vault — AES-256-GCM secret storage demo")
print(LINE)

# ── KEYS ─────────────────────────────────────────────────────────────────────
header(1, "KEYS — generate / export / import")
key = config.key or generate_key()
raw = export_key(key)
restored = import_key(raw)
ok("Key source",  "VOCAB_VAULT_KEY_B64" if config.key else "freshly generated")
ok("Key size",    f"{len(raw) * 8} bits")
ok("Handle",      repr(key))

# ── SEAL ─────────────────────────────────────────────────────────────────────
header(2, "SEAL — encrypt / decrypt")
t0      = time.perf_counter()
sealed  = encrypt(API_KEY, key)
opened  = decrypt(sealed, restored)
elapsed = time.perf_counter() - t0
ok("Record",      f"{len(sealed)} chars base64 / {len(decode_base64(sealed))} bytes "
                  f"(nonce=12 + data + tag=16)")
ok("Round-trip",  f"{elapsed*1000:.2f} ms")
ok("Matches",     str(opened == API_KEY))
ok("Fresh nonce", str(encrypt(API_KEY, key) != sealed))

# ── FAILURES ─────────────────────────────────────────────────────────────────
header(3, "FAILURES — wrong key, tampering, garbage")
try:
    decrypt(sealed, generate_key())
except AuthenticationFailed as e:
    ok("Wrong key", e.kind)
bundle = bytearray(decode_base64(sealed))
bundle[-1] ^= 0xFF
try:
    decrypt(encode_base64(bytes(bundle)), key)
except AuthenticationFailed as e:
    ok("Tampered tag", e.kind)
try:
    decrypt("not-base64!!!", key)
except MalformedInput as e:
    ok("Garbage", e.kind)

# ── ASYNC ────────────────────────────────────────────────────────────────────
header(4, "ASYNC — sealing off the event loop")
async def seal_many(n):
    records = await asyncio.gather(*(encrypt_async(f"key-{i}", key) for i in range(n)))
    return await asyncio.gather(*(decrypt_async(r, key) for r in records))

t0      = time.perf_counter()
values  = asyncio.run(seal_many(100))
elapsed = time.perf_counter() - t0
ok("Sealed + opened", f"{len(values)} records in {elapsed*1000:.1f} ms")

# ── SETTINGS ─────────────────────────────────────────────────────────────────
header(5, "SETTINGS — API keys sealed at rest")
with tempfile.TemporaryDirectory() as tmp:
    path     = os.path.join(tmp, "settings.json")
    storage  = SettingsStorage(JsonFileStore(path))
    settings = default_app_settings()
    settings.provider("openai").api_key   = API_KEY
    settings.provider("openai").is_active = True
    storage.save_settings(settings)
    with open(path, encoding="utf-8") as f:
        on_disk = f.read()
    ok("Stored file",       f"{len(on_disk)} bytes")
    ok("Plaintext on disk", str(API_KEY in on_disk))
    back = SettingsStorage(JsonFileStore(path)).get_settings()
    ok("Read back",         str(back.provider("openai").api_key == API_KEY))
    storage.reset_key()
    lost = storage.get_settings().provider("openai").api_key
    ok("After key reset",   "API key must be re-entered" if not lost else "unexpected")

print(f"\n{LINE}")
print("  DEMO COMPLETE")
print(LINE + "\n")
