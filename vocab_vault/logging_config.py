"""
Logging setup for scripts and services built on the vault.

The library itself only creates module loggers; nothing is configured
on import. Records carry sizes and error kinds, never secrets.
"""

import logging
import sys

from .config import _log_level

HANDLER_NAME = "vocab_vault"

FORMAT      = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level=logging.INFO, stream=None) -> logging.Handler:
    """
    Attach one stdout handler to the root logger.

    level may be a number or a level name such as VaultConfig.log_level
    or "debug". Calling again reuses the handler and only updates levels.
    """
    if isinstance(level, str):
        level = _log_level(level)

    root = logging.getLogger()
    handler = next((h for h in root.handlers if h.get_name() == HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(FORMAT, DATE_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)

    # the vault logs at debug; keep the backend library at warnings
    logging.getLogger("cryptography").setLevel(logging.WARNING)
    return handler
