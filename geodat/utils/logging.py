# geodat/utils/logging.py

from __future__ import annotations
import logging
import os
import sys

_ROOT = "geodat"
_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return

    root = logging.getLogger(_ROOT)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(handler)
    root.setLevel(os.getenv("GEODAT_LOG_LEVEL", "INFO").upper())
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger under the shared ``geodat`` hierarchy.

    The stderr handler is installed once, on first use.
    """
    _configure_root()
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)


def set_level(level: int | str) -> None:
    """Change the level of every geodat logger at once (CLI --verbose)."""
    _configure_root()
    logging.getLogger(_ROOT).setLevel(level)
