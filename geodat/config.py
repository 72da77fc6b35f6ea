# geodat/config.py
"""
Path configuration (override with environment variables).
"""

from __future__ import annotations
import os
from pathlib import Path

ROOT       = Path(os.getenv("GEODAT_ROOT", os.getcwd())).resolve()
DATA_DIR   = Path(os.getenv("GEODAT_DATA_DIR",   ROOT / "data")).resolve()
TMP_DIR    = Path(os.getenv("GEODAT_TMP_DIR",    ROOT / "tmp")).resolve()
SOURCE_DIR = Path(os.getenv("GEODAT_SOURCE_DIR", ROOT / "sources")).resolve()

# Encoding of the MaxMind legacy CSV dumps.
SOURCE_ENCODING = "latin-1"

# Seconds between "Still working" progress messages.
HEARTBEAT_SECONDS = float(os.getenv("GEODAT_HEARTBEAT_SECONDS", "5"))
