# geodat/utils/numbers.py

from __future__ import annotations
import ipaddress
import math
import re

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

UINT32_MAX = 0xFFFFFFFF
INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1

# Latitude / longitude are stored as degrees * 10^4.
COORD_SCALE = 10000


def _unquote(text: str) -> str:
    return text.replace('"', "").strip()


def parse_int(text: str) -> int:
    """Strict base-10 integer parse. Raises ValueError on anything else."""
    return int(_unquote(text), 10)


def parse_uint32(text: str) -> int:
    value = parse_int(text)
    if not 0 <= value <= UINT32_MAX:
        raise ValueError(f"{value} does not fit in 32 unsigned bits")
    return value


def leading_int(text: str) -> int:
    """
    Lenient integer parse for optional fields: the leading run of digits,
    or 0 when there is none ("94043" -> 94043, "12-345" -> 12, "" -> 0).
    """
    m = _LEADING_INT.match(_unquote(text))
    return int(m.group(1)) if m else 0


def fixed_point(text: str, scale: int = COORD_SCALE) -> int:
    """
    Scale a decimal coordinate to an int32, rounding half up.

    >>> fixed_point("37.751")
    377510
    """
    value = float(_unquote(text))
    if not math.isfinite(value):
        raise ValueError(f"not a finite number: {text!r}")
    scaled = math.floor(value * scale + 0.5)
    if not INT32_MIN <= scaled <= INT32_MAX:
        raise ValueError(f"{text!r} does not fit in 32 signed bits once scaled")
    return scaled


def ipv6_words(text: str) -> tuple[int, int, int, int]:
    """Split a textual IPv6 address into four big-endian 32-bit words."""
    addr = int(ipaddress.IPv6Address(_unquote(text)))
    return (
        (addr >> 96) & UINT32_MAX,
        (addr >> 64) & UINT32_MAX,
        (addr >> 32) & UINT32_MAX,
        addr & UINT32_MAX,
    )


def words_to_ipv6(words) -> str:
    value = 0
    for w in words:
        value = (value << 32) | (int(w) & UINT32_MAX)
    return str(ipaddress.IPv6Address(value))
