# geodat/layouts.py
"""
Byte layouts of the emitted .dat files.

All integers are big-endian. Every record starts as a zero-filled buffer, so
any slot that is not written (short text, absent optional value) reads back
as NUL bytes.

    country v4       10 B   start u32 | end u32 | cc[2]
    country v6       34 B   start 4*u32 | end 4*u32 | cc[2]
    city block v4    12 B   start u32 | end u32 | loc_id u32
    city block v6    58 B   start 4*u32 | end 4*u32 | cc[2] | region[2]
                            | lat i32 | lon i32 | city[...]
    city names       64 B   cc[2] | region[2] | lat i32 | lon i32
                            | metro i32 | postal i32 | city[...]
"""

from __future__ import annotations
import struct
from dataclasses import dataclass


@dataclass(frozen=True)
class RecordLayout:
    name: str
    size: int


COUNTRY_V4 = RecordLayout("country", 10)
COUNTRY_V6 = RecordLayout("country6", 34)
CITY_BLOCK_V4 = RecordLayout("city", 12)
CITY_BLOCK_V6 = RecordLayout("city6", 58)
CITY_NAMES = RecordLayout("city-names", 64)

LAYOUTS = {
    layout.name: layout
    for layout in (COUNTRY_V4, COUNTRY_V6, CITY_BLOCK_V4, CITY_BLOCK_V6, CITY_NAMES)
}

I32 = struct.Struct(">i")
U32X2 = struct.Struct(">II")
U32X3 = struct.Struct(">III")
U32X4 = struct.Struct(">IIII")
I32X2 = struct.Struct(">ii")

# Offsets inside a v6 record, after the two 16-byte addresses.
V6_END_OFFSET = 16
V6_TAIL_OFFSET = 32

# Offsets inside a city-names record.
NAMES_CC = 0
NAMES_REGION = 2
NAMES_LATLON = 4
NAMES_METRO = 12
NAMES_POSTAL = 16
NAMES_CITY = 20

CC_WIDTH = 2
REGION_WIDTH = 2


def new_record(layout: RecordLayout) -> bytearray:
    """A zero-initialized buffer for one record."""
    return bytearray(layout.size)


def put_text(buf: bytearray, offset: int, text: str, width: int | None = None) -> int:
    """
    Write UTF-8 text at ``offset``, cut to ``width`` bytes (or to the end of
    the buffer) without splitting a character. Returns the bytes written.
    """
    room = len(buf) - offset if width is None else min(width, len(buf) - offset)
    data = text.encode("utf-8")
    if len(data) > room:
        data = data[:room].decode("utf-8", "ignore").encode("utf-8")
    buf[offset:offset + len(data)] = data
    return len(data)


def get_text(buf, offset: int, width: int | None = None) -> str:
    """Read a NUL-padded text slot back (used by the reader)."""
    end = len(buf) if width is None else offset + width
    return bytes(buf[offset:end]).split(b"\0", 1)[0].decode("utf-8", "replace")
