# geodat/encoders/city_blocks.py

from __future__ import annotations

from geodat.csvline import is_ipv6_text
from geodat.encoders.base import LineEncoder
from geodat.errors import MalformedLineError
from geodat.layouts import (
    CC_WIDTH, CITY_BLOCK_V4, CITY_BLOCK_V6, I32X2, REGION_WIDTH, U32X3, U32X4,
    V6_END_OFFSET, V6_TAIL_OFFSET, new_record, put_text,
)
from geodat.utils.numbers import INT32_MIN, UINT32_MAX, fixed_point, ipv6_words, parse_int

V4_MIN_FIELDS = 3
V6_MIN_FIELDS = 9


def _as_uint32(text: str) -> int:
    # Negative 32-bit values are reinterpreted as unsigned; anything wider is an error.
    value = parse_int(text)
    if not INT32_MIN <= value <= UINT32_MAX:
        raise ValueError(f"{value} does not fit in 32 bits")
    return value & UINT32_MAX


class CityBlockEncoder(LineEncoder):
    """
    City block lines.

    IPv4: ``start_num, end_num, loc_id`` -> 12-byte record.
    IPv6: ``start_ip, end_ip, _, _, cc, region, city, lat, lon`` -> 58-byte
    record with the location stored inline; the city name takes whatever
    room is left after the coordinates.
    """

    skip_noise = True

    def encode_line(self, line: str) -> list[bytes]:
        fields = self.tokenize(line)
        if fields and is_ipv6_text(fields[0]):
            return [self._encode_v6(line, fields)]
        return [self._encode_v4(line, fields)]

    def _encode_v4(self, line: str, fields: list[str]) -> bytes:
        if len(fields) < V4_MIN_FIELDS:
            raise MalformedLineError(line, f"expected at least {V4_MIN_FIELDS} fields, got {len(fields)}")
        try:
            start, end, loc_id = (_as_uint32(f) for f in fields[:3])
        except ValueError as e:
            raise MalformedLineError(line, str(e)) from e

        buf = new_record(CITY_BLOCK_V4)
        U32X3.pack_into(buf, 0, start, end, loc_id)
        return bytes(buf)

    def _encode_v6(self, line: str, fields: list[str]) -> bytes:
        if len(fields) < V6_MIN_FIELDS:
            raise MalformedLineError(line, f"expected at least {V6_MIN_FIELDS} fields, got {len(fields)}")
        try:
            start = ipv6_words(fields[0])
            end = ipv6_words(fields[1])
            lat = fixed_point(fields[7])
            lon = fixed_point(fields[8])
        except ValueError as e:
            raise MalformedLineError(line, str(e)) from e

        buf = new_record(CITY_BLOCK_V6)
        U32X4.pack_into(buf, 0, *start)
        U32X4.pack_into(buf, V6_END_OFFSET, *end)

        offset = V6_TAIL_OFFSET
        put_text(buf, offset, fields[4], CC_WIDTH)
        put_text(buf, offset + 2, fields[5], REGION_WIDTH)
        I32X2.pack_into(buf, offset + 4, lat, lon)
        put_text(buf, offset + 12, fields[6])
        return bytes(buf)
