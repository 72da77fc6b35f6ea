# geodat/encoders/city_names.py

from __future__ import annotations
from typing import Optional

from geodat.encoders.base import LineEncoder
from geodat.errors import MalformedLineError
from geodat.layouts import (
    CC_WIDTH, CITY_NAMES, I32, I32X2, NAMES_CC, NAMES_CITY, NAMES_LATLON,
    NAMES_METRO, NAMES_POSTAL, NAMES_REGION, REGION_WIDTH, new_record, put_text,
)
from geodat.utils.logging import get_logger
from geodat.utils.numbers import INT32_MAX, INT32_MIN, fixed_point, leading_int, parse_int

log = get_logger(__name__)

MIN_FIELDS = 7

PLACEHOLDER = bytes(CITY_NAMES.size)


def _optional_int32(text: Optional[str]) -> int:
    value = leading_int(text) if text else 0
    return value if INT32_MIN <= value <= INT32_MAX else 0


class CityNamesEncoder(LineEncoder):
    """
    Location lines, sorted by ascending location ID:

        loc_id, cc, region, city, postal, lat, lon, metro[, ...]

    The output is a table of 64-byte records indexed by ``loc_id - base_id``,
    where ``base_id`` is the first ID seen. Missing IDs are filled with
    all-zero records so that the offset of any ID can be computed directly.
    """

    skip_noise = True

    def __init__(self, out, **kwargs):
        super().__init__(out, **kwargs)
        self.base_id: Optional[int] = None
        self.last_id: Optional[int] = None

    def encode_line(self, line: str) -> list[bytes]:
        fields = self.tokenize(line, MIN_FIELDS)
        try:
            loc_id = parse_int(fields[0])
            lat = fixed_point(fields[5])
            lon = fixed_point(fields[6])
        except ValueError as e:
            raise MalformedLineError(line, str(e)) from e

        if self.last_id is not None and loc_id <= self.last_id:
            raise MalformedLineError(line, f"location id {loc_id} is not above {self.last_id}")

        postal = _optional_int32(fields[4])
        metro = _optional_int32(fields[7] if len(fields) > 7 else None)

        buf = new_record(CITY_NAMES)
        put_text(buf, NAMES_CC, fields[1], CC_WIDTH)
        put_text(buf, NAMES_REGION, fields[2], REGION_WIDTH)
        I32X2.pack_into(buf, NAMES_LATLON, lat, lon)
        if metro:
            I32.pack_into(buf, NAMES_METRO, metro)
        if postal:
            I32.pack_into(buf, NAMES_POSTAL, postal)
        put_text(buf, NAMES_CITY, fields[3])

        if self.last_id is None:
            self.base_id = loc_id
            log.debug("Location table base id: %d", loc_id)
        else:
            self.fill_gap(loc_id - self.last_id - 1)
        self.last_id = loc_id
        return [bytes(buf)]

    def fill_gap(self, count: int) -> None:
        for _ in range(count):
            self.write(PLACEHOLDER)
        self.stats.placeholders += count

    def offset_of(self, loc_id: int) -> int:
        """Byte offset of ``loc_id`` in the table being written."""
        if self.base_id is None:
            raise LookupError("no location written yet")
        return CITY_NAMES.size * (loc_id - self.base_id)
