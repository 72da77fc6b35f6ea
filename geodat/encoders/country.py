# geodat/encoders/country.py

from __future__ import annotations

from geodat.csvline import is_ipv6_text
from geodat.encoders.base import LineEncoder
from geodat.errors import MalformedLineError
from geodat.layouts import (
    CC_WIDTH, COUNTRY_V4, COUNTRY_V6, U32X2, U32X4, V6_END_OFFSET,
    new_record, put_text,
)
from geodat.utils.numbers import ipv6_words, parse_uint32

MIN_FIELDS = 6


class CountryEncoder(LineEncoder):
    """
    Country range lines:

        start_ip, end_ip, start_num, end_num, cc, country_name

    IPv4 rows use the numeric columns; IPv6 rows (colon in the first field)
    are parsed from the address text. The country code always fills the
    last two bytes of the record.
    """

    def encode_line(self, line: str) -> list[bytes]:
        fields = self.tokenize(line, MIN_FIELDS)
        cc = fields[4].replace('"', "")

        try:
            if is_ipv6_text(fields[0]):
                layout = COUNTRY_V6
                buf = new_record(layout)
                U32X4.pack_into(buf, 0, *ipv6_words(fields[0]))
                U32X4.pack_into(buf, V6_END_OFFSET, *ipv6_words(fields[1]))
            else:
                layout = COUNTRY_V4
                buf = new_record(layout)
                U32X2.pack_into(buf, 0, parse_uint32(fields[2]), parse_uint32(fields[3]))
        except ValueError as e:
            raise MalformedLineError(line, str(e)) from e

        put_text(buf, layout.size - CC_WIDTH, cc, CC_WIDTH)
        return [bytes(buf)]
