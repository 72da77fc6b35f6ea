# geodat/reader.py
"""
Decode an emitted .dat file into a DataFrame, for inspection and checks.
This does not answer lookups; it only turns records back into rows.
"""

from __future__ import annotations
from pathlib import Path
from typing import Union

import pandas as pd

from geodat.layouts import (
    CC_WIDTH, CITY_BLOCK_V4, CITY_BLOCK_V6, CITY_NAMES, COUNTRY_V4, COUNTRY_V6,
    I32, I32X2, LAYOUTS, NAMES_CITY, NAMES_LATLON, NAMES_METRO, NAMES_POSTAL,
    NAMES_REGION, REGION_WIDTH, RecordLayout, U32X2, U32X3, U32X4,
    V6_END_OFFSET, V6_TAIL_OFFSET, get_text,
)
from geodat.utils.logging import get_logger
from geodat.utils.numbers import COORD_SCALE, words_to_ipv6

log = get_logger(__name__)

PathLike = Union[str, Path]


def _country_v4(rec: bytes) -> dict:
    start, end = U32X2.unpack_from(rec, 0)
    return {"start": start, "end": end, "cc": get_text(rec, COUNTRY_V4.size - CC_WIDTH)}


def _country_v6(rec: bytes) -> dict:
    return {
        "start": words_to_ipv6(U32X4.unpack_from(rec, 0)),
        "end": words_to_ipv6(U32X4.unpack_from(rec, V6_END_OFFSET)),
        "cc": get_text(rec, COUNTRY_V6.size - CC_WIDTH),
    }


def _city_v4(rec: bytes) -> dict:
    start, end, loc_id = U32X3.unpack_from(rec, 0)
    return {"start": start, "end": end, "loc_id": loc_id}


def _city_v6(rec: bytes) -> dict:
    lat, lon = I32X2.unpack_from(rec, V6_TAIL_OFFSET + 4)
    return {
        "start": words_to_ipv6(U32X4.unpack_from(rec, 0)),
        "end": words_to_ipv6(U32X4.unpack_from(rec, V6_END_OFFSET)),
        "cc": get_text(rec, V6_TAIL_OFFSET, CC_WIDTH),
        "region": get_text(rec, V6_TAIL_OFFSET + 2, REGION_WIDTH),
        "lat": lat / COORD_SCALE,
        "lon": lon / COORD_SCALE,
        "city": get_text(rec, V6_TAIL_OFFSET + 12),
    }


def _city_names(rec: bytes) -> dict:
    lat, lon = I32X2.unpack_from(rec, NAMES_LATLON)
    return {
        "cc": get_text(rec, 0, CC_WIDTH),
        "region": get_text(rec, NAMES_REGION, REGION_WIDTH),
        "lat": lat / COORD_SCALE,
        "lon": lon / COORD_SCALE,
        "metro": I32.unpack_from(rec, NAMES_METRO)[0],
        "postal": I32.unpack_from(rec, NAMES_POSTAL)[0],
        "city": get_text(rec, NAMES_CITY),
        "placeholder": not any(rec),
    }


_DECODERS = {
    COUNTRY_V4.name: _country_v4,
    COUNTRY_V6.name: _country_v6,
    CITY_BLOCK_V4.name: _city_v4,
    CITY_BLOCK_V6.name: _city_v6,
    CITY_NAMES.name: _city_names,
}


def read_records(path: PathLike, kind: str, base_id: int = 0) -> pd.DataFrame:
    """
    Read every record of ``path`` as laid out for ``kind`` (a key of
    ``geodat.layouts.LAYOUTS``).

    For city-names tables a ``loc_id`` column is derived from the record
    position: ``base_id + row``.
    """
    layout: RecordLayout = LAYOUTS[kind]
    data = Path(path).read_bytes()
    if len(data) % layout.size:
        log.warning(
            "%s: size %d is not a multiple of %d; trailing bytes ignored",
            path, len(data), layout.size,
        )

    decode = _DECODERS[kind]
    rows = [
        decode(data[off:off + layout.size])
        for off in range(0, len(data) - layout.size + 1, layout.size)
    ]
    df = pd.DataFrame(rows)

    if kind == CITY_NAMES.name:
        df.insert(0, "loc_id", range(base_id, base_id + len(df)))
    log.info("Read %d %s records from %s", len(df), kind, path)
    return df
