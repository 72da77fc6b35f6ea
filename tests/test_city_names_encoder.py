import struct

import pytest

from geodat.encoders.city_names import CityNamesEncoder

SIZE = 64


def loc(loc_id, cc="US", region="CA", city="Mountain View", postal="94043",
        lat="37.751", lon="-122.0574", metro="807"):
    return f'{loc_id},"{cc}","{region}","{city}","{postal}",{lat},{lon},{metro},650'


def record(data, i):
    return data[i * SIZE:(i + 1) * SIZE]


def test_gaps_are_filled_with_zero_records(run_encoder):
    data, enc = run_encoder(CityNamesEncoder, [loc(1), loc(2), loc(5)])
    assert len(data) == 5 * SIZE
    assert record(data, 0) != bytes(SIZE)
    assert record(data, 1) != bytes(SIZE)
    assert record(data, 2) == bytes(SIZE)
    assert record(data, 3) == bytes(SIZE)
    assert record(data, 4)[0:2] == b"US"
    assert enc.stats.records == 3
    assert enc.stats.placeholders == 2


def test_first_id_is_the_base(run_encoder):
    data, enc = run_encoder(CityNamesEncoder, [loc(1000), loc(1003)])
    assert enc.base_id == 1000
    assert len(data) == 4 * SIZE
    assert enc.offset_of(1003) == 3 * SIZE
    assert record(data, 3)[0:2] == b"US"


def test_offset_before_any_record():
    enc = CityNamesEncoder(None)
    with pytest.raises(LookupError):
        enc.offset_of(1)


def test_record_layout(run_encoder):
    data, _ = run_encoder(CityNamesEncoder, [loc(5)])
    assert len(data) == SIZE
    assert data[0:2] == b"US"
    assert data[2:4] == b"CA"
    lat, lon = struct.unpack(">ii", data[4:12])
    assert lat == 377510
    assert abs(lat / 10000 - 37.751) < 1e-4
    assert lon == -1220574
    assert struct.unpack(">i", data[12:16])[0] == 807
    assert struct.unpack(">i", data[16:20])[0] == 94043
    assert data[20:33] == b"Mountain View"
    assert data[33:] == bytes(SIZE - 33)


def test_zero_or_missing_optional_fields_stay_zero(run_encoder):
    lines = [
        loc(1, metro="0", postal=""),
        '2,"AP","","","",35.0000,105.0000',
        loc(3, postal="SW1A 1AA", metro=""),
    ]
    data, enc = run_encoder(CityNamesEncoder, lines)
    assert enc.stats.records == 3
    for i in range(3):
        assert record(data, i)[12:20] == bytes(8)
    assert record(data, 1)[0:4] == b"AP\0\0"


def test_long_city_name_is_truncated(run_encoder):
    data, _ = run_encoder(CityNamesEncoder, [loc(1, city="X" * 80)])
    assert len(data) == SIZE
    assert data[20:] == b"X" * 44


def test_multibyte_city_name_is_not_split(run_encoder):
    data, _ = run_encoder(CityNamesEncoder, [loc(1, city="a" * 43 + "é")])
    # "é" needs two bytes and only one is left
    assert data[20:] == b"a" * 43 + b"\0"


def test_skipped_lines_do_not_advance_the_tracker(run_encoder):
    lines = [
        "Copyright (c) 2012 MaxMind LLC.  All Rights Reserved.",
        "locId,country,region,city,postalCode,latitude,longitude,metroCode,areaCode",
        loc(1),
        loc(2, lat="north"),
        '3,"US",broken"',
        loc(3),
    ]
    data, enc = run_encoder(CityNamesEncoder, lines)
    assert len(data) == 3 * SIZE
    assert record(data, 1) == bytes(SIZE)
    assert record(data, 2)[0:2] == b"US"
    assert enc.stats.skipped == 4
    assert enc.stats.malformed == 2
    assert enc.stats.placeholders == 1


def test_ids_out_of_order_are_rejected(run_encoder):
    data, enc = run_encoder(CityNamesEncoder, [loc(1), loc(3), loc(2), loc(3), loc(4)])
    assert len(data) == 4 * SIZE
    assert enc.stats.records == 3
    assert enc.stats.malformed == 2
    assert enc.last_id == 4
