import gzip
import io
import zipfile
from pathlib import Path

import pytest

from samples import (
    CITY_BLOCKS_CSV, CITY_LOCATIONS_CSV, CITY_V6_CSV, COUNTRY_V4_CSV, COUNTRY_V6_CSV,
)


@pytest.fixture
def run_encoder():
    """Feed lines through an encoder writing to memory; return (bytes, encoder)."""
    def _run(encoder_cls, lines, **kwargs):
        out = io.BytesIO()
        encoder = encoder_cls(out, **kwargs)
        encoder.feed(lines)
        return out.getvalue(), encoder
    return _run


def _write_zip(path: Path, members: dict) -> None:
    with zipfile.ZipFile(path, "w") as zf:
        for name, text in members.items():
            zf.writestr(name, text.encode("latin-1"))


def _write_gz(path: Path, text: str) -> None:
    with gzip.open(path, "wb") as f:
        f.write(text.encode("latin-1"))


@pytest.fixture
def source_dir(tmp_path) -> Path:
    """A local mirror of the four upstream archives."""
    src = tmp_path / "sources"
    src.mkdir()
    _write_zip(src / "GeoIPCountryCSV.zip", {"GeoIPCountryWhois.csv": COUNTRY_V4_CSV})
    _write_gz(src / "GeoIPv6.csv.gz", COUNTRY_V6_CSV)
    _write_zip(src / "GeoLiteCity-latest.zip", {
        "GeoLiteCity_20130101/GeoLiteCity-Blocks.csv": CITY_BLOCKS_CSV,
        "GeoLiteCity_20130101/GeoLiteCity-Location.csv": CITY_LOCATIONS_CSV,
        "GeoLiteCity_20130101/README.txt": "not a csv",
    })
    _write_gz(src / "GeoLiteCityv6.csv.gz", CITY_V6_CSV)
    return src
