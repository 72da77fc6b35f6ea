# geodat/models.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class DatabaseType(str, Enum):
    COUNTRY = "country"              # one CSV -> country ranges (v4 or v6)
    CITY = "city"                    # one CSV -> city blocks (v4 or v6 inline)
    CITY_EXTENDED = "city-extended"  # blocks CSV + locations CSV -> two files


class JobState(str, Enum):
    PENDING = "pending"
    FETCHED = "fetched"
    EXTRACTED = "extracted"
    ENCODED = "encoded"
    DONE = "done"


@dataclass
class Database:
    type: DatabaseType
    archive: str                     # e.g. "GeoIPv6.csv.gz", looked up by the fetcher
    src: Union[str, list[str]]       # CSV name(s) inside the archive
    dest: Union[str, list[str]]      # .dat name(s) under the data dir
    url: Optional[str] = None        # upstream location, informational only

    @property
    def sources(self) -> list[str]:
        return [self.src] if isinstance(self.src, str) else list(self.src)

    @property
    def destinations(self) -> list[str]:
        return [self.dest] if isinstance(self.dest, str) else list(self.dest)

    def __post_init__(self) -> None:
        self.type = DatabaseType(self.type)
        expected = 2 if self.type is DatabaseType.CITY_EXTENDED else 1
        if len(self.sources) != expected or len(self.destinations) != expected:
            raise ValueError(
                f"{self.type.value} database needs {expected} source(s) and destination(s)"
            )


@dataclass
class EncodeStats:
    lines: int = 0          # lines pulled from the source
    records: int = 0        # data records written
    skipped: int = 0        # noise lines and malformed lines
    malformed: int = 0      # subset of skipped that failed to parse
    placeholders: int = 0   # zero records written for location-ID gaps
    bytes_written: int = 0
