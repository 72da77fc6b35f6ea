# geodat/encoders/base.py

from __future__ import annotations
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Type

from geodat.config import HEARTBEAT_SECONDS
from geodat.csvline import csv_to_list, is_noise_line
from geodat.errors import MalformedLineError
from geodat.models import EncodeStats
from geodat.utils.logging import get_logger

log = get_logger(__name__)


class LineEncoder(ABC):
    """
    Turns decoded CSV lines into fixed-width binary records.

    One instance owns one output stream for the duration of one file. Lines
    are handled one at a time: tokenized, encoded and written before the next
    is pulled. A line that cannot be encoded is logged and skipped.

    Subclasses implement ``encode_line``, returning the record(s) to append
    or raising MalformedLineError.
    """

    #: skip Copyright banners and digit-free lines before tokenizing
    skip_noise = False

    def __init__(
            self,
            out: BinaryIO,
            heartbeat: float = HEARTBEAT_SECONDS,
            clock: Callable[[], float] = time.monotonic,
    ):
        self.out = out
        self.stats = EncodeStats()
        self._heartbeat = heartbeat
        self._clock = clock
        self._tick = clock()

    @abstractmethod
    def encode_line(self, line: str) -> list[bytes]:
        """Record(s) for one line; raise MalformedLineError to skip it."""

    def tokenize(self, line: str, min_fields: int = 0) -> list[str]:
        fields = csv_to_list(line)
        if fields is None:
            raise MalformedLineError(line, "not well formed CSV")
        if len(fields) < min_fields:
            raise MalformedLineError(line, f"expected at least {min_fields} fields, got {len(fields)}")
        return fields

    def write(self, record: bytes) -> None:
        self.out.write(record)
        self.stats.bytes_written += len(record)

    def process_line(self, line: str) -> None:
        self.stats.lines += 1
        try:
            self._encode_and_write(line)
        finally:
            self._beat()

    def _encode_and_write(self, line: str) -> None:
        if self.skip_noise and is_noise_line(line):
            self.stats.skipped += 1
            return

        try:
            records = self.encode_line(line)
        except MalformedLineError as e:
            log.warning("weird line: %s (%s)", line, e.reason)
            self.stats.skipped += 1
            self.stats.malformed += 1
            return

        for record in records:
            self.write(record)
            self.stats.records += 1

    def _beat(self) -> None:
        now = self._clock()
        if now - self._tick > self._heartbeat:
            self._tick = now
            log.info("Still working (%d lines, %d records) ...", self.stats.lines, self.stats.records)

    def feed(self, lines: Iterable[str]) -> EncodeStats:
        for line in lines:
            self.process_line(line)
        return self.stats


def encode_file(
        encoder_cls: Type[LineEncoder],
        lines: Iterable[str],
        dest: Path,
        **kwargs,
) -> EncodeStats:
    """
    Rebuild ``dest`` from scratch with one encoder. The output handle is
    closed on every exit path, including a failing source iterator.
    """
    dest = Path(dest)
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.unlink(missing_ok=True)

    log.info("Processing %s (may take a moment) ...", dest.name)
    with open(dest, "wb") as out:
        encoder = encoder_cls(out, **kwargs)
        stats = encoder.feed(lines)

    log.info(
        "Wrote %s: %d records, %d placeholders, %d skipped (%d malformed), %d bytes",
        dest, stats.records, stats.placeholders, stats.skipped, stats.malformed,
        stats.bytes_written,
    )
    return stats
