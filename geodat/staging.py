# geodat/staging.py
"""
Fetch / extract stages and the line source handed to the encoders.

Network retrieval is not done here: the fetcher stages archives that already
sit in a local source directory (a mirror of the upstream downloads).
"""

from __future__ import annotations
import gzip
import shutil
import zipfile
from pathlib import Path
from typing import Iterator, Protocol

from geodat.config import SOURCE_ENCODING
from geodat.errors import ExtractError, FetchError
from geodat.models import Database
from geodat.utils.logging import get_logger

log = get_logger(__name__)


class Fetcher(Protocol):
    def fetch(self, database: Database, tmp_dir: Path) -> Path:
        """Stage the database's archive under ``tmp_dir`` and return its path."""


class LocalArchiveFetcher:
    """
    Stage archives from a local directory. ``.gz`` files are decompressed
    while staging; a file already present in the staging dir is reused.
    """

    def __init__(self, source_dir: Path):
        self.source_dir = Path(source_dir)

    def fetch(self, database: Database, tmp_dir: Path) -> Path:
        name = database.archive
        gzipped = name.endswith(".gz")
        staged = tmp_dir / (name[:-3] if gzipped else name)

        if staged.exists():
            log.info("Reusing staged %s", staged.name)
            return staged

        src = self.source_dir / name
        if not src.is_file():
            raise FetchError(f"source archive not found: {src}")

        log.info("Retrieving %s (upstream %s) ...", name, database.url or "unknown")
        tmp_dir.mkdir(parents=True, exist_ok=True)
        try:
            if gzipped:
                with gzip.open(src, "rb") as fin, open(staged, "wb") as fout:
                    shutil.copyfileobj(fin, fout)
            else:
                shutil.copyfile(src, staged)
        except (OSError, EOFError) as e:
            staged.unlink(missing_ok=True)
            raise FetchError(f"could not stage {src}: {e}") from e
        return staged


def extract(staged: Path, database: Database, tmp_dir: Path) -> list[Path]:
    """
    Unpack every ``.csv`` member of a zip (flattened to its basename) into
    ``tmp_dir`` and return the paths of the database's source CSVs.
    """
    if staged.suffix == ".zip":
        log.info("Extracting %s ...", staged.name)
        try:
            with zipfile.ZipFile(staged) as zf:
                for info in zf.infolist():
                    name = Path(info.filename).name
                    if info.is_dir() or not name.endswith(".csv"):
                        continue
                    with zf.open(info) as fin, open(tmp_dir / name, "wb") as fout:
                        shutil.copyfileobj(fin, fout)
        except zipfile.BadZipFile as e:
            raise ExtractError(f"{staged.name}: {e}") from e

    paths = [tmp_dir / name for name in database.sources]
    missing = [p.name for p in paths if not p.is_file()]
    if missing:
        raise ExtractError(f"{staged.name}: missing {', '.join(missing)}")
    return paths


def iter_lines(path: Path, encoding: str = SOURCE_ENCODING) -> Iterator[str]:
    """Lazily yield decoded lines without their line terminators."""
    with open(path, "r", encoding=encoding, newline="\n") as f:
        for line in f:
            yield line.rstrip("\r\n")


def clean_tmp(tmp_dir: Path) -> None:
    shutil.rmtree(tmp_dir, ignore_errors=True)
