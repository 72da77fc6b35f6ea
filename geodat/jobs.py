# geodat/jobs.py

from __future__ import annotations
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from geodat.encoders.base import LineEncoder, encode_file
from geodat.encoders.city_blocks import CityBlockEncoder
from geodat.encoders.city_names import CityNamesEncoder
from geodat.encoders.country import CountryEncoder
from geodat.models import Database, DatabaseType, EncodeStats, JobState
from geodat.staging import Fetcher, clean_tmp, extract, iter_lines
from geodat.utils.logging import get_logger

log = get_logger(__name__)

LineSource = Callable[[Path], Iterable[str]]


def encoders_for(db_type: DatabaseType) -> list[type[LineEncoder]]:
    """Encoder per source file, in processing order."""
    if db_type is DatabaseType.COUNTRY:
        return [CountryEncoder]
    if db_type is DatabaseType.CITY_EXTENDED:
        return [CityBlockEncoder, CityNamesEncoder]
    return [CityBlockEncoder]


class DatabaseJob:
    """
    One database definition moved through fetch -> extract -> encode.

    Steps run strictly in order; for city-extended the blocks file is
    encoded completely before the locations file is opened.
    """

    def __init__(
            self,
            database: Database,
            fetcher: Fetcher,
            tmp_dir: Path,
            data_dir: Path,
            line_source: LineSource = iter_lines,
            **encoder_kwargs,
    ):
        self.database = database
        self.fetcher = fetcher
        self.tmp_dir = Path(tmp_dir)
        self.data_dir = Path(data_dir)
        self.line_source = line_source
        self.encoder_kwargs = encoder_kwargs
        self.state = JobState.PENDING
        self.stats: list[EncodeStats] = []
        self._staged: Optional[Path] = None
        self._sources: list[Path] = []

    def _advance(self, state: JobState) -> None:
        log.debug("%s: %s -> %s", self.database.archive, self.state.value, state.value)
        self.state = state

    def fetch(self) -> None:
        self._staged = self.fetcher.fetch(self.database, self.tmp_dir)
        self._advance(JobState.FETCHED)

    def extract(self) -> None:
        self._sources = extract(self._staged, self.database, self.tmp_dir)
        self._advance(JobState.EXTRACTED)

    def encode(self) -> None:
        steps = zip(encoders_for(self.database.type), self._sources, self.database.destinations)
        for encoder_cls, src, dest in steps:
            stats = encode_file(
                encoder_cls,
                self.line_source(src),
                self.data_dir / dest,
                **self.encoder_kwargs,
            )
            self.stats.append(stats)
        self._advance(JobState.ENCODED)

    def run(self) -> list[EncodeStats]:
        self.fetch()
        self.extract()
        self.encode()
        self._advance(JobState.DONE)
        log.info("%s DONE", self.database.archive)
        return self.stats


def run_databases(
        databases: Sequence[Database],
        fetcher: Fetcher,
        tmp_dir: Path,
        data_dir: Path,
        keep_tmp: bool = False,
        **job_kwargs,
) -> list[DatabaseJob]:
    """
    Run every database job one after another. The first failure propagates
    and stops the run; the staging dir is wiped before starting and removed
    afterwards unless ``keep_tmp`` is set.
    """
    tmp_dir = Path(tmp_dir)
    clean_tmp(tmp_dir)
    tmp_dir.mkdir(parents=True, exist_ok=True)

    jobs = []
    for database in databases:
        job = DatabaseJob(database, fetcher, tmp_dir, data_dir, **job_kwargs)
        jobs.append(job)
        job.run()

    if keep_tmp:
        log.warning("Notice: temporary files are not deleted for debug purposes (%s)", tmp_dir)
    else:
        clean_tmp(tmp_dir)
    return jobs
