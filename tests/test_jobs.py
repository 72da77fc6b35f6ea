import pytest

from geodat.databases import DATABASES
from geodat.errors import FetchError
from geodat.jobs import DatabaseJob, encoders_for, run_databases
from geodat.models import DatabaseType, JobState
from geodat.staging import LocalArchiveFetcher, iter_lines
from geodat.encoders.city_blocks import CityBlockEncoder
from geodat.encoders.city_names import CityNamesEncoder
from geodat.encoders.country import CountryEncoder


def test_encoder_selection():
    assert encoders_for(DatabaseType.COUNTRY) == [CountryEncoder]
    assert encoders_for(DatabaseType.CITY) == [CityBlockEncoder]
    assert encoders_for(DatabaseType.CITY_EXTENDED) == [CityBlockEncoder, CityNamesEncoder]


def test_full_run_builds_every_file(source_dir, tmp_path):
    data, tmp = tmp_path / "data", tmp_path / "tmp"
    jobs = run_databases(DATABASES, LocalArchiveFetcher(source_dir), tmp, data)

    assert [j.state for j in jobs] == [JobState.DONE] * 4
    sizes = {p.name: p.stat().st_size for p in data.iterdir()}
    assert sizes == {
        "geoip-country.dat": 2 * 10,
        "geoip-country6.dat": 34,
        "geoip-city.dat": 2 * 12,
        "geoip-city-names.dat": 5 * 64,
        "geoip-city6.dat": 58,
    }
    assert not tmp.exists()


def test_debug_run_keeps_staging_files(source_dir, tmp_path):
    tmp = tmp_path / "tmp"
    run_databases(DATABASES, LocalArchiveFetcher(source_dir), tmp, tmp_path / "data", keep_tmp=True)
    assert (tmp / "GeoLiteCity-Location.csv").exists()
    assert (tmp / "GeoIPv6.csv").exists()


def test_outputs_are_rebuilt_not_appended(source_dir, tmp_path):
    data = tmp_path / "data"
    fetcher = LocalArchiveFetcher(source_dir)
    run_databases(DATABASES[:1], fetcher, tmp_path / "tmp", data)
    run_databases(DATABASES[:1], fetcher, tmp_path / "tmp", data)
    assert (data / "geoip-country.dat").stat().st_size == 20


def test_fetch_failure_stops_the_run(source_dir, tmp_path):
    (source_dir / "GeoLiteCity-latest.zip").unlink()
    data = tmp_path / "data"

    with pytest.raises(FetchError):
        run_databases(DATABASES, LocalArchiveFetcher(source_dir), tmp_path / "tmp", data)

    assert (data / "geoip-country6.dat").exists()
    assert not (data / "geoip-city.dat").exists()
    assert not (data / "geoip-city6.dat").exists()


def test_city_extended_encodes_blocks_before_names(source_dir, tmp_path):
    opened = []

    def recording_source(path):
        opened.append(path.name)
        return iter_lines(path)

    tmp = tmp_path / "tmp"
    tmp.mkdir()
    job = DatabaseJob(
        DATABASES[2], LocalArchiveFetcher(source_dir), tmp, tmp_path / "data",
        line_source=recording_source,
    )
    assert job.state is JobState.PENDING

    job.fetch()
    assert job.state is JobState.FETCHED
    job.extract()
    assert job.state is JobState.EXTRACTED

    stats = job.run()
    assert opened == ["GeoLiteCity-Blocks.csv", "GeoLiteCity-Location.csv"]
    assert job.state is JobState.DONE
    assert [s.records for s in stats] == [2, 3]
    assert stats[1].placeholders == 2
