from __future__ import annotations

import sys
from pathlib import Path
from enum import Enum
from typing import Optional

import typer

from geodat import config
from geodat.databases import DATABASES
from geodat.encoders.base import encode_file
from geodat.encoders.city_blocks import CityBlockEncoder
from geodat.encoders.city_names import CityNamesEncoder
from geodat.encoders.country import CountryEncoder
from geodat.errors import GeodatError
from geodat.jobs import run_databases
from geodat.reader import read_records
from geodat.staging import LocalArchiveFetcher, iter_lines
from geodat.utils.logging import get_logger, set_level

app = typer.Typer(help="Compile MaxMind legacy CSV dumps into fixed-width binary lookup files.")

log = get_logger(__name__)


class EncodeKind(str, Enum):
    country = "country"
    city = "city"
    city_names = "city-names"


class InspectKind(str, Enum):
    country = "country"
    country6 = "country6"
    city = "city"
    city6 = "city6"
    city_names = "city-names"


_ENCODERS = {
    "country": CountryEncoder,
    "city": CityBlockEncoder,
    "city-names": CityNamesEncoder,
}


@app.callback()
def _main(
        verbose: bool = typer.Option(False, "--verbose", help="Log debug messages."),
):
    if verbose:
        set_level("DEBUG")


@app.command()
def update(
        mode: Optional[str] = typer.Argument(
            None,
            help='Pass "debug" to keep the temporary staging files after the run.',
        ),
        source_dir: Path = typer.Option(
            config.SOURCE_DIR,
            "--source-dir",
            "-s",
            envvar="GEODAT_SOURCE_DIR",
            help="Directory holding the downloaded archives (zip / gz / csv).",
        ),
        data_dir: Path = typer.Option(
            config.DATA_DIR,
            "--data-dir",
            "-d",
            envvar="GEODAT_DATA_DIR",
            help="Directory the .dat files are written to.",
        ),
        tmp_dir: Path = typer.Option(
            config.TMP_DIR,
            "--tmp-dir",
            envvar="GEODAT_TMP_DIR",
            help="Staging directory for decompressed sources.",
        ),
):
    """
    Rebuild every database: stage, extract and encode each one in turn.

    Example:

        geodat update --source-dir ~/Downloads/maxmind
        geodat update debug
    """
    keep_tmp = mode == "debug"
    fetcher = LocalArchiveFetcher(source_dir.expanduser().resolve())

    try:
        run_databases(
            DATABASES,
            fetcher,
            tmp_dir=tmp_dir.expanduser().resolve(),
            data_dir=data_dir.expanduser().resolve(),
            keep_tmp=keep_tmp,
        )
    except GeodatError as e:
        log.error("%s", e)
        typer.secho("Failed to Update Databases from MaxMind.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho("Successfully Updated Databases from MaxMind.", fg=typer.colors.GREEN)
    if keep_tmp:
        typer.secho(
            "Notice: temporary files are not deleted for debug purposes.",
            fg=typer.colors.YELLOW,
            bold=True,
        )


@app.command()
def encode(
        kind: EncodeKind = typer.Argument(..., help="Encoder: country | city | city-names"),
        src: Path = typer.Argument(..., exists=True, dir_okay=False, help="Source CSV file."),
        dest: Path = typer.Argument(..., help="Output .dat file (rebuilt from scratch)."),
):
    """Encode a single CSV file with one encoder."""
    stats = encode_file(_ENCODERS[kind.value], iter_lines(src), dest.expanduser().resolve())
    typer.echo(
        f"Wrote {stats.records} records ({stats.placeholders} placeholders, "
        f"{stats.skipped} skipped) to {dest}"
    )


@app.command()
def inspect(
        dat: Path = typer.Argument(..., exists=True, dir_okay=False, help="A .dat file."),
        kind: InspectKind = typer.Option(
            ...,
            "--kind",
            "-k",
            help="Record layout: country | country6 | city | city6 | city-names",
        ),
        base_id: int = typer.Option(
            0,
            "--base-id",
            help="For city-names: location id of the first record.",
        ),
        head: int = typer.Option(10, "--head", "-n", help="Rows to print."),
        csv: Optional[Path] = typer.Option(
            None,
            "--csv",
            help="Write all decoded rows to this CSV instead of printing.",
        ),
):
    """Decode a .dat file back into rows."""
    df = read_records(dat, kind.value, base_id=base_id)
    if df.empty:
        typer.echo("No records.", err=True)
        raise typer.Exit(code=1)

    if csv is not None:
        df.to_csv(csv, index=False)
        typer.echo(f"Wrote {len(df)} rows to {csv}")
        return

    typer.echo(df.head(head).to_string(index=False))
    typer.echo(f"({len(df)} records)")


def main() -> None:
    """Entry point for console_scripts."""
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Interrupted by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
