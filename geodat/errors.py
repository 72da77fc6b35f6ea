# geodat/errors.py


class GeodatError(Exception):
    """Base class for errors raised by geodat."""


class MalformedLineError(GeodatError):
    """A single CSV line could not be encoded. Recovered by skipping it."""

    def __init__(self, line: str, reason: str):
        super().__init__(f"{reason}: {line!r}")
        self.line = line
        self.reason = reason


class FetchError(GeodatError):
    """The source archive for a database could not be retrieved."""


class ExtractError(GeodatError):
    """A staged archive could not be unpacked into the expected CSV files."""
