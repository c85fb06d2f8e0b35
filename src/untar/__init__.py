"""untar: a minimal, streaming ustar extractor for Python.

Forward-only.  Zero dependencies.  Python 3.10+.
"""

from __future__ import annotations

__title__ = "untar"
__version__ = "0.1"
__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"

from untar._entries import (
    ArchiveReport,
    Entry,
    EntryType,
    Outcome,
)
from untar._exceptions import (
    ArchiveOpenError,
    ChecksumMismatchError,
    DirectoryCreateError,
    MalformedArchiveError,
    ShortReadError,
    UntarError,
    WriteError,
)
from untar._header import (
    Header,
    parse_header,
    parse_octal,
    verify_checksum,
)
from untar._reader import ArchiveReader, is_end_of_archive

# Deferred imports: _core pulls in the materializer and reader, which
# plain header parsing does not need.


def __getattr__(name: str) -> object:
    if name in ("Extractor", "untar"):
        from untar._core import Extractor, untar

        globals()["Extractor"] = Extractor
        globals()["untar"] = untar
        return globals()[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Core
    "Extractor",
    "untar",
    # Parsing
    "ArchiveReader",
    "Header",
    "is_end_of_archive",
    "parse_header",
    "parse_octal",
    "verify_checksum",
    # Reports
    "ArchiveReport",
    "Entry",
    "EntryType",
    "Outcome",
    # Exceptions
    "UntarError",
    "ArchiveOpenError",
    "MalformedArchiveError",
    "ShortReadError",
    "ChecksumMismatchError",
    "DirectoryCreateError",
    "WriteError",
]
