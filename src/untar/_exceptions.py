"""Exception hierarchy for untar.

All exceptions inherit from ``UntarError`` so callers can catch the
package's entire error surface with a single ``except`` clause.  None of
them escape ``Extractor.extract``: each one is handled at the entry or
archive scope where it is raised and ends up in the ``ArchiveReport``.
"""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"


class UntarError(Exception):
    """Base exception for all untar failures."""


class ArchiveOpenError(UntarError):
    """The archive path could not be opened for reading."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        msg = f"Unable to open {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class MalformedArchiveError(UntarError):
    """The archive stream is structurally invalid.

    Aborts extraction of the current archive only.
    """


class ShortReadError(MalformedArchiveError):
    """The stream ended before a full 512-byte record was read."""

    def __init__(self, path: str, got: int, expected: int = 512) -> None:
        self.path = path
        self.got = got
        self.expected = expected
        super().__init__(f"Short read on {path}: expected {expected}, got {got}")


class ChecksumMismatchError(MalformedArchiveError):
    """A header block failed checksum validation."""

    def __init__(self, stored: int, computed: int) -> None:
        self.stored = stored
        self.computed = computed
        super().__init__(
            f"Checksum failure: header stores {stored:o}, computed {computed:o}"
        )


class DirectoryCreateError(UntarError):
    """A directory could not be created, even after creating its parents."""


class WriteError(UntarError):
    """A payload chunk could not be fully written to its output file."""
