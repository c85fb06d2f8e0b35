"""Entry-type and outcome enums plus the report dataclasses for untar."""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"

from dataclasses import dataclass, field
from enum import Enum

from untar._exceptions import UntarError


class EntryType(Enum):
    """What a header describes, keyed by its ustar typeflag.

    Only ``FILE`` and ``DIRECTORY`` are materialised.  The rest are
    reported and skipped, but their declared payload is still drained.
    """

    FILE = "0"
    HARDLINK = "1"
    SYMLINK = "2"
    CHAR_DEVICE = "3"
    BLOCK_DEVICE = "4"
    DIRECTORY = "5"
    FIFO = "6"

    @classmethod
    def from_typeflag(cls, typeflag: str) -> EntryType:
        """Map a typeflag to its type; unknown and absent flags are files."""
        try:
            return cls(typeflag)
        except ValueError:
            return cls.FILE

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_supported(self) -> bool:
        return self in (EntryType.FILE, EntryType.DIRECTORY)


_LABELS = {
    EntryType.FILE: "file",
    EntryType.HARDLINK: "hardlink",
    EntryType.SYMLINK: "symlink",
    EntryType.CHAR_DEVICE: "character device",
    EntryType.BLOCK_DEVICE: "block device",
    EntryType.DIRECTORY: "dir",
    EntryType.FIFO: "FIFO",
}


class Outcome(Enum):
    """How processing of a single archive argument ended.

    ``COMPLETED``
        The end-of-archive marker was reached.
    ``ABORTED``
        A short read or checksum failure stopped extraction early.
    ``UNOPENED``
        The archive path could not be opened.
    """

    COMPLETED = "completed"
    ABORTED = "aborted"
    UNOPENED = "unopened"


@dataclass(frozen=True, slots=True)
class Entry:
    """One archive member as it was dispatched."""

    name: str
    type: EntryType
    mode: int
    size: int
    """Payload length drained from the stream (0 for directories)."""


@dataclass(slots=True)
class ArchiveReport:
    """Summary of one archive's extraction."""

    path: str
    outcome: Outcome = Outcome.COMPLETED
    extracted: list[Entry] = field(default_factory=list)
    skipped: list[Entry] = field(default_factory=list)
    failed: list[Entry] = field(default_factory=list)
    error: UntarError | None = None
    records_read: int = 0

    @property
    def ok(self) -> bool:
        """True when the archive ended cleanly and every target was written."""
        return self.outcome is Outcome.COMPLETED and not self.failed
