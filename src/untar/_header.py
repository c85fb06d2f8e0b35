"""Header decoding and checksum verification for ustar blocks.

Pure functions over a 512-byte block; no I/O happens here.
"""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"
__all__ = (
    "BLOCK_SIZE",
    "Header",
    "compute_checksum",
    "decode_name",
    "parse_header",
    "parse_octal",
    "verify_checksum",
)

import os
from dataclasses import dataclass

from untar._entries import EntryType
from untar._exceptions import ChecksumMismatchError

BLOCK_SIZE = 512

# (offset, length) of each ustar field we read.
NAME_FIELD = (0, 100)
MODE_FIELD = (100, 8)
SIZE_FIELD = (124, 12)
CHECKSUM_FIELD = (148, 8)
TYPEFLAG_FIELD = (156, 1)

_OCTAL_DIGITS = frozenset(b"01234567")


def _field(block: bytes, bounds: tuple[int, int]) -> bytes:
    offset, length = bounds
    return block[offset : offset + length]


def parse_octal(data: bytes, length: int | None = None) -> int:
    """Parse an octal number, ignoring leading and trailing nonsense.

    Leading bytes that are not ``0``-``7`` are skipped, then digits are
    accumulated until a non-digit or the *length* bound is reached.
    Returns ``0`` when the field holds no digit at all.
    """
    if length is None:
        length = len(data)
    data = data[:length]

    pos = 0
    while pos < len(data) and data[pos] not in _OCTAL_DIGITS:
        pos += 1

    value = 0
    while pos < len(data) and data[pos] in _OCTAL_DIGITS:
        value = (value << 3) + (data[pos] - 0x30)
        pos += 1
    return value


def decode_name(field: bytes) -> str:
    """Return the NUL-terminated name in *field* as a filesystem string."""
    return os.fsdecode(field.split(b"\x00", 1)[0])


def compute_checksum(block: bytes) -> int:
    """Unsigned byte sum of *block* with the checksum field read as spaces."""
    offset, length = CHECKSUM_FIELD
    return (
        sum(block[:offset]) + 0x20 * length + sum(block[offset + length : BLOCK_SIZE])
    )


def verify_checksum(block: bytes) -> bool:
    """Return True if the stored checksum matches the computed one."""
    stored = parse_octal(_field(block, CHECKSUM_FIELD), CHECKSUM_FIELD[1])
    return compute_checksum(block) == stored


@dataclass(frozen=True, slots=True)
class Header:
    """The fields of a validated header block that extraction needs."""

    name: str
    mode: int
    size: int
    checksum: int
    typeflag: str
    """Single character, or ``""`` when the typeflag byte is NUL."""

    @property
    def entry_type(self) -> EntryType:
        return EntryType.from_typeflag(self.typeflag)


def parse_header(block: bytes) -> Header:
    """Validate *block* and decode its fields.

    :raises ValueError: If *block* is not exactly 512 bytes.
    :raises ChecksumMismatchError: If the stored checksum is wrong.
    """
    if len(block) != BLOCK_SIZE:
        raise ValueError(
            f"Header block must be {BLOCK_SIZE} bytes, got {len(block)}"
        )

    stored = parse_octal(_field(block, CHECKSUM_FIELD), CHECKSUM_FIELD[1])
    computed = compute_checksum(block)
    if stored != computed:
        raise ChecksumMismatchError(stored, computed)

    flag = _field(block, TYPEFLAG_FIELD)
    return Header(
        name=decode_name(_field(block, NAME_FIELD)),
        mode=parse_octal(_field(block, MODE_FIELD), MODE_FIELD[1]),
        size=parse_octal(_field(block, SIZE_FIELD), SIZE_FIELD[1]),
        checksum=stored,
        typeflag="" if flag == b"\x00" else flag.decode("latin-1"),
    )
