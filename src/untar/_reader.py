"""Fixed-size record reading over a forward-only archive stream."""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"
__all__ = (
    "ArchiveReader",
    "is_end_of_archive",
)

import logging
from typing import BinaryIO

from untar._exceptions import ShortReadError
from untar._header import BLOCK_SIZE

log = logging.getLogger("untar")

_ZERO_BLOCK = bytes(BLOCK_SIZE)


def is_end_of_archive(block: bytes) -> bool:
    """Return True if *block* is 512 zero bytes."""
    return block == _ZERO_BLOCK


class ArchiveReader:
    """Pull 512-byte records from *stream*, never seeking.

    :param stream: Open binary stream positioned at a record boundary.
    :param path: Archive name used in diagnostics.
    """

    def __init__(self, stream: BinaryIO, path: str) -> None:
        self._stream = stream
        self._path = path
        self._records_read = 0

    @property
    def path(self) -> str:
        return self._path

    @property
    def records_read(self) -> int:
        return self._records_read

    def read_record(self) -> bytes:
        """Return the next full record as a new ``bytes`` object.

        Short chunks from pipes are accumulated until a full record or
        end of stream.

        :raises ShortReadError: If the stream ends mid-record.
        """
        chunks: list[bytes] = []
        got = 0
        while got < BLOCK_SIZE:
            chunk = self._stream.read(BLOCK_SIZE - got)
            if not chunk:
                break
            chunks.append(chunk)
            got += len(chunk)

        if got < BLOCK_SIZE:
            raise ShortReadError(self._path, got, BLOCK_SIZE)

        self._records_read += 1
        log.debug("%s: record %d", self._path, self._records_read)
        return b"".join(chunks)
