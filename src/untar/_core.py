"""Extractor: the read / validate / dispatch / stream loop.

One ``Extractor`` processes archives strictly one after another.  Within
an archive, every entry's payload is drained record by record, whether
or not a target could be created, so the next header is always read
from the right position.
"""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"
__all__ = (
    "Extractor",
    "untar",
)

import contextlib
import logging
import os
from collections.abc import Callable, Iterable
from typing import BinaryIO

from untar._entries import ArchiveReport, Entry, EntryType, Outcome
from untar._exceptions import (
    ArchiveOpenError,
    ChecksumMismatchError,
    MalformedArchiveError,
    ShortReadError,
    WriteError,
)
from untar._header import BLOCK_SIZE, Header, parse_header
from untar._materializer import create_directory, create_file
from untar._reader import ArchiveReader, is_end_of_archive

log = logging.getLogger("untar")


class Extractor:
    """Sequential ustar extractor.

    :param destination: Directory that archive member names are resolved
        against.  ``None`` (the default) means the current working
        directory; names are otherwise used as-is.
    :param progress: Callable receiving one line of progress text per
        archive banner and per extracted entry.  ``None`` silences
        progress output.  Diagnostics always go through the ``untar``
        logger.
    """

    def __init__(
        self,
        destination: str | os.PathLike[str] | None = None,
        *,
        progress: Callable[[str], None] | None = print,
    ) -> None:
        self._destination = (
            os.fspath(destination) if destination is not None else None
        )
        self._progress = progress

    # ---- public entry points -----------------------------------------------

    def extract_all(
        self, paths: Iterable[str | os.PathLike[str]]
    ) -> list[ArchiveReport]:
        """Extract every archive in *paths*, in order.

        A failure in one archive never stops the next one.
        """
        return [self.extract_path(path) for path in paths]

    def extract_path(self, path: str | os.PathLike[str]) -> ArchiveReport:
        """Open *path* and extract it.

        An archive that cannot be opened is logged and reported with
        ``Outcome.UNOPENED``.
        """
        name = os.fspath(path)
        try:
            stream = open(path, "rb")  # noqa: SIM115
        except OSError as exc:
            error = ArchiveOpenError(name, exc.strerror or str(exc))
            log.error("%s", error)
            return ArchiveReport(path=name, outcome=Outcome.UNOPENED, error=error)

        with stream:
            return self.extract(stream, name)

    def extract(self, stream: BinaryIO, path: str) -> ArchiveReport:
        """Extract every entry from the open binary *stream*.

        *path* only names the archive in progress text and diagnostics.
        The stream is read forward and is not closed.
        """
        report = ArchiveReport(path=path)
        reader = ArchiveReader(stream, path)
        self._emit(f"Extracting from {path}")

        try:
            while True:
                block = reader.read_record()
                if is_end_of_archive(block):
                    self._emit(f"End of {path}")
                    break
                header = parse_header(block)
                self._extract_entry(reader, header, report)
        except ShortReadError as exc:
            log.error("%s", exc)
            report.outcome = Outcome.ABORTED
            report.error = exc
        except ChecksumMismatchError as exc:
            log.error(
                "Checksum failure on %s at record %d: stored %o, computed %o",
                path,
                reader.records_read,
                exc.stored,
                exc.computed,
            )
            report.outcome = Outcome.ABORTED
            report.error = exc
        finally:
            report.records_read = reader.records_read

        return report

    # ---- internal ----------------------------------------------------------

    def _emit(self, line: str) -> None:
        """Invoke the progress callable if configured."""
        if self._progress is None:
            return
        try:
            self._progress(line)
        except Exception:
            log.exception("progress callback raised an exception")

    def _target(self, name: str) -> str:
        if self._destination is None:
            return name
        return os.path.join(self._destination, name)

    def _extract_entry(
        self,
        reader: ArchiveReader,
        header: Header,
        report: ArchiveReport,
    ) -> None:
        """Dispatch one header and drain its payload."""
        entry_type = header.entry_type
        target = self._target(header.name)
        handle: BinaryIO | None = None
        size = header.size
        created = False

        if entry_type is EntryType.DIRECTORY:
            self._emit(f" Extracting dir {header.name}")
            # Directories carry no payload, whatever the size field says.
            size = 0
            created = create_directory(target, header.mode)
        elif not entry_type.is_supported:
            log.warning("Ignoring %s %s", entry_type.label, header.name)
        else:
            self._emit(f" Extracting file {header.name}")
            handle = create_file(target, header.mode)
            created = handle is not None

        entry = Entry(name=header.name, type=entry_type, mode=header.mode, size=size)

        try:
            written = self._stream_payload(reader, handle, size, header.name)
        except MalformedArchiveError:
            report.failed.append(entry)
            raise

        if not entry_type.is_supported:
            report.skipped.append(entry)
        elif created and written:
            report.extracted.append(entry)
        else:
            report.failed.append(entry)

    def _stream_payload(
        self,
        reader: ArchiveReader,
        handle: BinaryIO | None,
        size: int,
        name: str,
    ) -> bool:
        """Consume ``ceil(size / 512)`` records, writing into *handle*.

        The handle is always closed on return.  Returns ``False`` if a
        write failed; the remaining records are still consumed.

        :raises ShortReadError: If the stream ends inside the payload.
        """
        ok = True
        remaining = size
        try:
            while remaining > 0:
                record = reader.read_record()
                count = min(remaining, BLOCK_SIZE)
                if handle is not None:
                    try:
                        _write_chunk(handle, record[:count], name)
                    except WriteError as exc:
                        log.error("%s", exc)
                        ok = False
                        with contextlib.suppress(OSError):
                            handle.close()
                        handle = None
                remaining -= count

            if handle is not None:
                try:
                    handle.close()
                except OSError as exc:
                    log.error("Failed write to %s: %s", name, exc.strerror or exc)
                    ok = False
                handle = None
        finally:
            if handle is not None:
                with contextlib.suppress(OSError):
                    handle.close()
        return ok


def _write_chunk(handle: BinaryIO, chunk: bytes, name: str) -> None:
    """Write *chunk* in full or raise ``WriteError``."""
    try:
        written = handle.write(chunk)
    except OSError as exc:
        raise WriteError(f"Failed write to {name}: {exc.strerror or exc}") from exc
    # Raw handles may accept only part of the chunk.
    if written != len(chunk):
        raise WriteError(
            f"Failed write to {name}: wrote {written or 0} of {len(chunk)} bytes"
        )


def untar(
    archive: str | os.PathLike[str] | BinaryIO,
    destination: str | os.PathLike[str] | None = None,
    *,
    progress: Callable[[str], None] | None = print,
) -> ArchiveReport:
    """Extract *archive* into *destination* with a one-off ``Extractor``.

    *archive* is either a path or an open binary stream.
    """
    extractor = Extractor(destination, progress=progress)
    if isinstance(archive, (str, os.PathLike)):
        return extractor.extract_path(archive)
    name = getattr(archive, "name", None)
    return extractor.extract(archive, name if isinstance(name, str) else "<stream>")
