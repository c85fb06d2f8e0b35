"""Command-line interface: ``untar ARCHIVE [ARCHIVE ...]``."""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"
__all__ = (
    "build_parser",
    "configure_logging",
    "main",
)

import argparse
import logging
import os
import sys
from collections.abc import Sequence

from untar._core import Extractor

log = logging.getLogger("untar")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="untar",
        description="Extract uncompressed ustar archives.",
    )
    parser.add_argument(
        "archives",
        nargs="*",
        metavar="ARCHIVE",
        help="Archive file to extract. Several may be given; none is a no-op.",
    )
    parser.add_argument(
        "-C",
        "--directory",
        default=None,
        help="Extract into DIRECTORY instead of the current directory.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not print progress on standard output.",
    )
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log record-level details on standard error.",
    )
    return parser


def configure_logging(verbose: bool = False) -> None:
    """Send ``untar`` diagnostics to standard error as bare messages."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    log.handlers[:] = [handler]
    log.setLevel(logging.DEBUG if verbose else logging.INFO)


def _print_progress(line: str) -> None:
    """Write *line* to standard output with names as their raw bytes."""
    stream = sys.stdout
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        stream.write(line.encode("ascii", "backslashreplace").decode("ascii") + "\n")
        return
    stream.flush()
    buffer.write(os.fsencode(line) + b"\n")
    buffer.flush()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line.  Always returns 0.

    Per-archive and per-entry failures are reported on standard error;
    they never change the exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)
    if not args.archives:
        parser.print_usage(sys.stderr)
        return 0

    extractor = Extractor(
        args.directory,
        progress=None if args.quiet else _print_progress,
    )
    reports = extractor.extract_all(args.archives)
    for report in reports:
        log.debug(
            "%s: %s, %d extracted, %d skipped, %d failed, %d records",
            report.path,
            report.outcome.value,
            len(report.extracted),
            len(report.skipped),
            len(report.failed),
            report.records_read,
        )
    return 0
