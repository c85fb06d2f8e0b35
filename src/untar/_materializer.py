"""Best-effort creation of directories and output files.

Neither operation raises: failures are logged and reported through the
return value so the driver can keep the stream position in sync.
"""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"
__all__ = (
    "DEFAULT_DIR_MODE",
    "create_directory",
    "create_file",
    "sanitise_mode",
)

import logging
import os
import stat
from pathlib import Path
from typing import BinaryIO

from untar._exceptions import DirectoryCreateError

log = logging.getLogger("untar")

# Mode for parent directories implied by a deeper entry.
DEFAULT_DIR_MODE = 0o755

_FILE_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0)


def sanitise_mode(mode: int) -> int:
    """Keep only the permission bits of *mode*.

    Setuid (``04000``), setgid (``02000``) and sticky (``01000``) bits
    and any file-type bits are dropped.
    """
    mode &= ~(stat.S_ISUID | stat.S_ISGID | stat.S_ISVTX)
    return mode & 0o777


def _make_parents(path: Path) -> None:
    """Create every missing ancestor of *path*, shallowest first."""
    parent = path.parent
    for segment in [*reversed(parent.parents), parent]:
        if segment.is_dir():
            continue
        try:
            os.mkdir(segment, DEFAULT_DIR_MODE)
        except FileExistsError:
            continue
        except OSError as exc:
            log.debug("Could not create parent %s: %s", segment, exc)
            return


def _mkdir(path: str, mode: int) -> None:
    try:
        os.mkdir(path, mode)
    except FileExistsError:
        if not os.path.isdir(path):
            raise
    except OSError:
        _make_parents(Path(path))
        try:
            os.mkdir(path, mode)
        except FileExistsError:
            if not os.path.isdir(path):
                raise
        except OSError as exc:
            raise DirectoryCreateError(f"Could not create directory {path}") from exc


def create_directory(path: str, mode: int) -> bool:
    """Create directory *path* with *mode*, creating parents on demand.

    A single trailing ``/`` is stripped.  An existing directory counts
    as success.  Returns ``False`` (after logging) if the directory
    still cannot be created.
    """
    if path.endswith("/"):
        path = path[:-1]

    try:
        _mkdir(path, sanitise_mode(mode))
    except (DirectoryCreateError, OSError):
        log.error("Could not create directory %s", path)
        return False
    return True


def _open_for_write(path: str, mode: int) -> BinaryIO:
    fd = os.open(path, _FILE_FLAGS, mode)
    return os.fdopen(fd, "wb", buffering=0)


def create_file(path: str, mode: int) -> BinaryIO | None:
    """Open *path* for truncating binary write.

    On failure the parent directory is created and the open retried
    once.  Returns ``None`` if the file still cannot be opened.
    """
    safe_mode = sanitise_mode(mode)
    try:
        return _open_for_write(path, safe_mode)
    except OSError as exc:
        error = exc

    parent = os.path.dirname(path)
    if parent:
        create_directory(parent, DEFAULT_DIR_MODE)
        try:
            return _open_for_write(path, safe_mode)
        except OSError as exc:
            error = exc

    log.error("Could not create file %s: %s", path, error.strerror or error)
    return None
