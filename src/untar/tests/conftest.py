"""Archive factory fixtures for untar tests.

Archives are either written with Python's ``tarfile`` module in ustar
format or assembled block by block when a test needs exact control over
header bytes.  No mocks of the reader or parser.
"""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"

import io
import logging
import tarfile

import pytest

# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


def _header(
    name: bytes,
    *,
    size: int = 0,
    typeflag: bytes = b"0",
    mode: bytes = b"0000644",
    checksum: bytes | None = None,
) -> bytes:
    """Assemble a 512-byte ustar header with a correct checksum."""
    block = bytearray(512)
    block[0 : len(name)] = name
    block[100:108] = mode + b"\x00"
    block[124:136] = b"%011o\x00" % size
    block[156:157] = typeflag
    block[257:263] = b"ustar\x00"
    block[263:265] = b"00"
    block[148:156] = b" " * 8
    if checksum is None:
        checksum = b"%06o\x00 " % sum(block)
    block[148:156] = checksum
    return bytes(block)


def _pad(data: bytes) -> bytes:
    """Zero-pad *data* to a multiple of 512 bytes."""
    return data + bytes(-len(data) % 512)


def _tar_bytes(callback) -> bytes:
    """Create a ustar archive in memory via *callback(tf)* and return bytes."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w", format=tarfile.USTAR_FORMAT) as tf:
        callback(tf)
    return buf.getvalue()


def _write_to_path(tmp_path, name: str, data: bytes) -> str:
    p = tmp_path / name
    p.write_bytes(data)
    return str(p)


def _add_regular(tf, name: str, content: bytes, mode: int = 0o644) -> None:
    info = tarfile.TarInfo(name=name)
    info.size = len(content)
    info.mode = mode
    tf.addfile(info, io.BytesIO(content))


def _add_dir(tf, name: str, mode: int = 0o755) -> None:
    info = tarfile.TarInfo(name=name)
    info.type = tarfile.DIRTYPE
    info.mode = mode
    tf.addfile(info)


def _add_link(tf, name: str, target: str, linktype: bytes) -> None:
    info = tarfile.TarInfo(name=name)
    info.type = linktype
    info.linkname = target
    tf.addfile(info)


def _add_device(tf, name: str, devtype: bytes) -> None:
    info = tarfile.TarInfo(name=name)
    info.type = devtype
    info.devmajor = 1
    info.devminor = 3
    tf.addfile(info)


# ---------------------------------------------------------------------------
# logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _restore_untar_logger():
    """Undo handler and level changes made by the command line."""
    logger = logging.getLogger("untar")
    handlers = logger.handlers[:]
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


# ---------------------------------------------------------------------------
# block builders
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_header():
    """Return the hand-built header factory."""
    return _header


@pytest.fixture()
def pad():
    """Return the record padding helper."""
    return _pad


# ---------------------------------------------------------------------------
# hand-built archives
# ---------------------------------------------------------------------------


@pytest.fixture()
def hello_archive() -> bytes:
    """``hello.txt`` holding ``hello``, then two zero records."""
    return (
        _header(b"hello.txt", size=5, mode=b"0000644")
        + _pad(b"hello")
        + bytes(1024)
    )


@pytest.fixture()
def nested_dir_archive() -> bytes:
    """Directory ``a/b/`` with a bogus size field, then ``a/b/c.txt``."""
    return (
        _header(b"a/b/", size=1234, typeflag=b"5", mode=b"0000755")
        + _header(b"a/b/c.txt", size=3)
        + _pad(b"abc")
        + bytes(1024)
    )


@pytest.fixture()
def symlink_with_payload_archive() -> bytes:
    """Symlink carrying 700 bytes of payload, followed by a regular file."""
    return (
        _header(b"link", size=700, typeflag=b"2")
        + _pad(b"L" * 700)
        + _header(b"after.txt", size=6)
        + _pad(b"after\n")
        + bytes(1024)
    )


@pytest.fixture()
def truncated_header_archive() -> bytes:
    """One complete entry, then only 100 bytes of the next header."""
    return _header(b"first.txt", size=2) + _pad(b"ok") + b"x" * 100


@pytest.fixture()
def truncated_payload_archive() -> bytes:
    """A 1000-byte entry whose second payload record is missing."""
    return _header(b"cut.bin", size=1000) + _pad(b"C" * 512)


@pytest.fixture()
def bad_checksum_archive() -> bytes:
    """A good entry, a header with a wrong checksum, then a good entry."""
    return (
        _header(b"good.txt", size=4)
        + _pad(b"good")
        + _header(b"bad.txt", size=3, checksum=b"000001\x00 ")
        + _pad(b"bad")
        + _header(b"never.txt", size=5)
        + _pad(b"never")
        + bytes(1024)
    )


# ---------------------------------------------------------------------------
# tarfile-built archives on disk
# ---------------------------------------------------------------------------


@pytest.fixture()
def legitimate_archive(tmp_path):
    """A multi-file archive with a directory."""

    def build(tf):
        _add_regular(tf, "readme.txt", b"Hello, world!\n")
        _add_dir(tf, "data/")
        _add_regular(tf, "data/report.csv", b"a,b,c\n1,2,3\n")
        _add_regular(tf, "data/notes.txt", b"Some notes.\n")
        _add_regular(tf, "data/big.bin", bytes(range(256)) * 9)

    return _write_to_path(tmp_path, "legitimate.tar", _tar_bytes(build))


@pytest.fixture()
def special_entries_archive(tmp_path):
    """Every unsupported entry type, between two regular files."""

    def build(tf):
        _add_regular(tf, "first.txt", b"first\n")
        _add_link(tf, "hard.txt", "first.txt", tarfile.LNKTYPE)
        _add_link(tf, "soft.txt", "first.txt", tarfile.SYMTYPE)
        _add_device(tf, "dev_null", tarfile.CHRTYPE)
        _add_device(tf, "dev_sda", tarfile.BLKTYPE)
        info = tarfile.TarInfo(name="my_fifo")
        info.type = tarfile.FIFOTYPE
        tf.addfile(info)
        _add_regular(tf, "last.txt", b"last\n")

    return _write_to_path(tmp_path, "special.tar", _tar_bytes(build))


@pytest.fixture()
def corrupt_archive(tmp_path, bad_checksum_archive):
    """The bad-checksum archive written to disk."""
    return _write_to_path(tmp_path, "corrupt.tar", bad_checksum_archive)


@pytest.fixture()
def hello_archive_path(tmp_path, hello_archive):
    """The hello archive written to disk."""
    return _write_to_path(tmp_path, "hello.tar", hello_archive)
