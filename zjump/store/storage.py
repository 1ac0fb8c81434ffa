"""Storage for the path store - line-per-entry text file.

Reads never lock. Writes go through :func:`update_store`, which holds an
exclusive ``flock`` on the store while it reloads the table, applies a
mutation and swaps in a freshly written file with ``os.replace``. A
concurrent reader therefore sees either the old file or the new one,
never a partial write.
"""

import fcntl
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Iterator, TypeVar

from loguru import logger

from zjump.errors import (
    LockError,
    RecordEncodeError,
    RecordParseError,
    ReplaceError,
    StoreOpenError,
    TempFileError,
)
from zjump.store.codec import decode, encode
from zjump.store.models import Entry

R = TypeVar("R")

RETENTION_FLOOR = 0.98
ENCODING = "utf-8"
ERRORS = "surrogateescape"


def parse(stream: BinaryIO) -> list[Entry]:
    """Load every decodable entry from ``stream``.

    Bad lines are reported on the diagnostic log and skipped; a truncated
    or hand-edited store still yields whatever it can.
    """
    table: list[Entry] = []
    for raw in stream:
        line = raw.decode(ENCODING, ERRORS)
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        try:
            table.append(decode(line))
        except RecordParseError as e:
            logger.warning(f"couldn't parse {line!r}: {e}")
    return table


def write_table(stream: BinaryIO, table: Iterable[Entry], retention_floor: float = RETENTION_FLOOR) -> int:
    """Write entries to ``stream``; returns the number written.

    Entries ranked below ``retention_floor`` and entries that cannot be
    encoded are dropped.
    """
    written = 0
    for entry in table:
        if not entry.rank >= retention_floor:
            continue
        try:
            line = encode(entry)
        except RecordEncodeError as e:
            logger.debug(f"dropping entry: {e}")
            continue
        stream.write(line.encode(ENCODING, ERRORS) + b"\n")
        written += 1
    return written


@contextmanager
def open_store(data_file: str | Path, *, writable: bool = False) -> Iterator[BinaryIO]:
    """Open the store, creating an empty one if it does not exist yet."""
    data_file = Path(data_file)
    flags = (os.O_RDWR if writable else os.O_RDONLY) | os.O_CREAT
    try:
        fd = os.open(data_file, flags, 0o666)
    except OSError as e:
        raise StoreOpenError(data_file, e) from e
    with os.fdopen(fd, "r+b" if writable else "rb") as f:
        yield f


@contextmanager
def _locked_store(data_file: Path) -> Iterator[BinaryIO]:
    while True:
        with open_store(data_file, writable=True) as handle:
            try:
                fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
            except OSError as e:
                raise LockError(data_file, e) from e
            try:
                # The previous holder may have renamed a new file over the
                # path while we waited; our lock would then guard nothing.
                if _same_file(handle, data_file):
                    yield handle
                    return
                logger.debug(f"{data_file} was replaced while waiting for the lock, retrying")
            finally:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


def _same_file(handle: BinaryIO, data_file: Path) -> bool:
    try:
        current = os.stat(data_file)
    except FileNotFoundError:
        return False
    held = os.fstat(handle.fileno())
    return (held.st_dev, held.st_ino) == (current.st_dev, current.st_ino)


def _copy_ownership(source: os.stat_result, target: Path) -> None:
    """Best effort: keep uid/gid and mode of the file being replaced."""
    try:
        os.chown(target, source.st_uid, source.st_gid)
    except OSError:
        pass
    try:
        os.chmod(target, source.st_mode & 0o7777)
    except OSError:
        pass


def _replace(data_file: Path, table: list[Entry], retention_floor: float, original: os.stat_result) -> None:
    # Same directory as the store so the rename never crosses filesystems.
    try:
        tmp = tempfile.NamedTemporaryFile(
            mode="wb",
            delete=False,
            dir=data_file.parent,
            prefix=f".{data_file.name}.",
            suffix=".tmp",
        )
    except OSError as e:
        raise TempFileError(data_file, e) from e

    tmp_path = Path(tmp.name)
    try:
        with tmp:
            try:
                written = write_table(tmp, table, retention_floor)
                tmp.flush()
                os.fsync(tmp.fileno())
            except OSError as e:
                raise TempFileError(data_file, e, phase="writing temporary file for") from e

        _copy_ownership(original, tmp_path)

        try:
            os.replace(tmp_path, data_file)
        except OSError as e:
            raise ReplaceError(data_file, e) from e
        logger.debug(f"wrote {written} of {len(table)} entries to {data_file}")
    finally:
        if tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                pass


def update_store(
    data_file: str | Path,
    apply: Callable[[list[Entry]], R],
    *,
    retention_floor: float = RETENTION_FLOOR,
) -> R:
    """Run ``apply`` on the freshly loaded table under an exclusive lock.

    ``apply`` mutates the list it is given in place; its return value is
    passed back to the caller. The lock is held until the replacement file
    has been renamed into place. On any failure the store keeps its last
    committed contents.
    """
    data_file = Path(data_file)
    with _locked_store(data_file) as handle:
        original = os.fstat(handle.fileno())
        table = parse(handle)
        result = apply(table)
        _replace(data_file, table, retention_floor, original)
    return result
