"""Shared error types for zjump.

Per-line decode failures are recoverable and only logged by the loader.
Everything else here aborts the operation that raised it.
"""

from pathlib import Path


class ZjumpError(Exception):
    """Base error for zjump."""


class RecordParseError(ZjumpError, ValueError):
    """A store line could not be decoded into an entry."""


class RecordEncodeError(ZjumpError, ValueError):
    """An entry cannot be written without corrupting the store format."""


class InvalidPatternError(ZjumpError):
    """Search expression is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"parsing regex {pattern!r}: {reason}")


class NonFiniteScoreError(ZjumpError):
    """A score was NaN or infinite; results would have no defined order."""


class StoreError(ZjumpError):
    """Resource failure while reading or replacing the store file."""

    phase = "accessing"

    def __init__(self, path: str | Path, cause: BaseException | str, *, phase: str | None = None):
        self.path = Path(path)
        if phase is not None:
            self.phase = phase
        self.cause = cause
        super().__init__(f"{self.phase} {self.path}: {cause}")


class StoreOpenError(StoreError):
    phase = "opening"


class LockError(StoreError):
    phase = "locking"


class TempFileError(StoreError):
    phase = "creating temporary file near"


class ReplaceError(StoreError):
    phase = "replacing"
