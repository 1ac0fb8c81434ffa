"""Line codec for the ``path|rank|last_seen`` store format."""

import re
from decimal import Decimal

from zjump.errors import RecordEncodeError, RecordParseError
from zjump.store.models import U64_MAX, Entry, is_finite_f32, to_f32

DELIMITER = "|"

_RANK_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_TIME_RE = re.compile(r"\+?[0-9]+")
_U64_DIGITS = len(str(U64_MAX))


def _parse_time(time_text: str) -> int:
    if not _TIME_RE.fullmatch(time_text):
        raise RecordParseError(f"invalid time {time_text!r}")
    digits = time_text.lstrip("+").lstrip("0")
    if len(digits) > _U64_DIGITS:
        raise RecordParseError(f"time out of range: {len(digits)} digits")
    last_seen = int(digits or "0")
    if last_seen > U64_MAX:
        raise RecordParseError(f"time out of range: {time_text!r}")
    return last_seen


def decode(line: str) -> Entry:
    """Parse one line (without its trailing newline) into an entry.

    Extra fields after the timestamp are ignored. Ranks are rounded to
    32-bit precision.
    """
    parts = line.split(DELIMITER)
    if len(parts) < 2:
        raise RecordParseError("row needs a rank")
    if len(parts) < 3:
        raise RecordParseError("row needs a time")

    path, rank_text, time_text = parts[0], parts[1], parts[2]

    if not _RANK_RE.fullmatch(rank_text):
        raise RecordParseError(f"invalid rank {rank_text[:32]!r}")
    rank = float(rank_text)

    last_seen = _parse_time(time_text)

    if not is_finite_f32(rank):
        raise RecordParseError(f"file contained non-finite rank: {rank_text!r}")

    return Entry(path=path, rank=to_f32(rank), last_seen=last_seen)


def format_rank(rank: float) -> str:
    """Shortest plain decimal that reads back as the same 32-bit rank."""
    rank = to_f32(rank)
    for precision in range(1, 10):
        text = f"{rank:.{precision}g}"
        if to_f32(float(text)) == rank:
            break
    return format(Decimal(text), "f")


def encode(entry: Entry) -> str:
    """Render an entry as one line, without the newline."""
    if DELIMITER in entry.path or "\n" in entry.path:
        raise RecordEncodeError(f"path cannot be stored: {entry.path!r}")
    if not is_finite_f32(entry.rank):
        raise RecordEncodeError(f"non-finite rank for {entry.path!r}: {entry.rank!r}")
    return f"{entry.path}{DELIMITER}{format_rank(entry.rank)}{DELIMITER}{int(entry.last_seen)}"
