"""Models for the path store."""

import math
import struct
from dataclasses import dataclass

# Largest finite IEEE-754 single precision value. Ranks and scores are
# 32-bit quantities on disk; anything beyond this would be inf as f32.
F32_MAX = 3.4028234663852886e38
U64_MAX = 2**64 - 1


def is_finite_f32(value: float) -> bool:
    """True when ``value`` is representable as a finite 32-bit float."""
    return math.isfinite(value) and abs(value) <= F32_MAX


def to_f32(value: float) -> float:
    """Round ``value`` to the nearest 32-bit float."""
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


@dataclass
class Entry:
    """One persisted (path, rank, last_seen) record."""

    path: str
    rank: float = 1.0
    last_seen: int = 0  # unix seconds


@dataclass
class ScoredEntry:
    """A search hit. Never persisted."""

    path: str
    score: float
