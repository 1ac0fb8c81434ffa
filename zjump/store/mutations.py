"""Table mutations applied under the store lock."""

import os
from typing import Callable

from loguru import logger

from zjump.store.models import Entry, to_f32

DECAY_THRESHOLD = 9000.0
DECAY_FACTOR = 0.99


def total_rank(table: list[Entry]) -> float:
    return sum(entry.rank for entry in table)


def record_visit(
    table: list[Entry],
    path: str,
    now: int,
    *,
    decay_threshold: float = DECAY_THRESHOLD,
    decay_factor: float = DECAY_FACTOR,
) -> Entry:
    """Bump ``path`` (or add it), then age the whole table if it got too heavy.

    The aging pass runs at most once per call.
    """
    for entry in table:
        if entry.path == path:
            entry.rank = to_f32(entry.rank + 1.0)
            entry.last_seen = now
            visited = entry
            break
    else:
        visited = Entry(path=path, rank=1.0, last_seen=now)
        table.append(visited)

    total = total_rank(table)
    if total > decay_threshold:
        logger.debug(f"total rank {total:.2f} exceeds {decay_threshold}, aging {len(table)} entries")
        for entry in table:
            entry.rank = to_f32(entry.rank * decay_factor)

    return visited


def prune_stale(table: list[Entry], is_dir: Callable[[str], bool] = os.path.isdir) -> int:
    """Drop entries whose path is no longer a directory. Returns the count removed."""
    start = len(table)
    table[:] = [entry for entry in table if is_dir(entry.path)]
    removed = start - len(table)
    if removed:
        logger.info(f"Removed {removed} stale entries")
    return removed
