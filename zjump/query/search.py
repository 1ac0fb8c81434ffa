"""Regex search over the path store."""

import re
from operator import attrgetter
from pathlib import Path

from loguru import logger

from zjump.errors import InvalidPatternError
from zjump.query.scoring import Scorer, apply_prefix_boost, scored
from zjump.store.models import Entry, ScoredEntry
from zjump.store.storage import open_store, parse
from zjump.utils.helpers import unix_time


def _compile(pattern: str, flags: int = 0) -> re.Pattern:
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e


def filter_table(table: list[Entry], pattern: str) -> list[Entry]:
    """Entries whose path matches ``pattern``.

    Falls back to a case-insensitive match only when the case-sensitive
    pass finds nothing.
    """
    sensitive = _compile(pattern)
    matches = [entry for entry in table if sensitive.search(entry.path)]
    if matches:
        return matches

    insensitive = _compile(pattern, re.IGNORECASE)
    return [entry for entry in table if insensitive.search(entry.path)]


def search(
    data_file: str | Path,
    pattern: str,
    scorer: Scorer = Scorer.FRECENT,
    now: int | None = None,
) -> list[ScoredEntry]:
    """Matches for ``pattern``, sorted ascending by score (best last).

    Reads without locking and never writes the store.
    """
    if now is None:
        now = unix_time()

    with open_store(data_file) as handle:
        table = parse(handle)

    matches = filter_table(table, pattern)
    results = [scored(entry, scorer, now) for entry in matches]

    boosted = apply_prefix_boost(results)
    if boosted is not None:
        logger.debug(f"{boosted.path} contains every match, boosted")

    results.sort(key=attrgetter("score"))
    return results
