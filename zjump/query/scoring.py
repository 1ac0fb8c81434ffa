"""Scoring policies and the common-prefix boost."""

from enum import Enum
from pathlib import PurePath
from typing import Sequence

from zjump.errors import NonFiniteScoreError
from zjump.store.models import Entry, ScoredEntry, is_finite_f32

HOUR = 3600
DAY = HOUR * 24
WEEK = DAY * 7

PREFIX_BOOST = 100.0


class Scorer(str, Enum):
    """How search results are ordered."""
    RANK = "rank"
    RECENT = "recent"
    FRECENT = "frecent"


def age(now: int, last_seen: int) -> int:
    """Seconds since ``last_seen``; timestamps in the future count as 0."""
    return max(now - last_seen, 0)


def frecency(rank: float, dx: int) -> float:
    """Weight ``rank`` by a step function of its age in seconds."""
    if dx < HOUR:
        return rank * 4.0
    if dx < DAY:
        return rank * 2.0
    if dx < WEEK:
        return rank / 2.0
    return rank / 4.0


def score(entry: Entry, scorer: Scorer, now: int) -> float:
    scorer = Scorer(scorer)
    if scorer is Scorer.RANK:
        value = float(entry.rank)
    elif scorer is Scorer.RECENT:
        value = -float(age(now, entry.last_seen))
    else:
        value = frecency(entry.rank, age(now, entry.last_seen))

    if not is_finite_f32(value):
        raise NonFiniteScoreError(f"computed non-finite score from {entry!r}")
    return value


def scored(entry: Entry, scorer: Scorer, now: int) -> ScoredEntry:
    return ScoredEntry(path=entry.path, score=score(entry, scorer, now))


def common_prefix(paths: Sequence[str]) -> PurePath | None:
    """Deepest directory containing every path, or None.

    Needs at least two paths. The filesystem root never counts as a
    common prefix.
    """
    if len(paths) <= 1:
        return None

    shortest = PurePath(paths[0])
    for path in paths[1:]:
        part = PurePath(path)
        while not part.is_relative_to(shortest):
            parent = shortest.parent
            if parent == shortest or parent.parent == parent:
                return None
            shortest = parent

    if shortest.parent == shortest:
        return None
    return shortest


def apply_prefix_boost(results: list[ScoredEntry], factor: float = PREFIX_BOOST) -> ScoredEntry | None:
    """Boost the match that is the common ancestor of all other matches.

    Only an existing match is boosted; returns it, or None when nothing
    qualified.
    """
    prefix = common_prefix([r.path for r in results])
    if prefix is None:
        return None

    for result in results:
        if PurePath(result.path) == prefix:
            boosted = result.score * factor
            if not is_finite_f32(boosted):
                raise NonFiniteScoreError(f"boosting {result!r} overflowed")
            result.score = boosted
            return result
    return None
