"""Searching and ranking the path store."""

from zjump.query.scoring import (
    PREFIX_BOOST,
    Scorer,
    apply_prefix_boost,
    common_prefix,
    frecency,
    score,
)
from zjump.query.search import filter_table, search

__all__ = [
    "PREFIX_BOOST",
    "Scorer",
    "apply_prefix_boost",
    "common_prefix",
    "frecency",
    "score",
    "filter_table",
    "search",
]
