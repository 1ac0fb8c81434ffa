"""Persistent scored path store."""

from zjump.store.codec import DELIMITER, decode, encode
from zjump.store.models import Entry, ScoredEntry, is_finite_f32
from zjump.store.mutations import DECAY_FACTOR, DECAY_THRESHOLD, prune_stale, record_visit
from zjump.store.storage import RETENTION_FLOOR, open_store, parse, update_store, write_table

__all__ = [
    "DELIMITER",
    "decode",
    "encode",
    "Entry",
    "ScoredEntry",
    "is_finite_f32",
    "DECAY_FACTOR",
    "DECAY_THRESHOLD",
    "RETENTION_FLOOR",
    "prune_stale",
    "record_visit",
    "open_store",
    "parse",
    "update_store",
    "write_table",
]
