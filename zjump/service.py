"""PathStore - the handle every store operation goes through."""

import re
from pathlib import Path

from zjump.config.schema import StoreConfig
from zjump.query.scoring import Scorer
from zjump.query.search import search
from zjump.store.models import ScoredEntry
from zjump.store.mutations import prune_stale, record_visit
from zjump.store.storage import update_store
from zjump.utils.helpers import unix_time


class PathStore:
    """A store file plus the tunables used when writing it."""

    def __init__(self, data_file: str | Path, config: StoreConfig | None = None):
        self.data_file = Path(data_file)
        self.config = config or StoreConfig()

    def __repr__(self) -> str:
        return f"PathStore({str(self.data_file)!r})"

    def search(self, pattern: str, scorer: Scorer = Scorer.FRECENT, now: int | None = None) -> list[ScoredEntry]:
        """Matches ascending by score; the best match is last."""
        return search(self.data_file, pattern, scorer, now)

    def add(self, path: str, now: int | None = None) -> None:
        """Record a visit to ``path``."""
        stamp = unix_time() if now is None else now
        update_store(
            self.data_file,
            lambda table: record_visit(
                table,
                path,
                stamp,
                decay_threshold=self.config.decay_threshold,
                decay_factor=self.config.decay_factor,
            ),
            retention_floor=self.config.retention_floor,
        )

    def clean(self) -> int:
        """Forget paths that are no longer directories; returns how many."""
        return update_store(self.data_file, prune_stale, retention_floor=self.config.retention_floor)

    def complete(self, line: str, cmd: str = "z", now: int | None = None) -> list[str]:
        """Completion candidates for a shell command line, best first."""
        if line.startswith(cmd):
            line = line[len(cmd):].lstrip()
        results = self.search(re.escape(line), Scorer.FRECENT, now)
        return [r.path for r in reversed(results)]
