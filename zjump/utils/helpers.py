"""Helper functions for zjump."""

import os
import time
from pathlib import Path


def unix_time() -> int:
    """Current time in whole seconds since the epoch."""
    return int(time.time())


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_path() -> Path:
    """Get the zjump settings directory (~/.zjump)."""
    return Path.home() / ".zjump"


def get_share_path() -> Path:
    """Directory the shell helper is installed into."""
    base = os.environ.get("XDG_DATA_HOME")
    root = Path(base) if base else Path.home() / ".local" / "share"
    return root / "zjump"
