"""Utility functions for zjump."""

from zjump.utils.helpers import ensure_dir, get_data_path, get_share_path, unix_time

__all__ = [
    "ensure_dir",
    "get_data_path",
    "get_share_path",
    "unix_time",
]
