"""Configuration loading."""

import json
import re
from pathlib import Path
from typing import Any

from loguru import logger

from zjump.config.schema import Config
from zjump.utils.helpers import get_data_path


def get_config_path() -> Path:
    """Default configuration file path."""
    return get_data_path() / "config.json"


def camel_to_snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def convert_keys(data: Any) -> Any:
    """Recursively convert camelCase keys to snake_case."""
    if isinstance(data, dict):
        return {camel_to_snake(k): convert_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from file, or defaults if it is missing or broken."""
    path = config_path or get_config_path()

    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("top level must be an object")
            return Config(**convert_keys(data))
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            logger.warning("Using default configuration.")

    return Config()
