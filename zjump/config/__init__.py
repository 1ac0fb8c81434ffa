"""Configuration module for zjump."""

from zjump.config.loader import get_config_path, load_config
from zjump.config.schema import Config, ShellConfig, StoreConfig

__all__ = ["Config", "ShellConfig", "StoreConfig", "get_config_path", "load_config"]
