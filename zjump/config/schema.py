"""Configuration schema using Pydantic."""

import os
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from zjump.store.mutations import DECAY_FACTOR, DECAY_THRESHOLD
from zjump.store.storage import RETENTION_FLOOR


class StoreConfig(BaseModel):
    """Where the path history lives and how it ages."""
    data_file: str = "~/.z"
    decay_threshold: float = Field(default=DECAY_THRESHOLD, gt=0, description="Total rank that triggers an aging pass")
    decay_factor: float = Field(default=DECAY_FACTOR, gt=0, le=1, description="Multiplier applied to every rank when aging")
    retention_floor: float = Field(default=RETENTION_FLOOR, ge=0, description="Entries ranked below this are dropped on write")


class ShellConfig(BaseModel):
    """Shell integration settings."""
    cmd: str = "z"  # name of the shell function, stripped from completion lines
    profiles: list[str] = Field(default_factory=lambda: [".zshrc", ".bashrc"])


class Config(BaseSettings):
    """Root configuration for zjump."""
    model_config = SettingsConfigDict(env_prefix="ZJUMP_", env_nested_delimiter="__")

    store: StoreConfig = Field(default_factory=StoreConfig)
    shell: ShellConfig = Field(default_factory=ShellConfig)
    log_level: str = "WARNING"

    @property
    def data_path(self) -> Path:
        """Store location; ``_Z_DATA`` wins over the configured file."""
        override = os.environ.get("_Z_DATA")
        if override:
            return Path(override)
        return Path(self.store.data_file).expanduser()

    @property
    def command_name(self) -> str:
        return os.environ.get("_Z_CMD") or self.shell.cmd
