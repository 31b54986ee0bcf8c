"""Runtime settings assembled from command-line flags."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = Path(".config/slam/config.toml")


def default_config_path() -> Path:
    """Layout catalog location: ~/.config/slam/config.toml"""
    return Path.home() / DEFAULT_CONFIG_PATH


class SlamSettings(BaseModel):
    """Where the layout catalog lives and which external programs to run."""

    config_path: Path = Field(default_factory=default_config_path)
    dmenu_path: Optional[Path] = Field(default=None, description="dmenu binary, PATH lookup if unset")
    xrandr_path: Optional[Path] = Field(default=None, description="xrandr binary, PATH lookup if unset")
