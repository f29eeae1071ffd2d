"""XDG Base Directory support for evtail."""

import os
from pathlib import Path

CONFIG_FILENAME = "evtail.yaml"


def get_config_dir() -> Path:
    """Get the configuration directory for evtail.

    Returns ~/.config/evtail/ by default, or respects $XDG_CONFIG_HOME if set.
    The directory is not created here.
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home) / "evtail"
    return Path.home() / ".config" / "evtail"


def get_config_path() -> Path:
    """Default location of the YAML config file."""
    return get_config_dir() / CONFIG_FILENAME
