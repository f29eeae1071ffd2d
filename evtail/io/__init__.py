"""Logging and filesystem helpers for evtail."""

from .directories import get_config_dir, get_config_path
from .logger import get_logger, setup_logging

__all__ = [
    "get_config_dir",
    "get_config_path",
    "get_logger",
    "setup_logging",
]
