"""Configuration for evtail."""

from .config import Config
from .schema import EvtailConfig
from .time_window import begin_offset, build_filter_spec, parse_duration

__all__ = [
    "Config",
    "EvtailConfig",
    "begin_offset",
    "build_filter_spec",
    "parse_duration",
]
