"""Collection pipeline: events, filters, kind tracking and the loop."""

from .collector import CancellationToken, CollectionLoop, RunStats
from .constants import ALL, Formats, Modes, TimeUnits
from .events import AggregateState, EventRecord, RawEvent
from .exceptions import (
    ConfigurationError,
    EvtailError,
    FetchError,
    InvalidPatternError,
    InvalidTimeWindowError,
    RenderError,
    SourceConnectionError,
    SourceError,
    TransientFetchError,
    UnknownFormatError,
    UnknownModeError,
)
from .filter_config import FilterConfig
from .kind_registry import KindRegistry
from .matcher import MatchPredicate, MessagePattern, matches

__all__ = [
    "ALL",
    "AggregateState",
    "CancellationToken",
    "CollectionLoop",
    "ConfigurationError",
    "EventRecord",
    "EvtailError",
    "FetchError",
    "FilterConfig",
    "Formats",
    "InvalidPatternError",
    "InvalidTimeWindowError",
    "KindRegistry",
    "MatchPredicate",
    "MessagePattern",
    "Modes",
    "RawEvent",
    "RenderError",
    "RunStats",
    "SourceConnectionError",
    "SourceError",
    "TimeUnits",
    "TransientFetchError",
    "UnknownFormatError",
    "UnknownModeError",
    "matches",
]
