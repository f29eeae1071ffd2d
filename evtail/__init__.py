"""evtail - tail and filter platform event feeds"""

__version__ = "0.1.0"

# Core exports
from .core import (
    AggregateState,
    CancellationToken,
    CollectionLoop,
    EventRecord,
    FilterConfig,
    KindRegistry,
    MatchPredicate,
    MessagePattern,
    RawEvent,
    RunStats,
)

# IO exports
from .io import get_logger

# Source exports
from .sources import EventSource, FilterSpec, open_source

# UI exports
from .ui import Renderer, TailDisplay

__all__ = [
    # Version
    "__version__",
    # Core
    "AggregateState",
    "CancellationToken",
    "CollectionLoop",
    "EventRecord",
    "FilterConfig",
    "KindRegistry",
    "MatchPredicate",
    "MessagePattern",
    "RawEvent",
    "RunStats",
    # Sources
    "EventSource",
    "FilterSpec",
    "open_source",
    # UI
    "Renderer",
    "TailDisplay",
    # IO
    "get_logger",
]
