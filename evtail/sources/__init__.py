"""Event Source adapters and URL dispatch."""

from pathlib import Path
from typing import Callable, Dict
from urllib.parse import unquote, urlparse

from ..core.exceptions import ConfigurationError
from .base import Collector, EntityRef, EventSource, FilterSpec
from .jsonl import JsonlEventSource

SOURCE_FACTORIES: Dict[str, Callable[[str], EventSource]] = {
    "file": lambda location: JsonlEventSource(_file_path(location)),
}


def _file_path(location: str) -> Path:
    parsed = urlparse(location)
    if parsed.scheme == "file":
        netloc = "" if parsed.netloc in ("", "localhost") else "//" + parsed.netloc
        return Path(unquote(netloc + parsed.path))
    return Path(location)


def open_source(location: str) -> EventSource:
    """Open the Event Source at a URL or filesystem path.

    Raises:
        ConfigurationError: for an empty location or an unsupported scheme
        SourceConnectionError: if the source cannot be opened
    """
    if not location or not location.strip():
        raise ConfigurationError("An event source location is required")

    scheme = urlparse(location).scheme.lower()
    # Bare paths and Windows drive letters have no real scheme
    if not scheme or len(scheme) == 1:
        scheme = "file"

    factory = SOURCE_FACTORIES.get(scheme)
    if factory is None:
        supported = ", ".join(sorted(SOURCE_FACTORIES))
        raise ConfigurationError(
            f"Unsupported event source '{location}' (supported schemes: {supported})"
        )
    return factory(location)


__all__ = [
    "Collector",
    "EntityRef",
    "EventSource",
    "FilterSpec",
    "JsonlEventSource",
    "open_source",
]
