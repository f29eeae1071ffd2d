"""Event Source reading a JSON Lines event feed.

Each line is one event object::

    {"key": 42, "createdTime": "2024-05-01T10:00:00Z",
     "type": "VmPoweredOnEvent", "fullFormattedMessage": "vm01 powered on",
     "entity": "dc1/cluster1/vm01", "userName": "admin"}

``kind``, ``message`` and ``created_at`` / ``created_time`` are accepted as
aliases. The collector remembers its byte offset, so lines appended to the
file later are picked up by follow mode.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Union

from ..core.events import RawEvent
from ..core.exceptions import FetchError, SourceConnectionError
from ..io.logger import get_logger
from .base import Collector, EventSource, FilterSpec

logger = get_logger("sources.jsonl")

KIND_FIELDS = ("type", "kind")
MESSAGE_FIELDS = ("fullFormattedMessage", "message")
CREATED_FIELDS = ("createdTime", "created_time", "created_at")


def _first(data: Dict[str, Any], names) -> Any:
    for name in names:
        if data.get(name) is not None:
            return data[name]
    return None


def parse_timestamp(value: Union[str, int, float]) -> datetime:
    """Parse an ISO-8601 string or epoch seconds into an aware UTC datetime.

    Raises:
        ValueError: if the value is not a timestamp or is out of range
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid timestamp: {value!r}")
    try:
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (OverflowError, OSError) as e:
        raise ValueError(f"timestamp out of range: {value!r}") from e


def parse_event(data: Dict[str, Any]) -> RawEvent:
    """Build a RawEvent from one decoded line.

    Raises:
        ValueError: if a required field is missing or malformed
    """
    if not isinstance(data, dict):
        raise ValueError("event must be a JSON object")

    key = data.get("key")
    if isinstance(key, bool) or not isinstance(key, int):
        raise ValueError("'key' must be an integer")

    kind = _first(data, KIND_FIELDS)
    if not kind:
        raise ValueError("missing event type")

    created = _first(data, CREATED_FIELDS)
    if created is None:
        raise ValueError("missing creation time")

    message = _first(data, MESSAGE_FIELDS)

    return RawEvent(
        key=key,
        created_time=parse_timestamp(created),
        kind=str(kind),
        message="" if message is None else str(message),
        entity=data.get("entity"),
        user=data.get("userName"),
    )


class JsonlCollector(Collector):
    """Cursor over a JSON Lines file."""

    def __init__(self, path: Path, spec: FilterSpec):
        super().__init__()
        self.path = path
        self.spec = spec
        self.line_number = 0
        try:
            self._file: Optional[BinaryIO] = open(path, "rb")
        except OSError as e:
            raise SourceConnectionError(f"Cannot open event feed {path}: {e}") from e
        logger.debug(f"Opened collector on {path}")

    def read_next(self, max_count: int) -> List[RawEvent]:
        if self._file is None:
            raise FetchError(f"Collector for {self.path} has been released")

        events: List[RawEvent] = []
        try:
            while len(events) < max_count:
                position = self._file.tell()
                line = self._file.readline()
                if not line:
                    break

                if not line.endswith(b"\n") and not self._is_complete(line):
                    # Writer is mid-line; pick it up on the next read
                    self._file.seek(position)
                    break

                self.line_number += 1
                if not line.strip():
                    continue

                event = self._decode(line)
                if self.spec.admits(event):
                    events.append(event)
        except OSError as e:
            raise FetchError(f"Error reading {self.path}: {e}") from e

        return events

    @staticmethod
    def _is_complete(line: bytes) -> bool:
        try:
            json.loads(line)
        except ValueError:
            return False
        return True

    def _decode(self, line: bytes) -> RawEvent:
        try:
            return parse_event(json.loads(line))
        except ValueError as e:
            raise FetchError(
                f"{self.path}:{self.line_number}: malformed event: {e}"
            ) from e

    def _release(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
        logger.debug(f"Released collector on {self.path}")


class JsonlEventSource(EventSource):
    """Event Source backed by a local JSON Lines file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        if not self.path.is_file():
            raise SourceConnectionError(f"Event feed not found: {self.path}")

    def create_collector(self, spec: FilterSpec) -> JsonlCollector:
        return JsonlCollector(self.path, spec)

    def __repr__(self) -> str:
        return f"JsonlEventSource({str(self.path)!r})"
