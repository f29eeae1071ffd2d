"""Event types flowing through the collection loop."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from .constants import DISPLAY_TIME_FORMAT
from .kind_registry import KindRegistry


@dataclass(frozen=True)
class RawEvent:
    """An event as delivered by an Event Source adapter.

    The adapter fills ``kind`` from its own discriminator field; nothing
    downstream inspects runtime types.
    """

    key: int
    created_time: datetime
    kind: str
    message: str
    entity: Optional[str] = None
    user: Optional[str] = None


def format_created(created_time: datetime) -> str:
    """Format a timestamp the way list output shows it (ANSI C layout)."""
    # %e is not portable, pad the day by hand
    return DISPLAY_TIME_FORMAT.format(
        weekday=created_time.strftime("%a"),
        month=created_time.strftime("%b"),
        day=created_time.day,
        clock=created_time.strftime("%H:%M:%S"),
        year=created_time.year,
    )


@dataclass
class EventRecord:
    """Display-ready view of one raw event."""

    key: int
    created_at: str
    kind: str
    message: str
    visible: bool = field(default=True, compare=False)

    @classmethod
    def from_raw(cls, raw: RawEvent) -> "EventRecord":
        return cls(
            key=raw.key,
            created_at=format_created(raw.created_time),
            kind=raw.kind,
            message=raw.message,
        )

    def to_dict(self, include_visible: bool = False) -> Dict[str, Any]:
        """Serializable form; ``visible`` stays internal unless asked for."""
        data: Dict[str, Any] = {
            "key": self.key,
            "createdAt": self.created_at,
            "kind": self.kind,
            "message": self.message,
        }
        if include_visible:
            data["visible"] = self.visible
        return data


@dataclass
class AggregateState:
    """Running totals kept across the whole run."""

    kinds: KindRegistry = field(default_factory=KindRegistry)
    events: int = 0
    matched: int = 0
