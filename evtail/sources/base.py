"""Interfaces every Event Source adapter implements."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from ..core.constants import ROOT_ENTITY
from ..core.events import RawEvent


@dataclass(frozen=True)
class EntityRef:
    """Scope of a collector: an entity path plus recursion."""

    path: str = ROOT_ENTITY
    recursive: bool = True

    def contains(self, entity: Optional[str]) -> bool:
        """Check whether an event's entity path falls inside this scope."""
        scope = self.path.strip("/")
        if not scope:
            # Root scope: everything when recursive, unscoped events otherwise
            return self.recursive or not (entity or "").strip("/")
        if entity is None:
            return False
        target = entity.strip("/")
        if target == scope:
            return True
        return self.recursive and target.startswith(scope + "/")


@dataclass(frozen=True)
class FilterSpec:
    """Server-side filter handed to ``EventSource.create_collector``."""

    event_types: Tuple[str, ...] = ()
    entity: EntityRef = field(default_factory=EntityRef)
    begin_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    def admits(self, event: RawEvent) -> bool:
        """Apply the allowlist, scope and time window to one event."""
        if self.event_types and event.kind not in self.event_types:
            return False
        if not self.entity.contains(event.entity):
            return False
        if self.begin_time is not None and event.created_time < self.begin_time:
            return False
        if self.end_time is not None and event.created_time > self.end_time:
            return False
        return True


class Collector(ABC):
    """Stateful read cursor over an Event Source.

    Use as a context manager; ``release`` runs once on every exit path.
    """

    def __init__(self) -> None:
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    @abstractmethod
    def read_next(self, max_count: int) -> List[RawEvent]:
        """Return up to ``max_count`` events past the current position.

        Returns fewer (possibly zero) when nothing more is available right
        now. Must not block indefinitely.

        Raises:
            FetchError: on a fatal read failure
            TransientFetchError: on a failure worth retrying
        """

    def release(self) -> None:
        """Free the server-side cursor. Later calls are no-ops."""
        if self._released:
            return
        self._released = True
        self._release()

    def _release(self) -> None:
        """Adapter hook for freeing resources."""

    def __enter__(self) -> "Collector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class EventSource(ABC):
    """A paginated, time-windowed feed of platform events."""

    @abstractmethod
    def create_collector(self, spec: FilterSpec) -> Collector:
        """Open a collector for the given filter.

        Raises:
            SourceConnectionError: if the source cannot serve the request
        """

    def current_time(self) -> datetime:
        """Source clock used to anchor the time window (aware, UTC)."""
        return datetime.now(timezone.utc)

    def close(self) -> None:
        """Release the session with the source."""

    def __enter__(self) -> "EventSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
