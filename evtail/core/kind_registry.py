"""Insertion-ordered catalog of the event kinds seen during a run."""

from typing import Dict, Iterator, Tuple


class KindRegistry:
    """Append-only, deduplicated set of kinds in first-seen order."""

    def __init__(self) -> None:
        # dict keeps insertion order and gives O(1) membership
        self._kinds: Dict[str, None] = {}

    def add(self, kind: str) -> bool:
        """Record a kind.

        Returns:
            True if the kind was new, False if it was already present
        """
        if kind in self._kinds:
            return False
        self._kinds[kind] = None
        return True

    def snapshot(self) -> Tuple[str, ...]:
        """Kinds in first-seen order."""
        return tuple(self._kinds)

    def __len__(self) -> int:
        return len(self._kinds)

    def __contains__(self, kind: object) -> bool:
        return kind in self._kinds

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"KindRegistry({list(self._kinds)!r})"
