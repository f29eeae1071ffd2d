"""Turn event records and run totals into output strings."""

import json
from typing import Union

from ..core.constants import Formats, Modes
from ..core.events import AggregateState, EventRecord
from ..core.exceptions import UnknownFormatError, UnknownModeError

JSON_SEPARATORS = (",", ":")


class Renderer:
    """Render one (mode, format) pair at a time.

    Every supported pair is handled explicitly; anything else raises a
    ``RenderError`` subclass so the caller decides whether to abort.
    """

    def render(
        self, target: Union[EventRecord, AggregateState], mode: str, fmt: str
    ) -> str:
        if isinstance(target, EventRecord):
            return self.render_event(target, mode, fmt)
        if isinstance(target, AggregateState):
            return self.render_aggregate(target, mode, fmt)
        raise TypeError(f"Cannot render {type(target).__name__}")

    def render_event(self, record: EventRecord, mode: str, fmt: str) -> str:
        if mode != Modes.LIST:
            raise UnknownModeError(mode)

        if fmt == Formats.TEXT:
            return f"{record.key} [{record.created_at}] [{record.kind}] {record.message}"
        if fmt == Formats.JSON:
            return json.dumps(
                record.to_dict(), separators=JSON_SEPARATORS, ensure_ascii=False
            )
        raise UnknownFormatError(mode, fmt)

    def render_aggregate(self, state: AggregateState, mode: str, fmt: str) -> str:
        if mode == Modes.KINDS:
            return self._render_kinds(state, fmt)
        if mode == Modes.SUMMARY:
            return self._render_summary(state, fmt)
        raise UnknownModeError(mode)

    def _render_kinds(self, state: AggregateState, fmt: str) -> str:
        kinds = state.kinds.snapshot()
        if fmt == Formats.TEXT:
            return ", ".join(kinds)
        if fmt == Formats.JSON:
            return json.dumps(list(kinds), separators=JSON_SEPARATORS)
        raise UnknownFormatError(Modes.KINDS, fmt)

    def _render_summary(self, state: AggregateState, fmt: str) -> str:
        if fmt == Formats.TEXT:
            return f"# Events: {state.events}\n# Kinds:  {len(state.kinds)}"
        if fmt == Formats.JSON:
            return json.dumps(
                {
                    "events": state.events,
                    "matched": state.matched,
                    "kinds": len(state.kinds),
                },
                separators=JSON_SEPARATORS,
            )
        raise UnknownFormatError(Modes.SUMMARY, fmt)
