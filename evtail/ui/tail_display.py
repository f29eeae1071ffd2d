"""Console sink for rendered output."""

import zlib
from typing import Optional

from rich.console import Console
from rich.text import Text

from ..core.events import EventRecord
from .constants import KIND_PALETTE, NORD_GRAY, NORD_LIGHT


def kind_color(kind: str) -> str:
    """Stable color for a kind, identical across runs."""
    return KIND_PALETTE[zlib.crc32(kind.encode("utf-8")) % len(KIND_PALETTE)]


class TailDisplay:
    """Write rendered lines to the console, optionally styled."""

    def __init__(self, console: Optional[Console] = None, color: bool = False):
        """Initialize display.

        Args:
            console: Rich console for output
            color: Style list lines (text format only)
        """
        self.console = console or Console(highlight=False)
        self.color = color
        self.lines_written = 0

    def emit(self, text: str, record: Optional[EventRecord] = None) -> None:
        """Write one rendered block.

        When color is on and the block is an event line, the line is
        rebuilt from the record with styles; the plain text is identical.
        """
        if self.color and record is not None:
            self.console.print(self.styled_line(record), soft_wrap=True)
        else:
            self.console.print(
                text, markup=False, highlight=False, emoji=False, soft_wrap=True
            )
        self.lines_written += 1

    @staticmethod
    def styled_line(record: EventRecord) -> Text:
        line = Text()
        line.append(str(record.key), style=f"dim {NORD_LIGHT}")
        line.append(f" [{record.created_at}] ", style=NORD_GRAY)
        line.append(f"[{record.kind}]", style=f"bold {kind_color(record.kind)}")
        line.append(f" {record.message}")
        return line
