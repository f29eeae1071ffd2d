"""Display utilities for consistent CLI status messages."""

from typing import Optional

from rich.console import Console

NORD_COLORS = {
    "nord3": "#4c566a",  # Muted gray (dim text)
    "nord7": "#8fbcbb",  # Teal - Info
    "nord13": "#ebcb8b",  # Yellow - Warnings
    "nord14": "#a3be8c",  # Green - Success
}


class DisplayUtils:
    """Utilities for consistent message display."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def warning(self, message: str, context: Optional[str] = None) -> None:
        self.console.print(
            f"[{NORD_COLORS['nord13']}]⚠ {message}[/{NORD_COLORS['nord13']}]"
        )
        if context:
            self.console.print(
                f"[{NORD_COLORS['nord3']}]  {context}[/{NORD_COLORS['nord3']}]"
            )

    def info(self, message: str) -> None:
        self.console.print(
            f"[{NORD_COLORS['nord7']}]◆ {message}[/{NORD_COLORS['nord7']}]"
        )

    def success(self, message: str) -> None:
        self.console.print(
            f"[{NORD_COLORS['nord14']}][OK] {message}[/{NORD_COLORS['nord14']}]"
        )

    def dim(self, message: str) -> None:
        self.console.print(f"[{NORD_COLORS['nord3']}]{message}[/{NORD_COLORS['nord3']}]")
