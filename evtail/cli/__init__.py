# evtail/cli/__init__.py
"""Main CLI entry point."""

# Configure rich-click BEFORE importing it as click, otherwise the
# settings below don't take effect.
import rich_click.rich_click as rc

rc.USE_RICH_MARKUP = True
rc.SHOW_ARGUMENTS = True
rc.GROUP_ARGUMENTS_OPTIONS = True
rc.SHOW_METAVARS_COLUMN = False
rc.APPEND_METAVARS_HELP = True
rc.MAX_WIDTH = 100

# Nord color scheme
rc.STYLE_OPTION = "bold #8fbcbb"  # Nord7 teal
rc.STYLE_ARGUMENT = "bold #88c0d0"  # Nord8 light blue
rc.STYLE_COMMAND = "bold #5e81ac"  # Nord10 blue
rc.STYLE_SWITCH = "#a3be8c"  # Nord14 green
rc.STYLE_METAVAR = "#d8dee9"  # Nord4 light gray
rc.STYLE_USAGE = "bold #8fbcbb"
rc.STYLE_OPTION_DEFAULT = "#4c566a"  # Nord3 dim gray
rc.STYLE_REQUIRED_SHORT = "bold #bf616a"  # Nord11 red
rc.STYLE_REQUIRED_LONG = "bold #bf616a"
rc.STYLE_HELPTEXT_FIRST_LINE = "bold"
rc.STYLE_HELPTEXT = "#d8dee9"

import sys

import rich_click as click
from rich.console import Console

from .. import __version__
from .config import config
from .constants import BANNER
from .tail import tail

console = Console()


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="evtail")
def cli() -> None:
    """Tail and filter platform event feeds.

    Pages through an event source, filters events by kind and message,
    and prints them as a stream, a catalog of kinds, or a summary.

    QUICK START: evtail tail -s events.jsonl -f

    CONFIGURATION:
    • Configuration file: ~/.config/evtail/evtail.yaml
    • Environment variables: EVTAIL_SOURCE
    """


# Register commands
cli.add_command(tail)
cli.add_command(config)


def main() -> None:
    if "--help" in sys.argv or "-h" in sys.argv or len(sys.argv) == 1:
        console.print(BANNER)

    cli()


if __name__ == "__main__":
    main()
