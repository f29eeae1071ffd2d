"""Create the evtail configuration file."""

import rich_click as click
from rich.console import Console

from ..config import Config
from ..io.directories import get_config_path
from ..ui.display_utils import DisplayUtils

console = Console()
display = DisplayUtils(console)


@click.command()
@click.option(
    "--force", "-f", is_flag=True, help="Overwrite existing configuration file"
)
def config(force: bool):
    """Create a configuration file with example settings.

    Creates ~/.config/evtail/evtail.yaml with the default settings
    and comments describing each one.
    """
    config_path = get_config_path()

    if config_path.exists() and not force:
        display.warning(
            f"Config file already exists at: {config_path}",
            context="Use --force to overwrite",
        )
        return

    Config.write_example_config(config_path)

    display.success("Created configuration file")
    display.info(f"Location: {config_path}")
    display.dim("Edit the file to change defaults; command-line options still win")
