# evtail/cli/tail.py
"""Tail command: page through an event feed, filter and render."""

from pathlib import Path
from typing import Optional, Tuple

import rich_click as click
from pydantic import ValidationError
from rich.console import Console

from ..config import Config, begin_offset, build_filter_spec, parse_duration
from ..core import CancellationToken, CollectionLoop, FilterConfig, MessagePattern
from ..core.constants import ALL, Formats, Modes
from ..io.logger import get_logger, setup_logging
from ..sources import open_source
from ..ui.tail_display import TailDisplay
from .constants import SOURCE_ENV_VAR
from .error_handler import ConfigError, default_handler, handle_cli_error

logger = get_logger("cli.tail")


def _pick(value, fallback):
    """Command-line value if given, otherwise the configured one."""
    return fallback if value is None else value


@click.command()
@click.argument("event_types", nargs=-1, metavar="[EVENT_TYPE]...")
@click.option(
    "--source",
    "-s",
    envvar=SOURCE_ENV_VAR,
    help=f"* Event source: path or file:// URL (env: {SOURCE_ENV_VAR})",
)
@click.option(
    "--begin",
    "-b",
    type=click.IntRange(min=0),
    help="Start the window this many units ago (default: 10)",
)
@click.option(
    "--unit",
    "-U",
    help="Unit for --begin: s, m, h or d (default: m)",
)
@click.option(
    "--end",
    "-e",
    help="End the window this long ago, e.g. 90s, 15m, 1h30m (default: open-ended)",
)
@click.option(
    "--kind", "-k", default=ALL, show_default=True, help="Only show this event kind"
)
@click.option(
    "--match",
    "-M",
    "message_filter",
    default=ALL,
    show_default=True,
    help="Message filter: glob (*vmnic*), regex (^ERROR.*, re:...) or all",
)
@click.option(
    "--ignore-case", "-i", is_flag=True, help="Case-insensitive message matching"
)
@click.option(
    "--mode",
    "-m",
    type=click.Choice(Modes.ALL),
    help="Display mode: list, kinds or summary (default: list)",
)
@click.option(
    "--format",
    "-o",
    "output_format",
    type=click.Choice(Formats.ALL),
    help="Output format: text or json (default: text)",
)
@click.option("--follow", "-f", is_flag=True, help="Keep polling for new events")
@click.option(
    "--page-size",
    "-c",
    type=click.IntRange(1, 10000),
    help="Events to fetch per request (default: 100)",
)
@click.option(
    "--poll-interval",
    type=click.FloatRange(min=0, min_open=True),
    help="Seconds between polls when following (default: 1.0)",
)
@click.option(
    "--retries",
    type=click.IntRange(0, 20),
    help="Retries for transient fetch failures (default: 0)",
)
@click.option(
    "--color/--no-color", default=None, help="Color list output in text format"
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML config file (default: ~/.config/evtail/evtail.yaml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Debug logging on stderr")
@handle_cli_error
def tail(
    event_types: Tuple[str, ...],
    source: Optional[str],
    begin: Optional[int],
    unit: Optional[str],
    end: Optional[str],
    kind: str,
    message_filter: str,
    ignore_case: bool,
    mode: Optional[str],
    output_format: Optional[str],
    follow: bool,
    page_size: Optional[int],
    poll_interval: Optional[float],
    retries: Optional[int],
    color: Optional[bool],
    config_path: Optional[Path],
    verbose: bool,
):
    """Tail and filter an event feed.

    Pages through events newer than the lookback window, filters them by
    kind and message, and prints them as they arrive (list mode) or as a
    catalog of kinds or a summary once the feed is drained.

    EVENT_TYPE arguments restrict which event types the source returns.

    [bold]EXAMPLES:[/bold]

        evtail tail -s events.jsonl -b 8 -U h

        evtail tail -s events.jsonl -f -M "*error*"

        evtail tail -s events.jsonl -m kinds VmEvent UserLoginSessionEvent
    """
    default_handler.debug = verbose
    settings = Config(config_path)
    setup_logging(
        "DEBUG" if verbose else settings.get("logging.level"),
        settings.get("logging.file"),
    )

    location = source or settings.get("source")
    if not location:
        raise ConfigError(
            "An event source is required",
            suggestion=f"Pass --source or set {SOURCE_ENV_VAR}",
        )

    try:
        filter_config = FilterConfig(
            kind_filter=kind,
            message_filter=message_filter,
            ignore_case=ignore_case,
            mode=_pick(mode, settings.get("tail.mode")),
            format=_pick(output_format, settings.get("tail.format")),
            page_size=_pick(page_size, settings.get("tail.page_size")),
            follow=follow,
            poll_interval=_pick(poll_interval, settings.get("tail.poll_interval")),
            fetch_retries=_pick(retries, settings.get("fetch.retries")),
            retry_base_delay=settings.get("fetch.retry_base_delay"),
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid options: {e}") from e

    # Everything that can be validated locally fails before connecting
    pattern = None
    if filter_config.filters_message:
        pattern = MessagePattern.compile(
            filter_config.message_filter, filter_config.ignore_case
        )
    lookback = begin_offset(
        _pick(begin, settings.get("window.begin")),
        _pick(unit, settings.get("window.unit")),
    )
    window_end = parse_duration(end) if end else None

    use_color = _pick(color, settings.get("tail.color"))
    display = TailDisplay(
        Console(highlight=False),
        color=use_color and filter_config.format == Formats.TEXT,
    )
    token = CancellationToken()

    with open_source(location) as event_source:
        spec = build_filter_spec(
            event_source.current_time(), lookback, window_end, event_types
        )
        logger.debug(
            f"Window {spec.begin_time} .. {spec.end_time or 'open'}; "
            f"types={list(spec.event_types) or 'all'}"
        )
        loop = CollectionLoop(
            event_source, filter_config, display, token=token, pattern=pattern
        )
        with token.handle_signals():
            stats = loop.run(spec)

    if stats.cancelled:
        logger.info("Stopped by operator")
    logger.debug(f"Run complete: {stats}")
