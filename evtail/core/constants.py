"""Shared constants for the collection pipeline."""

# Sentinel accepted by the kind and message filters
ALL = "all"


class Modes:
    """Display modes."""

    LIST = "list"
    KINDS = "kinds"
    SUMMARY = "summary"

    ALL = (LIST, KINDS, SUMMARY)
    AGGREGATE = (KINDS, SUMMARY)


class Formats:
    """Output formats."""

    TEXT = "text"
    JSON = "json"

    ALL = (TEXT, JSON)


class TimeUnits:
    """Lookback units accepted for the window start."""

    SECOND = "s"
    MINUTE = "m"
    HOUR = "h"
    DAY = "d"

    ALL = (SECOND, MINUTE, HOUR, DAY)


# Collection defaults
DEFAULT_PAGE_SIZE = 100
DEFAULT_POLL_INTERVAL_SECONDS = 1.0
DEFAULT_BEGIN_QUANTITY = 10
DEFAULT_BEGIN_UNIT = TimeUnits.MINUTE
DEFAULT_FETCH_RETRIES = 0
DEFAULT_RETRY_BASE_DELAY_SECONDS = 1.0
MAX_RETRY_DELAY_SECONDS = 30.0

# ANSI C layout (Mon Jan  2 15:04:05 2006)
DISPLAY_TIME_FORMAT = "{weekday} {month} {day:2d} {clock} {year}"

# Root of the entity tree
ROOT_ENTITY = "/"
