"""Time window helpers: lookback quantities and Go-style durations."""

import re
from datetime import datetime, timedelta
from typing import Iterable, Optional

from ..core.constants import TimeUnits
from ..core.exceptions import InvalidTimeWindowError
from ..sources.base import EntityRef, FilterSpec

UNIT_ALIASES = {
    TimeUnits.SECOND: ("s", "sec", "secs", "second", "seconds"),
    TimeUnits.MINUTE: ("m", "min", "mins", "minute", "minutes"),
    TimeUnits.HOUR: ("h", "hr", "hrs", "hour", "hours"),
    TimeUnits.DAY: ("d", "day", "days"),
}

UNIT_SECONDS = {
    "ms": 0.001,
    TimeUnits.SECOND: 1,
    TimeUnits.MINUTE: 60,
    TimeUnits.HOUR: 3600,
    TimeUnits.DAY: 86400,
}

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ms|s|m|h|d)")


def normalize_unit(unit: str) -> str:
    """Map a unit name or abbreviation to its one-letter form.

    Raises:
        ValueError: for an unknown unit
    """
    key = unit.strip().lower()
    for short, aliases in UNIT_ALIASES.items():
        if key in aliases:
            return short
    raise ValueError(f"Unknown time unit '{unit}' (use s, m, h or d)")


def begin_offset(quantity: int, unit: str) -> timedelta:
    """How far back the window starts."""
    if quantity < 0:
        raise InvalidTimeWindowError(f"Begin quantity must not be negative: {quantity}")
    try:
        short = normalize_unit(unit)
    except ValueError as e:
        raise InvalidTimeWindowError(str(e)) from e
    try:
        return timedelta(seconds=quantity * UNIT_SECONDS[short])
    except OverflowError as e:
        raise InvalidTimeWindowError(f"Begin {quantity}{short} is too far back") from e


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``90s``, ``1h30m`` or ``2d``.

    Raises:
        InvalidTimeWindowError: if the text is not a duration
    """
    value = text.strip().lower()
    if value == "0":
        return timedelta(0)

    position = 0
    seconds = 0.0
    for part in _DURATION_PART.finditer(value):
        if part.start() != position:
            break
        seconds += float(part.group(1)) * UNIT_SECONDS[part.group(2)]
        position = part.end()

    if not value or position != len(value):
        raise InvalidTimeWindowError(
            f"Invalid duration '{text}' (examples: 90s, 15m, 1h30m, 2d)"
        )
    try:
        return timedelta(seconds=seconds)
    except OverflowError as e:
        raise InvalidTimeWindowError(f"Duration '{text}' is too long") from e


def build_filter_spec(
    now: datetime,
    begin: timedelta,
    end: Optional[timedelta] = None,
    event_types: Iterable[str] = (),
    entity: Optional[EntityRef] = None,
) -> FilterSpec:
    """Anchor the lookback window at the source's current time.

    A zero or missing ``end`` leaves the window open-ended.
    """
    if end is not None and end <= timedelta(0):
        end = None
    if end is not None and end >= begin:
        raise InvalidTimeWindowError(
            f"Window end ({end} ago) must be more recent than its begin ({begin} ago)"
        )

    try:
        begin_time = now - begin
        end_time = None if end is None else now - end
    except OverflowError as e:
        raise InvalidTimeWindowError(
            f"Window begin ({begin} ago) reaches before the earliest supported date"
        ) from e

    return FilterSpec(
        event_types=tuple(event_types),
        entity=entity or EntityRef(),
        begin_time=begin_time,
        end_time=end_time,
    )
