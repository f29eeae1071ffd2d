"""Match predicate deciding whether an event is shown."""

import fnmatch
import re
from typing import Optional, Pattern

from .events import EventRecord
from .exceptions import InvalidPatternError
from .filter_config import FilterConfig

REGEX_PREFIX = "re:"


class MessagePattern:
    """A message filter compiled once before collection starts.

    Pattern language:
        ``re:<regex>``      regular expression, searched anywhere
        ``^...`` / ``...$`` regular expression, searched anywhere
        anything else       shell glob matched against the whole message
    """

    def __init__(self, source: str, regex: Pattern[str], is_glob: bool):
        self.source = source
        self.regex = regex
        self.is_glob = is_glob

    @classmethod
    def compile(cls, text: str, ignore_case: bool = False) -> "MessagePattern":
        """Compile a message filter.

        Raises:
            InvalidPatternError: if the pattern is empty or does not compile
        """
        if not text:
            raise InvalidPatternError(text, "pattern is empty")

        flags = re.IGNORECASE if ignore_case else 0

        if text.startswith(REGEX_PREFIX):
            expression, is_glob = text[len(REGEX_PREFIX) :], False
            if not expression:
                raise InvalidPatternError(text, "regular expression is empty")
        elif text.startswith("^") or text.endswith("$"):
            expression, is_glob = text, False
        else:
            expression, is_glob = fnmatch.translate(text), True

        try:
            regex = re.compile(expression, flags)
        except re.error as e:
            raise InvalidPatternError(text, str(e)) from e

        return cls(text, regex, is_glob)

    def match(self, message: str) -> bool:
        if self.is_glob:
            return self.regex.match(message) is not None
        return self.regex.search(message) is not None

    def __repr__(self) -> str:
        flavour = "glob" if self.is_glob else "regex"
        return f"MessagePattern({self.source!r}, {flavour})"


def compile_message_filter(config: FilterConfig) -> Optional[MessagePattern]:
    """Compile the configured message filter, or None for 'all'."""
    if not config.filters_message:
        return None
    return MessagePattern.compile(config.message_filter, config.ignore_case)


def matches(
    record: EventRecord, config: FilterConfig, pattern: Optional[MessagePattern]
) -> bool:
    """Return True if the record passes every active filter.

    The kind check always runs first; the message pattern is only
    evaluated for records whose kind is accepted.
    """
    if config.filters_kind and record.kind != config.kind_filter:
        return False
    if config.filters_message:
        if pattern is None or not pattern.match(record.message):
            return False
    return True


class MatchPredicate:
    """Binds a filter configuration to its compiled message pattern."""

    def __init__(
        self, config: FilterConfig, pattern: Optional[MessagePattern] = None
    ):
        self.config = config
        if pattern is None:
            pattern = compile_message_filter(config)
        self.pattern = pattern

    def matches(self, record: EventRecord) -> bool:
        return matches(record, self.config, self.pattern)
