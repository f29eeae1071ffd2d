"""Incremental collection loop over an Event Source."""

import signal
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator, List, Optional

from ..io.logger import get_logger
from .constants import MAX_RETRY_DELAY_SECONDS, Modes
from .events import AggregateState, EventRecord, RawEvent
from .exceptions import TransientFetchError
from .filter_config import FilterConfig
from .matcher import MatchPredicate, MessagePattern

if TYPE_CHECKING:
    from ..sources.base import Collector, EventSource, FilterSpec
    from ..ui.renderer import Renderer
    from ..ui.tail_display import TailDisplay

logger = get_logger("collector")


class CancellationToken:
    """Cooperative stop signal checked before every fetch."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds; returns True if cancelled."""
        return self._event.wait(timeout)

    @contextmanager
    def handle_signals(self) -> Iterator["CancellationToken"]:
        """Turn SIGINT/SIGTERM into cancellation while the block runs.

        The first signal cancels; the original handlers come back right
        away, so a second Ctrl+C interrupts immediately.
        """
        originals = {}

        def restore() -> None:
            while originals:
                signum, handler = originals.popitem()
                signal.signal(signum, handler)

        def on_signal(signum, frame) -> None:
            logger.debug(f"Received signal {signum}, stopping after current page")
            self.cancel()
            restore()

        if threading.current_thread() is not threading.main_thread():
            # Signal handlers can only be installed from the main thread
            yield self
            return

        for signum in (signal.SIGINT, signal.SIGTERM):
            originals[signum] = signal.signal(signum, on_signal)
        try:
            yield self
        finally:
            restore()


@dataclass
class RunStats:
    """Outcome of a collection run."""

    events: int = 0
    matched: int = 0
    kinds: int = 0
    pages: int = 0
    cancelled: bool = False


class CollectionLoop:
    """Page through an Event Source, filter, track kinds and render.

    States: FETCHING -> EMPTY_WAIT | EMPTY_DONE | PROCESSING, ending in
    TERMINATED on source exhaustion (no follow), cancellation, or a fatal
    fetch error. The collector is released on every one of those paths.
    """

    def __init__(
        self,
        source: "EventSource",
        config: FilterConfig,
        display: "TailDisplay",
        renderer: Optional["Renderer"] = None,
        token: Optional[CancellationToken] = None,
        pattern: Optional[MessagePattern] = None,
        wait: Optional[Callable[[float], bool]] = None,
    ):
        """Initialize the loop.

        Args:
            source: Event Source to read from
            config: Immutable filter configuration for this run
            display: Sink for rendered output
            renderer: Renderer instance (a default one if omitted)
            token: Cancellation token (a fresh one if omitted)
            pattern: Pre-compiled message pattern; compiled from the
                config when omitted, so a bad pattern fails here
            wait: Sleep function returning True when cancelled; defaults
                to the token's interruptible wait
        """
        if renderer is None:
            from ..ui.renderer import Renderer

            renderer = Renderer()

        self.source = source
        self.config = config
        self.display = display
        self.renderer = renderer
        self.token = token or CancellationToken()
        self.predicate = MatchPredicate(config, pattern)
        self.state = AggregateState()
        self._wait = wait or self.token.wait
        self._kinds_emitted: Optional[int] = None

    def run(self, spec: "FilterSpec") -> RunStats:
        """Collect until exhausted (or cancelled, when following).

        Raises:
            FetchError: on a fatal read failure, after releasing the collector
        """
        stats = RunStats()
        logger.debug(
            f"Starting collection: mode={self.config.mode} "
            f"format={self.config.format} follow={self.config.follow} "
            f"page_size={self.config.page_size}"
        )

        with self.source.create_collector(spec) as collector:
            try:
                self._collect(collector, stats)
            except KeyboardInterrupt:
                logger.debug("Interrupted during fetch")
                self.token.cancel()
                stats.cancelled = True

        if self.config.mode in Modes.AGGREGATE:
            self._emit_aggregate(final=True)

        stats.events = self.state.events
        stats.matched = self.state.matched
        stats.kinds = len(self.state.kinds)
        logger.debug(
            f"Collection finished: {stats.events} events, {stats.matched} shown, "
            f"{stats.kinds} kinds over {stats.pages} pages"
        )
        return stats

    def _collect(self, collector: "Collector", stats: RunStats) -> None:
        while True:
            if self.token.cancelled:
                stats.cancelled = True
                return

            page = self._fetch(collector)
            if page is None:
                stats.cancelled = True
                return
            stats.pages += 1

            if not page:
                if not self.config.follow:
                    return
                logger.debug(
                    f"No new events, polling again in {self.config.poll_interval}s"
                )
                self._wait(self.config.poll_interval)
                continue

            logger.debug(f"Processing page of {len(page)} events")
            self._process(page)

    def _fetch(self, collector: "Collector") -> Optional[List[RawEvent]]:
        """Read one page, retrying transient failures if configured.

        Returns None when cancelled during a retry backoff.
        """
        attempt = 0
        while True:
            try:
                return list(collector.read_next(self.config.page_size))
            except TransientFetchError as e:
                if attempt >= self.config.fetch_retries:
                    raise
                delay = min(
                    self.config.retry_base_delay * (2**attempt),
                    MAX_RETRY_DELAY_SECONDS,
                )
                attempt += 1
                logger.warning(
                    f"Fetch failed ({e}); retry {attempt}/"
                    f"{self.config.fetch_retries} in {delay:.1f}s"
                )
                if self._wait(delay):
                    return None

    def _process(self, page: List[RawEvent]) -> None:
        new_kinds = False
        for raw in page:
            record = EventRecord.from_raw(raw)
            record.visible = self.predicate.matches(record)

            self.state.events += 1
            # Kinds are tracked whether or not the event is shown
            if self.state.kinds.add(record.kind):
                new_kinds = True

            if not record.visible:
                continue
            self.state.matched += 1
            if self.config.mode == Modes.LIST:
                self.display.emit(
                    self.renderer.render_event(
                        record, self.config.mode, self.config.format
                    ),
                    record,
                )

        if new_kinds and self.config.follow and self.config.mode == Modes.KINDS:
            self._emit_aggregate(final=False)

    def _emit_aggregate(self, final: bool) -> None:
        if (
            final
            and self.config.mode == Modes.KINDS
            and self._kinds_emitted == len(self.state.kinds)
        ):
            # Catalog already shown and unchanged since
            return
        self.display.emit(
            self.renderer.render_aggregate(
                self.state, self.config.mode, self.config.format
            )
        )
        if self.config.mode == Modes.KINDS:
            self._kinds_emitted = len(self.state.kinds)
