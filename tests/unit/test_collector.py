"""Tests for the collection loop state machine."""

import json
from unittest.mock import Mock

import pytest

from evtail.core.collector import CancellationToken, CollectionLoop
from evtail.core.exceptions import (
    FetchError,
    InvalidPatternError,
    TransientFetchError,
)
from evtail.core.filter_config import FilterConfig
from evtail.core.matcher import MessagePattern
from evtail.sources.base import FilterSpec
from tests.builders import (
    FakeEventSource,
    RecordingDisplay,
    make_raw_event,
    make_stream,
)


def make_loop(pages, on_exhausted=None, wait=None, token=None, **config):
    source = FakeEventSource(pages, on_exhausted)
    display = RecordingDisplay()
    loop = CollectionLoop(
        source,
        FilterConfig(**config),
        display,
        token=token,
        wait=wait or Mock(return_value=False),
    )
    return loop, source, display


class TestListMode:
    """Streaming output of visible events."""

    def test_emits_visible_events_in_order(self):
        loop, source, display = make_loop([make_stream(["A", "B", "A"])])

        stats = loop.run(FilterSpec())

        assert [line.split(" ")[0] for line in display.lines] == ["1", "2", "3"]
        assert stats.events == 3
        assert stats.matched == 3
        assert stats.kinds == 2

    def test_text_line_shape(self):
        raw = make_raw_event(key=5, kind="VmEvent", message="Powered on")
        loop, _, display = make_loop([[raw]])

        loop.run(FilterSpec())

        assert display.lines == ["5 [Mon Jan  1 00:00:00 2024] [VmEvent] Powered on"]
        assert display.records[0].key == 5

    def test_json_lines(self):
        loop, _, display = make_loop([make_stream(["A", "B"])], format="json")

        loop.run(FilterSpec())

        decoded = [json.loads(line) for line in display.lines]
        assert [d["kind"] for d in decoded] == ["A", "B"]
        assert all("visible" not in d for d in decoded)

    def test_hidden_events_are_not_emitted(self):
        loop, _, display = make_loop(
            [make_stream(["A", "B", "A", "C"])], kind_filter="A"
        )

        stats = loop.run(FilterSpec())

        assert len(display.lines) == 2
        assert all("[A]" in line for line in display.lines)
        assert stats.events == 4
        assert stats.matched == 2

    def test_message_filter(self):
        pages = [
            [
                make_raw_event(1, "VmEvent", "vm01 powered on"),
                make_raw_event(2, "VmEvent", "vm01 powered off"),
                make_raw_event(3, "HostEvent", "host powered on"),
            ]
        ]
        loop, _, display = make_loop(pages, message_filter="*powered on")

        loop.run(FilterSpec())

        assert [line.split(" ")[0] for line in display.lines] == ["1", "3"]

    def test_requests_configured_page_size(self):
        loop, source, _ = make_loop([make_stream(["A"])], page_size=7)

        loop.run(FilterSpec())

        assert source.collector.requests == [7, 7]

    def test_passes_filter_spec_to_source(self):
        spec = FilterSpec(event_types=("VmEvent",))
        loop, source, _ = make_loop([])

        loop.run(spec)

        assert source.specs == [spec]


class TestKindTracking:
    def test_kinds_recorded_regardless_of_visibility(self):
        """The kind catalog is the same with and without a message filter."""
        stream = [
            make_raw_event(1, "VmEvent", "vm01 on"),
            make_raw_event(2, "AlarmEvent", "alarm red"),
            make_raw_event(3, "UserLoginSessionEvent", "admin in"),
            make_raw_event(4, "VmEvent", "vm02 on"),
        ]
        unfiltered, _, _ = make_loop([list(stream)])
        filtered, _, display = make_loop([list(stream)], message_filter="*nothing*")

        unfiltered.run(FilterSpec())
        filtered.run(FilterSpec())

        assert display.lines == []
        assert filtered.state.kinds.snapshot() == unfiltered.state.kinds.snapshot()
        assert filtered.state.kinds.snapshot() == (
            "VmEvent",
            "AlarmEvent",
            "UserLoginSessionEvent",
        )

    def test_kind_filter_does_not_shrink_catalog(self):
        loop, _, _ = make_loop([make_stream(["A", "B", "C"])], kind_filter="B")

        stats = loop.run(FilterSpec())

        assert stats.kinds == 3

    def test_short_circuit_inside_loop(self):
        pattern = Mock(spec=MessagePattern)
        pattern.match.side_effect = AssertionError("pattern must not run")
        source = FakeEventSource([make_stream(["Y", "Y"])])
        loop = CollectionLoop(
            source,
            FilterConfig(kind_filter="X", message_filter="*boom*"),
            RecordingDisplay(),
            pattern=pattern,
        )

        stats = loop.run(FilterSpec())

        assert stats.matched == 0
        pattern.match.assert_not_called()


class TestAggregateModes:
    def test_summary_counts_all_processed_events(self):
        """7 events across 3 kinds."""
        pages = [
            make_stream(["A", "B", "A", "C"]),
            make_stream(["C", "A", "B"]),
        ]
        loop, _, display = make_loop(pages, mode="summary", kind_filter="A")

        loop.run(FilterSpec())

        assert display.lines == ["# Events: 7\n# Kinds:  3"]

    def test_summary_json(self):
        loop, _, display = make_loop(
            [make_stream(["A", "B", "A"])], mode="summary", format="json", kind_filter="A"
        )

        loop.run(FilterSpec())

        assert json.loads(display.lines[0]) == {"events": 3, "matched": 2, "kinds": 2}

    def test_kinds_rendered_once_at_end(self):
        pages = [make_stream(["A", "B"]), make_stream(["C", "A"])]
        loop, _, display = make_loop(pages, mode="kinds")

        loop.run(FilterSpec())

        assert display.lines == ["A, B, C"]

    def test_aggregate_modes_do_not_stream_events(self):
        loop, _, display = make_loop([make_stream(["A", "B"])], mode="summary")

        loop.run(FilterSpec())

        assert len(display.lines) == 1

    def test_empty_feed_still_renders_summary(self):
        loop, _, display = make_loop([], mode="summary")

        loop.run(FilterSpec())

        assert display.lines == ["# Events: 0\n# Kinds:  0"]

    def test_follow_kinds_refreshes_on_new_kinds(self):
        token = CancellationToken()
        pages = [make_stream(["A", "B"]), make_stream(["A"]), make_stream(["C"])]
        loop, _, display = make_loop(
            pages, on_exhausted=token.cancel, token=token, mode="kinds", follow=True
        )

        loop.run(FilterSpec())

        assert display.lines == ["A, B", "A, B, C"]

    def test_follow_summary_rendered_on_cancel(self):
        token = CancellationToken()
        loop, _, display = make_loop(
            [make_stream(["A", "B"])],
            on_exhausted=token.cancel,
            token=token,
            mode="summary",
            follow=True,
        )

        stats = loop.run(FilterSpec())

        assert stats.cancelled
        assert display.lines == ["# Events: 2\n# Kinds:  2"]


class TestTermination:
    def test_first_empty_page_ends_run_without_follow(self):
        wait = Mock(return_value=False)
        loop, source, _ = make_loop([[]], wait=wait)

        stats = loop.run(FilterSpec())

        assert len(source.collector.requests) == 1
        assert stats.pages == 1
        assert not stats.cancelled
        wait.assert_not_called()

    def test_follow_waits_and_retries(self):
        token = CancellationToken()
        wait = Mock(return_value=False)
        pages = [[], [], make_stream(["A"])]
        loop, source, display = make_loop(
            pages,
            on_exhausted=token.cancel,
            wait=wait,
            token=token,
            follow=True,
            poll_interval=0.25,
        )

        stats = loop.run(FilterSpec())

        assert wait.call_count >= 2
        wait.assert_called_with(0.25)
        assert len(display.lines) == 1
        assert stats.cancelled
        assert len(source.collector.requests) == 4

    def test_cancelled_before_start_never_fetches(self):
        token = CancellationToken()
        token.cancel()
        loop, source, _ = make_loop([make_stream(["A"])], token=token)

        stats = loop.run(FilterSpec())

        assert stats.cancelled
        assert source.collector.requests == []


class TestResourceRelease:
    """The collector is released exactly once on every exit path."""

    def test_normal_completion(self):
        loop, source, _ = make_loop([make_stream(["A"])])

        loop.run(FilterSpec())

        assert source.collector.release_calls == 1

    def test_fatal_fetch_error(self):
        loop, source, display = make_loop(
            [make_stream(["A"]), FetchError("connection reset")], mode="summary"
        )

        with pytest.raises(FetchError, match="connection reset"):
            loop.run(FilterSpec())

        assert source.collector.release_calls == 1
        assert display.lines == []

    def test_cancellation(self):
        token = CancellationToken()
        loop, source, _ = make_loop(
            [make_stream(["A"])], on_exhausted=token.cancel, token=token, follow=True
        )

        loop.run(FilterSpec())

        assert source.collector.release_calls == 1

    def test_keyboard_interrupt_during_fetch(self):
        loop, source, _ = make_loop([KeyboardInterrupt()], follow=True)

        stats = loop.run(FilterSpec())

        assert stats.cancelled
        assert loop.token.cancelled
        assert source.collector.release_calls == 1

    def test_unexpected_error(self):
        loop, source, _ = make_loop([RuntimeError("bug")])

        with pytest.raises(RuntimeError):
            loop.run(FilterSpec())

        assert source.collector.release_calls == 1


class TestTransientRetries:
    def test_transient_error_is_fatal_by_default(self):
        loop, source, _ = make_loop([TransientFetchError("timeout")])

        with pytest.raises(TransientFetchError):
            loop.run(FilterSpec())

        assert source.collector.release_calls == 1

    def test_retries_with_exponential_backoff(self):
        wait = Mock(return_value=False)
        pages = [
            TransientFetchError("timeout"),
            TransientFetchError("timeout"),
            make_stream(["A"]),
        ]
        loop, _, display = make_loop(
            pages, wait=wait, fetch_retries=2, retry_base_delay=0.5
        )

        stats = loop.run(FilterSpec())

        assert [c.args[0] for c in wait.call_args_list] == [0.5, 1.0]
        assert stats.events == 1
        assert len(display.lines) == 1

    def test_gives_up_after_retries(self):
        pages = [TransientFetchError("t1"), TransientFetchError("t2")]
        loop, source, _ = make_loop(pages, fetch_retries=1)

        with pytest.raises(TransientFetchError, match="t2"):
            loop.run(FilterSpec())

        assert source.collector.release_calls == 1

    def test_fatal_error_is_not_retried(self):
        loop, source, _ = make_loop([FetchError("denied")], fetch_retries=3)

        with pytest.raises(FetchError, match="denied"):
            loop.run(FilterSpec())

        assert len(source.collector.requests) == 1

    def test_cancel_during_backoff(self):
        wait = Mock(return_value=True)
        loop, source, _ = make_loop(
            [TransientFetchError("timeout")], wait=wait, fetch_retries=3
        )

        stats = loop.run(FilterSpec())

        assert stats.cancelled
        assert source.collector.release_calls == 1


class TestConfiguration:
    def test_bad_pattern_fails_before_collecting(self):
        source = FakeEventSource([make_stream(["A"])])

        with pytest.raises(InvalidPatternError):
            CollectionLoop(
                source, FilterConfig(message_filter="re:("), RecordingDisplay()
            )

        assert source.specs == []


class TestCancellationToken:
    def test_wait_returns_immediately_when_cancelled(self):
        token = CancellationToken()
        token.cancel()

        assert token.wait(10) is True

    def test_wait_times_out(self):
        assert CancellationToken().wait(0) is False

    def test_handle_signals_restores_handlers(self):
        import signal

        before = signal.getsignal(signal.SIGINT)
        token = CancellationToken()

        with token.handle_signals():
            assert signal.getsignal(signal.SIGINT) is not before

        assert signal.getsignal(signal.SIGINT) is before

    def test_signal_cancels(self):
        import os
        import signal
        import time

        token = CancellationToken()
        with token.handle_signals():
            os.kill(os.getpid(), signal.SIGTERM)
            for _ in range(100):
                if token.cancelled:
                    break
                time.sleep(0.01)

        assert token.cancelled
