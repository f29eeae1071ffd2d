"""Tests for event types."""

from datetime import datetime, timezone

import pytest

from evtail.core.events import AggregateState, EventRecord, RawEvent, format_created
from tests.builders import make_raw_event


class TestFormatCreated:
    def test_single_digit_day_is_space_padded(self):
        created = datetime(2024, 1, 2, 15, 4, 5, tzinfo=timezone.utc)

        assert format_created(created) == "Tue Jan  2 15:04:05 2024"

    def test_two_digit_day(self):
        created = datetime(2023, 11, 23, 9, 30, 0, tzinfo=timezone.utc)

        assert format_created(created) == "Thu Nov 23 09:30:00 2023"


class TestEventRecord:
    def test_from_raw(self):
        raw = make_raw_event(key=42, kind="VmPoweredOnEvent", message="vm01 on")

        record = EventRecord.from_raw(raw)

        assert record.key == 42
        assert record.kind == "VmPoweredOnEvent"
        assert record.message == "vm01 on"
        assert record.created_at == "Mon Jan  1 00:00:00 2024"
        assert record.visible is True

    def test_to_dict_hides_visible(self):
        record = EventRecord(key=1, created_at="x", kind="K", message="m")

        assert record.to_dict() == {
            "key": 1,
            "createdAt": "x",
            "kind": "K",
            "message": "m",
        }

    def test_to_dict_can_expose_visible(self):
        record = EventRecord(key=1, created_at="x", kind="K", message="m")
        record.visible = False

        assert record.to_dict(include_visible=True)["visible"] is False

    def test_visible_does_not_affect_equality(self):
        a = EventRecord(key=1, created_at="x", kind="K", message="m")
        b = EventRecord(key=1, created_at="x", kind="K", message="m", visible=False)

        assert a == b


class TestRawEvent:
    def test_is_frozen(self):
        raw = make_raw_event()

        with pytest.raises(AttributeError):
            raw.kind = "Other"

    def test_optional_fields_default_to_none(self):
        raw = RawEvent(
            key=1,
            created_time=datetime.now(timezone.utc),
            kind="K",
            message="m",
        )

        assert raw.entity is None
        assert raw.user is None


class TestAggregateState:
    def test_defaults(self):
        state = AggregateState()

        assert state.events == 0
        assert state.matched == 0
        assert len(state.kinds) == 0

    def test_instances_do_not_share_registry(self):
        first = AggregateState()
        first.kinds.add("A")

        assert len(AggregateState().kinds) == 0
