"""
Tests for the event channel, UI state store and error reporter.
"""

import logging
from unittest.mock import Mock

import pytest

from pagezones import ErrorReporter, EventChannel, UIStateStore
from pagezones.events import ZONE_ADJUSTED, ZONE_EDIT_MODE_ENABLED, ZONE_RESET
from pagezones.exceptions import UnknownZoneTypeError, ZoneLayoutError
from pagezones.utils.enums import Severity


class TestEventChannel:
    """Test cases for EventChannel."""

    def test_emit_delivers_and_queues(self):
        channel = EventChannel()
        listener = Mock()
        channel.on(ZONE_ADJUSTED, listener)

        event = channel.emit(ZONE_ADJUSTED, {"zone_id": "z", "height": 190})

        listener.assert_called_once_with({"zone_id": "z", "height": 190})
        assert channel.events == [event]

    def test_listeners_only_receive_their_event(self):
        channel = EventChannel()
        listener = Mock()
        channel.on(ZONE_RESET, listener)

        channel.emit(ZONE_ADJUSTED, {})

        listener.assert_not_called()

    def test_unsubscribe(self):
        channel = EventChannel()
        listener = Mock()
        unsubscribe = channel.on(ZONE_ADJUSTED, listener)

        unsubscribe()
        channel.emit(ZONE_ADJUSTED, {})

        listener.assert_not_called()
        assert channel.listener_count(ZONE_ADJUSTED) == 0

    def test_same_listener_registered_once(self):
        channel = EventChannel()
        listener = Mock()
        channel.on(ZONE_ADJUSTED, listener)
        channel.on(ZONE_ADJUSTED, listener)

        channel.emit(ZONE_ADJUSTED, {})

        assert listener.call_count == 1

    def test_once(self):
        channel = EventChannel()
        listener = Mock()
        channel.once(ZONE_RESET, listener)

        channel.emit(ZONE_RESET, {"n": 1})
        channel.emit(ZONE_RESET, {"n": 2})

        listener.assert_called_once_with({"n": 1})

    def test_failing_listener_does_not_stop_delivery(self, caplog):
        channel = EventChannel()
        failing = Mock(side_effect=RuntimeError("boom"))
        healthy = Mock()
        channel.on(ZONE_ADJUSTED, failing)
        channel.on(ZONE_ADJUSTED, healthy)

        with caplog.at_level(logging.WARNING):
            channel.emit(ZONE_ADJUSTED, {})

        healthy.assert_called_once()
        assert "zone:adjusted" in caplog.text

    def test_queue_is_bounded(self):
        channel = EventChannel(max_queue=2)

        for n in range(3):
            channel.emit(ZONE_ADJUSTED, {"n": n})

        assert [event.payload["n"] for event in channel.events] == [1, 2]

    def test_drain_and_clear(self):
        channel = EventChannel()
        channel.on(ZONE_ADJUSTED, Mock())
        channel.on(ZONE_RESET, Mock())
        channel.emit(ZONE_ADJUSTED, {})

        assert len(channel.drain()) == 1
        assert channel.events == []

        channel.clear(ZONE_ADJUSTED)
        assert channel.listener_count(ZONE_ADJUSTED) == 0
        assert channel.listener_count(ZONE_RESET) == 1
        channel.clear()
        assert channel.listener_count(ZONE_RESET) == 0

    def test_payload_is_copied(self):
        channel = EventChannel()
        payload = {"zone_id": "z"}

        event = channel.emit(ZONE_ADJUSTED, payload)
        payload["zone_id"] = "changed"

        assert event.payload == {"zone_id": "z"}


class TestUIStateStore:
    """Test cases for UIStateStore."""

    def test_initial_state(self):
        store = UIStateStore()

        assert store.edit_mode is False
        assert store.get_state()["edit_mode"] is False

    def test_set_state_notifies(self):
        store = UIStateStore()
        subscriber = Mock()
        store.subscribe(subscriber)

        store.set_ui_state(edit_mode=True)

        assert store.edit_mode is True
        current, previous = subscriber.call_args.args
        assert current["edit_mode"] is True
        assert previous["edit_mode"] is False

    def test_state_is_read_only(self):
        store = UIStateStore(panels=["zones"])
        state = store.get_state()

        with pytest.raises(TypeError):
            state["edit_mode"] = True
        state["panels"].append("other")

        assert store.get_state()["panels"] == ["zones"]

    def test_unsubscribe_and_reset(self):
        store = UIStateStore(edit_mode=True)
        subscriber = Mock()
        unsubscribe = store.subscribe(subscriber)

        unsubscribe()
        store.reset()

        subscriber.assert_not_called()
        assert store.edit_mode is False

    def test_failing_subscriber_is_logged(self, caplog):
        store = UIStateStore()
        store.subscribe(Mock(side_effect=ValueError("bad")))
        healthy = Mock()
        store.subscribe(healthy)

        with caplog.at_level(logging.WARNING):
            store.set_ui_state(edit_mode=True)

        healthy.assert_called_once()
        assert "state subscriber" in caplog.text

    def test_engine_edit_mode(self, engine, page):
        listener = Mock()
        engine.events.on(ZONE_EDIT_MODE_ENABLED, listener)

        engine.enable_edit_mode(page)

        assert engine.state.edit_mode is True
        listener.assert_called_once_with({"zones": ["page-header", "page-content", "page-footer"]})
        content = engine.find_zone(page, "page-content")
        header = engine.find_zone(page, "page-header")
        assert engine.surface.has_class(content.element, "zone-editable")
        assert not engine.surface.has_class(header.element, "zone-editable")

        engine.disable_edit_mode(page)

        assert engine.state.edit_mode is False
        assert not engine.surface.has_class(content.element, "zone-editable")


class TestErrorReporter:
    """Test cases for ErrorReporter."""

    def test_log_error(self, caplog):
        reporter = ErrorReporter()

        with caplog.at_level(logging.ERROR):
            record = reporter.log_error(UnknownZoneTypeError("aside", "a1"), "ZoneDiscovery.detect_zones")

        assert record.message == "Unknown zone type: aside: element id=a1"
        assert record.error_type == "UnknownZoneTypeError"
        assert reporter.errors == [record]
        assert reporter.user_messages == []
        assert "[ZoneDiscovery.detect_zones]" in caplog.text
        assert record.to_dict()["context"] == "ZoneDiscovery.detect_zones"

    def test_log_error_with_user_message(self):
        reporter = ErrorReporter()

        reporter.log_error(RuntimeError(), "ctx", user_message="Something went wrong")

        assert reporter.errors[0].message == "RuntimeError"
        assert reporter.last_message.message == "Something went wrong"
        assert reporter.last_message.severity == Severity.ERROR

    @pytest.mark.parametrize("method,severity", [
        ("show_error", Severity.ERROR),
        ("show_success", Severity.SUCCESS),
        ("show_info", Severity.INFO),
    ])
    def test_shortcuts(self, method, severity):
        reporter = ErrorReporter()

        getattr(reporter, method)("hello")

        assert reporter.last_message.severity == severity

    def test_show_user_error_accepts_strings(self):
        reporter = ErrorReporter()

        message = reporter.show_user_error("careful", "warning")

        assert message.severity is Severity.WARNING
        with pytest.raises(ValueError):
            reporter.show_user_error("nope", "fatal")

    def test_bounded_and_clear(self):
        reporter = ErrorReporter(max_records=2)
        for n in range(3):
            reporter.show_info(f"m{n}")

        assert [entry.message for entry in reporter.user_messages] == ["m1", "m2"]
        reporter.clear()
        assert reporter.last_message is None

    def test_exception_str(self):
        assert str(ZoneLayoutError("Failed")) == "Failed"
        assert str(ZoneLayoutError("Failed", "detail")) == "Failed: detail"
        assert UnknownZoneTypeError("aside").details is None
