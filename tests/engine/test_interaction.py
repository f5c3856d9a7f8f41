"""Tests for drag sessions, control actions and hover feedback."""

from unittest.mock import Mock

import pytest

from pagezones.engine.interaction import DragSession
from pagezones.events import ZONE_ADJUSTED, ZONE_EDIT_MODE_DISABLED, ZONE_RESET
from pagezones.exceptions import DragSessionError
from pagezones.utils.enums import DragState
from pagezones.utils.units import PX_PER_MM


@pytest.fixture
def editing(engine, page, zones):
    """Standard page with edit mode on; yields zones keyed by type."""
    engine.enable_edit_mode(page)
    engine.events.drain()
    return zones


class TestDragSession:
    """Test suite for pointer-drag resizing."""

    def test_drag_follows_total_pointer_displacement(self, engine, editing):
        content = editing["content"]
        interaction = engine.interaction

        session = interaction.pointer_down(content, 100.0)
        assert session is not None
        assert session.state == DragState.DRAGGING

        interaction.pointer_move(100.0 + 10 * PX_PER_MM)
        assert content.current_height == pytest.approx(190)

        # Each move resolves from the start height, not the previous move.
        interaction.pointer_move(100.0 + 5 * PX_PER_MM)
        assert content.current_height == pytest.approx(185)

        interaction.pointer_move(100.0 - 50 * PX_PER_MM)
        assert content.current_height == pytest.approx(150)

    def test_drag_is_fitted_to_the_page(self, engine, editing):
        content = editing["content"]
        interaction = engine.interaction

        interaction.pointer_down(content, 0.0)
        interaction.pointer_move(100 * PX_PER_MM)

        assert content.current_height == pytest.approx(197)

    def test_pointer_up_emits_final_height(self, engine, editing):
        content = editing["content"]
        interaction = engine.interaction

        interaction.pointer_down(content, 0.0)
        interaction.pointer_move(8 * PX_PER_MM)
        events = interaction.pointer_up()

        assert len(events) == 1
        assert events[0].name == ZONE_ADJUSTED
        assert events[0].payload["zone_id"] == "page-content"
        assert events[0].payload["type"] == "content"
        assert events[0].payload["height"] == pytest.approx(188)
        assert "adjustment" not in events[0].payload
        assert engine.events.events == events

    def test_listener_removed_after_pointer_up(self, engine, editing):
        interaction = engine.interaction
        content = editing["content"]

        session = interaction.pointer_down(content, 0.0)
        assert interaction.active_listener_count == 1
        assert interaction.active_session(content) is session

        interaction.pointer_up()

        assert interaction.active_listener_count == 0
        assert interaction.active_session(content) is None
        assert session.state == DragState.IDLE

        # Moves after the drag ended change nothing.
        interaction.pointer_move(40 * PX_PER_MM)
        assert content.current_height == pytest.approx(180)

    def test_context_manager_ends_drag_on_exception(self, engine, editing):
        interaction = engine.interaction
        content = editing["content"]

        with pytest.raises(RuntimeError):
            with interaction.pointer_down(content, 0.0) as session:
                session.move(5 * PX_PER_MM)
                raise RuntimeError("pointer lost")

        assert session.state == DragState.IDLE
        assert interaction.active_listener_count == 0
        assert not engine.presentation.is_dragging(content)
        assert content.current_height == pytest.approx(185)
        assert [event.name for event in engine.events.events] == [ZONE_ADJUSTED]

    def test_handle_marked_while_dragging(self, engine, editing):
        content = editing["content"]
        handle = engine.presentation.handle(content)

        engine.interaction.pointer_down(content, 0.0)
        assert engine.surface.get_attribute(handle, "data-dragging") == "true"
        assert engine.surface.get_style(handle)["opacity"] == "1"

        engine.interaction.pointer_up()
        assert engine.surface.get_attribute(handle, "data-dragging") == "false"
        assert engine.surface.get_style(handle)["opacity"] == "0"

    def test_no_drag_outside_edit_mode(self, engine, zones):
        assert engine.interaction.pointer_down(zones["content"], 0.0) is None
        assert engine.interaction.active_listener_count == 0

    def test_no_drag_on_fixed_zone(self, engine, editing):
        assert engine.interaction.pointer_down(editing["header"], 0.0) is None

    def test_second_pointer_down_ignored(self, engine, editing):
        content = editing["content"]

        first = engine.interaction.pointer_down(content, 0.0)
        second = engine.interaction.pointer_down(content, 50.0)

        assert first is not None
        assert second is None
        assert engine.interaction.active_listener_count == 1

    def test_begin_twice_raises(self, engine, editing):
        session = DragSession(engine, editing["footer"])
        session.begin(0.0)

        with pytest.raises(DragSessionError):
            session.begin(10.0)

    def test_end_when_idle_is_noop(self, engine, editing):
        session = DragSession(engine, editing["footer"])

        assert session.end() is None
        assert session.move(10.0) is False
        assert engine.events.events == []

    def test_disable_edit_mode_ends_active_drag(self, engine, page, editing):
        content = editing["content"]
        engine.interaction.pointer_down(content, 0.0)

        engine.disable_edit_mode(page)

        assert engine.interaction.active_listener_count == 0
        names = [event.name for event in engine.events.events]
        assert names == [ZONE_ADJUSTED, ZONE_EDIT_MODE_DISABLED]
        assert not engine.presentation.is_dragging(content)

    def test_failed_move_ends_session(self, engine, editing, monkeypatch):
        content = editing["content"]
        session = engine.interaction.pointer_down(content, 0.0)
        monkeypatch.setattr(engine, "set_zone_height", Mock(side_effect=RuntimeError("surface detached")))

        with pytest.raises(RuntimeError):
            engine.interaction.pointer_move(10 * PX_PER_MM)

        assert session.state == DragState.IDLE
        assert engine.interaction.active_listener_count == 0
        assert engine.interaction.active_session(content) is None
        assert not engine.presentation.is_dragging(content)

    def test_fractional_drag_reads_back_exactly(self, engine, page, editing):
        content = editing["content"]

        engine.interaction.pointer_down(content, 0.0)
        engine.interaction.pointer_move(13.0)
        engine.interaction.pointer_up()

        assert content.current_height == pytest.approx(180 + 13.0 / PX_PER_MM, abs=1e-4)
        assert engine.find_zone(page, "page-content").current_height == content.current_height

    def test_drag_fitted_to_page_stays_within_budget(self, engine, page_factory):
        page = page_factory([
            ("header", 233 / PX_PER_MM, "h"),
            ("content", 180.0, "c"),
            ("footer", 41.37, "f"),
        ])
        content = {zone.type: zone for zone in engine.initialize_zones(page)}["content"]
        engine.enable_edit_mode(page)

        engine.interaction.pointer_down(content, 0.0)
        engine.interaction.pointer_move(60 * PX_PER_MM + 0.5)
        engine.interaction.pointer_up()

        assert engine.calculate_total_page_height(page) <= 297
        assert engine.validate_page_layout(page).valid
        assert engine.find_zone(page, "c").current_height == content.current_height


class TestControlActions:
    """Test suite for the shrink/grow/reset control panel."""

    def test_shrink_and_grow_by_step(self, engine, editing):
        content = editing["content"]

        assert engine.interaction.on_control_action(content, "shrink")
        assert content.current_height == pytest.approx(170)

        assert engine.interaction.on_control_action(content, "grow")
        assert engine.interaction.on_control_action(content, "grow")
        assert content.current_height == pytest.approx(190)

        adjustments = [event.payload["adjustment"] for event in engine.events.events]
        assert adjustments == [-10, 10, 10]

    def test_grow_beyond_budget_is_fitted(self, engine, editing):
        content = editing["content"]
        engine.set_zone_height(content, 195)

        engine.interaction.on_control_action(content, "grow")

        assert content.current_height == pytest.approx(197)

    def test_reset_actions(self, engine, editing):
        content, footer = editing["content"], editing["footer"]

        engine.interaction.on_control_action(content, "reset")
        engine.interaction.on_control_action(footer, "reset")

        assert content.current_height == pytest.approx(150)
        assert footer.current_height == pytest.approx(50)
        assert [event.name for event in engine.events.events] == [ZONE_RESET, ZONE_RESET]

    def test_ignored_outside_edit_mode(self, engine, zones):
        content = zones["content"]

        assert engine.interaction.on_control_action(content, "grow") is False
        assert content.current_height == pytest.approx(180)

    def test_custom_step(self, page_factory):
        from pagezones import EngineConfig, ZoneLayoutEngine

        engine = ZoneLayoutEngine(config=EngineConfig(adjust_step_mm=2.5))
        page = page_factory()
        content = {zone.type: zone for zone in engine.initialize_zones(page)}["content"]
        engine.enable_edit_mode(page)

        engine.interaction.on_control_action(content, "shrink")

        assert content.current_height == pytest.approx(177.5)

    def test_unknown_action(self, engine, editing):
        with pytest.raises(ValueError):
            engine.interaction.on_control_action(editing["content"], "explode")


class TestHover:
    """Test suite for hover feedback."""

    def _opacity(self, engine, element):
        return engine.surface.get_style(element)["opacity"]

    def test_hover_shows_and_hides_affordances(self, engine, editing):
        content = editing["content"]
        handle = engine.presentation.handle(content)
        controls = engine.presentation.controls(content)

        engine.interaction.hover_enter(content)
        assert self._opacity(engine, handle) == "0.8"
        assert self._opacity(engine, controls) == "1"

        engine.interaction.hover_leave(content)
        assert self._opacity(engine, handle) == "0"
        assert self._opacity(engine, controls) == "0"

    def test_handle_stays_visible_while_dragging(self, engine, editing):
        content = editing["content"]
        handle = engine.presentation.handle(content)

        engine.interaction.pointer_down(content, 0.0)
        engine.interaction.hover_leave(content)

        assert self._opacity(engine, handle) == "1"
        assert self._opacity(engine, engine.presentation.controls(content)) == "0"

    def test_no_hover_feedback_outside_edit_mode(self, engine, zones):
        content = zones["content"]

        engine.interaction.hover_enter(content)

        assert self._opacity(engine, engine.presentation.handle(content)) == "0"

    def test_fixed_zone_has_no_affordances(self, engine, editing):
        header = editing["header"]

        engine.interaction.hover_enter(header)

        assert engine.presentation.handle(header) is None
        assert engine.presentation.controls(header) is None
