"""
Zone interaction: drag resize, control panel actions and hover feedback.

A drag is an explicit ``DragSession`` (idle -> dragging -> idle). While a
session is dragging it is registered as a global pointer listener on the
``ZoneInteraction``; ending the session, by pointer-up or by leaving its
``with`` block on an exception, always removes that registration.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Union

from ..events import ZONE_ADJUSTED, ZoneEvent
from ..exceptions import DragSessionError
from ..utils.enums import ControlAction, DragState
from .zone import Zone

if TYPE_CHECKING:
    from .zone_engine import ZoneLayoutEngine

logger = logging.getLogger(__name__)


class DragSession:
    """One pointer-drag resize of one zone."""

    def __init__(self, engine: "ZoneLayoutEngine", zone: Zone,
                 on_end: Optional[Callable[["DragSession"], None]] = None):
        self.engine = engine
        self.zone = zone
        self.on_end = on_end
        self.state = DragState.IDLE
        self.start_y: float = 0.0
        self.start_height: float = zone.current_height
        self.last_y: Optional[float] = None

    @property
    def dragging(self) -> bool:
        return self.state == DragState.DRAGGING

    def begin(self, pointer_y: float) -> None:
        """Capture the starting pointer coordinate (px) and height."""
        if self.dragging:
            raise DragSessionError("Drag session already active", self.zone.id)
        self.start_y = pointer_y
        self.last_y = pointer_y
        self.start_height = self.zone.current_height
        self.state = DragState.DRAGGING
        self.engine.presentation.set_dragging(self.zone, True)
        logger.debug(f"Drag started on zone {self.zone.id} at y={pointer_y}")

    def move(self, pointer_y: float) -> bool:
        """Re-resolve from the start height plus the total pointer displacement."""
        if not self.dragging:
            return False
        self.last_y = pointer_y
        delta_mm = self.engine.surface.units.px_to_mm(pointer_y - self.start_y)
        return self.engine.set_zone_height(self.zone, self.start_height + delta_mm)

    def end(self) -> Optional[ZoneEvent]:
        """Finish the drag and broadcast the final height; a no-op when idle."""
        if not self.dragging:
            return None
        self.state = DragState.IDLE
        try:
            self.engine.presentation.set_dragging(self.zone, False)
            return self.engine.events.emit(ZONE_ADJUSTED, {
                "zone_id": self.zone.id,
                "type": self.zone.type,
                "height": self.zone.current_height,
            })
        finally:
            if self.on_end is not None:
                self.on_end(self)
            logger.debug(f"Drag ended on zone {self.zone.id} at {self.zone.current_height:.2f}mm")

    def __enter__(self) -> "DragSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.end()


class ZoneInteraction:
    """Routes pointer and control events to the engine; gated by edit mode."""

    def __init__(self, engine: "ZoneLayoutEngine"):
        self.engine = engine
        self._sessions: Dict[str, DragSession] = {}
        self._pointer_listeners: List[DragSession] = []

    @property
    def edit_mode(self) -> bool:
        return self.engine.state.edit_mode

    @property
    def active_listener_count(self) -> int:
        return len(self._pointer_listeners)

    def active_session(self, zone: Zone) -> Optional[DragSession]:
        return self._sessions.get(zone.id)

    # -- drag --------------------------------------------------------------

    def pointer_down(self, zone: Zone, pointer_y: float) -> Optional[DragSession]:
        """
        Start a drag on ``zone``'s resize handle.

        Returns:
            The new session, or None when edit mode is off, the zone is not
            adjustable, or a drag is already active on it
        """
        if not self.edit_mode or not zone.adjustable:
            return None
        if zone.id in self._sessions or self.engine.presentation.is_dragging(zone):
            logger.debug(f"Drag already active on zone {zone.id}")
            return None

        session = DragSession(self.engine, zone, on_end=self._detach)
        session.begin(pointer_y)
        self._sessions[zone.id] = session
        self._pointer_listeners.append(session)
        return session

    def pointer_move(self, pointer_y: float) -> None:
        """Dispatch a move to every active drag; a session whose move fails is ended."""
        for session in list(self._pointer_listeners):
            try:
                session.move(pointer_y)
            except Exception:
                logger.warning(f"Drag on zone {session.zone.id} failed; ending session")
                session.end()
                raise

    def pointer_up(self) -> List[ZoneEvent]:
        """End every active drag; returns the broadcast events."""
        events = []
        for session in list(self._pointer_listeners):
            event = session.end()
            if event is not None:
                events.append(event)
        return events

    def end_all(self) -> None:
        for session in list(self._pointer_listeners):
            session.end()

    def _detach(self, session: DragSession) -> None:
        if session in self._pointer_listeners:
            self._pointer_listeners.remove(session)
        if self._sessions.get(session.zone.id) is session:
            del self._sessions[session.zone.id]

    # -- controls ----------------------------------------------------------

    def on_control_action(self, zone: Zone, action: Union[ControlAction, str]) -> bool:
        """Handle a shrink/grow/reset click; ignored outside edit mode."""
        if not self.edit_mode:
            return False

        action = ControlAction(action)
        step = self.engine.config.adjust_step_mm
        if action == ControlAction.SHRINK:
            return self.engine.adjust_zone_height(zone, -step)
        if action == ControlAction.GROW:
            return self.engine.adjust_zone_height(zone, step)
        return self.engine.reset_zone_height(zone)

    # -- hover -------------------------------------------------------------

    def hover_enter(self, zone: Zone) -> None:
        if self.edit_mode and zone.adjustable:
            self.engine.presentation.show_affordances(zone)

    def hover_leave(self, zone: Zone) -> None:
        self.engine.presentation.hide_affordances(zone)
