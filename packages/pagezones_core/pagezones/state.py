"""Process-wide UI state (edit mode) shared by zone interaction handlers."""

from __future__ import annotations

import copy
import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping

logger = logging.getLogger(__name__)

Subscriber = Callable[[Mapping[str, Any], Mapping[str, Any]], None]

_INITIAL_UI_STATE: Dict[str, Any] = {
    "edit_mode": False,
}


class UIStateStore:
    """Holds UI flags; read on every hover/interaction check."""

    def __init__(self, **initial: Any):
        self._state: Dict[str, Any] = {**_INITIAL_UI_STATE, **initial}
        self._subscribers: list = []

    def get_state(self) -> Mapping[str, Any]:
        """Read-only copy of the current state."""
        return MappingProxyType(copy.deepcopy(self._state))

    @property
    def edit_mode(self) -> bool:
        return bool(self._state.get("edit_mode"))

    def set_ui_state(self, **updates: Any) -> None:
        """Merge ``updates`` into the state and notify subscribers."""
        previous = self.get_state()
        self._state.update(updates)
        self._notify(previous)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def reset(self) -> None:
        previous = self.get_state()
        self._state = dict(_INITIAL_UI_STATE)
        self._notify(previous)

    def _notify(self, previous: Mapping[str, Any]) -> None:
        current = self.get_state()
        for callback in list(self._subscribers):
            try:
                callback(current, previous)
            except Exception:
                logger.warning("Error in state subscriber", exc_info=True)
