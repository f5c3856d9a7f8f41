"""Common enumerations used across the zone layout engine."""

from __future__ import annotations

from enum import Enum


class ZoneType(str, Enum):
    """Canonical zone types. Further types may be added through the constraint table."""

    HEADER = "header"
    CONTENT = "content"
    FOOTER = "footer"


class LayoutRole(str, Enum):
    """Whether a zone keeps its own size or absorbs the remaining page height."""

    FIXED = "fixed"
    FLEX = "flex"


class ZonePosition(str, Enum):
    """Vertical slot a zone type occupies on the page."""

    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class OverflowPolicy(str, Enum):
    """How content exceeding a zone is presented (not enforced by the resolver)."""

    HIDDEN = "hidden"
    AUTO = "auto"
    SCROLL = "scroll"
    VISIBLE = "visible"


class Severity(str, Enum):
    """Severity of user-facing messages."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class DragState(str, Enum):
    """Drag session lifecycle."""

    IDLE = "idle"
    DRAGGING = "dragging"


class ControlAction(str, Enum):
    """Actions offered by a zone's control panel."""

    SHRINK = "shrink"
    GROW = "grow"
    RESET = "reset"
