"""
Presentation adapter.

Applies zone markers, size hints and interactive affordances to the layout
surface. Everything here is idempotent: running it again on an initialized
page leaves the same attributes and never duplicates affordances.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional

from ..surface.base import LayoutSurface
from ..utils.enums import ControlAction
from ..utils.units import format_mm, parse_length
from .constraints import ConstraintProfile
from .zone import Zone

logger = logging.getLogger(__name__)

HEIGHT_ATTRIBUTE = "data-height"
DRAGGING_ATTRIBUTE = "data-dragging"

ZONE_CLASS = "zone"
EDITABLE_CLASS = "zone-editable"
HANDLE_CLASS = "zone-resize-handle"
CONTROLS_CLASS = "zone-controls"
READOUT_CLASS = "zone-height"

HANDLE_STYLE = {
    "position": "absolute",
    "bottom": "0",
    "left": "50%",
    "width": "40px",
    "height": "10px",
    "cursor": "ns-resize",
    "opacity": "0",
}

CONTROLS_STYLE = {
    "position": "absolute",
    "top": "10px",
    "right": "10px",
    "opacity": "0",
}

BUTTONS = (
    (ControlAction.SHRINK, "−", "Shrink zone"),
    (ControlAction.GROW, "+", "Grow zone"),
    (ControlAction.RESET, "⟲", "Reset to default"),
)


def format_readout(height_mm: float) -> str:
    """Rounded readout text, half-up like the control panel shows it."""
    return f"{int(math.floor(height_mm + 0.5))}mm"


def zone_css(profile: ConstraintProfile) -> Dict[str, Optional[str]]:
    """Base size hints for a zone with ``profile``."""
    styles: Dict[str, Optional[str]] = {
        "position": "relative",
        "width": "100%",
        "box-sizing": "border-box",
        "overflow": profile.overflow.value,
        "min-height": format_mm(profile.min_height) if profile.min_height is not None else None,
        "max-height": format_mm(profile.max_height) if profile.max_height is not None else None,
    }
    if profile.is_flex:
        styles.update({"flex": "1", "height": None, "flex-shrink": None})
    else:
        styles.update({"height": "auto", "flex-shrink": "0", "flex": None})
    return styles


def height_css(profile: ConstraintProfile, height_mm: float) -> Dict[str, Optional[str]]:
    """Size hints that commit ``height_mm``: flex zones are pinned via min/max."""
    value = format_mm(height_mm)
    if profile.is_flex:
        return {"min-height": value, "max-height": value}
    return {"height": value}


class ZonePresentation:
    """Writes zone presentation attributes to a layout surface."""

    def __init__(self, surface: LayoutSurface):
        self.surface = surface

    def apply_zone_attributes(self, element: Any, zone_id: str, zone_type: str,
                              profile: ConstraintProfile) -> None:
        """Mark ``element`` as a zone and apply its size hints.

        A height committed earlier (``data-height``) is re-applied on top of the
        base hints so re-running discovery keeps resized zones as they are.
        """
        surface = self.surface
        surface.add_class(element, ZONE_CLASS, f"zone-{zone_type}")
        if not surface.element_id(element):
            surface.set_attribute(element, "id", zone_id)

        if profile.adjustable:
            surface.set_attribute(element, "data-adjustable", "height")
            surface.set_attribute(
                element, "data-min-height",
                format_mm(profile.min_height) if profile.min_height is not None else None
            )
            surface.set_attribute(
                element, "data-max-height",
                format_mm(profile.max_height) if profile.max_height is not None else None
            )

        styles = zone_css(profile)
        committed = self.committed_height(element)
        if committed is not None and profile.adjustable:
            styles.update(height_css(profile, committed))
        surface.set_style(element, styles)

    def committed_height(self, element: Any) -> Optional[float]:
        parsed = parse_length(self.surface.get_attribute(element, HEIGHT_ATTRIBUTE))
        if parsed is None or parsed[1] != "mm":
            return None
        return parsed[0]

    def apply_height(self, zone: Zone) -> None:
        """Reflect ``zone.current_height`` on its element and readout."""
        element = zone.element
        self.surface.set_style(element, height_css(zone.constraints, zone.current_height))
        self.surface.set_attribute(element, HEIGHT_ATTRIBUTE, format_mm(zone.current_height))
        self.update_readout(zone)

    def update_readout(self, zone: Zone) -> None:
        readout = self.surface.find_child(zone.element, READOUT_CLASS)
        if readout is not None:
            self.surface.set_text(readout, format_readout(zone.current_height))

    # -- affordances -------------------------------------------------------

    def install_affordances(self, zone: Zone) -> bool:
        """Insert the resize handle and control panel once; returns True if anything was added."""
        if not zone.adjustable:
            return False

        added = False
        surface = self.surface
        if self.handle(zone) is None:
            handle = surface.append_child(zone.element, "div", HANDLE_CLASS)
            surface.set_style(handle, HANDLE_STYLE)
            surface.set_attribute(handle, DRAGGING_ATTRIBUTE, "false")
            added = True

        if self.controls(zone) is None:
            controls = surface.append_child(zone.element, "div", CONTROLS_CLASS)
            surface.set_style(controls, CONTROLS_STYLE)
            panel = surface.append_child(controls, "div", "zone-control-panel")
            info = surface.append_child(panel, "div", "zone-info")
            surface.append_child(info, "span", "zone-label", zone.type.upper())
            surface.append_child(info, "span", READOUT_CLASS, format_readout(zone.current_height))
            buttons = surface.append_child(panel, "div", "zone-buttons")
            for action, label, title in BUTTONS:
                surface.append_child(
                    buttons, "button", f"zone-btn zone-btn-{action.value}", label,
                    {"title": title, "data-action": action.value},
                )
            added = True

        if added:
            logger.debug(f"Installed affordances for zone {zone.id}")
        return added

    def handle(self, zone: Zone) -> Optional[Any]:
        return self.surface.find_child(zone.element, HANDLE_CLASS)

    def controls(self, zone: Zone) -> Optional[Any]:
        return self.surface.find_child(zone.element, CONTROLS_CLASS)

    def set_editable(self, zone: Zone, editable: bool) -> None:
        if editable:
            self.surface.add_class(zone.element, EDITABLE_CLASS)
        else:
            self.surface.remove_class(zone.element, EDITABLE_CLASS)

    def show_affordances(self, zone: Zone) -> None:
        handle, controls = self.handle(zone), self.controls(zone)
        if handle is not None:
            self.surface.set_style(handle, {"opacity": "0.8"})
        if controls is not None:
            self.surface.set_style(controls, {"opacity": "1"})

    def hide_affordances(self, zone: Zone, force: bool = False) -> None:
        """Hide affordances; the handle stays visible during a drag unless ``force``."""
        handle, controls = self.handle(zone), self.controls(zone)
        if controls is not None:
            self.surface.set_style(controls, {"opacity": "0"})
        if handle is not None and (force or not self.is_dragging(zone)):
            self.surface.set_style(handle, {"opacity": "0"})

    def set_dragging(self, zone: Zone, dragging: bool) -> None:
        handle = self.handle(zone)
        if handle is None:
            return
        self.surface.set_attribute(handle, DRAGGING_ATTRIBUTE, "true" if dragging else "false")
        self.surface.set_style(handle, {"opacity": "1" if dragging else "0"})

    def is_dragging(self, zone: Zone) -> bool:
        handle = self.handle(zone)
        return handle is not None and self.surface.get_attribute(handle, DRAGGING_ATTRIBUTE) == "true"
