"""
pagezones - fixed-height page layout with resizable header/content/footer zones.

Zones are discovered from marked regions of a page, sized within per-type
constraints and a whole-page height budget (A4, 297mm), resized interactively
through drag and control-panel actions, audited for structural problems and
serialized to a replayable snapshot.

Quick Start:
    from pagezones import ZoneLayoutEngine, load_page, page_to_html

    page = load_page(html)
    engine = ZoneLayoutEngine()
    zones = engine.initialize_zones(page)
    engine.set_zone_height(zones[1], 200)
    print(engine.validate_page_layout(page).warnings)
"""

from .version import __version__, __version_info__

from .engine import (
    ConstraintProfile,
    DEFAULT_ZONE_CONSTRAINTS,
    PAGE_HEIGHT_MM,
    PAGE_WIDTH_MM,
    DragSession,
    HeightResolution,
    HeightResolver,
    ValidationResult,
    Zone,
    ZoneInteraction,
    ZoneLayoutEngine,
    ZoneSnapshot,
)
from .config import EngineConfig, load_config
from .errors import ErrorReporter, UserMessage
from .events import EventChannel, ZoneEvent
from .exceptions import (
    ZoneLayoutError,
    UnknownZoneTypeError,
    ConfigurationError,
    SnapshotError,
    SurfaceError,
    DragSessionError,
)
from .state import UIStateStore
from .surface import HtmlLayoutSurface, LayoutSurface, load_page, page_to_html

__all__ = [
    "__version__",
    "__version_info__",
    "ConstraintProfile",
    "DEFAULT_ZONE_CONSTRAINTS",
    "PAGE_HEIGHT_MM",
    "PAGE_WIDTH_MM",
    "DragSession",
    "HeightResolution",
    "HeightResolver",
    "ValidationResult",
    "Zone",
    "ZoneInteraction",
    "ZoneLayoutEngine",
    "ZoneSnapshot",
    "EngineConfig",
    "load_config",
    "ErrorReporter",
    "UserMessage",
    "EventChannel",
    "ZoneEvent",
    "ZoneLayoutError",
    "UnknownZoneTypeError",
    "ConfigurationError",
    "SnapshotError",
    "SurfaceError",
    "DragSessionError",
    "UIStateStore",
    "HtmlLayoutSurface",
    "LayoutSurface",
    "load_page",
    "page_to_html",
]
