"""Zone layout engine: constraints, discovery, resolution, interaction and validation."""

from .constraints import (
    ConstraintProfile,
    DEFAULT_ZONE_CONSTRAINTS,
    PAGE_HEIGHT_MM,
    PAGE_WIDTH_MM,
    ZONE_ORDER,
    build_constraint_table,
    zone_sort_key,
)
from .zone import Zone, ZoneSnapshot
from .resolver import HeightResolution, HeightResolver
from .presentation import ZonePresentation
from .discovery import ZoneDiscovery
from .layout_validator import ValidationResult, ZoneLayoutValidator
from .interaction import DragSession, ZoneInteraction
from .zone_engine import ZoneLayoutEngine, PAGE_BOUNDARY_MESSAGE

__all__ = [
    "ConstraintProfile",
    "DEFAULT_ZONE_CONSTRAINTS",
    "PAGE_HEIGHT_MM",
    "PAGE_WIDTH_MM",
    "ZONE_ORDER",
    "build_constraint_table",
    "zone_sort_key",
    "Zone",
    "ZoneSnapshot",
    "HeightResolution",
    "HeightResolver",
    "ZonePresentation",
    "ZoneDiscovery",
    "ValidationResult",
    "ZoneLayoutValidator",
    "DragSession",
    "ZoneInteraction",
    "ZoneLayoutEngine",
    "PAGE_BOUNDARY_MESSAGE",
]
