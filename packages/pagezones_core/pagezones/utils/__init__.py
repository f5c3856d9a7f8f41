"""
Utils module for page zone utilities.
"""

from .units import UnitsConverter, PX_PER_MM, MM_DECIMALS, parse_length, format_mm, floor_mm
from .logger import get_logger, setup_logging
from .enums import (
    ZoneType,
    LayoutRole,
    ZonePosition,
    OverflowPolicy,
    Severity,
    DragState,
    ControlAction,
)

__all__ = [
    "UnitsConverter",
    "PX_PER_MM",
    "parse_length",
    "MM_DECIMALS",
    "format_mm",
    "floor_mm",
    "get_logger",
    "setup_logging",
    "ZoneType",
    "LayoutRole",
    "ZonePosition",
    "OverflowPolicy",
    "Severity",
    "DragState",
    "ControlAction",
]
