"""
Units converter for page zones.

Handles pixel/millimeter conversion at the fixed device factor used by the
layout engine (96 DPI, 1mm ~ 3.78px) and CSS length parsing/formatting.
"""

from typing import Dict, Optional, Union
import logging
import math
import re

logger = logging.getLogger(__name__)

PX_PER_MM = 3.78
MM_PER_INCH = 25.4

# Decimal places kept when a millimeter length is written to a surface.
MM_DECIMALS = 4

_LENGTH_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?|-?\.\d+)\s*(mm|px|cm|in|pt)?\s*$", re.IGNORECASE)


class UnitsConverter:
    """
    Converts between pixels and millimeters.

    The factor is fixed per converter so discovery, drag deltas and
    position reads all agree on the same device scale.
    """

    def __init__(self, px_per_mm: float = PX_PER_MM):
        """
        Initialize units converter.

        Args:
            px_per_mm: Pixels per millimeter
        """
        if not isinstance(px_per_mm, (int, float)) or px_per_mm <= 0:
            raise ValueError("px_per_mm must be a positive number")
        self.px_per_mm = float(px_per_mm)
        self.conversion_factors = {
            'mm_per_cm': 10.0,
            'mm_per_in': MM_PER_INCH,
            'mm_per_pt': MM_PER_INCH / 72.0,
        }
        logger.debug(f"Units converter initialized with {self.px_per_mm} px/mm")

    @property
    def dpi(self) -> float:
        """Equivalent dots per inch."""
        return self.px_per_mm * MM_PER_INCH

    def px_to_mm(self, pixel_value: float) -> float:
        """
        Convert pixels to millimeters.

        Args:
            pixel_value: Pixels value to convert

        Returns:
            Millimeters value
        """
        if not isinstance(pixel_value, (int, float)):
            raise ValueError("Pixel value must be a number")
        return pixel_value / self.px_per_mm

    def mm_to_px(self, mm_value: float) -> float:
        """
        Convert millimeters to pixels.

        Args:
            mm_value: Millimeters value to convert

        Returns:
            Pixels value
        """
        if not isinstance(mm_value, (int, float)):
            raise ValueError("Millimeters value must be a number")
        return mm_value * self.px_per_mm

    def length_to_px(self, value: Optional[str]) -> Optional[float]:
        """
        Convert a CSS length (``"12mm"``, ``"40px"``, ``"3"``) to pixels.

        Unitless numbers are treated as pixels. Returns None for ``auto``,
        empty or unparseable values.
        """
        parsed = parse_length(value)
        if parsed is None:
            return None
        number, unit = parsed
        if unit == 'px':
            return number
        if unit == 'mm':
            return self.mm_to_px(number)
        return self.mm_to_px(number * self.conversion_factors[f'mm_per_{unit}'])

    def length_to_mm(self, value: Optional[str]) -> Optional[float]:
        """
        Convert a CSS length to millimeters.

        Millimeter values are returned as written, so a stored height reads
        back exactly. Returns None where ``length_to_px`` would.
        """
        parsed = parse_length(value)
        if parsed is None:
            return None
        number, unit = parsed
        if unit == 'mm':
            return number
        if unit == 'px':
            return self.px_to_mm(number)
        return number * self.conversion_factors[f'mm_per_{unit}']

    def get_conversion_factors(self) -> Dict[str, float]:
        """Get all conversion factors."""
        factors = self.conversion_factors.copy()
        factors['px_per_mm'] = self.px_per_mm
        return factors


def parse_length(value: Optional[str]) -> Optional[tuple]:
    """Split a CSS length into ``(number, unit)``; unit defaults to ``px``."""
    if value is None:
        return None
    match = _LENGTH_RE.match(str(value))
    if not match:
        return None
    unit = (match.group(2) or 'px').lower()
    return float(match.group(1)), unit


def format_mm(value: Union[int, float]) -> str:
    """Format a millimeter value as a CSS length with at most ``MM_DECIMALS`` decimals."""
    text = f"{float(value):.{MM_DECIMALS}f}".rstrip('0').rstrip('.')
    if text in ('', '-0'):
        text = '0'
    return f"{text}mm"


def floor_mm(value: Union[int, float]) -> float:
    """
    Round a millimeter value down to the precision ``format_mm`` writes.

    The result formats and parses back to the same float, and never exceeds
    ``value`` beyond float noise, so a height fitted to the page stays fitted.
    """
    scale = 10 ** MM_DECIMALS
    # round() first so 190.39999999999998 floors to 190.4, not 190.3999
    return math.floor(round(float(value) * scale, 6)) / scale
