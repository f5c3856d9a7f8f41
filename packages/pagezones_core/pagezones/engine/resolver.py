"""Height resolver - the single path through which a zone's height changes.

Resolution is pure: it looks at the zone's constraint profile and at the
combined height of every other region on the page and returns the outcome.
Committing the height and updating presentation is left to the caller.

Algorithm:
1. clamp the request into ``[min, max]`` (missing bounds are 0 / infinity);
2. if the page total with the clamped height fits the budget, accept it;
3. otherwise shrink the requested zone by the overflow, never the others,
   and accept only if that still respects its minimum.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .constraints import PAGE_HEIGHT_MM
from .zone import Zone

logger = logging.getLogger(__name__)

FITS = "fits"
REDUCED = "reduced"
EXCEEDS_PAGE = "exceeds-page"
NOT_ADJUSTABLE = "not-adjustable"
INVALID_REQUEST = "invalid-request"

# Float slack when comparing summed heights read back from pixel values.
HEIGHT_TOLERANCE_MM = 1e-6


@dataclass(frozen=True, slots=True)
class HeightResolution:
    """Outcome of resolving one height request."""
    accepted: bool
    height: float
    requested: float
    clamped: Optional[float]
    overflow: float
    reason: str

    @property
    def reduced(self) -> bool:
        """True when the height was cut below the clamped request to fit the page."""
        return self.reason == REDUCED


class HeightResolver:
    """Clamp-then-fit resolution against a fixed page height budget."""

    def __init__(self, page_height_mm: float = PAGE_HEIGHT_MM,
                 tolerance: float = HEIGHT_TOLERANCE_MM):
        self.page_height_mm = page_height_mm
        self.tolerance = tolerance

    def resolve(self, zone: Zone, requested: float, other_heights: float) -> HeightResolution:
        """
        Resolve ``requested`` for ``zone``.

        Args:
            zone: Zone being resized
            requested: Requested height in mm
            other_heights: Sum of every other region's current height in mm

        Returns:
            HeightResolution; when rejected, ``height`` is the zone's unchanged height
        """
        current = zone.current_height

        if not zone.constraints.adjustable:
            logger.debug(f"Ignoring resize of non-adjustable zone {zone.id} ({zone.type})")
            return HeightResolution(False, current, requested, None, 0.0, NOT_ADJUSTABLE)

        if requested is None or not math.isfinite(requested):
            logger.debug(f"Rejecting non-finite height request for zone {zone.id}: {requested}")
            return HeightResolution(False, current, requested, None, 0.0, INVALID_REQUEST)

        profile = zone.constraints
        clamped = profile.clamp(requested)
        total = other_heights + clamped

        if total <= self.page_height_mm + self.tolerance:
            return HeightResolution(True, clamped, requested, clamped, 0.0, FITS)

        overflow = total - self.page_height_mm
        adjusted = clamped - overflow
        if adjusted >= profile.lower_bound - self.tolerance:
            adjusted = max(adjusted, profile.lower_bound)
            logger.debug(
                f"Zone {zone.id}: {clamped:.2f}mm overflows page by {overflow:.2f}mm, "
                f"reduced to {adjusted:.2f}mm"
            )
            return HeightResolution(True, adjusted, requested, clamped, overflow, REDUCED)

        logger.debug(
            f"Zone {zone.id}: {clamped:.2f}mm overflows page by {overflow:.2f}mm, "
            f"cannot shrink below {profile.lower_bound:.2f}mm"
        )
        return HeightResolution(False, current, requested, clamped, overflow, EXCEEDS_PAGE)
