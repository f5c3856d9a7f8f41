"""Zone discovery: materialize zones from the marked regions of a page."""

from __future__ import annotations

import logging
import time
from collections import Counter
from typing import Any, Callable, List, Mapping, Optional, Set

from ..errors import ErrorReporter
from ..exceptions import UnknownZoneTypeError
from ..surface.base import ZONE_ATTRIBUTE, LayoutSurface
from .constraints import ConstraintProfile, zone_sort_key
from .presentation import ZonePresentation
from .zone import Zone

logger = logging.getLogger(__name__)


class ZoneDiscovery:
    """Scans a page container for ``data-zone`` regions."""

    def __init__(self, surface: LayoutSurface, constraints: Mapping[str, ConstraintProfile],
                 presentation: ZonePresentation, errors: ErrorReporter,
                 clock: Callable[[], float] = time.time):
        self.surface = surface
        self.constraints = constraints
        self.presentation = presentation
        self.errors = errors
        self.clock = clock

    def detect_zones(self, page: Any) -> List[Zone]:
        """
        Return the zones of ``page`` in canonical order (header, content, footer).

        Regions with an unknown type are reported and skipped. Each region is
        marked with zone classes, id and size hints before its height is read.

        Args:
            page: Page container

        Returns:
            Freshly built Zone objects
        """
        zones: List[Zone] = []
        assigned_ids: Set[str] = set()

        for element in self.surface.find_zone_elements(page):
            zone_type = (self.surface.get_attribute(element, ZONE_ATTRIBUTE) or "").strip()
            profile = self.constraints.get(zone_type)
            if profile is None:
                self.errors.log_error(
                    UnknownZoneTypeError(zone_type, self.surface.element_id(element)),
                    "ZoneDiscovery.detect_zones",
                )
                continue

            zone_id = self.surface.element_id(element) or self._generate_id(page, zone_type, assigned_ids)
            assigned_ids.add(zone_id)

            self.presentation.apply_zone_attributes(element, zone_id, zone_type, profile)
            height = self.surface.read_height_mm(element)

            zones.append(Zone(
                id=zone_id,
                type=zone_type,
                constraints=profile,
                current_height=height,
                element=element,
            ))

        # sort() is stable, so same-rank zones keep document order
        zones.sort(key=lambda zone: zone_sort_key(zone.type))

        duplicates = duplicate_types(zones)
        if duplicates:
            logger.debug(f"Page has repeated zone types: {duplicates}")

        logger.debug(f"Detected {len(zones)} zones: {[zone.id for zone in zones]}")
        return zones

    def _generate_id(self, page: Any, zone_type: str, taken: Set[str]) -> str:
        base = f"zone-{zone_type}-{int(self.clock() * 1000)}"
        candidate, suffix = base, 1
        while candidate in taken or self.surface.find_by_id(page, candidate) is not None:
            suffix += 1
            candidate = f"{base}-{suffix}"
        return candidate


def duplicate_types(zones: List[Zone]) -> List[str]:
    """Zone types occurring more than once, in canonical order."""
    counts = Counter(zone.type for zone in zones)
    return sorted((zone_type for zone_type, count in counts.items() if count > 1), key=zone_sort_key)
