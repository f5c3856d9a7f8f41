"""Zone layout engine.

Owns one constraint table and wires discovery, height resolution,
presentation, interaction and validation around a layout surface:

- discovery materializes zones from a page container;
- every height change goes through ``set_zone_height``;
- interaction and validation are consumers of the two.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from ..config import EngineConfig
from ..errors import ErrorReporter
from ..events import (
    ZONE_ADJUSTED,
    ZONE_EDIT_MODE_DISABLED,
    ZONE_EDIT_MODE_ENABLED,
    ZONE_RESET,
    ZONE_VALIDATION_WARNING,
    EventChannel,
)
from ..exceptions import SnapshotError, UnknownZoneTypeError
from ..state import UIStateStore
from ..surface.base import ZONE_ATTRIBUTE, LayoutSurface
from ..surface.html_surface import HtmlLayoutSurface
from ..utils.enums import Severity
from ..utils.units import floor_mm
from .discovery import ZoneDiscovery
from .interaction import ZoneInteraction
from .layout_validator import ValidationResult, ZoneLayoutValidator
from .presentation import ZonePresentation
from .resolver import EXCEEDS_PAGE, HeightResolution, HeightResolver
from .zone import Zone, ZoneSnapshot

logger = logging.getLogger(__name__)

PAGE_BOUNDARY_MESSAGE = "Cannot resize: would exceed page boundaries"


class ZoneLayoutEngine:
    """Fixed-height page layout with header/content/footer zones."""

    def __init__(self, surface: Optional[LayoutSurface] = None,
                 config: Optional[EngineConfig] = None,
                 state: Optional[UIStateStore] = None,
                 events: Optional[EventChannel] = None,
                 errors: Optional[ErrorReporter] = None,
                 clock: Optional[Callable[[], float]] = None):
        """
        Args:
            surface: Layout surface binding (HTML/lxml by default)
            config: Engine configuration (A4 defaults)
            state: Shared UI state store holding the edit-mode flag
            events: Notification channel
            errors: Error reporting façade
            clock: Time source used for generated zone ids
        """
        self.config = config or EngineConfig()
        self.surface = surface or HtmlLayoutSurface(px_per_mm=self.config.px_per_mm)
        self.state = state or UIStateStore()
        self.events = events or EventChannel()
        self.errors = errors or ErrorReporter()

        self.presentation = ZonePresentation(self.surface)
        discovery_kwargs = {"clock": clock} if clock is not None else {}
        self.discovery = ZoneDiscovery(
            self.surface, self.config.constraints, self.presentation, self.errors,
            **discovery_kwargs,
        )
        self.resolver = HeightResolver(self.config.page_height_mm)
        self.interaction = ZoneInteraction(self)

    @property
    def constraints(self) -> Mapping[str, Any]:
        return self.config.constraints

    # -- discovery ---------------------------------------------------------

    def detect_zones(self, page: Any) -> List[Zone]:
        return self.discovery.detect_zones(page)

    def find_zone(self, page: Any, zone_id: str) -> Optional[Zone]:
        for zone in self.detect_zones(page):
            if zone.id == zone_id:
                return zone
        return None

    def initialize_zones(self, page: Any) -> List[Zone]:
        """
        Discover zones, install affordances on adjustable ones and validate the page.

        Any fault is logged and re-raised.
        """
        try:
            zones = self.detect_zones(page)
            for zone in zones:
                self.presentation.install_affordances(zone)

            self.validate_page_layout(page)
            logger.info(f"Initialized {len(zones)} zones")
            return zones

        except Exception as error:
            self.errors.log_error(error, "ZoneLayoutEngine.initialize_zones")
            raise

    # -- height resolution -------------------------------------------------

    def calculate_total_page_height(self, page: Any, modified_zone: Optional[Zone] = None,
                                    new_height: Optional[float] = None) -> float:
        """
        Sum the heights of every marked region on ``page`` (mm).

        Regions of unknown type are included; they still take up page height.
        When ``modified_zone`` is given its height is replaced by ``new_height``.
        """
        total = 0.0
        for element in self.surface.find_zone_elements(page):
            if modified_zone is not None and element is modified_zone.element:
                total += new_height if new_height is not None else modified_zone.current_height
            else:
                total += self.surface.read_height_mm(element)
        return total

    def resolve_zone_height(self, zone: Zone, height: float,
                            page: Optional[Any] = None) -> HeightResolution:
        """Resolve ``height`` for ``zone`` without committing anything."""
        page = page if page is not None else self.surface.get_container(zone.element)
        others = self.calculate_total_page_height(page, zone, 0.0)
        return self.resolver.resolve(zone, height, others)

    def set_zone_height(self, zone: Zone, height: float, page: Optional[Any] = None) -> bool:
        """
        Set a zone's height, enforcing its bounds and the page height budget.

        Returns:
            True when a height was committed (possibly smaller than requested),
            False when the change was rejected and nothing was modified
        """
        resolution = self.resolve_zone_height(zone, height, page)

        if not resolution.accepted:
            if resolution.reason == EXCEEDS_PAGE:
                self.errors.show_user_error(PAGE_BOUNDARY_MESSAGE, Severity.WARNING)
            return False

        # Commit what the surface stores; rounding down keeps a fitted page within budget.
        zone.current_height = floor_mm(resolution.height)
        self.presentation.apply_height(zone)
        return True

    def adjust_zone_height(self, zone: Zone, delta: float) -> bool:
        """Change a zone's height by ``delta`` mm and broadcast the result."""
        success = self.set_zone_height(zone, zone.current_height + delta)

        self.events.emit(ZONE_ADJUSTED, {
            "zone_id": zone.id,
            "type": zone.type,
            "height": zone.current_height,
            "adjustment": delta,
        })
        return success

    def reset_zone_height(self, zone: Zone) -> bool:
        """Restore the type default (minimum for flex zones, bound midpoint otherwise)."""
        default = zone.constraints.default_height()
        success = self.set_zone_height(zone, default if default is not None else zone.current_height)

        self.events.emit(ZONE_RESET, {
            "zone_id": zone.id,
            "type": zone.type,
            "height": zone.current_height,
        })
        return success

    def get_zone_position(self, zone: Zone, page: Optional[Any] = None) -> float:
        """Top offset of ``zone`` relative to its page (mm)."""
        page = page if page is not None else self.surface.get_container(zone.element)
        return self.surface.read_top_mm(zone.element, page)

    # -- validation --------------------------------------------------------

    def validate_page_layout(self, page: Any) -> ValidationResult:
        """Audit ``page``; warnings are broadcast but never block anything."""
        zones = self.detect_zones(page)
        validator = ZoneLayoutValidator(
            zones,
            total_height=self.calculate_total_page_height(page),
            positions=[self.get_zone_position(zone, page) for zone in zones],
            page_height=self.config.page_height_mm,
        )
        result = validator.validate()

        if result.duplicate_types:
            logger.info(f"Repeated zone types on page: {result.duplicate_types}")
        if result.warnings:
            for warning in result.warnings:
                logger.warning(warning)
            self.events.emit(ZONE_VALIDATION_WARNING, {"warnings": list(result.warnings)})
        return result

    # -- edit mode ---------------------------------------------------------

    def enable_edit_mode(self, page: Any) -> None:
        zones = self.detect_zones(page)
        for zone in zones:
            if zone.adjustable:
                self.presentation.set_editable(zone, True)

        self.state.set_ui_state(edit_mode=True)
        self.events.emit(ZONE_EDIT_MODE_ENABLED, {"zones": [zone.id for zone in zones]})

    def disable_edit_mode(self, page: Any) -> None:
        self.interaction.end_all()
        zones = self.detect_zones(page)
        for zone in zones:
            self.presentation.set_editable(zone, False)
            self.presentation.hide_affordances(zone, force=True)

        self.state.set_ui_state(edit_mode=False)
        self.events.emit(ZONE_EDIT_MODE_DISABLED, {"zones": [zone.id for zone in zones]})

    # -- snapshots ---------------------------------------------------------

    def get_zone_data(self, page: Any) -> List[Dict[str, Any]]:
        """Serializable ``{id, type, height, constraints, adjustable}`` per zone."""
        return [zone.snapshot().to_dict() for zone in self.detect_zones(page)]

    def apply_zone_data(self, page: Any,
                        zone_data: Iterable[Mapping[str, Any]]) -> Dict[str, bool]:
        """
        Restore zone heights from snapshot data through the height resolver.

        Entries whose id is missing from the page, or whose type does not match
        the region, are logged and skipped.

        Returns:
            Mapping of zone id to whether a height was committed
        """
        snapshots = [ZoneSnapshot.from_dict(entry) for entry in zone_data]
        results: Dict[str, bool] = {}

        for snapshot in snapshots:
            element = self.surface.find_by_id(page, snapshot.id)
            if element is None:
                logger.warning(f"Zone {snapshot.id} not found on page; skipping")
                continue

            declared = self.surface.get_attribute(element, ZONE_ATTRIBUTE)
            if declared != snapshot.type:
                logger.warning(
                    f"Zone {snapshot.id} is '{declared}' on page but '{snapshot.type}' in snapshot; skipping"
                )
                continue

            profile = self.constraints.get(snapshot.type)
            if profile is None:
                self.errors.log_error(
                    UnknownZoneTypeError(snapshot.type, snapshot.id),
                    "ZoneLayoutEngine.apply_zone_data",
                )
                continue

            zone = Zone(
                id=snapshot.id,
                type=snapshot.type,
                constraints=profile,
                current_height=self.surface.read_height_mm(element),
                element=element,
            )
            results[snapshot.id] = self.set_zone_height(zone, snapshot.height, page)

        return results

    def export_zone_data_json(self, page: Any, indent: int = 2) -> str:
        return json.dumps(self.get_zone_data(page), indent=indent, ensure_ascii=False)

    def import_zone_data_json(self, page: Any, text: str) -> Dict[str, bool]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SnapshotError("Zone data is not valid JSON", str(exc)) from exc
        if not isinstance(data, list):
            raise SnapshotError("Zone data must be a list of zone entries", type(data).__name__)
        return self.apply_zone_data(page, data)
