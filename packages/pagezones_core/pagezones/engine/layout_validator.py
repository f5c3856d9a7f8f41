"""

Layout Validator - page zone validation.

Checks:
- whether the page has a content zone
- whether the zones fit in the page height budget
- whether consecutive zones overlap vertically

Warnings are advisory; nothing here blocks rendering or later edits.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from ..utils.enums import ZoneType
from .constraints import PAGE_HEIGHT_MM
from .discovery import duplicate_types
from .zone import Zone

OVERLAP_TOLERANCE_MM = 1e-6


@dataclass
class ValidationResult:
    """Result of a page audit."""
    valid: bool
    warnings: List[str] = field(default_factory=list)
    duplicate_types: List[str] = field(default_factory=list)
    total_height: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "warnings": list(self.warnings)}


class ZoneLayoutValidator:
    """Zone layout validator - audits one page's zones."""

    def __init__(self, zones: List[Zone], total_height: float,
                 positions: Sequence[float], page_height: float = PAGE_HEIGHT_MM):
        """
        Args:
            zones: Zones in canonical order
            total_height: Height of all marked regions on the page (mm)
            positions: Top offset of each zone relative to the page, aligned with zones (mm)
            page_height: Page height budget (mm)
        """
        self.zones = zones
        self.total_height = total_height
        self.positions = positions
        self.page_height = page_height
        self.warnings: List[str] = []

    def validate(self) -> ValidationResult:
        """

        Performs full zone validation.

        Returns:
        ValidationResult with every warning found

        """
        self.warnings.clear()

        self._validate_content_zone()
        self._validate_total_height()
        self._validate_overlaps()

        return ValidationResult(
            valid=not self.warnings,
            warnings=self.warnings.copy(),
            duplicate_types=duplicate_types(self.zones),
            total_height=self.total_height,
        )

    def _validate_content_zone(self) -> None:
        """Checks if a content zone exists."""
        if not any(zone.type == ZoneType.CONTENT.value for zone in self.zones):
            self.warnings.append("Missing content zone - page may not display properly")

    def _validate_total_height(self) -> None:
        """Checks if the zones fit the page height."""
        if self.total_height > self.page_height + OVERLAP_TOLERANCE_MM:
            self.warnings.append(
                f"Page content exceeds A4 height "
                f"({round(self.total_height)}mm > {self.page_height:g}mm)"
            )

    def _validate_overlaps(self) -> None:
        """Checks if a zone starts above the bottom edge of the previous one."""
        for index, zone in enumerate(self.zones):
            if index == 0:
                continue

            prev_zone = self.zones[index - 1]
            zone_top = self.positions[index]
            prev_bottom = self.positions[index - 1] + prev_zone.current_height

            if zone_top < prev_bottom - OVERLAP_TOLERANCE_MM:
                self.warnings.append(
                    f"Zone overlap detected: {prev_zone.type} and {zone.type}"
                )

    def get_summary(self) -> Dict[str, Any]:
        """
        Returns validation summary.

        Returns:
            Dict with validation information
        """
        result = self.validate()

        return {
            "is_valid": result.valid,
            "total_warnings": len(result.warnings),
            "total_zones": len(self.zones),
            "total_height": self.total_height,
            "page_height": self.page_height,
            "duplicate_types": result.duplicate_types,
            "warnings": result.warnings,
        }
