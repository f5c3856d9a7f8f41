"""Constraint profiles for zone types.

The constraint table is an immutable mapping ``zone type -> ConstraintProfile``.
An engine owns one table; alternate tables can be injected for testing or for
page formats with different zone rules.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ..exceptions import ConfigurationError
from ..utils.enums import LayoutRole, OverflowPolicy, ZonePosition, ZoneType

PAGE_HEIGHT_MM = 297.0  # A4 portrait
PAGE_WIDTH_MM = 210.0

ZONE_ORDER: Mapping[str, int] = MappingProxyType({
    ZoneType.HEADER.value: 1,
    ZoneType.CONTENT.value: 2,
    ZoneType.FOOTER.value: 3,
})


@dataclass(frozen=True, slots=True)
class ConstraintProfile:
    """Static size rules shared by every zone of one type (millimeters)."""
    adjustable: bool
    min_height: Optional[float] = None
    max_height: Optional[float] = None
    overflow: OverflowPolicy = OverflowPolicy.HIDDEN
    role: LayoutRole = LayoutRole.FIXED
    position: ZonePosition = ZonePosition.MIDDLE

    def __post_init__(self):
        if self.min_height is not None and self.min_height < 0:
            raise ConfigurationError("min_height must not be negative", str(self.min_height))
        if self.max_height is not None and self.max_height < 0:
            raise ConfigurationError("max_height must not be negative", str(self.max_height))
        if (self.min_height is not None and self.max_height is not None
                and self.min_height > self.max_height):
            raise ConfigurationError(
                "min_height exceeds max_height",
                f"{self.min_height} > {self.max_height}"
            )

    @property
    def lower_bound(self) -> float:
        """Minimum height, 0 when unbounded."""
        return self.min_height if self.min_height is not None else 0.0

    @property
    def upper_bound(self) -> float:
        """Maximum height, infinity when unbounded."""
        return self.max_height if self.max_height is not None else math.inf

    @property
    def is_flex(self) -> bool:
        return self.role == LayoutRole.FLEX

    def clamp(self, height: float) -> float:
        """Clamp a height into ``[lower_bound, upper_bound]``."""
        return max(self.lower_bound, min(height, self.upper_bound))

    def default_height(self) -> Optional[float]:
        """Reset target: the minimum for flex zones, the midpoint of the bounds otherwise.

        Returns None when the profile has no finite bounds to derive it from.
        """
        if self.is_flex:
            return self.lower_bound
        if self.max_height is None:
            return None
        return (self.lower_bound + self.max_height) / 2

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "adjustable": self.adjustable,
            "overflow": self.overflow.value,
            "role": self.role.value,
            "position": self.position.value,
        }
        if self.min_height is not None:
            data["min_height"] = self.min_height
        if self.max_height is not None:
            data["max_height"] = self.max_height
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConstraintProfile":
        """Build a profile from a plain mapping (JSON config or snapshot)."""
        if not isinstance(data, Mapping):
            raise ConfigurationError("Constraint profile must be a mapping", repr(data))
        try:
            return cls(
                adjustable=bool(data.get("adjustable", False)),
                min_height=_optional_float(data.get("min_height", data.get("minHeight"))),
                max_height=_optional_float(data.get("max_height", data.get("maxHeight"))),
                overflow=OverflowPolicy(data.get("overflow", OverflowPolicy.HIDDEN.value)),
                role=LayoutRole(data.get("role", LayoutRole.FIXED.value)),
                position=ZonePosition(data.get("position", ZonePosition.MIDDLE.value)),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigurationError("Invalid constraint profile", str(exc)) from exc


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value)


DEFAULT_ZONE_CONSTRAINTS: Mapping[str, ConstraintProfile] = MappingProxyType({
    ZoneType.HEADER.value: ConstraintProfile(
        adjustable=False,
        max_height=80.0,
        overflow=OverflowPolicy.HIDDEN,
        role=LayoutRole.FIXED,
        position=ZonePosition.TOP,
    ),
    ZoneType.CONTENT.value: ConstraintProfile(
        adjustable=True,
        min_height=150.0,
        max_height=220.0,
        overflow=OverflowPolicy.AUTO,
        role=LayoutRole.FLEX,
        position=ZonePosition.MIDDLE,
    ),
    ZoneType.FOOTER.value: ConstraintProfile(
        adjustable=True,
        min_height=20.0,
        max_height=80.0,
        overflow=OverflowPolicy.HIDDEN,
        role=LayoutRole.FIXED,
        position=ZonePosition.BOTTOM,
    ),
})


def build_constraint_table(overrides: Optional[Mapping[str, Any]] = None,
                           base: Mapping[str, ConstraintProfile] = DEFAULT_ZONE_CONSTRAINTS
                           ) -> Mapping[str, ConstraintProfile]:
    """Return a new immutable table with ``overrides`` merged over ``base``.

    Override values may be ``ConstraintProfile`` instances or mappings; a mapping
    for an existing type only replaces the keys it names.
    """
    table: Dict[str, ConstraintProfile] = dict(base)
    for zone_type, value in (overrides or {}).items():
        if isinstance(value, ConstraintProfile):
            table[zone_type] = value
            continue
        if not isinstance(value, Mapping):
            raise ConfigurationError(f"Invalid constraints for zone type '{zone_type}'", repr(value))
        merged = table[zone_type].to_dict() if zone_type in table else {}
        merged.update(value)
        table[zone_type] = ConstraintProfile.from_dict(merged)
    return MappingProxyType(table)


def zone_sort_key(zone_type: str) -> int:
    """Canonical vertical rank of a zone type; unknown types sort last."""
    return ZONE_ORDER.get(zone_type, len(ZONE_ORDER) + 1)
