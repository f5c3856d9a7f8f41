"""Zone model and its serializable snapshot."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..exceptions import ConfigurationError, SnapshotError
from .constraints import ConstraintProfile


@dataclass(eq=False)
class Zone:
    """A vertical page region; created fresh by every discovery pass."""
    id: str
    type: str
    constraints: ConstraintProfile
    current_height: float  # mm
    element: Any = field(default=None, repr=False)

    @property
    def adjustable(self) -> bool:
        return self.constraints.adjustable

    def snapshot(self) -> "ZoneSnapshot":
        return ZoneSnapshot(
            id=self.id,
            type=self.type,
            height=self.current_height,
            constraints=self.constraints.to_dict(),
            adjustable=self.constraints.adjustable,
        )


@dataclass(frozen=True)
class ZoneSnapshot:
    """Durable representation of one zone: ``{id, type, height, constraints, adjustable}``."""
    id: str
    type: str
    height: float
    constraints: Dict[str, Any] = field(default_factory=dict)
    adjustable: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "height": self.height,
            "constraints": dict(self.constraints),
            "adjustable": self.adjustable,
        }

    @property
    def profile(self) -> Optional[ConstraintProfile]:
        """The constraint profile recorded at capture time, if it is readable."""
        if not self.constraints:
            return None
        try:
            return ConstraintProfile.from_dict(self.constraints)
        except ConfigurationError:
            return None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ZoneSnapshot":
        if not isinstance(data, Mapping):
            raise SnapshotError("Zone snapshot entry must be a mapping", repr(data))

        missing = [key for key in ("id", "type", "height") if key not in data]
        if missing:
            raise SnapshotError("Zone snapshot entry is missing keys", ", ".join(missing))

        zone_id, zone_type = data["id"], data["type"]
        if not isinstance(zone_id, str) or not zone_id:
            raise SnapshotError("Zone snapshot id must be a non-empty string", repr(zone_id))
        if not isinstance(zone_type, str) or not zone_type:
            raise SnapshotError("Zone snapshot type must be a non-empty string", repr(zone_type))

        try:
            height = float(data["height"])
        except (TypeError, ValueError) as exc:
            raise SnapshotError("Zone snapshot height must be a number", repr(data["height"])) from exc
        if not math.isfinite(height):
            raise SnapshotError("Zone snapshot height must be finite", repr(data["height"]))

        constraints = data.get("constraints") or {}
        if not isinstance(constraints, Mapping):
            raise SnapshotError("Zone snapshot constraints must be a mapping", repr(constraints))

        return cls(
            id=zone_id,
            type=zone_type,
            height=height,
            constraints=dict(constraints),
            adjustable=bool(data.get("adjustable", constraints.get("adjustable", False))),
        )
