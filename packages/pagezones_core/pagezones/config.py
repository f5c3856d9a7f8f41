"""
Engine configuration.

Handles page budget, device conversion factor, control step size and the
constraint table, loaded from defaults or a JSON file.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .engine.constraints import (
    DEFAULT_ZONE_CONSTRAINTS,
    PAGE_HEIGHT_MM,
    PAGE_WIDTH_MM,
    ConstraintProfile,
    build_constraint_table,
)
from .exceptions import ConfigurationError
from .utils.units import PX_PER_MM

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for a zone layout engine."""
    page_height_mm: float = PAGE_HEIGHT_MM
    page_width_mm: float = PAGE_WIDTH_MM
    px_per_mm: float = PX_PER_MM
    adjust_step_mm: float = 10.0
    constraints: Mapping[str, ConstraintProfile] = field(
        default_factory=lambda: DEFAULT_ZONE_CONSTRAINTS
    )

    def __post_init__(self):
        for name in ("page_height_mm", "page_width_mm", "px_per_mm", "adjust_step_mm"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive number", repr(value))

    def profile_for(self, zone_type: str) -> Optional[ConstraintProfile]:
        return self.constraints.get(zone_type)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page_height_mm": self.page_height_mm,
            "page_width_mm": self.page_width_mm,
            "px_per_mm": self.px_per_mm,
            "adjust_step_mm": self.adjust_step_mm,
            "constraints": {
                zone_type: profile.to_dict()
                for zone_type, profile in self.constraints.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EngineConfig":
        """
        Build configuration from a mapping.

        Args:
            data: Mapping with optional scalar keys and a ``constraints`` mapping
                merged over the default constraint table

        Returns:
            EngineConfig instance
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError("Configuration must be a mapping", repr(data))

        known = {"page_height_mm", "page_width_mm", "px_per_mm", "adjust_step_mm", "constraints"}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {sorted(unknown)}")

        kwargs: Dict[str, Any] = {
            key: float(data[key])
            for key in ("page_height_mm", "page_width_mm", "px_per_mm", "adjust_step_mm")
            if key in data
        }
        kwargs["constraints"] = build_constraint_table(data.get("constraints"))
        return cls(**kwargs)


def load_config(path: Optional[Union[str, Path]] = None) -> EngineConfig:
    """
    Load engine configuration from a JSON file.

    Args:
        path: Path to JSON file; defaults are returned when None

    Returns:
        EngineConfig instance
    """
    if path is None:
        return EngineConfig()

    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigurationError("Configuration file not found", str(config_path)) from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError("Configuration file is not valid JSON", str(exc)) from exc

    config = EngineConfig.from_dict(raw)
    logger.debug(f"Loaded configuration from {config_path}")
    return config
