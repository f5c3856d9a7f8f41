"""Custom exceptions for pagezones."""

from typing import Optional


class ZoneLayoutError(Exception):
    """Base exception for zone layout errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class UnknownZoneTypeError(ZoneLayoutError):
    """Exception raised when a marked region declares a zone type with no constraint profile."""

    def __init__(self, zone_type: str, element_id: Optional[str] = None):
        details = f"element id={element_id}" if element_id else None
        super().__init__(f"Unknown zone type: {zone_type}", details)
        self.zone_type = zone_type
        self.element_id = element_id


class ConfigurationError(ZoneLayoutError):
    """Exception raised for invalid engine configuration or constraint profiles."""

    pass


class SnapshotError(ZoneLayoutError):
    """Exception raised when zone snapshot data cannot be read."""

    pass


class SurfaceError(ZoneLayoutError):
    """Exception raised by the layout surface binding."""

    pass


class DragSessionError(ZoneLayoutError):
    """Exception raised on an invalid drag session transition."""

    pass
