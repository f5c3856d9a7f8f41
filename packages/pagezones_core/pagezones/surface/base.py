"""
Layout surface interface.

A layout surface is whatever tree of positioned elements the zones live on.
The engine only needs to enumerate marked regions, read their rendered size
and position, and write presentation attributes back; concrete bindings
implement the primitive accessors and inherit the size/position reads.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from ..utils.units import PX_PER_MM, UnitsConverter

ZONE_ATTRIBUTE = "data-zone"
RENDERED_HEIGHT_ATTRIBUTE = "data-rendered-height"
TOP_ATTRIBUTE = "data-top"


class LayoutSurface(ABC):
    """Abstract access to the elements a page is made of."""

    def __init__(self, px_per_mm: float = PX_PER_MM):
        self.units = UnitsConverter(px_per_mm)

    # -- structure ---------------------------------------------------------

    @abstractmethod
    def find_zone_elements(self, page: Any) -> List[Any]:
        """All elements under ``page`` carrying ``data-zone``, in document order."""

    @abstractmethod
    def find_by_id(self, page: Any, element_id: str) -> Optional[Any]:
        """Element under ``page`` with the given id, or None."""

    @abstractmethod
    def get_container(self, element: Any) -> Any:
        """Closest enclosing page container of ``element``."""

    @abstractmethod
    def find_child(self, element: Any, class_name: str) -> Optional[Any]:
        """First descendant of ``element`` with ``class_name``."""

    @abstractmethod
    def append_child(self, element: Any, tag: str, class_name: Optional[str] = None,
                     text: Optional[str] = None,
                     attributes: Optional[Mapping[str, str]] = None) -> Any:
        """Create a child element at the end of ``element`` and return it."""

    # -- attributes --------------------------------------------------------

    @abstractmethod
    def get_attribute(self, element: Any, name: str, default: Optional[str] = None) -> Optional[str]:
        ...

    @abstractmethod
    def set_attribute(self, element: Any, name: str, value: Optional[str]) -> None:
        """Set ``name``; a None value removes the attribute."""

    @abstractmethod
    def get_classes(self, element: Any) -> List[str]:
        ...

    @abstractmethod
    def set_classes(self, element: Any, classes: List[str]) -> None:
        ...

    @abstractmethod
    def get_style(self, element: Any) -> Dict[str, str]:
        """Inline style as a ``{property: value}`` dict with CSS property names."""

    @abstractmethod
    def set_style(self, element: Any, properties: Mapping[str, Optional[str]]) -> None:
        """Merge ``properties`` into the inline style; None values are removed."""

    @abstractmethod
    def get_text(self, element: Any) -> str:
        ...

    @abstractmethod
    def set_text(self, element: Any, text: str) -> None:
        ...

    # -- derived helpers ---------------------------------------------------

    def element_id(self, element: Any) -> Optional[str]:
        return self.get_attribute(element, "id") or None

    def has_class(self, element: Any, class_name: str) -> bool:
        return class_name in self.get_classes(element)

    def add_class(self, element: Any, *class_names: str) -> None:
        classes = self.get_classes(element)
        changed = False
        for name in class_names:
            if name not in classes:
                classes.append(name)
                changed = True
        if changed:
            self.set_classes(element, classes)

    def remove_class(self, element: Any, *class_names: str) -> None:
        classes = self.get_classes(element)
        remaining = [name for name in classes if name not in class_names]
        if len(remaining) != len(classes):
            self.set_classes(element, remaining)

    def read_height_mm(self, element: Any) -> float:
        """Rendered height in millimeters.

        An explicit ``height`` wins; otherwise the natural height is clamped
        by ``max-height`` and then ``min-height`` (so min wins over max, as
        in CSS).

        Lengths written in mm are taken as is, so a committed height reads
        back unchanged.
        """
        style = self.get_style(element)
        explicit = self.units.length_to_mm(style.get("height"))
        if explicit is not None:
            return max(explicit, 0.0)

        height = self._natural_height_mm(element)
        max_mm = self.units.length_to_mm(style.get("max-height"))
        if max_mm is not None:
            height = min(height, max_mm)
        min_mm = self.units.length_to_mm(style.get("min-height"))
        if min_mm is not None:
            height = max(height, min_mm)
        return height

    def read_height_px(self, element: Any) -> float:
        """Rendered height in pixels."""
        return self.units.mm_to_px(self.read_height_mm(element))

    def read_top_mm(self, element: Any, page: Optional[Any] = None) -> float:
        """Top offset of ``element`` relative to its page, in millimeters.

        Uses ``data-top`` when the binding knows the real position, otherwise
        stacks the page's zone regions in document order.
        """
        explicit = self.units.length_to_mm(self.get_attribute(element, TOP_ATTRIBUTE))
        if explicit is not None:
            return explicit

        page = page if page is not None else self.get_container(element)
        offset = 0.0
        for candidate in self.find_zone_elements(page):
            if candidate is element:
                return offset
            offset += self.read_height_mm(candidate)
        return offset

    def read_top_px(self, element: Any, page: Optional[Any] = None) -> float:
        return self.units.mm_to_px(self.read_top_mm(element, page))

    def _natural_height_mm(self, element: Any) -> float:
        natural = self.units.length_to_mm(self.get_attribute(element, RENDERED_HEIGHT_ATTRIBUTE))
        return max(natural, 0.0) if natural is not None else 0.0
