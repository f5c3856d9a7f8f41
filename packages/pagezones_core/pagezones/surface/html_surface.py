"""HTML layout surface backed by lxml."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import lxml.html
from lxml import etree

from ..exceptions import SurfaceError
from .base import ZONE_ATTRIBUTE, LayoutSurface

logger = logging.getLogger(__name__)

PAGE_CLASS = "page"


def _class_xpath(class_name: str) -> str:
    return f'contains(concat(" ", normalize-space(@class), " "), " {class_name} ")'


def parse_style(value: Optional[str]) -> Dict[str, str]:
    """Parse an inline ``style`` attribute into an ordered dict."""
    properties: Dict[str, str] = {}
    for declaration in (value or "").split(";"):
        if ":" not in declaration:
            continue
        name, _, prop_value = declaration.partition(":")
        name = name.strip().lower()
        if name:
            properties[name] = prop_value.strip()
    return properties


def format_style(properties: Mapping[str, str]) -> str:
    return "; ".join(f"{name}: {value}" for name, value in properties.items())


class HtmlLayoutSurface(LayoutSurface):
    """Layout surface over an lxml HTML tree.

    Zones are elements with a ``data-zone`` attribute inside a page container
    (an element with class ``page``).
    """

    def find_zone_elements(self, page: Any) -> List[Any]:
        return page.xpath(f".//*[@{ZONE_ATTRIBUTE}]")

    def find_by_id(self, page: Any, element_id: str) -> Optional[Any]:
        if not element_id:
            return None
        found = page.xpath(".//*[@id=$element_id]", element_id=element_id)
        return found[0] if found else None

    def get_container(self, element: Any) -> Any:
        for ancestor in element.iterancestors():
            if PAGE_CLASS in self.get_classes(ancestor):
                return ancestor
        return element.getroottree().getroot()

    def find_child(self, element: Any, class_name: str) -> Optional[Any]:
        found = element.xpath(f".//*[{_class_xpath(class_name)}]")
        return found[0] if found else None

    def append_child(self, element: Any, tag: str, class_name: Optional[str] = None,
                     text: Optional[str] = None,
                     attributes: Optional[Mapping[str, str]] = None) -> Any:
        attrib = dict(attributes or {})
        if class_name:
            attrib["class"] = class_name
        child = element.makeelement(tag, attrib)
        if text is not None:
            child.text = text
        element.append(child)
        return child

    def get_attribute(self, element: Any, name: str, default: Optional[str] = None) -> Optional[str]:
        return element.get(name, default)

    def set_attribute(self, element: Any, name: str, value: Optional[str]) -> None:
        if value is None:
            element.attrib.pop(name, None)
        else:
            element.set(name, str(value))

    def get_classes(self, element: Any) -> List[str]:
        return (element.get("class") or "").split()

    def set_classes(self, element: Any, classes: List[str]) -> None:
        if classes:
            element.set("class", " ".join(classes))
        else:
            element.attrib.pop("class", None)

    def get_style(self, element: Any) -> Dict[str, str]:
        return parse_style(element.get("style"))

    def set_style(self, element: Any, properties: Mapping[str, Optional[str]]) -> None:
        style = self.get_style(element)
        for name, value in properties.items():
            if value is None:
                style.pop(name, None)
            else:
                style[name] = str(value)
        if style:
            element.set("style", format_style(style))
        else:
            element.attrib.pop("style", None)

    def get_text(self, element: Any) -> str:
        return element.text_content()

    def set_text(self, element: Any, text: str) -> None:
        for child in list(element):
            element.remove(child)
        element.text = text


def load_page(source: Union[str, bytes, Path]) -> Any:
    """
    Parse HTML and return its page container.

    Args:
        source: HTML markup, or a path to an HTML file

    Returns:
        The first element with class ``page``, or the document root
    """
    if isinstance(source, Path):
        source = source.read_text(encoding="utf-8")
    if not source or not str(source).strip():
        raise SurfaceError("Cannot load page from empty markup")
    try:
        root = lxml.html.fromstring(source)
    except (etree.ParserError, ValueError) as exc:
        raise SurfaceError("Could not parse page markup", str(exc)) from exc

    pages = root.xpath(f"descendant-or-self::*[{_class_xpath(PAGE_CLASS)}]")
    if len(pages) > 1:
        logger.warning(f"Markup contains {len(pages)} pages; using the first one")
    return pages[0] if pages else root


def page_to_html(page: Any, pretty_print: bool = True) -> str:
    """Serialize the whole document that ``page`` belongs to."""
    root = page.getroottree().getroot()
    return lxml.html.tostring(root, encoding="unicode", pretty_print=pretty_print)
