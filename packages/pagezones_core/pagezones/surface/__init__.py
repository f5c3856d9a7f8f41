"""Layout surface bindings."""

from .base import LayoutSurface, ZONE_ATTRIBUTE, RENDERED_HEIGHT_ATTRIBUTE, TOP_ATTRIBUTE
from .html_surface import HtmlLayoutSurface, load_page, page_to_html, parse_style, format_style

__all__ = [
    "LayoutSurface",
    "ZONE_ATTRIBUTE",
    "RENDERED_HEIGHT_ATTRIBUTE",
    "TOP_ATTRIBUTE",
    "HtmlLayoutSurface",
    "load_page",
    "page_to_html",
    "parse_style",
    "format_style",
]
