"""
Pytest configuration for pagezones
"""

import pytest
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

from pagezones import EngineConfig, ZoneLayoutEngine, load_page
from pagezones.utils.units import PX_PER_MM

ZoneSpec = Tuple[str, float, Optional[str]]

STANDARD_ZONES: Sequence[ZoneSpec] = (
    ("header", 60.0, "page-header"),
    ("content", 180.0, "page-content"),
    ("footer", 40.0, "page-footer"),
)


def build_page_html(zones: Sequence[ZoneSpec] = STANDARD_ZONES, extra: str = "") -> str:
    """HTML for one page whose zones have the given natural heights (mm)."""
    parts = []
    for zone_type, height_mm, zone_id in zones:
        id_attr = f' id="{zone_id}"' if zone_id else ""
        parts.append(
            f'<div data-zone="{zone_type}"{id_attr} '
            f'data-rendered-height="{height_mm * PX_PER_MM}px"><p>{zone_type} text</p></div>'
        )
    return (
        "<html><head><title>Page</title></head><body>"
        f'<div class="page">{"".join(parts)}{extra}</div>'
        "</body></html>"
    )


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests

    formatter = logging.Formatter(
        '%(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def temp_dir(tmp_path):
    """Temporary directory for tests."""
    return Path(tmp_path)


@pytest.fixture
def page_factory():
    """Build a page container from zone specs."""
    def factory(zones: Sequence[ZoneSpec] = STANDARD_ZONES, extra: str = ""):
        return load_page(build_page_html(zones, extra))
    return factory


@pytest.fixture
def page(page_factory):
    """Standard page: header 60mm, content 180mm, footer 40mm (280mm total)."""
    return page_factory()


@pytest.fixture
def engine():
    """Engine with default A4 configuration and a fixed clock."""
    return ZoneLayoutEngine(config=EngineConfig(), clock=lambda: 1700000000.0)


@pytest.fixture
def zones(engine, page):
    """Initialized zones of the standard page, keyed by type."""
    return {zone.type: zone for zone in engine.initialize_zones(page)}


@pytest.fixture
def page_file(temp_dir):
    """Write a page built from zone specs to an HTML file and return its path."""
    def factory(zones: Sequence[ZoneSpec] = STANDARD_ZONES, name: str = "page.html") -> Path:
        path = temp_dir / name
        path.write_text(build_page_html(zones), encoding="utf-8")
        return path
    return factory
