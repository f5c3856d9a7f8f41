"""
Command-line interface for pagezones.

Usage:
    pagezones inspect page.html
    pagezones validate page.html
    pagezones export page.html --output zones.json
    pagezones apply page.html zones.json --output restored.html
    pagezones resize page.html zone-content 200 --output resized.html
    pagezones version
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table

from .config import load_config
from .exceptions import ZoneLayoutError
from .utils.logger import setup_logging

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pagezones",
        description="pagezones - resizable header/content/footer zones on fixed-height pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pagezones inspect page.html
  pagezones validate page.html
  pagezones export page.html -o zones.json
  pagezones apply page.html zones.json -o restored.html
  pagezones resize page.html zone-content 200 -o resized.html
        """,
    )
    parser.add_argument(
        "--config",
        help="JSON configuration file (page budget, constraint overrides)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Log level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    inspect_parser = subparsers.add_parser("inspect", help="List the zones of a page")
    inspect_parser.add_argument("input", help="Input HTML file")
    inspect_parser.add_argument("--json", action="store_true", help="Output as JSON")

    validate_parser = subparsers.add_parser("validate", help="Audit a page for layout problems")
    validate_parser.add_argument("input", help="Input HTML file")

    export_parser = subparsers.add_parser("export", help="Export zone snapshot JSON")
    export_parser.add_argument("input", help="Input HTML file")
    export_parser.add_argument("-o", "--output", help="Output JSON file (default: stdout)")

    apply_parser = subparsers.add_parser("apply", help="Restore zone heights from a snapshot")
    apply_parser.add_argument("input", help="Input HTML file")
    apply_parser.add_argument("zones", help="Zone snapshot JSON file")
    apply_parser.add_argument("-o", "--output", help="Output HTML file (default: overwrite input)")

    resize_parser = subparsers.add_parser("resize", help="Resize one zone")
    resize_parser.add_argument("input", help="Input HTML file")
    resize_parser.add_argument("zone_id", help="Zone id")
    resize_parser.add_argument("height", type=float, help="Requested height in mm")
    resize_parser.add_argument("-o", "--output", help="Output HTML file (default: overwrite input)")

    subparsers.add_parser("version", help="Show version information")

    return parser


def _open(args):
    """Load the engine and the page named by ``args.input``."""
    from .engine import ZoneLayoutEngine
    from .surface import load_page

    input_path = Path(args.input)
    if not input_path.exists():
        raise FileNotFoundError(f"File not found: {input_path}")

    engine = ZoneLayoutEngine(config=load_config(args.config))
    page = load_page(input_path)
    return engine, page, input_path


def _write_page(page, output: Optional[str], input_path: Path, console: Console) -> None:
    from .surface import page_to_html

    output_path = Path(output) if output else input_path
    output_path.write_text(page_to_html(page), encoding="utf-8")
    console.print(f"Saved: {output_path}")


def cmd_inspect(args, console: Console) -> int:
    """Handle inspect command."""
    engine, page, input_path = _open(args)
    zones = engine.detect_zones(page)
    total = engine.calculate_total_page_height(page)

    if args.json:
        console.print_json(json.dumps({
            "file": str(input_path),
            "total_height": total,
            "page_height": engine.config.page_height_mm,
            "zones": [zone.snapshot().to_dict() for zone in zones],
        }))
        return 0

    table = Table(title=f"Zones in {input_path.name}")
    table.add_column("Id", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Height (mm)", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Adjustable")
    for zone in zones:
        profile = zone.constraints
        table.add_row(
            zone.id,
            zone.type,
            f"{zone.current_height:.1f}",
            "-" if profile.min_height is None else f"{profile.min_height:g}",
            "-" if profile.max_height is None else f"{profile.max_height:g}",
            "yes" if profile.adjustable else "no",
        )
    console.print(table)
    console.print(f"Total: {total:.1f}mm of {engine.config.page_height_mm:g}mm")
    return 0


def cmd_validate(args, console: Console) -> int:
    """Handle validate command."""
    engine, page, input_path = _open(args)
    result = engine.validate_page_layout(page)

    if result.valid:
        console.print(f"[green]✓ {input_path} is valid[/green]")
        return 0

    console.print(f"[yellow]⚠ {input_path}: {len(result.warnings)} warning(s)[/yellow]")
    for warning in result.warnings:
        console.print(f"  - {warning}")
    return 1


def cmd_export(args, console: Console) -> int:
    """Handle export command."""
    engine, page, _ = _open(args)
    text = engine.export_zone_data_json(page)

    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        console.print(f"Saved: {args.output}")
    else:
        console.print_json(text)
    return 0


def cmd_apply(args, console: Console) -> int:
    """Handle apply command."""
    engine, page, input_path = _open(args)
    zones_path = Path(args.zones)
    if not zones_path.exists():
        raise FileNotFoundError(f"File not found: {zones_path}")

    results = engine.import_zone_data_json(page, zones_path.read_text(encoding="utf-8"))
    for zone_id, applied in results.items():
        mark = "[green]✓[/green]" if applied else "[red]✗[/red]"
        console.print(f"{mark} {zone_id}")

    _write_page(page, args.output, input_path, console)
    return 0 if all(results.values()) else 1


def cmd_resize(args, console: Console) -> int:
    """Handle resize command."""
    engine, page, input_path = _open(args)
    zone = engine.find_zone(page, args.zone_id)
    if zone is None:
        console.print(f"[red]Zone not found: {args.zone_id}[/red]")
        return 1

    if not engine.set_zone_height(zone, args.height, page):
        message = engine.errors.last_message
        reason = message.message if message else f"zone {zone.id} is not adjustable"
        console.print(f"[red]✗ {reason}[/red]")
        return 1

    console.print(f"{zone.id}: {zone.current_height:.1f}mm")
    _write_page(page, args.output, input_path, console)
    return 0


def cmd_version(args=None, console: Optional[Console] = None) -> int:
    """Handle version command."""
    from .version import __version__
    (console or Console()).print(f"pagezones v{__version__}")
    return 0


COMMANDS = {
    "inspect": cmd_inspect,
    "validate": cmd_validate,
    "export": cmd_export,
    "apply": cmd_apply,
    "resize": cmd_resize,
    "version": cmd_version,
}


def main(argv: Optional[Sequence[str]] = None, console: Optional[Console] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    console = console or Console()

    setup_logging(args.log_level)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args, console)
    except FileNotFoundError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        return 1
    except ZoneLayoutError as exc:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[red]Error: {exc}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
