"""Command line entry point for the world map renderer."""
from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path
from typing import Optional, Tuple

from .config import DEFAULT_COLUMNS, DEFAULT_ROWS, RenderConfig, load_config, parse_dusk, parse_when
from .map_shapes import MapSourceError
from .projection import Projection
from .quantizer import CHARSETS
from .renderer import WorldMapRenderer
from .terminator import SUN_BORDER_METHODS

log = logging.getLogger("termatlas.main")


def _setup_logging(verbose: bool) -> None:
    """Send log records to stderr so they never mix with the map on stdout."""

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s", datefmt="%H:%M:%S"))
    root = logging.getLogger("termatlas")
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def terminal_size() -> Tuple[int, int]:
    if sys.stdout.isatty():
        size = shutil.get_terminal_size((DEFAULT_COLUMNS, DEFAULT_ROWS))
        return size.columns, size.lines
    return DEFAULT_COLUMNS, DEFAULT_ROWS


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a world map in the terminal.")
    parser.add_argument("--config", type=Path, help="JSON or YAML file with default settings.")
    parser.add_argument("-w", "--width", type=int, help="Output width in characters (default: terminal width).")
    parser.add_argument("-H", "--height", type=int, help="Output height in lines (default: terminal height).")
    parser.add_argument("-m", "--map", type=Path, help="Polygon shapefile to draw instead of the built-in outlines.")
    parser.add_argument("-l", "--locations", type=Path, help="File with points, tracks and circles to highlight.")
    parser.add_argument("-s", "--sun", action="store_true", default=None, help="Shade day and night.")
    parser.add_argument(
        "-S", "--no-sun-markers", dest="sun_markers", action="store_false", default=None,
        help="Do not mark the sun and the sun border.",
    )
    parser.add_argument("--sun-border", choices=SUN_BORDER_METHODS, help="How the sun border is traced.")
    parser.add_argument("--when", help="UTC time to render the sun for, ISO 8601 (default: now).")
    parser.add_argument(
        "-d", "--dusk", help="Twilight width: civil, nautical, astronomical or degrees (default: civil)."
    )
    parser.add_argument("--shade-step", type=float, help="Shading grid step in degrees.")
    parser.add_argument("--shade-bands", type=int, help="Number of shade bands, 2 to 8.")
    parser.add_argument(
        "-p", "--projection", help="equirectangular, kavrayskiy, lambert or hammer (three letters suffice)."
    )
    parser.add_argument("-b", "--world-border", action="store_true", default=None, help="Draw the world border.")
    parser.add_argument("-c", "--colors", type=int, choices=(0, 8, 256), help="Colour palette; 0 disables colour.")
    parser.add_argument(
        "--outline", dest="solid_land", action="store_false", default=None,
        help="Draw land outlines instead of solid land.",
    )
    parser.add_argument("--charset", choices=sorted(CHARSETS), help="Glyph set for the terminal output.")
    parser.add_argument("-t", "--title", help="Title shown in a box at the top.")
    parser.add_argument(
        "-T", "--no-trailing-newline", dest="trailing_newline", action="store_false", default=None,
        help="Omit the newline after the last line.",
    )
    parser.add_argument("-W", "--write-image", type=Path, help="Save a PNG image instead of printing text.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr.")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RenderConfig:
    base = load_config(args.config) if args.config else RenderConfig()
    config = base.with_overrides(
        columns=args.width,
        rows=args.height,
        map_path=args.map,
        locations_path=args.locations,
        sun=args.sun,
        sun_markers=args.sun_markers,
        sun_border_method=args.sun_border,
        when=parse_when(args.when),
        dusk_degrees=parse_dusk(args.dusk) if args.dusk else None,
        shade_step_degrees=args.shade_step,
        shade_bands=args.shade_bands,
        projection=Projection.from_name(args.projection) if args.projection else None,
        world_border=args.world_border,
        colors=args.colors,
        solid_land=args.solid_land,
        charset=args.charset,
        title=args.title,
        trailing_newline=args.trailing_newline,
        output_image=args.write_image,
    )
    if config.columns is None or config.rows is None:
        columns, rows = terminal_size()
        config = config.with_overrides(columns=config.columns or columns, rows=config.rows or rows)
    return config


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config = build_config(args)
        renderer = WorldMapRenderer(config)
        if config.output_image is not None:
            output_path = renderer.render_image()
            log.info("Saved map to %s", output_path)
        else:
            sys.stdout.write(renderer.render_text())
            sys.stdout.flush()
    except (MapSourceError, OSError, ValueError, RuntimeError, MemoryError) as exc:
        log.error("%s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
