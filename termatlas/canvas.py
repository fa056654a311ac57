"""Raster canvas of semantic paint classes.

Cells hold what is drawn there (land, a shade band, a track, ...), not a
colour. The quantizer and the image exporter decide how each class looks,
so one canvas can drive both a terminal and a PNG.
"""
from __future__ import annotations

import enum
import math
from typing import Any, Iterable, List, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

MAX_SHADES = 8
NUM_TRACKS = 3
SHADE_BASE = 10
TRACK_BASE = 20

Point = Tuple[float, float]


class PaintClass(enum.IntEnum):
    """Fixed paint classes. Shade bands and tracks are indexed ranges."""

    EMPTY = 0
    LAND = 1
    WORLD_BORDER = 2
    SUN_BORDER = 30
    SUN = 31
    HIGHLIGHT = 32


def shade_class(band: int) -> int:
    if not 0 <= band < MAX_SHADES:
        raise ValueError(f"Shade band {band} outside 0..{MAX_SHADES - 1}")
    return SHADE_BASE + band


def track_class(track: int) -> int:
    return TRACK_BASE + track % NUM_TRACKS


def is_shade(cells: Any) -> Any:
    return (cells >= SHADE_BASE) & (cells < SHADE_BASE + MAX_SHADES)


def is_track(cells: Any) -> Any:
    return (cells >= TRACK_BASE) & (cells < TRACK_BASE + NUM_TRACKS)


def bresenham(x1: int, y1: int, x2: int, y2: int) -> List[Tuple[int, int]]:
    """Cells on the 8-connected line between two integer points, both ends included."""

    # Fixed endpoint order keeps the path identical whichever way it is drawn.
    if (x2, y2) < (x1, y1):
        x1, y1, x2, y2 = x2, y2, x1, y1

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    cells = []
    while True:
        cells.append((x1, y1))
        if x1 == x2 and y1 == y2:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x1 += sx
        if e2 < dx:
            err += dx
            y1 += sy
    return cells


def _finite(points: Iterable[Sequence[float]]) -> List[Point]:
    result = []
    for x, y in points:
        x, y = float(x), float(y)
        if math.isfinite(x) and math.isfinite(y):
            result.append((x, y))
    return result


class Canvas:
    """A ``width`` x ``height`` grid of paint classes, initially empty."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.cells = np.zeros((self.height, self.width), dtype=np.uint8)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> int:
        return int(self.cells[y, x])

    def set_pixel(self, x: float, y: float, paint: int) -> None:
        """Paint one cell; coordinates are floored and anything off-canvas is ignored."""

        if not (math.isfinite(x) and math.isfinite(y)):
            return
        xi, yi = math.floor(x), math.floor(y)
        if self.contains(xi, yi):
            self.cells[yi, xi] = paint

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, paint: int) -> None:
        if not all(math.isfinite(v) for v in (x1, y1, x2, y2)):
            return
        for x, y in bresenham(math.floor(x1), math.floor(y1), math.floor(x2), math.floor(y2)):
            if self.contains(x, y):
                self.cells[y, x] = paint

    def draw_polyline(self, points: Iterable[Sequence[float]], paint: int) -> None:
        pts = _finite(points)
        if len(pts) == 1:
            self.set_pixel(pts[0][0], pts[0][1], paint)
        for (x1, y1), (x2, y2) in zip(pts[:-1], pts[1:]):
            self.draw_line(x1, y1, x2, y2, paint)

    def stroke_polygon(self, points: Iterable[Sequence[float]], paint: int) -> None:
        pts = _finite(points)
        if len(pts) > 1 and pts[0] != pts[-1]:
            pts.append(pts[0])
        self.draw_polyline(pts, paint)

    def fill_polygon(self, points: Iterable[Sequence[float]], paint: int) -> None:
        """Fill a polygon, boundary included, using the even-odd rule.

        Rasterisation happens on a mask covering only the polygon's bounding
        box clipped to the canvas.
        """

        pts = _finite(points)
        if len(pts) < 3:
            self.stroke_polygon(pts, paint)
            return

        xs = [x for x, _ in pts]
        ys = [y for _, y in pts]
        x0 = max(math.floor(min(xs)), 0)
        y0 = max(math.floor(min(ys)), 0)
        x1 = min(math.floor(max(xs)), self.width - 1)
        y1 = min(math.floor(max(ys)), self.height - 1)
        if x0 > x1 or y0 > y1:
            return

        mask = Image.new("L", (x1 - x0 + 1, y1 - y0 + 1), 0)
        ImageDraw.Draw(mask).polygon([(x - x0, y - y0) for x, y in pts], fill=255, outline=255)
        region = np.asarray(mask) > 0
        self.cells[y0 : y1 + 1, x0 : x1 + 1][region] = paint

    def overlay_merge(self, overlay: "Canvas") -> None:
        """Copy the overlay's shade bands onto land cells.

        Background cells stay empty and every other class keeps its value.
        """

        if overlay.cells.shape != self.cells.shape:
            raise ValueError("Overlay size does not match canvas size")
        target = (self.cells == PaintClass.LAND) & is_shade(overlay.cells)
        self.cells[target] = overlay.cells[target]

    def to_rgb(self, colors: np.ndarray) -> np.ndarray:
        """Map every cell through a ``(256, 3)`` colour lookup table."""

        return np.asarray(colors, dtype=np.uint8)[self.cells]
