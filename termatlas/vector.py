"""Painting vector land shapes and the world border onto the canvas."""
from __future__ import annotations

import logging
import math
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from .canvas import Canvas, PaintClass
from .geometry import Coordinate, ring_orientation
from .map_shapes import MapSourceError, Shape
from .projection import Projection

log = logging.getLogger("termatlas.vector")

WORLD_BORDER_STEPS = 128
_EDGE = 179.99999
_POLE = 89.99999


def project_ring(
    projection: Projection, ring: Sequence[Coordinate], width: int, height: int
) -> List[Tuple[float, float]]:
    lons = np.array([lon for lon, _ in ring], dtype=float)
    lats = np.array([lat for _, lat in ring], dtype=float)
    xs, ys = projection.project(lons, lats, width, height)
    return list(zip(np.atleast_1d(xs).tolist(), np.atleast_1d(ys).tolist()))


def ring_is_hole(ring: Sequence[Coordinate], ring_count: int, trust_single_ring_winding: bool = False) -> bool:
    """Decide whether a ring is a hole from its winding.

    Holes wind counter-clockwise (positive orientation) against their outer
    ring. Some datasets wind lone rings inconsistently, so unless
    ``trust_single_ring_winding`` is set the winding only counts for shapes
    with more than one ring. This is a data workaround rather than a
    geometric rule.
    """

    if ring_count < 2 and not trust_single_ring_winding:
        return False
    return ring_orientation(ring) > 0


def draw_shapes(
    canvas: Canvas,
    projection: Projection,
    shapes: Iterable[Shape],
    solid_land: bool = True,
    trust_single_ring_winding: bool = False,
) -> int:
    """Paint every shape as land and return how many shapes were drawn.

    Raises :class:`MapSourceError` on the first shape that is not a usable
    polygon; the caller must discard the canvas in that case.
    """

    count = 0
    for index, shape in enumerate(shapes):
        if shape.kind != "polygon":
            raise MapSourceError(f"Shape {index} is not a polygon ({shape.kind})")
        if not shape.rings:
            raise MapSourceError(f"Shape {index} has no rings")

        for ring in shape.rings:
            if not ring:
                raise MapSourceError(f"Shape {index} has a ring without vertices")
            points = project_ring(projection, ring, canvas.width, canvas.height)
            if not solid_land:
                canvas.stroke_polygon(points, PaintClass.LAND)
            elif ring_is_hole(ring, len(shape.rings), trust_single_ring_winding):
                canvas.fill_polygon(points, PaintClass.EMPTY)
            else:
                canvas.fill_polygon(points, PaintClass.LAND)
        count += 1

    log.debug("Painted %d shapes", count)
    return count


def draw_projected_line(
    canvas: Canvas, projection: Projection, start: Coordinate, end: Coordinate, paint: int
) -> None:
    """Draw a straight canvas line between two projected points.

    Nothing is drawn when both ends land in the same cell.
    """

    x1, y1 = projection.project(start[0], start[1], canvas.width, canvas.height)
    x2, y2 = projection.project(end[0], end[1], canvas.width, canvas.height)
    if math.floor(x1) == math.floor(x2) and math.floor(y1) == math.floor(y2):
        return
    canvas.draw_line(x1, y1, x2, y2, paint)


def draw_world_border(canvas: Canvas, projection: Projection, steps: int = WORLD_BORDER_STEPS) -> None:
    """Outline the edge of the projected world."""

    for i in range(steps):
        lat1 = i / steps * 180.0 - 90.0
        lat2 = (i + 1) / steps * 180.0 - 90.0
        lon1 = i / steps * 360.0 - 180.0
        lon2 = (i + 1) / steps * 360.0 - 180.0
        draw_projected_line(canvas, projection, (-_EDGE, lat1), (-_EDGE, lat2), PaintClass.WORLD_BORDER)
        draw_projected_line(canvas, projection, (_EDGE, lat1), (_EDGE, lat2), PaintClass.WORLD_BORDER)
        draw_projected_line(canvas, projection, (lon1, -_POLE), (lon2, -_POLE), PaintClass.WORLD_BORDER)
        draw_projected_line(canvas, projection, (lon1, _POLE), (lon2, _POLE), PaintClass.WORLD_BORDER)
