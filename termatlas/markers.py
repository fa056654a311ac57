"""Highlighted points, tracks and circles read from a plain-text locations file."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .canvas import NUM_TRACKS, Canvas, PaintClass, track_class
from .geometry import CIRCLE_STEPS, Coordinate, spherical_circle
from .projection import Projection

log = logging.getLogger("termatlas.markers")

BLOCK_HEADERS = ("points", "track", "circles")
BLOCK_END = "."


@dataclass(frozen=True)
class PointMarker:
    longitude: float
    latitude: float


@dataclass(frozen=True)
class TrackMarker:
    points: Tuple[Coordinate, ...]
    track: int = 0


@dataclass(frozen=True)
class CircleMarker:
    longitude: float
    latitude: float
    radius: float
    track: int = 0


@dataclass
class MarkerSet:
    """Everything parsed from one locations file."""

    points: List[PointMarker] = field(default_factory=list)
    tracks: List[TrackMarker] = field(default_factory=list)
    circles: List[CircleMarker] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.points or self.tracks or self.circles)


def _parse_fields(line: str, count: int) -> Optional[Tuple[float, ...]]:
    fields = line.split()
    if len(fields) < count:
        return None
    try:
        return tuple(float(value) for value in fields[:count])
    except ValueError:
        return None


def parse_locations(lines: Iterable[str]) -> MarkerSet:
    """Parse the block-structured locations format.

    ``points``, ``track`` and ``circles`` headers open a block; data lines are
    ``<lat> <lon>`` or ``<lat> <lon> <radius>``; a line holding only ``.``
    closes the block. Malformed data lines are logged and skipped. The track
    colour advances once per ``track`` block and once per circle.
    """

    markers = MarkerSet()
    block: Optional[str] = None
    track_points: List[Coordinate] = []
    track_index = -1

    def close_block() -> None:
        if block == "track":
            markers.tracks.append(TrackMarker(points=tuple(track_points), track=track_index))

    for number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if line in BLOCK_HEADERS:
            close_block()
            block = line
            if block == "track":
                track_index = (track_index + 1) % NUM_TRACKS
                track_points = []
            continue
        if line == BLOCK_END:
            close_block()
            block = None
            continue
        if not line or block is None:
            continue

        expected = 3 if block == "circles" else 2
        values = _parse_fields(line, expected)
        if values is None:
            log.warning("Skipping malformed %s line %d: %r", block, number, line)
            continue

        lat, lon = values[0], values[1]
        if block == "points":
            markers.points.append(PointMarker(longitude=lon, latitude=lat))
        elif block == "track":
            track_points.append((lon, lat))
        else:
            track_index = (track_index + 1) % NUM_TRACKS
            markers.circles.append(CircleMarker(longitude=lon, latitude=lat, radius=values[2], track=track_index))

    close_block()
    return markers


def load_locations(path: Path) -> MarkerSet:
    """Read a locations file; an unreadable file raises ``OSError``."""

    with Path(path).open("r", encoding="utf8") as handle:
        markers = parse_locations(handle)
    log.debug(
        "Loaded %d points, %d tracks and %d circles from %s",
        len(markers.points),
        len(markers.tracks),
        len(markers.circles),
        path,
    )
    return markers


def draw_markers(
    canvas: Canvas, projection: Projection, markers: MarkerSet, circle_steps: int = CIRCLE_STEPS
) -> None:
    """Paint tracks and circles, then the highlighted points on top."""

    w, h = canvas.width, canvas.height
    for track in markers.tracks:
        projected = [projection.project(lon, lat, w, h) for lon, lat in track.points]
        canvas.draw_polyline(projected, track_class(track.track))

    for circle in markers.circles:
        paint = track_class(circle.track)
        for lon, lat in spherical_circle(circle.longitude, circle.latitude, circle.radius, circle_steps):
            x, y = projection.project(lon, lat, w, h)
            canvas.set_pixel(x, y, paint)

    for point in markers.points:
        x, y = projection.project(point.longitude, point.latitude, w, h)
        canvas.set_pixel(x, y, PaintClass.HIGHLIGHT)
