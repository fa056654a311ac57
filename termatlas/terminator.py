"""Day/night shading and the sun border (terminator) curve."""
from __future__ import annotations

import logging
import math
from typing import Any, List, Tuple, Union

import numpy as np

from .canvas import MAX_SHADES, Canvas, PaintClass, shade_class
from .geometry import CIRCLE_STEPS, Coordinate, angular_distance, spherical_circle, wrap_longitude
from .projection import Projection
from .sun import SunState

log = logging.getLogger("termatlas.terminator")

Segment = Tuple[Coordinate, Coordinate]

DUSK_DEGREES = {
    "civil": 6.0,
    "nautical": 12.0,
    "astronomical": 18.0,
}

# Colatitude window (90 + sub-solar latitude) where the meridian sweep
# becomes unstable. Chosen empirically.
EQUINOX_COLATITUDE = (86.0, 94.0)
# Strength of the arctangent warp that packs samples near the turning points.
BORDER_WARP = 8.0
BORDER_SAMPLES = 360
# Highest latitude sampled on the equinox path. At the pole every longitude
# is on the terminator, so a pole sample has no usable longitude.
POLE_LIMIT = 90.0 - 1e-9

SUN_BORDER_METHODS = ("curve", "circle")


def shade_band(zeta: Any, dusk_degrees: float = 6.0, bands: int = MAX_SHADES) -> Union[int, np.ndarray]:
    """Night-ness band for an angular distance ``zeta`` from the sub-solar point.

    0 is full daylight, ``bands - 1`` is full night. Twilight spreads the
    bands over ``dusk_degrees`` beyond the horizon.
    """

    if not 2 <= bands <= MAX_SHADES:
        raise ValueError(f"bands must be between 2 and {MAX_SHADES}")
    if dusk_degrees <= 0:
        raise ValueError("dusk_degrees must be positive")

    d90 = (np.asarray(zeta, dtype=float) - 90.0) / dusk_degrees
    band = np.clip(np.floor(d90 * (bands - 1) + 0.5), 0, bands - 1).astype(np.int64)
    if band.ndim == 0:
        return int(band)
    return band


def shade_map(
    canvas: Canvas,
    projection: Projection,
    sun: SunState,
    step: float = 1.0,
    dusk_degrees: float = 6.0,
    bands: int = MAX_SHADES,
) -> Canvas:
    """Shade the land on ``canvas`` by time of day and return the overlay used.

    The globe is cut into ``step`` degree cells; each cell is coloured from
    the great-circle distance between its center and the sub-solar point and
    filled as a projected quadrilateral, so no inverse projection is needed.
    """

    if step <= 0:
        raise ValueError("step must be positive")

    lon_count = max(1, math.ceil(360.0 / step))
    lat_count = max(1, math.ceil(180.0 / step))
    lon_edges = np.minimum(-180.0 + step * np.arange(lon_count + 1), 180.0)
    lat_edges = np.minimum(-90.0 + step * np.arange(lat_count + 1), 90.0)

    west, south = np.meshgrid(lon_edges[:-1], lat_edges[:-1])
    east, north = np.meshgrid(lon_edges[1:], lat_edges[1:])

    zeta = angular_distance(sun.longitude, sun.latitude, (west + east) / 2.0, (south + north) / 2.0)
    band = shade_band(zeta, dusk_degrees, bands)

    w, h = canvas.width, canvas.height
    corners = [
        projection.project(west, south, w, h),
        projection.project(east, south, w, h),
        projection.project(east, north, w, h),
        projection.project(west, north, w, h),
    ]

    overlay = Canvas(w, h)
    for iy in range(lat_count):
        for ix in range(lon_count):
            quad = [(float(xs[iy, ix]), float(ys[iy, ix])) for xs, ys in corners]
            overlay.fill_polygon(quad, shade_class(int(band[iy, ix])))

    canvas.overlay_merge(overlay)
    log.debug(
        "Shaded %dx%d cells around sun at (%.2f, %.2f)",
        lon_count,
        lat_count,
        sun.longitude,
        sun.latitude,
    )
    return overlay


def _sweep_segments(sun: SunState, colatitude: float, samples: int) -> List[Segment]:
    lons = np.linspace(-180.0, 180.0, samples + 1)
    lats = np.degrees(
        np.arctan(math.tan(math.radians(colatitude)) * np.cos(np.radians(lons - sun.longitude)))
    )
    segments = []
    for i in range(samples):
        if np.isnan(lats[i]) or np.isnan(lats[i + 1]):
            continue
        segments.append(((float(lons[i]), float(lats[i])), (float(lons[i + 1]), float(lats[i + 1]))))
    return segments


def _equinox_segments(sun: SunState, colatitude: float, samples: int) -> List[Segment]:
    t = np.linspace(-1.0, 1.0, samples + 1)
    lat_max = min(90.0 - abs(sun.latitude), POLE_LIMIT)
    lats = lat_max * np.arctan(BORDER_WARP * t) / math.atan(BORDER_WARP)

    ratio = np.tan(np.radians(lats)) / math.tan(math.radians(colatitude))
    # Snap values a rounding error beyond +-1 back onto the turning points.
    ratio = np.where(np.abs(np.abs(ratio) - 1.0) < 1e-9, np.sign(ratio), ratio)
    with np.errstate(invalid="ignore"):
        delta = np.degrees(np.arccos(ratio))

    segments = []
    for sign in (1.0, -1.0):
        raw = sun.longitude + sign * delta
        lons = wrap_longitude(raw)
        wrapped = np.abs(lons - raw) > 1e-9
        for i in range(samples):
            if np.isnan(delta[i]) or np.isnan(delta[i + 1]):
                continue
            if wrapped[i] != wrapped[i + 1]:
                continue
            segments.append(((float(lons[i]), float(lats[i])), (float(lons[i + 1]), float(lats[i + 1]))))
    return segments


def sun_border_segments(sun: SunState, samples: int = BORDER_SAMPLES) -> List[Segment]:
    """Geographic segments approximating the line where the sun is on the horizon."""

    colatitude = 90.0 + sun.latitude
    low, high = EQUINOX_COLATITUDE
    if low <= colatitude <= high:
        return _equinox_segments(sun, colatitude, samples)
    return _sweep_segments(sun, colatitude, samples)


def draw_sun_border(
    canvas: Canvas,
    projection: Projection,
    sun: SunState,
    method: str = "curve",
    samples: int = BORDER_SAMPLES,
) -> None:
    """Paint the terminator, either as a sampled curve or as a 90 degree small circle."""

    w, h = canvas.width, canvas.height
    if method == "curve":
        for (lon1, lat1), (lon2, lat2) in sun_border_segments(sun, samples):
            x1, y1 = projection.project(lon1, lat1, w, h)
            x2, y2 = projection.project(lon2, lat2, w, h)
            canvas.draw_line(x1, y1, x2, y2, PaintClass.SUN_BORDER)
    elif method == "circle":
        for lon, lat in spherical_circle(sun.longitude, sun.latitude, 90.0, CIRCLE_STEPS):
            x, y = projection.project(lon, lat, w, h)
            canvas.set_pixel(x, y, PaintClass.SUN_BORDER)
    else:
        raise ValueError(f"Unknown sun border method {method!r}")


def mark_sun(canvas: Canvas, projection: Projection, sun: SunState) -> None:
    x, y = projection.project(sun.longitude, sun.latitude, canvas.width, canvas.height)
    canvas.set_pixel(x, y, PaintClass.SUN)
