"""Spherical and planar geometry helpers shared by the map layers."""
from __future__ import annotations

import math
from typing import Any, List, Sequence, Tuple

import numpy as np

Coordinate = Tuple[float, float]

CIRCLE_STEPS = 1024


def angular_distance(lon1: Any, lat1: Any, lon2: Any, lat2: Any) -> Any:
    """Great-circle angular distance in degrees (spherical law of cosines).

    Works element-wise on numpy arrays as well as on plain floats.
    """

    lam1, phi1 = np.radians(lon1), np.radians(lat1)
    lam2, phi2 = np.radians(lon2), np.radians(lat2)
    cos_zeta = np.sin(phi1) * np.sin(phi2) + np.cos(phi1) * np.cos(phi2) * np.cos(lam2 - lam1)
    return np.degrees(np.arccos(np.clip(cos_zeta, -1.0, 1.0)))


def wrap_longitude(lon: Any) -> Any:
    """Wrap longitudes into [-180, 180)."""

    return (np.asarray(lon) + 180.0) % 360.0 - 180.0


def to_cartesian(lon: float, lat: float) -> np.ndarray:
    """Unit vector for a geographic coordinate."""

    theta = math.radians(90.0 - lat)
    phi = math.radians(lon)
    return np.array(
        [math.sin(theta) * math.cos(phi), math.sin(theta) * math.sin(phi), math.cos(theta)],
        dtype=float,
    )


def from_cartesian(vector: Sequence[float]) -> Coordinate:
    """Geographic coordinate of a (nearly) unit vector."""

    x, y, z = vector
    # Rounding can push z marginally outside [-1, 1].
    theta = math.acos(max(-1.0, min(1.0, z)))
    return math.degrees(math.atan2(y, x)), 90.0 - math.degrees(theta)


def rotation_matrix(axis: Sequence[float], angle: float) -> np.ndarray:
    """Rotation by ``angle`` radians around the unit vector ``axis``."""

    rx, ry, rz = axis
    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c
    return np.array(
        [
            [rx * rx * t + c, rx * ry * t - rz * s, rx * rz * t + ry * s],
            [ry * rx * t + rz * s, ry * ry * t + c, ry * rz * t - rx * s],
            [rz * rx * t - ry * s, rz * ry * t + rx * s, rz * rz * t + c],
        ],
        dtype=float,
    )


def spherical_circle(lon: float, lat: float, radius: float, steps: int = CIRCLE_STEPS) -> List[Coordinate]:
    """Sample the small circle of angular ``radius`` degrees around a center.

    The first point sits on the center's meridian, moved towards the equator
    so it never crosses a pole. Each further point is the previous one rotated
    by ``360 / steps`` degrees around the axis through the center, so no
    inverse projection is needed to trace the circle.
    """

    if steps <= 0:
        raise ValueError("steps must be positive")

    start_lat = lat - radius if lat > 0 else lat + radius
    rotation = rotation_matrix(to_cartesian(lon, lat), math.radians(360.0 / steps))
    point = to_cartesian(lon, start_lat)

    points: List[Coordinate] = []
    for _ in range(steps):
        point = rotation @ point
        points.append(from_cartesian(point))
    return points


def triple_orientation(a: Coordinate, b: Coordinate, c: Coordinate) -> int:
    """Sign of the turn a -> b -> c: 1 counter-clockwise, -1 clockwise, 0 collinear."""

    e1x, e1y = b[0] - a[0], b[1] - a[1]
    e2x, e2y = c[0] - b[0], c[1] - b[1]
    z = e1x * e2y - e1y * e2x
    if z > 0:
        return 1
    if z < 0:
        return -1
    return 0


def ring_orientation(ring: Sequence[Coordinate]) -> int:
    """Accumulated turn direction over consecutive vertex triples (Paul Bourke).

    Positive for rings traversed counter-clockwise with x to the right and y
    up, negative for clockwise rings. Every triple counts, the first one
    included, and collinear triples add nothing. A count that treats
    collinear turns as clockwise can flip a counter-clockwise ring with many
    collinear vertices; this one keeps its sign.
    """

    total = 0
    for a, b, c in zip(ring[:-2], ring[1:-1], ring[2:]):
        total += triple_orientation(a, b, c)
    return total
