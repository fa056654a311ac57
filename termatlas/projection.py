"""Map projections from geographic coordinates onto the raster canvas."""
from __future__ import annotations

import enum
import math
from typing import Any, Callable, Dict, Tuple

import numpy as np

SQRT2 = math.sqrt(2.0)

ProjectFunc = Callable[[Any, Any, float, float], Tuple[Any, Any]]


def _to_canvas(x_deg: Any, y_deg: Any, width: float, height: float) -> Tuple[Any, Any]:
    x = (x_deg + 180.0) / 360.0 * width
    y = (180.0 - (y_deg + 90.0)) / 180.0 * height
    return x, y


def _from_canvas(x: Any, y: Any, width: float, height: float) -> Tuple[Any, Any]:
    x_deg = x / width * 360.0 - 180.0
    y_deg = 90.0 - y / height * 180.0
    return x_deg, y_deg


def project_equirect(lon: Any, lat: Any, width: float, height: float) -> Tuple[Any, Any]:
    """Plate carrée: both axes linear in degrees."""

    return _to_canvas(lon, lat, width, height)


def project_kavrayskiy(lon: Any, lat: Any, width: float, height: float) -> Tuple[Any, Any]:
    """Kavrayskiy VII pseudocylindrical projection."""

    lonr = np.radians(lon)
    latr = np.radians(lat)
    x = 1.5 * lonr * np.sqrt(1.0 / 3.0 - (latr / np.pi) ** 2)
    return _to_canvas(np.degrees(x), lat, width, height)


def project_lambert(lon: Any, lat: Any, width: float, height: float) -> Tuple[Any, Any]:
    """Lambert cylindrical equal-area projection."""

    y = np.sin(np.radians(lat)) * 90.0
    return _to_canvas(lon, y, width, height)


def project_hammer(lon: Any, lat: Any, width: float, height: float) -> Tuple[Any, Any]:
    """Hammer-Aitoff equal-area projection."""

    lonr = np.radians(lon)
    latr = np.radians(lat)
    denom = np.sqrt(1.0 + np.cos(latr) * np.cos(lonr * 0.5))
    x = 2.0 * SQRT2 * np.cos(latr) * np.sin(lonr * 0.5) / denom
    y = SQRT2 * np.sin(latr) / denom
    return _to_canvas(np.degrees(x), np.degrees(y), width, height)


def unproject_equirect(x: Any, y: Any, width: float, height: float) -> Tuple[Any, Any]:
    return _from_canvas(x, y, width, height)


def unproject_kavrayskiy(x: Any, y: Any, width: float, height: float) -> Tuple[Any, Any]:
    x_deg, lat = _from_canvas(x, y, width, height)
    latr = np.radians(lat)
    with np.errstate(invalid="ignore", divide="ignore"):
        lon = x_deg / (1.5 * np.sqrt(1.0 / 3.0 - (latr / np.pi) ** 2))
    return lon, lat


def unproject_lambert(x: Any, y: Any, width: float, height: float) -> Tuple[Any, Any]:
    lon, y_deg = _from_canvas(x, y, width, height)
    with np.errstate(invalid="ignore"):
        lat = np.degrees(np.arcsin(np.asarray(y_deg) / 90.0))
    return lon, lat


def unproject_hammer(x: Any, y: Any, width: float, height: float) -> Tuple[Any, Any]:
    x_deg, y_deg = _from_canvas(x, y, width, height)
    hx = np.radians(x_deg)
    hy = np.radians(y_deg)
    with np.errstate(invalid="ignore"):
        z = np.sqrt(1.0 - (hx / 4.0) ** 2 - (hy / 2.0) ** 2)
        lon = 2.0 * np.arctan2(z * hx, 2.0 * (2.0 * z**2 - 1.0))
        lat = np.arcsin(z * hy)
    return np.degrees(lon), np.degrees(lat)


class Projection(enum.Enum):
    """The supported world projections.

    Members are plain values; ``project`` and ``unproject`` dispatch to the
    module-level functions so a projection can be shared freely.
    """

    EQUIRECTANGULAR = "equirectangular"
    KAVRAYSKIY = "kavrayskiy"
    LAMBERT = "lambert"
    HAMMER = "hammer"

    @classmethod
    def from_name(cls, name: "str | Projection") -> "Projection":
        """Resolve a projection from its name or any prefix of three or more letters."""

        if isinstance(name, Projection):
            return name
        key = str(name).strip().lower()
        if len(key) >= 3:
            for member in cls:
                if member.value.startswith(key) or key.startswith(member.value[:3]):
                    return member
        choices = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown projection {name!r}; expected one of: {choices}")

    def project(self, lon: Any, lat: Any, width: float, height: float) -> Tuple[Any, Any]:
        return _FORWARD[self](lon, lat, width, height)

    def unproject(self, x: Any, y: Any, width: float, height: float) -> Tuple[Any, Any]:
        return _INVERSE[self](x, y, width, height)


_FORWARD: Dict[Projection, ProjectFunc] = {
    Projection.EQUIRECTANGULAR: project_equirect,
    Projection.KAVRAYSKIY: project_kavrayskiy,
    Projection.LAMBERT: project_lambert,
    Projection.HAMMER: project_hammer,
}

_INVERSE: Dict[Projection, ProjectFunc] = {
    Projection.EQUIRECTANGULAR: unproject_equirect,
    Projection.KAVRAYSKIY: unproject_kavrayskiy,
    Projection.LAMBERT: unproject_lambert,
    Projection.HAMMER: unproject_hammer,
}
