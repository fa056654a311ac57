"""Vector land sources: built-in outlines and shapefiles."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

Coordinate = Tuple[float, float]
Ring = Tuple[Coordinate, ...]

log = logging.getLogger("termatlas.map_shapes")


class MapSourceError(Exception):
    """Unreadable or malformed vector map source."""


@dataclass(frozen=True)
class Shape:
    """One map record: an outer ring followed by any holes, as (lon, lat) pairs."""

    rings: Tuple[Ring, ...]
    kind: str = "polygon"

    @staticmethod
    def from_rings(rings: Sequence[Sequence[Sequence[float]]], kind: str = "polygon") -> "Shape":
        return Shape(
            rings=tuple(tuple((float(lon), float(lat)) for lon, lat in ring) for ring in rings),
            kind=kind,
        )


# Stylised, low fidelity continent outlines so the program draws a recognisable
# world without any shapefile installed. Vertices are (longitude, latitude).
CONTINENT_SHAPES: Dict[str, List[Coordinate]] = {
    "north_america": [
        (-95.0, 83.0),
        (-168.0, 70.0),
        (-170.0, 50.0),
        (-100.0, 23.0),
        (-83.0, 7.0),
        (-64.0, 18.0),
        (-81.0, 32.0),
        (-60.0, 50.0),
        (-64.0, 60.0),
        (-70.0, 70.0),
        (-95.0, 83.0),
    ],
    "greenland": [
        (-45.0, 60.0),
        (-20.0, 70.0),
        (-20.0, 82.0),
        (-60.0, 82.0),
        (-55.0, 70.0),
        (-45.0, 60.0),
    ],
    "south_america": [
        (-81.0, 12.0),
        (-75.0, 5.0),
        (-75.0, -15.0),
        (-69.0, -33.0),
        (-67.0, -55.0),
        (-47.0, -55.0),
        (-40.0, -30.0),
        (-38.0, -12.0),
        (-50.0, 4.0),
        (-60.0, 12.0),
        (-81.0, 12.0),
    ],
    "europe_asia": [
        (-10.0, 72.0),
        (40.0, 70.0),
        (85.0, 55.0),
        (120.0, 50.0),
        (160.0, 58.0),
        (180.0, 50.0),
        (140.0, 10.0),
        (100.0, 5.0),
        (50.0, 25.0),
        (30.0, 35.0),
        (10.0, 45.0),
        (-10.0, 60.0),
        (-10.0, 72.0),
    ],
    "africa": [
        (-17.0, 35.0),
        (30.0, 31.0),
        (43.0, 12.0),
        (46.0, 0.0),
        (32.0, -25.0),
        (20.0, -35.0),
        (15.0, -35.0),
        (11.0, -22.0),
        (10.0, -5.0),
        (-5.0, 16.0),
        (-17.0, 20.0),
        (-17.0, 35.0),
    ],
    "madagascar": [
        (44.0, -25.0),
        (47.0, -25.0),
        (50.0, -15.0),
        (49.0, -12.0),
        (44.0, -17.0),
        (44.0, -25.0),
    ],
    "australia": [
        (113.0, -11.0),
        (129.0, -12.0),
        (153.0, -23.0),
        (149.0, -36.0),
        (146.0, -43.0),
        (135.0, -39.0),
        (115.0, -34.0),
        (113.0, -17.0),
        (113.0, -11.0),
    ],
    "antarctica": [
        (-180.0, -60.0),
        (-90.0, -60.0),
        (0.0, -60.0),
        (90.0, -60.0),
        (180.0, -60.0),
        (180.0, -80.0),
        (-180.0, -80.0),
        (-180.0, -60.0),
    ],
}


def iter_builtin_shapes() -> Iterator[Shape]:
    """Yield one single-ring shape per built-in continent outline."""

    for outline in CONTINENT_SHAPES.values():
        yield Shape(rings=(tuple(outline),))


def _geometry_shape(geometry: object) -> Shape:
    kind = geometry.geom_type  # type: ignore[attr-defined]
    if kind == "Polygon":
        polygons = [geometry]
    elif kind == "MultiPolygon":
        polygons = list(geometry.geoms)  # type: ignore[attr-defined]
    else:
        # Kept so the renderer can reject the whole source by kind.
        return Shape(rings=(), kind=kind.lower())

    rings = []
    for polygon in polygons:
        rings.append([c[:2] for c in polygon.exterior.coords])
        for interior in polygon.interiors:
            rings.append([c[:2] for c in interior.coords])
    return Shape.from_rings(rings)


def load_shapefile(path: Path) -> Iterator[Shape]:
    """Yield the records of a polygon shapefile, one :class:`Shape` per record.

    Requires the optional ``geopandas`` dependency.
    """

    path = Path(path)
    if not path.exists():
        raise MapSourceError(f"Could not open map source {path}")

    try:  # pragma: no cover - optional dependency
        import geopandas as gpd  # type: ignore
    except Exception as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "Shapefile maps requested but geopandas is not available. Install with 'pip install geopandas'."
        ) from exc

    try:
        frame = gpd.read_file(path)
    except Exception as exc:
        raise MapSourceError(f"Could not open map source {path}: {exc}") from exc

    log.debug("Loaded %d records from %s", len(frame), path)
    for index, geometry in enumerate(frame.geometry):
        if geometry is None or geometry.is_empty:
            raise MapSourceError(f"Could not read object {index} from {path}")
        yield _geometry_shape(geometry)


def load_map(path: Optional[Path] = None) -> Iterator[Shape]:
    """Shapes from ``path``, or the built-in outlines when no path is given."""

    if path is None:
        return iter_builtin_shapes()
    return load_shapefile(path)
