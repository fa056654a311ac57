"""Terminal world map renderer."""

from .canvas import Canvas, PaintClass
from .config import RenderConfig, load_config
from .map_shapes import MapSourceError, Shape
from .markers import MarkerSet, parse_locations
from .projection import Projection
from .renderer import RenderContext, WorldMapRenderer
from .sun import SunState, compute_sun

__all__ = [
    "Canvas",
    "PaintClass",
    "RenderConfig",
    "load_config",
    "MapSourceError",
    "Shape",
    "MarkerSet",
    "parse_locations",
    "Projection",
    "RenderContext",
    "WorldMapRenderer",
    "SunState",
    "compute_sun",
]
