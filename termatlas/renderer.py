"""Rendering pipeline from map data to terminal text or a pixel image."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import imageio.v2 as imageio

from .canvas import Canvas
from .config import RenderConfig
from .map_shapes import Shape, load_map
from .markers import MarkerSet, draw_markers, load_locations
from .palette import export_colors, palette_for
from .projection import Projection
from .quantizer import GlyphQuantizer
from .sun import SunState, compute_sun
from .terminator import draw_sun_border, mark_sun, shade_map
from .vector import draw_shapes, draw_world_border

log = logging.getLogger("termatlas.renderer")


@dataclass
class RenderContext:
    """Per-run state: the fixed configuration plus the canvas being painted."""

    config: RenderConfig
    projection: Projection
    canvas: Canvas
    sun: SunState


class WorldMapRenderer:
    """Render a world map according to a :class:`RenderConfig`.

    ``shapes``, ``markers`` and ``sun`` may be supplied directly; otherwise
    they come from the configured map file, locations file and clock.
    """

    def __init__(
        self,
        config: RenderConfig,
        shapes: Optional[Iterable[Shape]] = None,
        markers: Optional[MarkerSet] = None,
        sun: Optional[SunState] = None,
    ) -> None:
        self.config = config
        self._shapes: Optional[List[Shape]] = list(shapes) if shapes is not None else None
        self._markers = markers
        self._sun = sun

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def canvas_size(self, for_image: bool = False) -> Tuple[int, int]:
        """Canvas pixels: one per character for images, 2x2 per character for text."""

        columns, rows = self.config.size
        scale = 1 if for_image else 2
        return columns * scale, rows * scale

    def _resolve_sun(self) -> SunState:
        if self._sun is not None:
            return self._sun
        if self.config.sun:
            return compute_sun(self.config.when)
        return SunState()

    def _resolve_markers(self) -> Optional[MarkerSet]:
        if self._markers is not None:
            return self._markers
        if self.config.locations_path is not None:
            return load_locations(self.config.locations_path)
        return None

    def _resolve_shapes(self) -> Iterable[Shape]:
        if self._shapes is not None:
            return self._shapes
        return load_map(self.config.map_path)

    def build_context(self, for_image: bool = False) -> RenderContext:
        width, height = self.canvas_size(for_image)
        sun = self._resolve_sun()
        if sun.active:
            log.info("Sub-solar point at lon %.2f, lat %.2f", sun.longitude, sun.latitude)
        return RenderContext(
            config=self.config,
            projection=self.config.projection,
            canvas=Canvas(width, height),
            sun=sun,
        )

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def paint(self, for_image: bool = False) -> RenderContext:
        """Run every painting stage in order and return the finished context."""

        context = self.build_context(for_image)
        config, canvas, projection, sun = context.config, context.canvas, context.projection, context.sun

        draw_shapes(canvas, projection, self._resolve_shapes(), solid_land=config.solid_land)

        if sun.active:
            shade_map(
                canvas,
                projection,
                sun,
                step=config.shade_step_degrees,
                dusk_degrees=config.dusk_degrees,
                bands=config.shade_bands,
            )
            if config.sun_markers:
                draw_sun_border(canvas, projection, sun, method=config.sun_border_method)

        if config.world_border:
            draw_world_border(canvas, projection)

        markers = self._resolve_markers()
        if markers:
            draw_markers(canvas, projection, markers)

        if sun.active and config.sun_markers:
            mark_sun(canvas, projection, sun)

        return context

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def quantizer(self) -> GlyphQuantizer:
        return GlyphQuantizer(
            palette=palette_for(self.config.colors),
            charset=self.config.charset,
            shade_bands=self.config.shade_bands,
            title=self.config.title,
            trailing_newline=self.config.trailing_newline,
        )

    def render_text(self) -> str:
        context = self.paint(for_image=False)
        return self.quantizer().quantize(context.canvas)

    def render_image(self, output_path: Optional[Path] = None) -> Path:
        path = Path(output_path or self.config.output_image or "termatlas.png")
        context = self.paint(for_image=True)
        image = context.canvas.to_rgb(export_colors(self.config.shade_bands))
        path.parent.mkdir(parents=True, exist_ok=True)
        imageio.imwrite(path, image)
        log.info("Saved %dx%d map image to %s", context.canvas.width, context.canvas.height, path)
        return path
