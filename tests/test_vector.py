"""Tests for painting vector shapes and the world border."""

import pytest

from termatlas.canvas import Canvas, PaintClass
from termatlas.map_shapes import MapSourceError, Shape, iter_builtin_shapes
from termatlas.projection import Projection
from termatlas.vector import draw_projected_line, draw_shapes, draw_world_border, ring_is_hole

EQUI = Projection.EQUIRECTANGULAR
# Clockwise with y pointing north, as outer rings are stored.
OUTER = [(-40, -40), (-40, 40), (40, 40), (40, -40), (-40, -40)]
HOLE = [(-10, -10), (10, -10), (10, 10), (-10, 10), (-10, -10)]


class TestDrawShapes:
    """Test land filling and hole handling."""

    def test_square_is_filled(self, square_shape):
        canvas = Canvas(360, 180)
        assert draw_shapes(canvas, EQUI, [square_shape]) == 1
        assert canvas.get_pixel(180, 90) == PaintClass.LAND
        assert canvas.get_pixel(100, 90) == PaintClass.EMPTY

    def test_counter_clockwise_inner_ring_is_a_hole(self):
        canvas = Canvas(360, 180)
        draw_shapes(canvas, EQUI, [Shape.from_rings([OUTER, HOLE])])
        assert canvas.get_pixel(180, 90) == PaintClass.EMPTY
        assert canvas.get_pixel(210, 90) == PaintClass.LAND

    def test_single_ring_winding_ignored_by_default(self):
        canvas = Canvas(360, 180)
        draw_shapes(canvas, EQUI, [Shape.from_rings([HOLE])])
        assert canvas.get_pixel(180, 90) == PaintClass.LAND

    def test_single_ring_winding_trusted_on_request(self):
        canvas = Canvas(360, 180)
        draw_shapes(canvas, EQUI, [Shape.from_rings([HOLE])], trust_single_ring_winding=True)
        assert canvas.get_pixel(180, 90) == PaintClass.EMPTY

    def test_outline_mode_strokes(self):
        canvas = Canvas(360, 180)
        draw_shapes(canvas, EQUI, [Shape.from_rings([OUTER])], solid_land=False)
        assert canvas.get_pixel(140, 90) == PaintClass.LAND
        assert canvas.get_pixel(180, 90) == PaintClass.EMPTY

    def test_builtin_outlines_draw(self):
        canvas = Canvas(360, 180)
        assert draw_shapes(canvas, EQUI, iter_builtin_shapes()) > 0
        assert (canvas.cells == PaintClass.LAND).any()

    @pytest.mark.parametrize(
        "shape",
        [
            Shape(rings=(), kind="point"),
            Shape(rings=()),
            Shape(rings=((),)),
        ],
    )
    def test_unusable_shapes_raise(self, shape):
        with pytest.raises(MapSourceError):
            draw_shapes(Canvas(36, 18), EQUI, [shape])

    def test_hole_needs_positive_winding(self):
        assert ring_is_hole(HOLE, 2) is True
        assert ring_is_hole(OUTER, 2) is False
        assert ring_is_hole(HOLE, 1) is False


class TestWorldBorder:
    """Test the outline of the projected world."""

    def test_equirectangular_frame(self):
        canvas = Canvas(360, 180)
        draw_world_border(canvas, EQUI)
        assert canvas.get_pixel(0, 90) == PaintClass.WORLD_BORDER
        assert canvas.get_pixel(359, 90) == PaintClass.WORLD_BORDER
        assert canvas.get_pixel(180, 0) == PaintClass.WORLD_BORDER
        assert canvas.get_pixel(180, 179) == PaintClass.WORLD_BORDER
        assert canvas.get_pixel(180, 90) == PaintClass.EMPTY

    def test_line_within_one_cell_is_skipped(self):
        canvas = Canvas(36, 18)
        draw_projected_line(canvas, EQUI, (0.0, 0.0), (0.5, -0.5), PaintClass.WORLD_BORDER)
        assert not canvas.cells.any()
