"""Shared fixtures for the termatlas tests."""

import logging
from typing import Generator

import pytest

from termatlas.canvas import Canvas, PaintClass
from termatlas.map_shapes import Shape
from termatlas.sun import SunState


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop handlers installed by the CLI so they never outlive a captured stream."""
    yield
    logger = logging.getLogger("termatlas")
    logger.handlers[:] = []
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def square_shape() -> Shape:
    """A single 20 degree square of land centred on (0, 0)."""
    return Shape.from_rings([[(-10, -10), (10, -10), (10, 10), (-10, 10), (-10, -10)]])


@pytest.fixture
def land_canvas() -> Canvas:
    """A one-pixel-per-degree canvas that is land everywhere."""
    canvas = Canvas(360, 180)
    canvas.cells[:] = PaintClass.LAND
    return canvas


@pytest.fixture
def noon_sun() -> SunState:
    """Sun overhead where the equator meets the prime meridian."""
    return SunState(active=True, longitude=0.0, latitude=0.0)
