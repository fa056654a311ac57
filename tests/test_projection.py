"""Tests for the map projections."""

import numpy as np
import pytest

from termatlas.projection import Projection


class TestEquirectangular:
    """Test the linear plate carrée mapping."""

    def test_corners_and_center(self):
        """The world corners land on the canvas corners."""
        proj = Projection.EQUIRECTANGULAR
        assert proj.project(-180, 90, 360, 180) == pytest.approx((0, 0))
        assert proj.project(180, -90, 360, 180) == pytest.approx((360, 180))
        assert proj.project(0, 0, 360, 180) == pytest.approx((180, 90))

    def test_arrays_keep_their_shape(self):
        """Projecting numpy arrays works element-wise."""
        lons = np.array([[-90.0, 0.0], [90.0, 180.0]])
        lats = np.zeros((2, 2))
        xs, ys = Projection.EQUIRECTANGULAR.project(lons, lats, 80, 40)
        assert xs.shape == (2, 2)
        assert xs[0, 0] == pytest.approx(20)
        assert ys[1, 1] == pytest.approx(20)


class TestProjectionFamily:
    """Properties every projection shares."""

    @pytest.mark.parametrize("proj", list(Projection))
    def test_center_maps_to_canvas_center(self, proj):
        """(0, 0) is the middle of the canvas in every projection."""
        assert proj.project(0.0, 0.0, 200, 100) == pytest.approx((100, 50))

    @pytest.mark.parametrize("proj", list(Projection))
    def test_deterministic(self, proj):
        """The same input always gives the same output."""
        assert proj.project(33.3, -12.5, 160, 48) == proj.project(33.3, -12.5, 160, 48)

    @pytest.mark.parametrize("proj", list(Projection))
    def test_unproject_inverts_project(self, proj):
        """Unprojecting a projected point returns the starting coordinate."""
        x, y = proj.project(30.0, 40.0, 360, 180)
        lon, lat = proj.unproject(x, y, 360, 180)
        assert float(lon) == pytest.approx(30.0, abs=1e-6)
        assert float(lat) == pytest.approx(40.0, abs=1e-6)

    def test_hammer_is_narrower_at_the_poles(self):
        """Hammer pulls high latitudes towards the central meridian."""
        x_equator, _ = Projection.HAMMER.project(90.0, 0.0, 360, 180)
        x_polar, _ = Projection.HAMMER.project(90.0, 80.0, 360, 180)
        assert x_polar < x_equator


class TestFromName:
    """Test resolving projections by name."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("equirectangular", Projection.EQUIRECTANGULAR),
            ("equ", Projection.EQUIRECTANGULAR),
            ("KAV", Projection.KAVRAYSKIY),
            ("lambert", Projection.LAMBERT),
            ("hammer-aitoff", Projection.HAMMER),
        ],
    )
    def test_prefixes(self, name, expected):
        """Three letters are enough to pick a projection."""
        assert Projection.from_name(name) is expected

    def test_member_passes_through(self):
        """An existing member is returned unchanged."""
        assert Projection.from_name(Projection.LAMBERT) is Projection.LAMBERT

    @pytest.mark.parametrize("name", ["", "ha", "mercator"])
    def test_unknown_names_raise(self, name):
        """Too short or unknown names are rejected."""
        with pytest.raises(ValueError):
            Projection.from_name(name)
