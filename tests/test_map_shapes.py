"""Tests for the vector map sources."""

import pytest

from termatlas.canvas import Canvas
from termatlas.map_shapes import MapSourceError, Shape, _geometry_shape, iter_builtin_shapes, load_map, load_shapefile
from termatlas.projection import Projection
from termatlas.vector import draw_shapes

SHELL = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
HOLE = [(2, 2), (2, 4), (4, 4), (4, 2), (2, 2)]
OTHER = [(20, 20), (30, 20), (30, 30), (20, 30), (20, 20)]


class TestBuiltinShapes:
    """Test the outlines that ship with the package."""

    def test_one_ring_per_outline(self):
        shapes = list(iter_builtin_shapes())
        assert shapes
        assert all(len(shape.rings) == 1 and shape.kind == "polygon" for shape in shapes)

    def test_default_map_is_builtin(self):
        assert list(load_map()) == list(iter_builtin_shapes())

    def test_from_rings_converts_to_floats(self):
        shape = Shape.from_rings([[(1, 2), (3, 4)]])
        assert shape.rings == (((1.0, 2.0), (3.0, 4.0)),)


class TestGeometryShape:
    """Test converting shapely geometries into shapes."""

    def test_polygon_with_interior(self):
        shapely_geometry = pytest.importorskip("shapely.geometry")
        shape = _geometry_shape(shapely_geometry.Polygon(SHELL, [HOLE]))
        assert shape.kind == "polygon"
        assert len(shape.rings) == 2
        assert shape.rings[0][0] == (0.0, 0.0)
        assert (2.0, 2.0) in shape.rings[1]

    def test_multipolygon_becomes_one_shape(self):
        shapely_geometry = pytest.importorskip("shapely.geometry")
        multi = shapely_geometry.MultiPolygon(
            [shapely_geometry.Polygon(SHELL, [HOLE]), shapely_geometry.Polygon(OTHER)]
        )
        shape = _geometry_shape(multi)
        assert shape.kind == "polygon"
        assert len(shape.rings) == 3
        assert (20.0, 20.0) in shape.rings[2]

    def test_three_dimensional_coordinates_are_flattened(self):
        shapely_geometry = pytest.importorskip("shapely.geometry")
        shape = _geometry_shape(shapely_geometry.Polygon([(x, y, 5.0) for x, y in SHELL]))
        assert all(len(point) == 2 for point in shape.rings[0])

    def test_other_kinds_are_kept_for_the_renderer_to_reject(self):
        shapely_geometry = pytest.importorskip("shapely.geometry")
        shape = _geometry_shape(shapely_geometry.LineString([(0, 0), (1, 1)]))
        assert shape.kind == "linestring"
        assert shape.rings == ()
        with pytest.raises(MapSourceError):
            draw_shapes(Canvas(36, 18), Projection.EQUIRECTANGULAR, [shape])


class TestLoadShapefile:
    """Test reading map files through geopandas."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(MapSourceError):
            list(load_shapefile(tmp_path / "missing.shp"))

    def test_unreadable_file(self, tmp_path):
        pytest.importorskip("geopandas")
        path = tmp_path / "broken.shp"
        path.write_text("not a map", encoding="utf8")
        with pytest.raises(MapSourceError):
            list(load_shapefile(path))

    def test_reads_polygons_and_multipolygons(self, tmp_path):
        gpd = pytest.importorskip("geopandas")
        shapely_geometry = pytest.importorskip("shapely.geometry")
        path = tmp_path / "land.geojson"
        frame = gpd.GeoDataFrame(
            {"name": ["island", "archipelago"]},
            geometry=[
                shapely_geometry.Polygon(SHELL, [HOLE]),
                shapely_geometry.MultiPolygon([shapely_geometry.Polygon(SHELL), shapely_geometry.Polygon(OTHER)]),
            ],
            crs="EPSG:4326",
        )
        frame.to_file(path, driver="GeoJSON")

        shapes = list(load_map(path))
        assert [len(shape.rings) for shape in shapes] == [2, 2]
        assert all(shape.kind == "polygon" for shape in shapes)

    def test_null_geometry(self, tmp_path):
        gpd = pytest.importorskip("geopandas")
        shapely_geometry = pytest.importorskip("shapely.geometry")
        path = tmp_path / "gaps.geojson"
        frame = gpd.GeoDataFrame(
            {"name": ["island", "nothing"]},
            geometry=[shapely_geometry.Polygon(SHELL), None],
            crs="EPSG:4326",
        )
        frame.to_file(path, driver="GeoJSON")

        shapes = load_shapefile(path)
        assert len(next(shapes).rings) == 1
        with pytest.raises(MapSourceError):
            next(shapes)
