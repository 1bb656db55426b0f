import geopandas as gpd
import pytest
from shapely.geometry import LineString, MultiPolygon, Point, Polygon

from termtrack.data_loader import (
    extract_points,
    extract_polygons,
    load_airports,
    load_geometry,
    load_polygons,
)
from termtrack.errors import GeometryLoadError, TermTrackError

SQUARE = Polygon([(0, 0), (4, 0), (4, 2), (0, 2)])
TRIANGLE = Polygon([(10, 10), (12, 10), (11, 13)])


def _gdf(geoms):
    return gpd.GeoDataFrame({"name": [str(i) for i in range(len(geoms))]},
                            geometry=geoms, crs="EPSG:4326")


@pytest.fixture
def shapefiles(tmp_path):
    states = tmp_path / "states.shp"
    airports = tmp_path / "airports.shp"
    _gdf([SQUARE, MultiPolygon([TRIANGLE, Polygon([(20, 20), (21, 20), (21, 21)])])]).to_file(states)
    _gdf([Point(1, 1), Point(11, 11)]).to_file(airports)
    return str(states), str(airports)


def test_extract_polygons_splits_multipolygons():
    polygons = extract_polygons(_gdf([SQUARE, MultiPolygon([TRIANGLE, SQUARE])]))
    assert len(polygons) == 3
    square = polygons[0]
    assert square.vertices.shape == (5, 2)
    assert (square.bounds.min_x, square.bounds.max_x) == (0.0, 4.0)
    assert (polygons[1].bounds.min_y, polygons[1].bounds.max_y) == (10.0, 13.0)


def test_extract_polygons_ignores_other_geometry():
    polygons = extract_polygons(_gdf([LineString([(0, 0), (1, 1)]), Point(3, 3), None]))
    assert polygons == []


def test_vertices_are_read_only():
    polygon = extract_polygons(_gdf([SQUARE]))[0]
    with pytest.raises(ValueError):
        polygon.vertices[0, 0] = 99.0


def test_extract_points():
    points = extract_points(_gdf([Point(1, 2), SQUARE, Point(-3, 4.5)]))
    assert [(p.x, p.y) for p in points] == [(1.0, 2.0), (-3.0, 4.5)]


def test_load_geometry(shapefiles):
    states, airports = shapefiles
    geometry = load_geometry(states, airports)
    assert len(geometry.polygons) == 3
    assert len(geometry.points) == 2
    ob = geometry.original_bounds
    assert (ob.min_x, ob.min_y, ob.max_x, ob.max_y) == (0.0, 0.0, 21.0, 21.0)


def test_empty_airport_path_disables_layer(shapefiles):
    states, _ = shapefiles
    assert load_airports("") == []
    assert load_geometry(states, "").points == ()


def test_missing_map_file(tmp_path):
    with pytest.raises(GeometryLoadError, match="not found"):
        load_polygons(str(tmp_path / "nope.shp"))


def test_missing_airport_file_is_fatal(tmp_path):
    with pytest.raises(TermTrackError):
        load_airports(str(tmp_path / "nope.shp"))


def test_map_without_polygons(tmp_path):
    path = tmp_path / "points.shp"
    _gdf([Point(0, 0)]).to_file(path)
    with pytest.raises(GeometryLoadError, match="no polygons"):
        load_polygons(str(path))


def test_unreadable_file(tmp_path):
    path = tmp_path / "broken.shp"
    path.write_bytes(b"not a shapefile")
    with pytest.raises(GeometryLoadError, match="failed to open"):
        load_polygons(str(path))
