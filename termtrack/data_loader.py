"""
Shapefile loading for the map outline and airport layers.
"""

import os
os.environ['SHAPE_RESTORE_SHX'] = 'YES'

import logging

import numpy as np

from .errors import GeometryLoadError
from .geometry import GeometrySource, PointGeometry, PolygonGeometry

log = logging.getLogger("termtrack.data_loader")


def extract_polygons(gdf):
    """Extract exterior rings with precomputed bounding boxes for view culling.

    MultiPolygons contribute one ring per part. Empty or missing geometries
    are skipped; anything that is not polygonal is ignored.
    """
    polygons = []

    def extract_coords(geom):
        t = geom.geom_type
        if t == 'Polygon':
            coords = np.asarray(geom.exterior.coords, dtype=np.float64)[:, :2]
            if len(coords):
                polygons.append(PolygonGeometry(coords))
        elif t == 'MultiPolygon':
            for poly in geom.geoms:
                extract_coords(poly)

    for geom in gdf.geometry:
        if geom is not None and not geom.is_empty:
            extract_coords(geom)

    return polygons


def extract_points(gdf):
    points = []
    for geom in gdf.geometry:
        if geom is not None and not geom.is_empty and geom.geom_type == 'Point':
            points.append(PointGeometry(float(geom.x), float(geom.y)))
    return points


def _read(path, what):
    if not path or not os.path.exists(path):
        raise GeometryLoadError(f"{what} shapefile not found: {path}")
    import geopandas as gpd
    try:
        return gpd.read_file(path)
    except Exception as e:
        raise GeometryLoadError(f"failed to open {what} shapefile {path}: {e}") from e


def load_polygons(shapefile_path):
    gdf = _read(shapefile_path, "map")
    polygons = extract_polygons(gdf)
    del gdf
    if not polygons:
        raise GeometryLoadError(f"no polygons found in shapefile: {shapefile_path}")
    log.info("Loaded %d polygons from %s", len(polygons), shapefile_path)
    return polygons


def load_airports(airports_path):
    """Load airport points. An empty path disables the layer."""
    if not airports_path:
        log.info("Airport layer disabled")
        return []
    gdf = _read(airports_path, "airport")
    points = extract_points(gdf)
    del gdf
    if not points:
        raise GeometryLoadError(f"no points found in airport shapefile: {airports_path}")
    log.info("Loaded %d airports from %s", len(points), airports_path)
    return points


def load_geometry(shapefile_path, airports_path) -> GeometrySource:
    geometry = GeometrySource(load_polygons(shapefile_path), load_airports(airports_path))
    log.info("Map extent %s, %d vertices", geometry.original_bounds, geometry.vertex_count)
    return geometry
