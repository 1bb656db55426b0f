"""
Geographic rectangles and the read-only geometry collections drawn on the map.
"""

import math
from dataclasses import dataclass

import numpy as np

WORLD_BOUNDS = (-180.0, -90.0, 180.0, 90.0)


def is_valid_fix(lat, lon) -> bool:
    """True for a finite, in-range position other than the (0, 0) "no position yet" sentinel."""
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        return False
    return not (lat == 0 and lon == 0)


@dataclass(frozen=True)
class GeographicRect:
    """Axis-aligned lon/lat rectangle in degrees."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        return (self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2

    def intersects(self, other: "GeographicRect") -> bool:
        return not (self.max_x < other.min_x or
                    self.min_x > other.max_x or
                    self.max_y < other.min_y or
                    self.min_y > other.max_y)

    def translated(self, dx: float, dy: float) -> "GeographicRect":
        return GeographicRect(self.min_x + dx, self.min_y + dy,
                              self.max_x + dx, self.max_y + dy)

    @classmethod
    def around(cls, cx: float, cy: float, width: float, height: float) -> "GeographicRect":
        half_w = width / 2
        half_h = height / 2
        return cls(cx - half_w, cy - half_h, cx + half_w, cy + half_h)

    @classmethod
    def from_coords(cls, xs, ys) -> "GeographicRect":
        return cls(float(np.min(xs)), float(np.min(ys)),
                   float(np.max(xs)), float(np.max(ys)))


class PolygonGeometry:
    """Polygon ring with its precomputed bounding box.

    Vertices are an (N, 2) float64 array of (lon, lat) and are made
    read-only on construction.
    """

    __slots__ = ('vertices', 'bounds')

    def __init__(self, vertices, bounds: GeographicRect = None):
        arr = np.array(vertices, dtype=np.float64).reshape(-1, 2)
        arr.setflags(write=False)
        self.vertices = arr
        if bounds is None:
            bounds = GeographicRect.from_coords(arr[:, 0], arr[:, 1])
        self.bounds = bounds

    def __len__(self):
        return len(self.vertices)


@dataclass(frozen=True)
class PointGeometry:
    x: float
    y: float


class GeometrySource:
    """Immutable polygon and point collections supplied once at startup.

    ``original_bounds`` is the union box of every polygon vertex. Without
    polygons it falls back to the points' box, then to the whole world.
    """

    def __init__(self, polygons=(), points=()):
        self.polygons = tuple(polygons)
        self.points = tuple(points)
        self.original_bounds = self._compute_bounds()

    def _compute_bounds(self) -> GeographicRect:
        if self.polygons:
            return GeographicRect(
                min(p.bounds.min_x for p in self.polygons),
                min(p.bounds.min_y for p in self.polygons),
                max(p.bounds.max_x for p in self.polygons),
                max(p.bounds.max_y for p in self.polygons),
            )
        if self.points:
            xs = [p.x for p in self.points]
            ys = [p.y for p in self.points]
            return GeographicRect.from_coords(xs, ys)
        return GeographicRect(*WORLD_BOUNDS)

    @property
    def vertex_count(self) -> int:
        return sum(len(p) for p in self.polygons)
