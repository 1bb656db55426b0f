"""
Viewport state and the lon/lat to character-grid projection.

The projection is a plain linear mapping of the visible rectangle onto the
grid, not a cartographic one.
"""

import math

import numpy as np

from .geometry import GeographicRect

# Terminal cells are roughly twice as tall as wide. Applied to columns only.
CHAR_ASPECT = 1.9
DEGENERATE_EPSILON = 1e-6


def _usable_bounds(bounds: GeographicRect) -> GeographicRect:
    """Return bounds with a zero-size axis nudged open. Never mutates input."""
    if bounds.width != 0 and bounds.height != 0:
        return bounds
    max_x = bounds.max_x
    max_y = bounds.max_y
    if bounds.width == 0:
        max_x += DEGENERATE_EPSILON
    if bounds.height == 0:
        max_y += DEGENERATE_EPSILON
    return GeographicRect(bounds.min_x, bounds.min_y, max_x, max_y)


def project(lon, lat, bounds: GeographicRect, grid_width: int, grid_height: int,
            char_aspect: float = CHAR_ASPECT):
    """Map a lon/lat to (col, row). Result may lie outside the grid."""
    b = _usable_bounds(bounds)
    nx = (lon - b.min_x) / (b.max_x - b.min_x)
    ny = (b.max_y - lat) / (b.max_y - b.min_y)
    col = math.floor(nx * grid_width / char_aspect)
    row = math.floor(ny * grid_height)
    return col, row


def project_array(lons, lats, bounds: GeographicRect, grid_width: int, grid_height: int,
                  char_aspect: float = CHAR_ASPECT):
    """Vectorised :func:`project` over numpy arrays. Returns int64 (cols, rows)."""
    b = _usable_bounds(bounds)
    nx = (np.asarray(lons, dtype=np.float64) - b.min_x) / (b.max_x - b.min_x)
    ny = (b.max_y - np.asarray(lats, dtype=np.float64)) / (b.max_y - b.min_y)
    cols = np.floor(nx * grid_width / char_aspect).astype(np.int64)
    rows = np.floor(ny * grid_height).astype(np.int64)
    return cols, rows


class Viewport:
    """Current visible rectangle plus the full-extent rectangle it resets to.

    Every mutation sets ``dirty`` so the static layer is rebuilt on the
    next render. The static layer cache clears it.
    """

    def __init__(self, original_bounds: GeographicRect):
        self.original_bounds = original_bounds
        self.view_bounds = original_bounds
        self.dirty = True

    def _set(self, bounds: GeographicRect):
        self.view_bounds = bounds
        self.dirty = True

    def pan(self, dx: float, dy: float):
        """Shift by fractions of the current extent. Not bounded."""
        vb = self.view_bounds
        self._set(vb.translated(vb.width * dx, vb.height * dy))

    def zoom(self, factor: float):
        """Scale about the view center; <1 zooms in, >1 zooms out.

        Zooming past the original extent on either axis snaps back to it.
        """
        vb = self.view_bounds
        ob = self.original_bounds
        new_width = vb.width * factor
        new_height = vb.height * factor
        if new_width > ob.width or new_height > ob.height:
            self._set(ob)
            return
        cx, cy = vb.center
        self._set(GeographicRect.around(cx, cy, new_width, new_height))

    def reset(self):
        self._set(self.original_bounds)

    def recenter_on(self, lat: float, lon: float, zoom: float):
        """Center on a point, showing ``1/zoom`` of the original width.

        The height follows from the original aspect ratio.
        """
        ob = self.original_bounds
        new_width = ob.width / zoom
        # Same divisor on both axes keeps the original aspect ratio.
        new_height = ob.height / zoom
        self._set(GeographicRect.around(lon, lat, new_width, new_height))

    def current_zoom_factor(self) -> float:
        view_width = self.view_bounds.width
        if view_width == 0:
            return 1.0
        return self.original_bounds.width / view_width

    def project(self, lon, lat, grid_width: int, grid_height: int,
                char_aspect: float = CHAR_ASPECT):
        return project(lon, lat, self.view_bounds, grid_width, grid_height, char_aspect)
