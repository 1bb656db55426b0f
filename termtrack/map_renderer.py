"""
Map rendering for character-cell terminal output.

The static layer (map outlines and airports) is rasterised once per view
and cached. Each frame copies it and draws aircraft icons and callsigns on
top.
"""

import logging

import numpy as np
from rich.text import Text

from .geometry import is_valid_fix
from .viewport import CHAR_ASPECT, project_array

log = logging.getLogger("termtrack.renderer")

BLANK = ' '
MAP_GLYPH = '.'
AIRPORT_GLYPH = '*'
AIRCRAFT_GLYPH = '✈'

# Style tags stored per cell
TAG_BLANK = 0
TAG_MAP = 1
TAG_AIRPORT = 2
TAG_AIRCRAFT = 3
TAG_CALLSIGN = 4

TAG_STYLES = {
    TAG_BLANK: None,
    TAG_MAP: 'color(255)',
    TAG_AIRPORT: 'color(220)',
    TAG_AIRCRAFT: 'color(81)',
    TAG_CALLSIGN: 'color(86)',
}

DEFAULT_VERTEX_STEP = 3


class RenderGrid:
    """height x width grid of (character, style tag) cells. (0, 0) is top-left."""

    __slots__ = ('chars', 'tags')

    def __init__(self, width: int, height: int, chars=None, tags=None):
        if chars is None:
            chars = np.full((height, width), BLANK, dtype='<U1')
        if tags is None:
            tags = np.zeros((height, width), dtype=np.uint8)
        self.chars = chars
        self.tags = tags

    @property
    def width(self) -> int:
        return self.chars.shape[1]

    @property
    def height(self) -> int:
        return self.chars.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        return self.chars.shape

    def copy(self) -> "RenderGrid":
        return RenderGrid(self.width, self.height, self.chars.copy(), self.tags.copy())

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def put(self, col: int, row: int, char: str, tag: int):
        self.chars[row, col] = char
        self.tags[row, col] = tag

    def is_blank(self, col: int, row: int) -> bool:
        return self.chars[row, col] == BLANK

    def lines(self) -> list[str]:
        return [''.join(row) for row in self.chars.tolist()]

    def to_plain(self) -> str:
        return '\n'.join(self.lines())

    def to_text(self) -> Text:
        """Styled rendering, one span per run of equal tags."""
        text = Text(no_wrap=True, overflow='crop')
        chars = self.chars.tolist()
        tags = self.tags.tolist()
        for r, (row_chars, row_tags) in enumerate(zip(chars, tags)):
            if r:
                text.append('\n')
            start = 0
            for c in range(1, len(row_tags) + 1):
                if c == len(row_tags) or row_tags[c] != row_tags[start]:
                    text.append(''.join(row_chars[start:c]), style=TAG_STYLES.get(row_tags[start]))
                    start = c
        return text


class StaticLayerCache:
    """Rasterised map and airport layer, rebuilt only when the view changes.

    A rebuild happens when the viewport is dirty, when nothing is cached yet,
    or when the requested size differs from the cached one. :meth:`get`
    always hands out an independent copy.
    """

    def __init__(self, geometry, vertex_step: int = DEFAULT_VERTEX_STEP,
                 char_aspect: float = CHAR_ASPECT):
        self.geometry = geometry
        self.vertex_step = max(1, int(vertex_step))
        self.char_aspect = char_aspect
        self._grid = None
        self._size = None
        self.rebuild_count = 0

        if geometry.points:
            self._point_lons = np.array([p.x for p in geometry.points], dtype=np.float64)
            self._point_lats = np.array([p.y for p in geometry.points], dtype=np.float64)
        else:
            self._point_lons = self._point_lats = np.zeros(0, dtype=np.float64)

    def needs_rebuild(self, viewport, width: int, height: int) -> bool:
        return viewport.dirty or self._grid is None or self._size != (width, height)

    def get(self, viewport, width: int, height: int) -> RenderGrid:
        if self.needs_rebuild(viewport, width, height):
            self._grid = self._build(viewport.view_bounds, width, height)
            self._size = (width, height)
            viewport.dirty = False
            self.rebuild_count += 1
        return self._grid.copy()

    def _stamp(self, grid, cols, rows, char, tag):
        mask = (cols >= 0) & (cols < grid.width) & (rows >= 0) & (rows < grid.height)
        grid.chars[rows[mask], cols[mask]] = char
        grid.tags[rows[mask], cols[mask]] = tag

    def _build(self, bounds, width, height) -> RenderGrid:
        grid = RenderGrid(width, height)

        drawn = 0
        for polygon in self.geometry.polygons:
            if not polygon.bounds.intersects(bounds):
                continue
            drawn += 1
            sampled = polygon.vertices[::self.vertex_step]
            cols, rows = project_array(sampled[:, 0], sampled[:, 1], bounds,
                                       width, height, self.char_aspect)
            self._stamp(grid, cols, rows, MAP_GLYPH, TAG_MAP)

        # Airports go last so they win over outline dots
        if len(self._point_lons):
            cols, rows = project_array(self._point_lons, self._point_lats, bounds,
                                       width, height, self.char_aspect)
            self._stamp(grid, cols, rows, AIRPORT_GLYPH, TAG_AIRPORT)

        log.debug("Static layer rebuilt at %dx%d, %d/%d polygons in view",
                  width, height, drawn, len(self.geometry.polygons))
        return grid


class OverlayCompositor:
    """Draws aircraft icons, then callsign labels, onto a copy of the static layer."""

    def __init__(self, char_aspect: float = CHAR_ASPECT):
        self.char_aspect = char_aspect

    def compose(self, grid: RenderGrid, aircraft, viewport) -> RenderGrid:
        """Draw onto ``grid`` in place and return it.

        ``aircraft`` maps id to a record with ``lat``, ``lon`` and ``callsign``.
        """
        width, height = grid.width, grid.height
        ordered = sorted(aircraft.items())

        # Pass 1: icons
        icon_positions = {}
        for icao, ac in ordered:
            if not is_valid_fix(ac.lat, ac.lon):
                continue
            col, row = viewport.project(ac.lon, ac.lat, width, height, self.char_aspect)
            if grid.in_bounds(col, row):
                grid.put(col, row, AIRCRAFT_GLYPH, TAG_AIRCRAFT)
                icon_positions[icao] = (col, row)

        # Pass 2: callsigns one row below, never over existing glyphs
        for icao, ac in ordered:
            pos = icon_positions.get(icao)
            if pos is None or not ac.callsign:
                continue
            col, row = pos
            label_row = row + 1
            if label_row >= height:
                continue
            for offset, ch in enumerate(ac.callsign):
                label_col = col + offset
                if label_col >= width:
                    break
                if grid.is_blank(label_col, label_row):
                    grid.put(label_col, label_row, ch, TAG_CALLSIGN)

        return grid


class MapRenderer:
    """Static cache plus overlay, producing one frame per call."""

    def __init__(self, geometry, vertex_step: int = DEFAULT_VERTEX_STEP,
                 char_aspect: float = CHAR_ASPECT):
        self.cache = StaticLayerCache(geometry, vertex_step=vertex_step, char_aspect=char_aspect)
        self.compositor = OverlayCompositor(char_aspect=char_aspect)

    def render(self, viewport, aircraft, width: int, height: int) -> RenderGrid:
        width = max(1, int(width))
        height = max(1, int(height))
        grid = self.cache.get(viewport, width, height)
        return self.compositor.compose(grid, aircraft, viewport)

    def render_text(self, viewport, aircraft, width: int, height: int) -> str:
        return self.render(viewport, aircraft, width, height).to_plain()
