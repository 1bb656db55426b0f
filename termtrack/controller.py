"""Input command dispatch onto the viewport."""

import enum
import logging

from .geometry import is_valid_fix

log = logging.getLogger("termtrack.controller")

PAN_FRACTION = 0.1
ZOOM_FACTOR = 1.2
RECENTER_ZOOM = 25.0


class Command(enum.Enum):
    PAN_UP = "pan_up"
    PAN_DOWN = "pan_down"
    PAN_LEFT = "pan_left"
    PAN_RIGHT = "pan_right"
    ZOOM_IN = "zoom_in"
    ZOOM_OUT = "zoom_out"
    RESET = "reset"


# (dx, dy) in units of the pan fraction; up is north (+y)
_PAN_DIRECTIONS = {
    Command.PAN_UP: (0, 1),
    Command.PAN_DOWN: (0, -1),
    Command.PAN_LEFT: (-1, 0),
    Command.PAN_RIGHT: (1, 0),
}


class ViewportController:
    """Applies discrete commands to a :class:`Viewport` and owns the render size.

    Each command is handled on its own; the only state kept besides the
    render size is whether the one-time zoom to first contact has fired.
    """

    def __init__(self, viewport, pan_fraction: float = PAN_FRACTION,
                 zoom_factor: float = ZOOM_FACTOR, recenter_zoom: float = RECENTER_ZOOM,
                 auto_recenter: bool = True, width: int = 80, height: int = 23):
        self.viewport = viewport
        self.pan_fraction = pan_fraction
        self.zoom_factor = zoom_factor
        self.recenter_zoom = recenter_zoom
        self.auto_recenter = auto_recenter
        self.width = max(1, width)
        self.height = max(1, height)
        self.first_contact_seen = False

    def handle(self, command: Command):
        if command in _PAN_DIRECTIONS:
            dx, dy = _PAN_DIRECTIONS[command]
            self.viewport.pan(dx * self.pan_fraction, dy * self.pan_fraction)
        elif command is Command.ZOOM_IN:
            self.viewport.zoom(1 / self.zoom_factor)
        elif command is Command.ZOOM_OUT:
            self.viewport.zoom(self.zoom_factor)
        elif command is Command.RESET:
            self.viewport.reset()
        else:
            raise ValueError(f"Unknown command: {command!r}")

    def recenter(self, lat: float, lon: float):
        self.viewport.recenter_on(lat, lon, self.recenter_zoom)

    def resize(self, width: int, height: int):
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.viewport.dirty = True

    def observe_fix(self, lat: float, lon: float) -> bool:
        """Zoom to the first valid aircraft fix of the session.

        Returns True if this call moved the view.
        """
        if self.first_contact_seen or not self.auto_recenter:
            return False
        if not is_valid_fix(lat, lon):
            return False
        self.first_contact_seen = True
        log.info("First contact at %.4f, %.4f, zooming to %.1fx", lat, lon, self.recenter_zoom)
        self.recenter(lat, lon)
        return True

    @property
    def zoom_level(self) -> float:
        return self.viewport.current_zoom_factor()
