"""Main TrackerApp Textual application."""

import logging

from textual.app import App, ComposeResult
from textual.containers import Container

from .controller import Command, ViewportController
from .feed.aircraft_table import AircraftTable
from .feed.models import PositionUpdate
from .map_renderer import MapRenderer
from .viewport import Viewport
from .widgets import HeaderBar, MapDisplay, StatusFooter
from .widgets.messages import AircraftUpdated, FeedLost

log = logging.getLogger("termtrack.app")


class TrackerApp(App):
    """Textual TUI application for the live aircraft map."""

    CSS = """
    Screen {
        background: $surface;
    }

    #map-container {
        width: 100%;
        height: 1fr;
        border: round #5f5fff;
    }

    MapDisplay {
        width: 100%;
        height: 100%;
    }
    """

    TITLE = "TermTrack"
    BINDINGS = [
        ("up,k", "pan_up", "Up"),
        ("down,l", "pan_down", "Down"),
        ("left,j", "pan_left", "Left"),
        ("right,semicolon", "pan_right", "Right"),
        ("plus,equals_sign,K,shift+k", "zoom_in", "Zoom+"),
        ("minus,L,shift+l", "zoom_out", "Zoom-"),
        ("r", "reset", "Reset"),
        ("q,escape,ctrl+c", "quit", "Quit"),
    ]

    def __init__(self, geometry, config, feed_client=None):
        super().__init__()
        self.geometry = geometry
        self.config = config
        self.feed_client = feed_client
        self.feed_error = None

        render_cfg = config.render
        view_cfg = config.view
        self.aircraft = AircraftTable()
        self.viewport = Viewport(geometry.original_bounds)
        self.controller = ViewportController(
            self.viewport,
            pan_fraction=view_cfg["pan_fraction"],
            zoom_factor=view_cfg["zoom_factor"],
            recenter_zoom=view_cfg["recenter_zoom"],
            auto_recenter=view_cfg["auto_recenter"],
        )
        self.renderer = MapRenderer(
            geometry,
            vertex_step=render_cfg["vertex_step"],
            char_aspect=render_cfg["char_aspect"],
        )

    def compose(self) -> ComposeResult:
        """Create child widgets for the app."""
        self.map_display = MapDisplay(self.renderer, self.controller, lambda: self.aircraft.aircraft)
        self.status_footer = StatusFooter(self.config.map["shapefile"])

        yield HeaderBar()
        with Container(id="map-container"):
            yield self.map_display
        yield self.status_footer

    def on_mount(self):
        """Start the render ticker and the feed."""
        self.set_interval(self.config.frame_interval, self.render_tick)
        if self.feed_client is not None:
            self.status_footer.feed_status = self.feed_client.address
            self.feed_client.start(
                on_update=lambda update: self.post_message(AircraftUpdated(update)),
                on_lost=lambda error: self.post_message(FeedLost(error)),
            )
        else:
            self.status_footer.feed_status = "off"
        self._sync_footer()

    def render_tick(self):
        self.map_display.refresh_map()
        self._sync_footer()

    def _sync_footer(self):
        footer = self.status_footer
        footer.zoom_level = self.controller.zoom_level
        footer.aircraft_count = len(self.aircraft)
        footer.fixed_count = self.aircraft.with_fix_count()

    # ── Feed messages ──

    def on_aircraft_updated(self, message: AircraftUpdated) -> None:
        update = message.update
        self.aircraft.apply(update)
        if isinstance(update, PositionUpdate):
            self.controller.observe_fix(update.lat, update.lon)

    def on_feed_lost(self, message: FeedLost) -> None:
        if self.feed_error is not None:
            return
        self.feed_error = str(message.error)
        log.error("Feed lost: %s", self.feed_error)
        self.status_footer.feed_status = "lost"
        self.map_display.show_error(self.feed_error)

    # ── Action handlers (BINDINGS) ──

    def _command(self, command: Command):
        if self.feed_error is not None:
            self.exit()
            return
        self.controller.handle(command)
        self.render_tick()

    def action_pan_up(self):
        self._command(Command.PAN_UP)

    def action_pan_down(self):
        self._command(Command.PAN_DOWN)

    def action_pan_left(self):
        self._command(Command.PAN_LEFT)

    def action_pan_right(self):
        self._command(Command.PAN_RIGHT)

    def action_zoom_in(self):
        self._command(Command.ZOOM_IN)

    def action_zoom_out(self):
        self._command(Command.ZOOM_OUT)

    def action_reset(self):
        self._command(Command.RESET)

    def on_key(self, event):
        """While the feed error is shown, any key quits."""
        if self.feed_error is not None:
            event.stop()
            self.exit()
