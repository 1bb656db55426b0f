import asyncio
import threading

import pytest

from termtrack.config_manager import ConfigManager
from termtrack.errors import FeedError
from termtrack.feed.models import CallsignUpdate, PositionUpdate
from termtrack.map_renderer import AIRCRAFT_GLYPH
from termtrack.tracker_app import TrackerApp


class FakeFeed:
    address = "test:30003"

    def __init__(self):
        self.on_update = None
        self.on_lost = None
        self.started = False

    def start(self, on_update, on_lost):
        self.on_update = on_update
        self.on_lost = on_lost
        self.started = True

    def from_thread(self, callback, arg):
        t = threading.Thread(target=callback, args=(arg,))
        t.start()
        t.join()


@pytest.fixture
def config(tmp_path):
    return ConfigManager(tmp_path / "absent.toml")


def _run(app, scenario):
    async def runner():
        async with app.run_test(size=(80, 24)) as pilot:
            await pilot.pause()
            await scenario(app, pilot)
    asyncio.run(runner())


def test_keys_drive_the_view(square_geometry, config):
    app = TrackerApp(square_geometry, config)

    async def scenario(app, pilot):
        assert app.status_footer.feed_status == "off"
        await pilot.press("plus")
        assert app.controller.zoom_level == pytest.approx(1.2)
        await pilot.press("left")
        assert app.viewport.view_bounds.center[0] < 0
        await pilot.press("r")
        assert app.viewport.view_bounds == square_geometry.original_bounds
        frame = app.map_display.last_frame
        assert frame is not None
        assert (frame.width, frame.height) == (app.controller.width, app.controller.height)

    _run(app, scenario)


def test_feed_updates_reach_the_map(square_geometry, config):
    feed = FakeFeed()
    app = TrackerApp(square_geometry, config, feed_client=feed)

    async def scenario(app, pilot):
        assert feed.started
        assert app.status_footer.feed_status == "test:30003"
        feed.from_thread(feed.on_update, CallsignUpdate(id="ABC123", callsign="UAL1"))
        feed.from_thread(feed.on_update, PositionUpdate(id="ABC123", lat=0.5, lon=0.5))
        await pilot.pause()

        assert app.aircraft.get("ABC123").callsign == "UAL1"
        assert app.controller.first_contact_seen
        assert app.controller.zoom_level == pytest.approx(25.0)

        app.render_tick()
        assert AIRCRAFT_GLYPH in app.map_display.last_frame.to_plain()
        assert "UAL1" in app.map_display.last_frame.to_plain()
        assert app.status_footer.aircraft_count == 1
        assert app.status_footer.fixed_count == 1

    _run(app, scenario)


def test_feed_loss_shows_error_and_any_key_quits(square_geometry, config):
    feed = FakeFeed()
    app = TrackerApp(square_geometry, config, feed_client=feed)
    exits = []

    async def scenario(app, pilot):
        app.exit = lambda *args, **kwargs: exits.append(True)
        feed.from_thread(feed.on_lost, FeedError("sbs feed disconnected"))
        await pilot.pause()

        assert app.feed_error == "sbs feed disconnected"
        assert app.map_display.error_message == "sbs feed disconnected"
        assert app.status_footer.feed_status == "lost"

        frame = app.map_display.last_frame
        app.render_tick()
        assert app.map_display.last_frame is frame

        app.action_zoom_in()
        assert exits
        assert app.controller.zoom_level == 1.0
        del app.exit

    _run(app, scenario)


def test_second_loss_is_ignored(square_geometry, config):
    feed = FakeFeed()
    app = TrackerApp(square_geometry, config, feed_client=feed)

    async def scenario(app, pilot):
        feed.from_thread(feed.on_lost, FeedError("first"))
        feed.from_thread(feed.on_lost, FeedError("second"))
        await pilot.pause()
        assert app.feed_error == "first"

    _run(app, scenario)
