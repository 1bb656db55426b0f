import dataclasses

import pytest

from termtrack.controller import Command, ViewportController
from termtrack.geometry import GeographicRect
from termtrack.viewport import Viewport


def _t(rect):
    return dataclasses.astuple(rect)


@pytest.fixture
def controller(viewport):
    return ViewportController(viewport, pan_fraction=0.1, zoom_factor=1.2, recenter_zoom=4.0)


class TestCommands:

    @pytest.mark.parametrize("command, expected", [
        (Command.PAN_UP, (-10.0, -8.0, 10.0, 12.0)),
        (Command.PAN_DOWN, (-10.0, -12.0, 10.0, 8.0)),
        (Command.PAN_LEFT, (-12.0, -10.0, 8.0, 10.0)),
        (Command.PAN_RIGHT, (-8.0, -10.0, 12.0, 10.0)),
    ])
    def test_pan_directions(self, controller, command, expected):
        controller.handle(command)
        assert _t(controller.viewport.view_bounds) == pytest.approx(expected)

    def test_zoom_in_then_out_returns_to_original(self, controller, square_bounds):
        controller.handle(Command.ZOOM_IN)
        assert controller.viewport.view_bounds.width == pytest.approx(20 / 1.2)
        controller.handle(Command.ZOOM_OUT)
        assert _t(controller.viewport.view_bounds) == pytest.approx(_t(square_bounds))

    def test_zoom_out_at_original_is_a_no_op(self, controller, square_bounds):
        controller.handle(Command.ZOOM_OUT)
        assert controller.viewport.view_bounds == square_bounds

    def test_reset(self, controller, square_bounds):
        controller.handle(Command.PAN_LEFT)
        controller.handle(Command.ZOOM_IN)
        controller.handle(Command.RESET)
        assert controller.viewport.view_bounds == square_bounds

    def test_unknown_command(self, controller):
        with pytest.raises(ValueError):
            controller.handle("spin")

    def test_zoom_level_tracks_view(self, controller):
        assert controller.zoom_level == 1.0
        controller.handle(Command.ZOOM_IN)
        controller.handle(Command.ZOOM_IN)
        assert controller.zoom_level == pytest.approx(1.44)


class TestResize:

    def test_resize_marks_view_dirty(self, controller):
        controller.viewport.dirty = False
        controller.resize(120, 40)
        assert (controller.width, controller.height) == (120, 40)
        assert controller.viewport.dirty

    def test_resize_clamps_to_one_cell(self, controller):
        controller.resize(0, -3)
        assert (controller.width, controller.height) == (1, 1)


class TestFirstContact:

    def test_first_valid_fix_recenters_once(self, controller):
        assert controller.observe_fix(2.0, 3.0)
        vb = controller.viewport.view_bounds
        assert vb.center == pytest.approx((3.0, 2.0))
        assert vb.width == pytest.approx(5.0)

        controller.handle(Command.RESET)
        assert not controller.observe_fix(-4.0, -4.0)
        assert controller.viewport.view_bounds == controller.viewport.original_bounds

    def test_sentinel_fix_is_ignored(self, controller):
        assert not controller.observe_fix(0.0, 0.0)
        assert not controller.first_contact_seen
        assert controller.observe_fix(0.0, 1.0)

    def test_disabled(self, viewport):
        controller = ViewportController(viewport, auto_recenter=False)
        assert not controller.observe_fix(2.0, 3.0)
        assert viewport.view_bounds == viewport.original_bounds

    def test_explicit_recenter_uses_configured_zoom(self):
        vp = Viewport(GeographicRect(-125.0, 24.0, -66.0, 50.0))
        controller = ViewportController(vp, recenter_zoom=25.0)
        controller.recenter(40.0, -73.0)
        assert controller.zoom_level == pytest.approx(25.0)

    @pytest.mark.parametrize("lat, lon", [
        (float("inf"), 5.0),
        (float("nan"), 5.0),
        (120.0, 5.0),
    ])
    def test_unusable_fix_does_not_move_view(self, controller, lat, lon):
        assert not controller.observe_fix(lat, lon)
        assert controller.viewport.view_bounds == controller.viewport.original_bounds
        assert not controller.first_contact_seen
