"""Header and footer bars."""

from rich.table import Table
from rich.text import Text
from textual.reactive import reactive
from textual.widgets import Static

HELP_TEXT = "Pan: j/k/l/; | Zoom: K/L | Reset: r | Quit: q"


class HeaderBar(Static):

    DEFAULT_CSS = """
    HeaderBar {
        dock: top;
        height: 1;
        width: 100%;
        padding: 0 1;
        background: #5f5fff;
        color: #ffffff;
    }
    """

    def __init__(self, title: str = "TermTrack"):
        super().__init__(title)


class StatusFooter(Static):
    """Map path, zoom level, aircraft count and key help."""

    DEFAULT_CSS = """
    StatusFooter {
        dock: bottom;
        height: 1;
        width: 100%;
        padding: 0 1;
        color: #585858;
    }
    """

    zoom_level = reactive(1.0)
    aircraft_count = reactive(0)
    fixed_count = reactive(0)
    feed_status = reactive("connecting")

    def __init__(self, map_path: str):
        super().__init__()
        self.map_path = map_path

    def render(self):
        left = Text(
            f"TermTrack | Map: {self.map_path} | Zoom: {self.zoom_level:.1f}x"
            f" | Aircraft: {self.aircraft_count} ({self.fixed_count} located)"
            f" | Feed: {self.feed_status}",
            no_wrap=True, overflow="ellipsis",
        )
        grid = Table.grid(expand=True)
        grid.add_column(justify="left", ratio=1, no_wrap=True)
        grid.add_column(justify="right", no_wrap=True)
        grid.add_row(left, HELP_TEXT)
        return grid
