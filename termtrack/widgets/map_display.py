"""Map display widget: draws the rendered grid into the terminal."""

from rich.align import Align
from rich.panel import Panel
from rich.text import Text
from textual.widgets import Static


class MapDisplay(Static):
    """Shows the current frame of the map, or the feed error box."""

    def __init__(self, renderer, controller, aircraft_provider):
        super().__init__()
        self.renderer = renderer
        self.controller = controller
        self.aircraft_provider = aircraft_provider
        self.error_message = None
        self.last_frame = None

    def on_mount(self):
        self.refresh_map()

    def on_resize(self, event):
        self.refresh_map()

    def show_error(self, message: str):
        self.error_message = message
        body = Text.assemble(
            ("Error:\n\n", "bold"),
            message,
            "\n\nPress any key to quit.",
        )
        self.update(Align.center(
            Panel(body, border_style="color(9)", padding=1),
            vertical="middle",
        ))

    def refresh_map(self):
        """Render one frame at the widget's current size."""
        if self.error_message is not None:
            return
        size = self.size
        if size.width == 0 or size.height == 0:
            return

        controller = self.controller
        if (size.width, size.height) != (controller.width, controller.height):
            controller.resize(size.width, size.height)

        grid = self.renderer.render(controller.viewport, self.aircraft_provider(),
                                    controller.width, controller.height)
        self.last_frame = grid
        self.update(grid.to_text())
