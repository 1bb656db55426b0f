"""Textual Message subclasses posted from the feed thread to the app."""

from textual.message import Message


class AircraftUpdated(Message):
    """Posted for every decoded feed update."""

    def __init__(self, update) -> None:
        super().__init__()
        self.update = update


class FeedLost(Message):
    """Posted once when the feed connection fails or ends."""

    def __init__(self, error: Exception) -> None:
        super().__init__()
        self.error = error
