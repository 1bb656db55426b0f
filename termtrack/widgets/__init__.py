"""Widget components for the tracker application."""

from .map_display import MapDisplay
from .status_bar import HeaderBar, StatusFooter

__all__ = [
    'MapDisplay',
    'HeaderBar',
    'StatusFooter',
]
