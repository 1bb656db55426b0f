"""Terminal live aircraft tracker."""

__version__ = "0.1.0"
