import pytest

from termtrack.geometry import GeographicRect, GeometrySource, PointGeometry, PolygonGeometry
from termtrack.viewport import Viewport


@pytest.fixture
def square_bounds():
    return GeographicRect(-10.0, -10.0, 10.0, 10.0)


@pytest.fixture
def square_geometry():
    """A 20x20 degree square outline with a center vertex and an airport on it."""
    polygon = PolygonGeometry([(-10, -10), (10, -10), (10, 10), (-10, 10), (0.5, 0.5)])
    return GeometrySource([polygon], [PointGeometry(0.5, 0.5)])


@pytest.fixture
def viewport(square_bounds):
    return Viewport(square_bounds)
