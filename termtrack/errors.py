"""Exception types raised outside the rendering core."""


class TermTrackError(Exception):
    """Base class for tracker errors."""


class GeometryLoadError(TermTrackError):
    """A map or airport shapefile could not be loaded or held no geometry."""


class FeedError(TermTrackError):
    """The SBS feed could not be reached or was lost."""
