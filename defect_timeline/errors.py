"""
Exception types raised while building a dataset.
"""


class DefectTimelineError(Exception):
    """Base class for all dataset construction errors"""


class InvalidRangeError(DefectTimelineError, ValueError):
    """A release index outside 1..N was requested"""


class RepositoryAccessError(DefectTimelineError, OSError):
    """Reading commits or tags from the repository failed"""


class TrackerAccessError(DefectTimelineError, OSError):
    """Retrieving tickets from the issue tracker failed"""
