from .site import SiteCreate, SiteResponse
from .event import TrackRequest
from .stats import SiteStats, TimeseriesPoint, PageViews

__all__ = [
    "SiteCreate",
    "SiteResponse",
    "TrackRequest",
    "SiteStats",
    "TimeseriesPoint",
    "PageViews",
]
