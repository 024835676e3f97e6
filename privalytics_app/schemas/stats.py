from pydantic import BaseModel


class SiteStats(BaseModel):
    visitors: int = 0  # Distinct daily session hashes
    views: int = 0


class TimeseriesPoint(BaseModel):
    date: str  # YYYY-MM-DD
    count: int


class PageViews(BaseModel):
    path: str
    views: int
