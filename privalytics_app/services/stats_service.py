from typing import List

from sqlalchemy import desc, distinct, func

from privalytics_app.config import settings
from privalytics_app.database.connection import Database
from privalytics_app.models.event import Event
from privalytics_app.schemas.stats import PageViews, SiteStats, TimeseriesPoint


class StatsService:
    """
    Read-only aggregate reports for one site.
    
    None of these check that the site exists: an unknown site simply has
    no events, so the results are zeroed or empty.
    """
    
    def __init__(self, db: Database):
        self.db = db

    async def get_stats(self, site_id: str) -> SiteStats:
        """Distinct daily visitors and total views across all time"""
        with self.db.session() as session:
            visitors, views = session.query(
                func.count(distinct(Event.session_hash)),
                func.count(Event.id),
            ).filter(Event.site_id == site_id).one()
        
        return SiteStats(visitors=visitors or 0, views=views or 0)

    async def get_timeseries(self, site_id: str) -> List[TimeseriesPoint]:
        """
        Views per calendar day for the most recent days with data.
        
        Takes the newest `timeseries_days` distinct dates, returned oldest
        first. Days without events are not filled in.
        """
        day = func.date(Event.timestamp)
        
        with self.db.session() as session:
            rows = (
                session.query(day.label("date"), func.count(Event.id).label("count"))
                .filter(Event.site_id == site_id)
                .group_by(day)
                .order_by(day.desc())
                .limit(settings.timeseries_days)
                .all()
            )
        
        return [TimeseriesPoint(date=row.date, count=row.count) for row in reversed(rows)]

    async def get_top_pages(self, site_id: str) -> List[PageViews]:
        """Most viewed paths, highest first (ties broken by path)"""
        with self.db.session() as session:
            rows = (
                session.query(Event.path, func.count(Event.id).label("views"))
                .filter(Event.site_id == site_id)
                .group_by(Event.path)
                .order_by(desc("views"), Event.path)
                .limit(settings.top_pages_limit)
                .all()
            )
        
        return [PageViews(path=row.path, views=row.views) for row in rows]
