from privalytics_app.database.connection import Database
from privalytics_app.models.event import Event
from privalytics_app.services.fingerprint import generate_session_hash, today_utc


class TrackingService:
    """Pageview ingestion."""
    
    def __init__(self, db: Database):
        self.db = db

    async def track(self, site_id: str, path: str, address: str) -> Event:
        """
        Record one pageview and persist the database before returning.
        
        The fingerprint uses today's UTC date, not the event timestamp.
        site_id is stored as given, even if no such site exists.
        """
        event = Event(
            site_id=site_id,
            session_hash=generate_session_hash(address, today_utc()),
            path=path or "/",
        )
        
        with self.db.transaction() as session:
            session.add(event)
        
        return event
