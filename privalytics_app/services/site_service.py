import logging
from datetime import datetime, timezone
from typing import List

from privalytics_app.database.connection import Database
from privalytics_app.models.site import Site, generate_site_id

logger = logging.getLogger(__name__)


class SiteService:
    """
    Site registry: create and list tracked sites.
    
    The database handle is injected, never created here.
    """
    
    def __init__(self, db: Database):
        self.db = db

    async def list_sites(self) -> List[Site]:
        """All sites, newest first. Empty list when nothing is registered."""
        with self.db.session() as session:
            return session.query(Site).order_by(Site.created_at.desc()).all()

    async def create_site(self, name: str, domain: str) -> Site:
        """
        Register a new site.
        
        id and created_at are generated server-side. The returned instance
        is detached but fully loaded (expire_on_commit=False).
        """
        site = Site(
            id=generate_site_id(),
            name=name,
            domain=domain,
            # Millisecond precision, same as the serialized form
            created_at=_utc_now_millis(),
        )
        
        with self.db.transaction() as session:
            session.add(site)
        
        logger.info("Created site %s (%s)", site.id, site.domain)
        return site


def _utc_now_millis() -> datetime:
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)
