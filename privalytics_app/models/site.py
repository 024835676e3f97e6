import uuid

from sqlalchemy import Column, String, DateTime
from privalytics_app.database.connection import Base


def generate_site_id() -> str:
    return str(uuid.uuid4())


class Site(Base):
    """
    A tracked website.
    
    Sites are created once and never updated or deleted.
    """
    __tablename__ = "sites"

    id = Column(String, primary_key=True, default=generate_site_id)
    name = Column(String, nullable=False)
    domain = Column(String, nullable=False)
    # Set by the service at creation time (UTC), immutable afterwards
    created_at = Column(DateTime, nullable=False)
