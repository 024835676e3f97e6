from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from privalytics_app.database.connection import Base


class Event(Base):
    """
    One recorded pageview.
    
    site_id is declared as a foreign key but SQLite does not enforce it
    (foreign_keys pragma stays off), so events for unknown sites are accepted.
    """
    __tablename__ = "events"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    site_id = Column(String, ForeignKey("sites.id"), nullable=False, index=True)
    session_hash = Column(String(16), nullable=False)
    path = Column(String, nullable=False)
    timestamp = Column(DateTime, nullable=False, server_default=func.current_timestamp())
