"""
In-memory SQLite database with whole-file snapshot persistence.

The whole database is held in one in-memory SQLite connection. SQLAlchemy
talks to it through a StaticPool, so every session shares that single
connection. After each committed write the database is serialized and
handed to a SnapshotPersistence strategy.

All access goes through Database.session() or Database.transaction(),
which serialize callers on one re-entrant lock.
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from privalytics_app.persistence.strategies import SnapshotPersistence

logger = logging.getLogger(__name__)

Base = declarative_base()


def _new_connection() -> sqlite3.Connection:
    # Shared across threads, guarded by Database._lock
    return sqlite3.connect(":memory:", check_same_thread=False)


class Database:
    """
    Explicitly owned store handle, injected into services.
    
    Lifecycle:
    1. Load the last snapshot into memory (fresh database if that fails)
    2. Create tables if absent
    3. Save, so the file always holds a readable database
    """
    
    def __init__(self, persistence: SnapshotPersistence):
        self.persistence = persistence
        self._lock = threading.RLock()
        self._snapshot = b""
        self.connection = self._load()
        
        self.engine = create_engine(
            "sqlite://",
            creator=lambda: self.connection,
            poolclass=StaticPool,
        )
        self.session_factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )
        
        # Import models to ensure they're registered with Base
        from privalytics_app import models  # noqa: F401
        
        Base.metadata.create_all(bind=self.engine)
        self.save()
    
    def _load(self) -> sqlite3.Connection:
        """Deserialize the saved snapshot, or start empty on any failure."""
        connection = _new_connection()
        
        try:
            data = self.persistence.load()
            if data is None:
                logger.info("No saved database found, starting empty")
                return connection
            
            connection.deserialize(data)
            # Garbage deserializes fine and only fails on first read
            connection.execute("SELECT count(*) FROM sqlite_master").fetchone()
            logger.info("Loaded database snapshot (%d bytes)", len(data))
            return connection
        
        except (OSError, sqlite3.Error, OverflowError) as e:
            logger.warning(f"Could not load saved database, starting empty: {e}")
            connection.close()
            return _new_connection()
    
    def save(self) -> None:
        """Serialize the entire database and persist it, overwriting the last snapshot."""
        with self._lock:
            data = self.connection.serialize()
            self.persistence.save(data)
            # Last state known to be durable, used by _restore
            self._snapshot = data
    
    def _restore(self) -> None:
        """Roll the in-memory database back to the last successfully saved snapshot."""
        self.connection.deserialize(self._snapshot)
    
    @contextmanager
    def session(self) -> Iterator[Session]:
        """Read-only session, held under the store lock."""
        with self._lock:
            db = self.session_factory()
            try:
                yield db
            finally:
                db.close()
    
    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Write session: commit, then save the full snapshot.
        
        A successful exit means the write is on disk. If the save fails the
        in-memory database is restored from the previous snapshot and the
        error propagates.
        """
        with self._lock:
            db = self.session_factory()
            try:
                yield db
                db.commit()
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()
            
            try:
                self.save()
            except Exception:
                logger.exception("Snapshot save failed, restoring last saved state")
                self._restore()
                raise
    
    def close(self) -> None:
        with self._lock:
            self.engine.dispose()
            self.connection.close()
