"""
Tests for the in-memory database and its snapshot persistence.
"""
import asyncio
import os

import pytest

from privalytics_app.database.connection import Database
from privalytics_app.models import Event, Site
from privalytics_app.persistence.factory import PersistenceFactory, PersistenceBackend
from privalytics_app.persistence.strategies import FileSnapshotPersistence, MemoryOnlyPersistence
from privalytics_app.services.site_service import SiteService
from privalytics_app.services.tracking_service import TrackingService


def dump(db: Database):
    """Every site and event as plain tuples"""
    with db.session() as session:
        sites = [
            (s.id, s.name, s.domain, s.created_at)
            for s in session.query(Site).order_by(Site.id).all()
        ]
        events = [
            (e.id, e.site_id, e.session_hash, e.path, e.timestamp)
            for e in session.query(Event).order_by(Event.id).all()
        ]
    return sites, events


class TestFilePersistence:
    """Test durability across restarts"""

    def test_creates_file_on_startup(self, database_path):
        db = Database(FileSnapshotPersistence(database_path))
        db.close()

        assert os.path.exists(database_path)
        assert not os.path.exists(f"{database_path}.tmp")

    def test_restart_reloads_identical_data(self, database, database_path):
        site = asyncio.run(SiteService(database).create_site("Blog", "blog.example.com"))
        tracking = TrackingService(database)
        asyncio.run(tracking.track(site.id, "/", "192.0.2.1"))
        asyncio.run(tracking.track(site.id, "/about", "192.0.2.2"))
        before = dump(database)

        reopened = Database(FileSnapshotPersistence(database_path))
        try:
            after = dump(reopened)
        finally:
            reopened.close()

        assert after == before
        assert len(after[0]) == 1
        assert len(after[1]) == 2

    def test_every_write_is_saved(self, database, database_path):
        asyncio.run(SiteService(database).create_site("Blog", "blog.example.com"))
        size_after_site = os.path.getsize(database_path)

        reopened = Database(FileSnapshotPersistence(database_path))
        try:
            assert len(dump(reopened)[0]) == 1
        finally:
            reopened.close()
        assert size_after_site > 0

    def test_corrupt_file_falls_back_to_empty(self, database_path):
        with open(database_path, "wb") as f:
            f.write(b"this is not a sqlite database" * 10)

        db = Database(FileSnapshotPersistence(database_path))
        try:
            assert dump(db) == ([], [])
            # Tables exist and accept writes
            asyncio.run(SiteService(db).create_site("Blog", "blog.example.com"))
        finally:
            db.close()

        reopened = Database(FileSnapshotPersistence(database_path))
        try:
            assert len(dump(reopened)[0]) == 1
        finally:
            reopened.close()

    def test_failed_save_restores_previous_state(self, database, monkeypatch):
        asyncio.run(SiteService(database).create_site("Kept", "kept.example.com"))

        def broken_save(data):
            raise OSError("disk full")

        monkeypatch.setattr(database.persistence, "save", broken_save)

        with pytest.raises(OSError):
            asyncio.run(SiteService(database).create_site("Lost", "lost.example.com"))

        names = [s[1] for s in dump(database)[0]]
        assert names == ["Kept"]

    def test_failed_save_restores_when_file_is_gone(self, database, database_path, monkeypatch):
        asyncio.run(TrackingService(database).track("s", "/kept", "192.0.2.1"))
        os.remove(database_path)

        def broken_save(data):
            raise OSError("read-only file system")

        monkeypatch.setattr(database.persistence, "save", broken_save)

        with pytest.raises(OSError):
            asyncio.run(TrackingService(database).track("s", "/lost", "192.0.2.1"))

        paths = [e[3] for e in dump(database)[1]]
        assert paths == ["/kept"]


class TestMemoryOnlyPersistence:
    """Test ephemeral mode"""

    def test_nothing_survives(self):
        first = Database(MemoryOnlyPersistence())
        try:
            asyncio.run(SiteService(first).create_site("Blog", "blog.example.com"))
            assert len(dump(first)[0]) == 1
        finally:
            first.close()

        second = Database(MemoryOnlyPersistence())
        try:
            assert dump(second) == ([], [])
        finally:
            second.close()


class TestPersistenceFactory:
    """Test factory selection and caching"""

    def setup_method(self):
        PersistenceFactory.clear_instance()

    def teardown_method(self):
        PersistenceFactory.clear_instance()

    def test_memory_backend(self):
        assert isinstance(PersistenceFactory.create(PersistenceBackend.MEMORY), MemoryOnlyPersistence)

    def test_file_backend(self):
        assert isinstance(PersistenceFactory.create(PersistenceBackend.FILE), FileSnapshotPersistence)

    def test_instance_is_cached(self):
        first = PersistenceFactory.create(PersistenceBackend.MEMORY)
        second = PersistenceFactory.create(PersistenceBackend.MEMORY)

        assert first is second

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            PersistenceBackend("redis")
