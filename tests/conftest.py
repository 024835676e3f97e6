"""
Test configuration and fixtures for the analytics collector.
Every test gets its own file-backed database under tmp_path.
"""

import pytest
from fastapi.testclient import TestClient

from main import app
from privalytics_app.database.connection import Database
from privalytics_app.dependencies import get_database
from privalytics_app.persistence.strategies import FileSnapshotPersistence


@pytest.fixture(scope="function")
def database_path(tmp_path):
    return str(tmp_path / "privalytics-test.db")


@pytest.fixture(scope="function")
def database(database_path):
    """
    Fresh database for each test, persisted to a temporary file.
    """
    db = Database(FileSnapshotPersistence(database_path))
    
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client(database):
    """
    Test client with the database dependency overridden.
    This is the main fixture that API tests use.
    """
    app.dependency_overrides[get_database] = lambda: database
    
    with TestClient(app) as test_client:
        yield test_client
    
    app.dependency_overrides.clear()
