"""
Snapshot persistence for the in-memory database.

This module implements the Strategy Pattern for pluggable durability.
"""

from .strategies import SnapshotPersistence, FileSnapshotPersistence, MemoryOnlyPersistence
from .factory import PersistenceFactory, PersistenceBackend

__all__ = [
    "SnapshotPersistence",
    "FileSnapshotPersistence",
    "MemoryOnlyPersistence",
    "PersistenceFactory",
    "PersistenceBackend",
]
