"""
Chooses where database snapshots go.

"file" keeps one snapshot file at settings.database_path, rewritten on
every write. "memory" keeps nothing, for demos and throwaway runs. The
chosen strategy is built once per process and shared.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Optional

from .strategies import SnapshotPersistence, FileSnapshotPersistence, MemoryOnlyPersistence
from privalytics_app.config import settings

logger = logging.getLogger(__name__)


class PersistenceBackend(Enum):
    """Snapshot destinations selectable through PERSISTENCE_BACKEND"""
    FILE = "file"
    MEMORY = "memory"


def _file_persistence() -> SnapshotPersistence:
    logger.info("Persisting snapshots to %s", settings.database_path)
    return FileSnapshotPersistence(path=settings.database_path)


def _memory_persistence() -> SnapshotPersistence:
    logger.warning("Memory-only persistence: data is lost when the process exits")
    return MemoryOnlyPersistence()


_BUILDERS: Dict[PersistenceBackend, Callable[[], SnapshotPersistence]] = {
    PersistenceBackend.FILE: _file_persistence,
    PersistenceBackend.MEMORY: _memory_persistence,
}


class PersistenceFactory:
    """Builds the process-wide snapshot strategy on first use."""

    _instance: Optional[SnapshotPersistence] = None

    @classmethod
    def create(cls, backend: PersistenceBackend) -> SnapshotPersistence:
        """
        Return the shared strategy, building it for `backend` if none exists yet.

        Later calls return the first strategy regardless of `backend`.
        """
        if cls._instance is None:
            builder = _BUILDERS.get(backend)
            if builder is None:
                raise ValueError(f"Unknown persistence backend: {backend}")
            cls._instance = builder()

        return cls._instance

    @classmethod
    def clear_instance(cls):
        """Forget the shared strategy so tests can build another"""
        cls._instance = None
