"""
Snapshot persistence strategies using Strategy Pattern.

The database lives entirely in memory. After every write the whole
database is serialized and handed to one of these strategies:
- File: durable single-file snapshot (default)
- Memory only: nothing is kept, data dies with the process
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)


class SnapshotPersistence(ABC):
    """
    Abstract base class for snapshot persistence.
    
    A snapshot is the complete serialized database, as bytes. Strategies
    never see partial updates: every save replaces the previous snapshot.
    """
    
    @abstractmethod
    def load(self) -> Optional[bytes]:
        """
        Read the last saved snapshot.
        
        Returns:
            Snapshot bytes, or None if nothing has been saved yet
            
        Raises:
            OSError: if a snapshot exists but cannot be read
        """
        pass
    
    @abstractmethod
    def save(self, data: bytes) -> None:
        """
        Replace the stored snapshot.
        
        Args:
            data: Complete serialized database
        """
        pass


class FileSnapshotPersistence(SnapshotPersistence):
    """
    Single-file snapshot persistence.
    
    Every save rewrites the whole file. The new snapshot is written to a
    temporary sibling first and then moved over the target, so a crash
    mid-write leaves the previous snapshot intact.
    
    Cost: O(database size) disk I/O per write, fine for low volume.
    """
    
    def __init__(self, path: str = "privalytics-lite.db"):
        """
        Args:
            path: Path to the database file
        """
        self.path = path
    
    def load(self) -> Optional[bytes]:
        if not os.path.exists(self.path):
            return None
        
        with open(self.path, "rb") as f:
            return f.read()
    
    def save(self, data: bytes) -> None:
        tmp_path = f"{self.path}.tmp"
        
        with open(tmp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        
        os.replace(tmp_path, self.path)
        logger.debug("Saved %d byte snapshot to %s", len(data), self.path)


class MemoryOnlyPersistence(SnapshotPersistence):
    """
    No-op persistence for ephemeral runs.
    
    Use case:
    - Demos
    - Throwaway environments where durability is not wanted
    """
    
    def load(self) -> Optional[bytes]:
        return None
    
    def save(self, data: bytes) -> None:
        pass
