from .connection import Base, Database

__all__ = ["Base", "Database"]
