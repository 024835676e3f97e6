"""
Database models for the analytics collector.

Two tables only: registered sites and the pageview events recorded for them.
"""

from .site import Site
from .event import Event

__all__ = ["Site", "Event"]
