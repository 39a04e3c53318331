"""
Comic Tracker - A reading log for comic books.

This package provides the persistence and statistics core of the app:
- Comics read, rolled up into series and events
- Issues and pages read per series and event
- Dated, rotating JSON backups that old versions can still read
"""

__version__ = "0.1.0"

# Make key components available at package level
from comic_tracker.core import ComicEvent, ComicFields, ComicItem, ComicSeries, ReadStatus
from comic_tracker.coordinators import PersistenceSession

__all__ = [
    "ComicItem",
    "ComicFields",
    "ComicSeries",
    "ComicEvent",
    "ReadStatus",
    "PersistenceSession",
]
