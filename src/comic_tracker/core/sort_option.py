"""Orderings offered by the comic, series and event lists."""

from enum import Enum


class SortOption(Enum):
    """All orderings are descending."""

    ID = "ID"
    PAGES_READ = "Pages Read"
    ISSUES_READ = "Issues Read"
