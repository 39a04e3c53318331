"""Coordinators - Orchestration layer connecting a UI shell with the catalogue."""

from .persistence_session import PersistenceSession, SaveStatus

__all__ = [
    "PersistenceSession",
    "SaveStatus",
]
