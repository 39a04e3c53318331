"""Unique id allocation for the three record kinds."""

from enum import Enum
from typing import Dict, Iterable, Protocol, Sequence


class EntityKind(Enum):
    """Record kinds that receive ids. Values name their backup files."""

    ITEM = "comic_data"
    SERIES = "comic_series"
    EVENT = "comic_event"


class HasId(Protocol):
    id: int


class IdAllocator:
    """Hands out increasing ids per kind.

    The counter is never persisted. After loading it is seeded from the
    highest id present in the data, so a hand-edited backup cannot make it
    hand out an id twice.
    """

    def __init__(self) -> None:
        self._last: Dict[EntityKind, int] = {kind: 0 for kind in EntityKind}

    def next_id(self, kind: EntityKind) -> int:
        self._last[kind] += 1
        return self._last[kind]

    def last_id(self, kind: EntityKind) -> int:
        return self._last[kind]

    def seed(self, kind: EntityKind, records: Iterable[HasId]) -> None:
        """Reset the counter to the largest id among records (0 when empty)."""
        self._last[kind] = max((record.id for record in records), default=0)

    def recompact(self, kind: EntityKind, ordered_records: Sequence[HasId]) -> None:
        """Renumber records 1..N in the given order and reseed to N."""
        for new_id, record in enumerate(ordered_records, start=1):
            record.id = new_id
        self._last[kind] = len(ordered_records)
