"""Read status of a comic."""

from enum import Enum


class ReadStatus(Enum):
    """Whether a comic has been read.

    NotRead entries let an event list track comics that are still to come.
    The values are the strings written to backup files.
    """

    READ = "Read"
    SKIPPED = "Skipped"
    NOT_READ = "Not Read"

    @classmethod
    def from_wire(cls, value: str) -> "ReadStatus":
        """Parse a stored value, accepting the display value or the legacy name."""
        for status in cls:
            if value == status.value:
                return status
        if value == "NotRead":
            return cls.NOT_READ
        raise ValueError(f"Unknown read status: {value!r}")
