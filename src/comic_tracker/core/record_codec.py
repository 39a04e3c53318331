"""Tolerant field-table codec shared by the backup record types.

Each record type declares a tuple of ``WireField`` entries. Decoding walks
the table: a field whose key (or any legacy alias) is missing, or is JSON
null, takes the default for its kind. Encoding drops fields still holding
their default unless the field is marked as always written.

Defaults per kind:
    text   -> ""
    count  -> 0          (non-negative integer)
    flag   -> False      (stored as 0/1, true/false also accepted)
    date   -> None       (stored as ISO date, legacy reference seconds accepted)
    status -> NOT_READ
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from .read_status import ReadStatus

TEXT = "text"
COUNT = "count"
FLAG = "flag"
DATE = "date"
STATUS = "status"

# Legacy backups stored dates as seconds since this instant.
REFERENCE_DATE = datetime(2001, 1, 1, tzinfo=timezone.utc)

_MISSING = object()


class RecordDecodeError(ValueError):
    """Raised when a stored record holds a value of the wrong shape."""


@dataclass(frozen=True)
class WireField:
    """One attribute of a record and how it appears in a backup file.

    Attributes:
        attr: Attribute name on the record dataclass.
        key: Compact key written to disk.
        kind: One of the codec kinds (text, count, flag, date, status).
        aliases: Older key spellings still accepted on decode.
        always: Write the field even when it holds its default.
    """

    attr: str
    key: str
    kind: str
    aliases: Tuple[str, ...] = ()
    always: bool = False

    @property
    def keys(self) -> Tuple[str, ...]:
        return (self.key,) + self.aliases


def default_for(kind: str) -> Any:
    if kind == TEXT:
        return ""
    if kind == COUNT:
        return 0
    if kind == FLAG:
        return False
    if kind == DATE:
        return None
    if kind == STATUS:
        return ReadStatus.NOT_READ
    raise ValueError(f"Unknown wire field kind: {kind}")


def _decode_text(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise RecordDecodeError(f"Field '{key}' must be a string, got {type(value).__name__}")
    return value


def _decode_count(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecordDecodeError(f"Field '{key}' must be an integer, got {type(value).__name__}")
    if value < 0:
        raise RecordDecodeError(f"Field '{key}' must not be negative, got {value}")
    return value


def _decode_flag(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return value == 1
    raise RecordDecodeError(f"Field '{key}' must be true/false or 0/1, got {value!r}")


def _decode_date(value: Any, key: str) -> date:
    if isinstance(value, bool):
        raise RecordDecodeError(f"Field '{key}' must be a date, got a boolean")
    if isinstance(value, (int, float)):
        try:
            return (REFERENCE_DATE + timedelta(seconds=value)).date()
        except OverflowError as e:
            raise RecordDecodeError(f"Field '{key}' is out of range: {value}") from e
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError as e:
            raise RecordDecodeError(f"Field '{key}' is not an ISO date: {value!r}") from e
    raise RecordDecodeError(f"Field '{key}' must be a date, got {type(value).__name__}")


def _decode_status(value: Any, key: str) -> ReadStatus:
    if not isinstance(value, str):
        raise RecordDecodeError(f"Field '{key}' must be a string, got {type(value).__name__}")
    try:
        return ReadStatus.from_wire(value)
    except ValueError as e:
        raise RecordDecodeError(str(e)) from e


_DECODERS: Dict[str, Callable[[Any, str], Any]] = {
    TEXT: _decode_text,
    COUNT: _decode_count,
    FLAG: _decode_flag,
    DATE: _decode_date,
    STATUS: _decode_status,
}

_ENCODERS: Dict[str, Callable[[Any], Any]] = {
    TEXT: lambda value: value,
    COUNT: lambda value: value,
    FLAG: lambda value: 1 if value else 0,
    DATE: lambda value: value.isoformat(),
    STATUS: lambda value: value.value,
}


def decode_fields(data: Any, fields: Iterable[WireField]) -> Dict[str, Any]:
    """Decode a JSON object into constructor keyword arguments.

    Unknown keys are ignored.

    Raises:
        RecordDecodeError: If data is not an object or a field has the wrong shape.
    """
    if not isinstance(data, dict):
        raise RecordDecodeError(f"Record must be a JSON object, got {type(data).__name__}")

    values: Dict[str, Any] = {}
    for field in fields:
        raw: Any = _MISSING
        for key in field.keys:
            if key in data:
                raw = data[key]
                break
        if raw is _MISSING or raw is None:
            values[field.attr] = default_for(field.kind)
        else:
            values[field.attr] = _DECODERS[field.kind](raw, field.key)
    return values


def encode_fields(record: Any, fields: Iterable[WireField]) -> Dict[str, Any]:
    """Encode a record, dropping fields that hold their default."""
    data: Dict[str, Any] = {}
    for field in fields:
        value = getattr(record, field.attr)
        if not field.always and value == default_for(field.kind):
            continue
        data[field.key] = _ENCODERS[field.kind](value)
    return data


def wire_field(
    attr: str, key: str, kind: str, *aliases: str, always: bool = False
) -> WireField:
    """Shorthand used by the record tables."""
    return WireField(attr=attr, key=key, kind=kind, aliases=tuple(aliases), always=always)


def optional_date(value: Optional[date]) -> Optional[date]:
    """Normalise a datetime to its date part, leaving None alone."""
    if isinstance(value, datetime):
        return value.date()
    return value
