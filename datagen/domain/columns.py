"""
Column definitions and the field expander.

The YAML groups fields by type tag. The expander flattens that map into the
ordered list of ColumnDef that fixes column order for both CREATE TABLE and
every emitted row, and resolves each raw `{start, end}` pair into a typed
range so the row loop never sees untyped values.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from datagen.domain.models import FieldSchema, ValueRange
from datagen.errors import RangeConversionError


@dataclass(frozen=True)
class IntRange:
    """Signed integers in [start, end)."""

    start: int
    end: int


@dataclass(frozen=True)
class UintRange:
    """Unsigned integers in [start, end)."""

    start: int
    end: int


@dataclass(frozen=True)
class FloatRange:
    """Reals in [start, end)."""

    start: float
    end: float


@dataclass(frozen=True)
class StringLenRange:
    """String lengths in [min_len, max_len], both inclusive."""

    min_len: int
    max_len: int


@dataclass(frozen=True)
class TimestampRange:
    """Instants in [start, end). Naive datetimes are local wall-clock time."""

    start: datetime
    end: datetime


TypedRange = Union[IntRange, UintRange, FloatRange, StringLenRange, TimestampRange]

DEFAULT_RANGES: Dict[str, TypedRange] = {
    "int": IntRange(-100, 100),
    "uint": UintRange(0, 100),
    "float": FloatRange(-100.0, 100.0),
    "string": StringLenRange(0, 5),
    "timestamp": TimestampRange(datetime(2023, 1, 1, 0, 0, 0), datetime(2023, 12, 31, 23, 59, 59)),
}


@dataclass(frozen=True)
class ColumnDef:
    """A single output column: name, type tag and optional typed range."""

    name: str
    type: str
    range: Optional[TypedRange] = None

    @property
    def effective_range(self) -> Optional[TypedRange]:
        """The explicit range, or the type's default when none was given."""
        return self.range if self.range is not None else DEFAULT_RANGES.get(self.type)

    def ddl(self) -> str:
        return f"{self.name} {self.type}"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _int_bounds(label: str, tag: str, raw: ValueRange, minimum: Optional[int] = None) -> tuple:
    for bound in (raw.start, raw.end):
        if not _is_int(bound):
            raise RangeConversionError(label, tag, f"expected integer bounds, got {bound!r}")
        if minimum is not None and bound < minimum:
            raise RangeConversionError(label, tag, f"bound {bound} is below {minimum}")
    return raw.start, raw.end


def _require_ordered(label: str, tag: str, start: Any, end: Any, inclusive: bool) -> None:
    if end < start or (end == start and not inclusive):
        interval = f"[{start}, {end}]" if inclusive else f"[{start}, {end})"
        raise RangeConversionError(label, tag, f"empty range {interval}")


def _resolve_int(label: str, raw: ValueRange) -> IntRange:
    start, end = _int_bounds(label, "int", raw)
    _require_ordered(label, "int", start, end, inclusive=False)
    return IntRange(start, end)


def _resolve_uint(label: str, raw: ValueRange) -> UintRange:
    start, end = _int_bounds(label, "uint", raw, minimum=0)
    _require_ordered(label, "uint", start, end, inclusive=False)
    return UintRange(start, end)


def _resolve_float(label: str, raw: ValueRange) -> FloatRange:
    bounds = []
    for bound in (raw.start, raw.end):
        if isinstance(bound, bool) or not isinstance(bound, (int, float)):
            raise RangeConversionError(label, "float", f"expected numeric bounds, got {bound!r}")
        if not math.isfinite(bound):
            raise RangeConversionError(label, "float", f"bound {bound} is not finite")
        bounds.append(float(bound))
    _require_ordered(label, "float", bounds[0], bounds[1], inclusive=False)
    return FloatRange(bounds[0], bounds[1])


def _resolve_string(label: str, raw: ValueRange) -> StringLenRange:
    min_len, max_len = _int_bounds(label, "string", raw, minimum=0)
    _require_ordered(label, "string", min_len, max_len, inclusive=True)
    return StringLenRange(min_len, max_len)


def _to_datetime(label: str, value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise RangeConversionError(label, "timestamp", f"cannot parse {value!r}") from exc
    raise RangeConversionError(label, "timestamp", f"expected a timestamp, got {value!r}")


def _resolve_timestamp(label: str, raw: ValueRange) -> TimestampRange:
    start = _to_datetime(label, raw.start)
    end = _to_datetime(label, raw.end)
    if (start.tzinfo is None) != (end.tzinfo is None):
        raise RangeConversionError(
            label, "timestamp", "start and end must both carry a UTC offset or neither"
        )
    _require_ordered(label, "timestamp", start, end, inclusive=False)
    for bound in (start, end):
        _require_epoch_convertible(label, bound)
    return TimestampRange(start, end)


def _require_epoch_convertible(label: str, value: datetime) -> None:
    # Sampling goes through epoch seconds; instants whose UTC or local
    # equivalent falls outside years 1..9999 cannot make the round trip.
    try:
        datetime.fromtimestamp(value.timestamp(), tz=value.tzinfo)
    except (ValueError, OverflowError, OSError) as exc:
        raise RangeConversionError(
            label, "timestamp", f"{value.isoformat()} is outside the supported calendar range"
        ) from exc


_RESOLVERS: Dict[str, Callable[[str, ValueRange], TypedRange]] = {
    "int": _resolve_int,
    "uint": _resolve_uint,
    "float": _resolve_float,
    "string": _resolve_string,
    "timestamp": _resolve_timestamp,
}


def resolve_range(label: str, type_tag: str, raw: Optional[ValueRange]) -> Optional[TypedRange]:
    """
    Convert a raw range into the typed range for `type_tag`.

    Returns None when no range was given or the type ignores ranges (boolean).
    Raises RangeConversionError when the bounds do not fit the type.
    """
    if raw is None:
        return None
    resolver = _RESOLVERS.get(type_tag)
    if resolver is None:
        return None
    return resolver(label, raw)


def expand_fields(fields: Mapping[str, Sequence[FieldSchema]]) -> List[ColumnDef]:
    """
    Flatten the grouped-by-type field map into an ordered column list.

    Order within each type's list is preserved. Order across type tags follows
    the mapping's iteration order and carries no meaning.
    """
    columns: List[ColumnDef] = []
    for type_tag, entries in fields.items():
        for entry in entries:
            if entry.count > 0:
                label = f"col_{type_tag}0..{entry.count - 1}"
                typed = resolve_range(label, type_tag, entry.range)
                columns.extend(
                    ColumnDef(name=f"col_{type_tag}{i}", type=type_tag, range=typed)
                    for i in range(entry.count)
                )
            else:
                typed = resolve_range(entry.name or "", type_tag, entry.range)
                columns.append(ColumnDef(name=entry.name or "", type=type_tag, range=typed))
    return columns


__all__ = [
    "IntRange",
    "UintRange",
    "FloatRange",
    "StringLenRange",
    "TimestampRange",
    "TypedRange",
    "DEFAULT_RANGES",
    "ColumnDef",
    "resolve_range",
    "expand_fields",
]
