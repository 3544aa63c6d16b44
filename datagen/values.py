"""
Value generator: one text token per (row, column).

An emitter is picked once per column and then called once per row, so the
row loop is a flat list of zero-argument callables. Tokens are written into
the SQL unquoted, strings and timestamps included; the consuming dialect
expects exactly that.
"""

from __future__ import annotations

import math
import random
import string
from datetime import datetime
from typing import Any, Callable, Dict

from datagen.domain.columns import (
    ColumnDef,
    FloatRange,
    IntRange,
    StringLenRange,
    TimestampRange,
    UintRange,
)
from datagen.utils.logging import get_logger

log = get_logger(__name__)

ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits

Emitter = Callable[[], str]


def _bounds(column: ColumnDef, *kinds: type) -> Any:
    bounds = column.effective_range
    if not isinstance(bounds, kinds):
        expected = " or ".join(kind.__name__ for kind in kinds)
        raise TypeError(
            f"column '{column.name}' of type {column.type} needs a {expected}, "
            f"got {type(bounds).__name__}"
        )
    return bounds


def _int_emitter(column: ColumnDef, rng: random.Random) -> Emitter:
    bounds = _bounds(column, IntRange, UintRange)
    start, end = bounds.start, bounds.end
    if end <= start:
        return lambda: str(start)
    return lambda: str(rng.randrange(start, end))


def _float_emitter(column: ColumnDef, rng: random.Random) -> Emitter:
    bounds = _bounds(column, FloatRange)
    start, end = bounds.start, bounds.end
    if end <= start:
        return lambda: f"{start:.6f}"
    # Largest value still below `end` once rendered with six fraction digits.
    below_end = f"{max(end - max(1e-6, math.ulp(end)), start):.6f}"

    def emit() -> str:
        fraction = rng.random()
        # No `end - start`: it overflows for bounds near the float limits.
        value = start * (1.0 - fraction) + end * fraction
        text = f"{value:.6f}"
        if float(text) >= end:
            return below_end
        return text

    return emit


def _string_emitter(column: ColumnDef, rng: random.Random) -> Emitter:
    bounds = _bounds(column, StringLenRange)
    min_len, max_len = bounds.min_len, max(bounds.min_len, bounds.max_len)

    def emit() -> str:
        return "".join(rng.choices(ALPHABET, k=rng.randint(min_len, max_len)))

    return emit


def format_timestamp(value: datetime) -> str:
    """Render `YYYY-MM-DD HH:MM:SS.mmm`, years zero-padded to four digits."""
    return f"{value.year:04d}-{value:%m-%d %H:%M:%S}.{value.microsecond // 1000:03d}"


def _timestamp_emitter(column: ColumnDef, rng: random.Random) -> Emitter:
    bounds = _bounds(column, TimestampRange)
    # Millisecond epoch arithmetic keeps DST transitions correct for local times.
    start_ms = round(bounds.start.timestamp() * 1000)
    span_ms = round(bounds.end.timestamp() * 1000) - start_ms
    tz = bounds.start.tzinfo

    def emit() -> str:
        offset = rng.randrange(span_ms) if span_ms > 0 else 0
        return format_timestamp(datetime.fromtimestamp((start_ms + offset) / 1000, tz=tz))

    return emit


def _boolean_emitter(column: ColumnDef, rng: random.Random) -> Emitter:
    return lambda: "true" if rng.random() < 0.5 else "false"


_EMITTER_FACTORIES: Dict[str, Callable[[ColumnDef, random.Random], Emitter]] = {
    "int": _int_emitter,
    "uint": _int_emitter,
    "float": _float_emitter,
    "string": _string_emitter,
    "timestamp": _timestamp_emitter,
    "boolean": _boolean_emitter,
}


def make_emitter(column: ColumnDef, rng: random.Random) -> Emitter:
    """
    Build the token emitter for one column.

    Unknown type tags get an emitter that always returns an empty token so
    row arity is preserved; a warning is logged once per column.
    """
    factory = _EMITTER_FACTORIES.get(column.type)
    if factory is None:
        log.warning(
            f"Unknown type tag '{column.type}' for column '{column.name}'; emitting empty values",
            extra={"column": column.name, "type_tag": column.type},
        )
        return lambda: ""
    return factory(column, rng)


def generate_value(column: ColumnDef, rng: random.Random) -> str:
    """Produce a single token for `column`."""
    return make_emitter(column, rng)()


__all__ = ["ALPHABET", "Emitter", "format_timestamp", "generate_value", "make_emitter"]
