from __future__ import annotations

import logging
import random
import re
from datetime import datetime, timezone

import pytest

from datagen.domain.columns import (
    ColumnDef,
    FloatRange,
    IntRange,
    StringLenRange,
    TimestampRange,
    UintRange,
)
from datagen.values import ALPHABET, format_timestamp, generate_value, make_emitter

DRAWS = 500
SEED = 7
FLOAT_TOKEN = re.compile(r"^-?\d+\.\d{6}$")
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def _draw(column: ColumnDef, n: int = DRAWS) -> list[str]:
    emit = make_emitter(column, random.Random(SEED))
    return [emit() for _ in range(n)]


def test_alphabet_has_62_characters():
    assert len(ALPHABET) == 62
    assert len(set(ALPHABET)) == 62


def test_int_respects_half_open_range():
    tokens = _draw(ColumnDef("c", "int", IntRange(0, 10)))
    values = {int(t) for t in tokens}

    assert values <= set(range(10))
    assert 0 in values and 9 in values


def test_int_default_range():
    values = [int(t) for t in _draw(ColumnDef("c", "int"))]

    assert all(-100 <= v < 100 for v in values)
    assert any(v < 0 for v in values)


def test_uint_default_range_is_non_negative():
    values = [int(t) for t in _draw(ColumnDef("c", "uint"))]

    assert all(0 <= v < 100 for v in values)


def test_uint_custom_range():
    values = [int(t) for t in _draw(ColumnDef("c", "uint", UintRange(1000, 1003)))]

    assert set(values) <= {1000, 1001, 1002}


def test_float_tokens_have_six_fraction_digits_and_respect_range():
    tokens = _draw(ColumnDef("c", "float", FloatRange(-1.5, 2.5)))

    assert all(FLOAT_TOKEN.match(t) for t in tokens)
    assert all(-1.5 <= float(t) < 2.5 for t in tokens)


def test_float_default_range():
    tokens = _draw(ColumnDef("c", "float"))

    assert all(-100.0 <= float(t) < 100.0 for t in tokens)


def test_string_lengths_and_characters():
    tokens = _draw(ColumnDef("c", "string", StringLenRange(3, 5)))

    assert {len(t) for t in tokens} == {3, 4, 5}
    assert all(re.fullmatch(r"[a-zA-Z0-9]+", t) for t in tokens)


def test_string_default_length_allows_empty():
    lengths = {len(t) for t in _draw(ColumnDef("c", "string"))}

    assert lengths <= set(range(6))
    assert 0 in lengths


def test_timestamp_default_range_is_2023():
    for token in _draw(ColumnDef("c", "timestamp")):
        value = datetime.strptime(token, TIMESTAMP_FORMAT)
        assert datetime(2023, 1, 1) <= value < datetime(2023, 12, 31, 23, 59, 59)


def test_timestamp_custom_range_with_offset():
    start = datetime(2024, 3, 1, tzinfo=timezone.utc)
    end = datetime(2024, 3, 2, tzinfo=timezone.utc)
    tokens = _draw(ColumnDef("c", "timestamp", TimestampRange(start, end)))

    for token in tokens:
        value = datetime.strptime(token, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
        assert start <= value < end


def test_format_timestamp_uses_milliseconds():
    assert format_timestamp(datetime(2023, 5, 6, 7, 8, 9, 123456)) == "2023-05-06 07:08:09.123"


def test_boolean_tokens():
    tokens = set(_draw(ColumnDef("c", "boolean")))

    assert tokens == {"true", "false"}


def test_unknown_type_emits_empty_token_and_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="datagen.values"):
        token = generate_value(ColumnDef("amount", "decimal"), random.Random(SEED))

    assert token == ""
    assert "decimal" in caplog.text


@pytest.mark.parametrize(
    "column",
    [
        ColumnDef("c", "int", IntRange(5, 5)),
        ColumnDef("c", "float", FloatRange(1.0, 0.0)),
    ],
)
def test_degenerate_ranges_do_not_crash(column):
    assert _draw(column, n=3)


def test_same_seed_same_tokens():
    column = ColumnDef("c", "string", StringLenRange(1, 8))

    assert _draw(column) == _draw(column)


def test_float_range_spanning_the_float_limits():
    column = ColumnDef("c", "float", FloatRange(-1.7e308, 1.7e308))

    tokens = _draw(column, n=50)

    assert all(FLOAT_TOKEN.match(t) for t in tokens)
    assert all(-1.7e308 <= float(t) < 1.7e308 for t in tokens)


def test_float_token_never_rounds_onto_the_upper_bound():
    tokens = _draw(ColumnDef("c", "float", FloatRange(0.0, 0.000002)))

    assert all(0.0 <= float(t) < 0.000002 for t in tokens)


def test_format_timestamp_pads_early_years():
    assert format_timestamp(datetime(500, 1, 1, 5, 0, 34, 63000)) == "0500-01-01 05:00:34.063"
    assert format_timestamp(datetime(9, 12, 31)) == "0009-12-31 00:00:00.000"


def test_early_year_timestamps_keep_the_four_digit_year():
    start = datetime(500, 1, 1, tzinfo=timezone.utc)
    end = datetime(500, 1, 2, tzinfo=timezone.utc)

    for token in _draw(ColumnDef("c", "timestamp", TimestampRange(start, end)), n=50):
        assert re.fullmatch(r"0500-01-01 \d{2}:\d{2}:\d{2}\.\d{3}", token)


@pytest.mark.parametrize(
    "column",
    [
        ColumnDef("c", "int", FloatRange(0.0, 1.0)),
        ColumnDef("c", "float", IntRange(0, 1)),
        ColumnDef("c", "string", TimestampRange(datetime(2024, 1, 1), datetime(2024, 1, 2))),
        ColumnDef("c", "timestamp", StringLenRange(1, 2)),
    ],
)
def test_mismatched_range_variant_is_a_type_error(column):
    with pytest.raises(TypeError, match="column 'c'"):
        make_emitter(column, random.Random(SEED))
