# tests/test_intervals.py

from __future__ import annotations

import pytest

from tickwork.tasks.errors import InvalidArgument
from tickwork.tasks.intervals import INTERVAL_MS, describe_interval, resolve_interval
from tickwork.tasks.task_models import IntervalUnit


def test_unit_table() -> None:
    assert {unit.value: ms for unit, ms in INTERVAL_MS.items()} == {
        "second": 1000,
        "minute": 60_000,
        "hour": 3_600_000,
        "day": 86_400_000,
        "week": 604_800_000,
    }


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("second", 1000),
        (" Minute ", 60_000),
        (IntervalUnit.DAY, 86_400_000),
        (500, 500),
        (2.5, 2.5),
    ],
)
def test_resolve_interval(value, expected) -> None:
    assert resolve_interval(value) == expected


@pytest.mark.parametrize("value", ["", "seconds", "500", None, [1000], 0, -1.0, False])
def test_resolve_interval_rejects(value) -> None:
    with pytest.raises(InvalidArgument, match="invalid interval"):
        resolve_interval(value)


def test_invalid_argument_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        resolve_interval("fortnight")


@pytest.mark.parametrize(
    ("ms", "text"),
    [
        (1000, "1 second"),
        (120_000, "2 minutes"),
        (3_600_000, "1 hour"),
        (1_209_600_000, "2 weeks"),
        (90_000, "90 seconds"),
        (1500, "1500 ms"),
        (2.5, "2.5 ms"),
    ],
)
def test_describe_interval(ms, text) -> None:
    assert describe_interval(ms) == text
