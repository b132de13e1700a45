# src/tickwork/tasks/intervals.py

from __future__ import annotations

"""
Interval resolution.

Symbolic units map to milliseconds through a fixed table; numbers are taken as
milliseconds as-is. Anything else (unknown names, bools, zero, negatives, NaN/inf)
is rejected with InvalidArgument.
"""

import math
from typing import Final

from .errors import InvalidArgument
from .task_models import IntervalUnit

INTERVAL_MS: Final[dict[IntervalUnit, int]] = {
    IntervalUnit.SECOND: 1_000,
    IntervalUnit.MINUTE: 60 * 1_000,
    IntervalUnit.HOUR: 60 * 60 * 1_000,
    IntervalUnit.DAY: 24 * 60 * 60 * 1_000,
    IntervalUnit.WEEK: 7 * 24 * 60 * 60 * 1_000,
}


def resolve_interval(interval: IntervalUnit | str | int | float) -> int | float:
    """Return the interval in milliseconds or raise InvalidArgument."""
    if isinstance(interval, str):
        try:
            unit = IntervalUnit(interval.strip().lower())
        except ValueError:
            raise InvalidArgument(f"invalid interval: {interval!r}") from None
        return INTERVAL_MS[unit]

    # bool is an int subclass; True would silently mean 1 ms.
    if isinstance(interval, bool) or not isinstance(interval, (int, float)):
        raise InvalidArgument(f"invalid interval: {interval!r}")

    if not math.isfinite(interval) or interval <= 0:
        raise InvalidArgument(f"invalid interval: {interval!r}")

    return interval


def describe_interval(interval_ms: int | float) -> str:
    """Human readable form: whole units when exact ("2 hours"), else milliseconds."""
    for unit in reversed(IntervalUnit):
        size = INTERVAL_MS[unit]
        if interval_ms >= size and interval_ms % size == 0:
            n = int(interval_ms // size)
            return f"{n} {unit.value}" + ("s" if n != 1 else "")
    if float(interval_ms).is_integer():
        return f"{int(interval_ms)} ms"
    return f"{interval_ms} ms"
