"""Candidate grouping interval: a calendar unit multiplied by a count.

`IntervalGenerator` is an immutable value type. It knows its approximate
duration (used only to order candidates and to compare them with the natural
resolution of the data), a total ordering and a de-duplication key.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Dict, Tuple, Union

from src.stock_grouping.intervals.interval_unit import IntervalUnit
from src.stock_grouping.intervals.interval_validator import IntervalValidator

Level = Dict[str, Union[str, int]]


def to_natural_number(value: Any, default: int = 1) -> int:
    """Coerce *value* to an integer >= 1, falling back to *default*."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    number = int(number)
    return number if number >= 1 else default


class IntervalGenerator:
    """One candidate grouping interval, e.g. ``3 days``."""

    __slots__ = ("_unit", "_count")

    def __init__(self, unit: Union[IntervalUnit, str], count: Any = 1) -> None:
        """Create an interval; raises `InvalidUnitError` for an unknown *unit*."""
        self._unit: IntervalUnit = IntervalUnit.parse(unit)
        self._count: int = to_natural_number(count, 1)

    @property
    def unit(self) -> IntervalUnit:
        """Calendar unit of the interval."""
        return self._unit

    @property
    def count(self) -> int:
        """Number of units in the interval."""
        return self._count

    def approx_duration(self) -> float:
        """Approximate duration in milliseconds.

        Exact for millisecond through week. Month, quarter and year use average
        lengths, so the value must not be used to bucket timestamps.
        """
        return self._count * self._unit.approx_ms

    def sort_key(self) -> Tuple[float, int, int]:
        """Key giving the same total order as `comparator`."""
        return self.approx_duration(), self._unit.order, self._count

    def identity_key(self) -> str:
        """Stable key used to drop duplicate candidates."""
        return f"{self._unit.value}:{self._count}"

    def to_level(self) -> Level:
        """Export as a ``{"unit", "count"}`` record."""
        return {"unit": self._unit.value, "count": self._count}

    @staticmethod
    def comparator(a: "IntervalGenerator", b: "IntervalGenerator") -> int:
        """Ascending by duration, then unit order, then count."""
        key_a, key_b = a.sort_key(), b.sort_key()
        if key_a < key_b:
            return -1
        if key_a > key_b:
            return 1
        return 0

    @classmethod
    def from_level(cls, level: Any) -> "IntervalGenerator":
        """Parse a single level entry.

        Accepted forms: a bare unit name (``"day"``), a compact string
        (``"5min"``), a mapping with ``unit`` and ``count`` keys, or a
        ``(unit, count)`` pair.
        """
        if isinstance(level, IntervalGenerator):
            return level
        if isinstance(level, str):
            parts = IntervalValidator.split(level)
            if parts is not None:
                count, unit = parts
                return cls(unit, count)
            return cls(level, 1)
        if isinstance(level, Mapping):
            unit = level.get("unit")
            if not isinstance(unit, IntervalUnit):
                unit = str(unit)
            return cls(unit, level.get("count", 1))
        if isinstance(level, (tuple, list)) and len(level) == 2:
            return cls(level[0], level[1])
        raise TypeError(f"Unsupported grouping level: {level!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntervalGenerator):
            return NotImplemented
        return self._unit is other._unit and self._count == other._count

    def __hash__(self) -> int:
        return hash(self.identity_key())

    def __repr__(self) -> str:
        return f"IntervalGenerator(unit={self._unit.value!r}, count={self._count})"
