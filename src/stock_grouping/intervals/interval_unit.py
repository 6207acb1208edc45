"""Calendar units used by grouping intervals.

Defines `IntervalUnit`, the fixed enumeration of units a grouping level can be
expressed in, together with the approximate length of each unit in
milliseconds. Month, quarter and year are calendar units with no fixed
duration; their lengths here are estimates meant for ordering and selection,
never for exact timestamp arithmetic.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict

MILLISECOND_MS = 1
SECOND_MS = 1000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS
WEEK_MS = 7 * DAY_MS


class InvalidUnitError(ValueError):
    """Raised when a value cannot be resolved to an `IntervalUnit`."""


class IntervalUnit(Enum):
    """Supported interval units, declared from finest to coarsest."""

    MILLISECOND = "millisecond"
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @property
    def approx_ms(self) -> float:
        """Length of one unit in milliseconds (approximate for calendar units)."""
        return _APPROX_MS[self]

    @property
    def is_calendar(self) -> bool:
        """True for units whose real length depends on the calendar."""
        return self in (IntervalUnit.MONTH, IntervalUnit.QUARTER, IntervalUnit.YEAR)

    @property
    def order(self) -> int:
        """Position of the unit in declaration order."""
        return _ORDER[self]

    @classmethod
    def parse(cls, value: Any) -> "IntervalUnit":
        """Resolve *value* (unit, name, plural or short alias) to a unit."""
        if isinstance(value, IntervalUnit):
            return value
        if not isinstance(value, str) or not value.strip():
            raise InvalidUnitError(f"Invalid interval unit: {value!r}")
        unit = _ALIASES.get(value.strip().lower())
        if unit is None:
            raise InvalidUnitError(f"Invalid interval unit: {value!r}")
        return unit


_APPROX_MS: Dict[IntervalUnit, float] = {
    IntervalUnit.MILLISECOND: MILLISECOND_MS,
    IntervalUnit.SECOND: SECOND_MS,
    IntervalUnit.MINUTE: MINUTE_MS,
    IntervalUnit.HOUR: HOUR_MS,
    IntervalUnit.DAY: DAY_MS,
    IntervalUnit.WEEK: WEEK_MS,
    IntervalUnit.MONTH: 30.4 * DAY_MS,
    IntervalUnit.QUARTER: 91.3 * DAY_MS,
    IntervalUnit.YEAR: 365 * DAY_MS,
}

_ORDER: Dict[IntervalUnit, int] = {unit: i for i, unit in enumerate(IntervalUnit)}

_ALIASES: Dict[str, IntervalUnit] = {
    "ms": IntervalUnit.MILLISECOND,
    "millisecond": IntervalUnit.MILLISECOND,
    "milliseconds": IntervalUnit.MILLISECOND,
    "s": IntervalUnit.SECOND,
    "sec": IntervalUnit.SECOND,
    "second": IntervalUnit.SECOND,
    "seconds": IntervalUnit.SECOND,
    "m": IntervalUnit.MINUTE,
    "min": IntervalUnit.MINUTE,
    "minute": IntervalUnit.MINUTE,
    "minutes": IntervalUnit.MINUTE,
    "h": IntervalUnit.HOUR,
    "hour": IntervalUnit.HOUR,
    "hours": IntervalUnit.HOUR,
    "d": IntervalUnit.DAY,
    "day": IntervalUnit.DAY,
    "days": IntervalUnit.DAY,
    "w": IntervalUnit.WEEK,
    "wk": IntervalUnit.WEEK,
    "week": IntervalUnit.WEEK,
    "weeks": IntervalUnit.WEEK,
    "mo": IntervalUnit.MONTH,
    "month": IntervalUnit.MONTH,
    "months": IntervalUnit.MONTH,
    "q": IntervalUnit.QUARTER,
    "quarter": IntervalUnit.QUARTER,
    "quarters": IntervalUnit.QUARTER,
    "y": IntervalUnit.YEAR,
    "year": IntervalUnit.YEAR,
    "years": IntervalUnit.YEAR,
}
