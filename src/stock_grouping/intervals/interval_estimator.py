"""Estimate the natural interval of raw data from its minimum point spacing."""

from typing import List, Optional

from src.stock_grouping.intervals.interval_generator import Level
from src.stock_grouping.intervals.interval_unit import IntervalUnit

_COARSEST_FIRST: List[IntervalUnit] = sorted(
    IntervalUnit, key=lambda unit: unit.approx_ms, reverse=True
)


def estimate_interval(spacing_ms: Optional[float]) -> Level:
    """Return the ``{"unit", "count"}`` level whose duration best matches *spacing_ms*.

    The coarsest unit not longer than the spacing is chosen and the count is the
    rounded number of such units. Missing or non-positive spacing yields one
    millisecond.
    """
    if not spacing_ms or spacing_ms <= 0:
        return {"unit": IntervalUnit.MILLISECOND.value, "count": 1}
    for unit in _COARSEST_FIRST:
        if unit.approx_ms <= spacing_ms:
            count = max(1, int(round(spacing_ms / unit.approx_ms)))
            return {"unit": unit.value, "count": count}
    return {"unit": IntervalUnit.MILLISECOND.value, "count": 1}


def format_interval(level: Level) -> str:
    """Human readable form of a level, e.g. ``5 minutes`` or ``1 day``."""
    count = int(level["count"])
    unit = str(level["unit"])
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"
