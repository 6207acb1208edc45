"""Density policies controlling how many points a chart should render.

A grouping policy is driven by exactly one of two knobs: a maximum number of
visible points, or a minimum number of pixels per point. Modelling them as two
variants of one type makes the "both set" and "both unset" states impossible.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Union

MIN_VISIBLE_POINTS = 2
MIN_PIXELS_PER_POINT = 0.1


def _to_float(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return math.nan
    return number


@dataclass(frozen=True)
class MaxVisiblePoints:
    """Render at most *points* points, whatever the pixel width."""

    points: float

    # pylint: disable=unused-argument
    def target_point_count(self, pixel_width: float) -> float:
        """Target count of rendered points."""
        return self.points


@dataclass(frozen=True)
class MinPixelsPerPoint:
    """Give every rendered point at least *pixels* pixels."""

    pixels: float

    def target_point_count(self, pixel_width: float) -> float:
        """Target count of rendered points for *pixel_width* pixels."""
        return pixel_width / self.pixels


DensityPolicy = Union[MaxVisiblePoints, MinPixelsPerPoint]


def max_points(value: Any) -> MaxVisiblePoints:
    """Build a `MaxVisiblePoints`, clamping to the minimum of 2."""
    number = _to_float(value)
    if math.isnan(number):
        number = MIN_VISIBLE_POINTS
    number = max(MIN_VISIBLE_POINTS, number)
    if math.isfinite(number) and float(number).is_integer():
        number = int(number)
    return MaxVisiblePoints(number)


def min_pixels(value: Any) -> MinPixelsPerPoint:
    """Build a `MinPixelsPerPoint`, clamping to the minimum of 0.1."""
    number = _to_float(value)
    if math.isnan(number):
        number = MIN_PIXELS_PER_POINT
    return MinPixelsPerPoint(max(MIN_PIXELS_PER_POINT, number))


DEFAULT_DENSITY: DensityPolicy = MaxVisiblePoints(500)
