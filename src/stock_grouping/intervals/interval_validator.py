"""Validation of compact interval strings such as ``5min``, ``2d`` or ``1 week``.

This module defines the IntervalValidator class, which verifies whether a string
is a positive count followed by a unit name or alias accepted by `IntervalUnit`.
"""

import re
from typing import Optional, Tuple

from src.stock_grouping.intervals.interval_unit import (InvalidUnitError,
                                                        IntervalUnit)


class IntervalValidator:
    """Validates and splits compact interval strings.

    Acceptable units are the names, plurals and aliases known to `IntervalUnit`.
    """

    PATTERN = re.compile(r"^(\d+)\s*([A-Za-z]+)$")

    @classmethod
    def is_valid(cls, interval: str) -> bool:
        """Checks if the string is a positive count followed by a known unit."""
        return cls.split(interval) is not None

    @classmethod
    def split(cls, interval: str) -> Optional[Tuple[int, IntervalUnit]]:
        """Return ``(count, unit)`` for a valid compact string, otherwise ``None``."""
        if not isinstance(interval, str) or len(interval.strip()) == 0:
            return None
        match = cls.PATTERN.fullmatch(interval.strip())
        if not match:
            return None
        count = int(match.group(1))
        if count <= 0:
            return None
        try:
            unit = IntervalUnit.parse(match.group(2))
        except InvalidUnitError:
            return None
        return count, unit
