"""Adaptive grouping policy for stock chart series.

`GroupingPolicy` owns the sorted list of candidate grouping intervals and the
active density policy. On every redraw the chart asks it, through
`GroupingPolicy.choose_interval`, which interval (if any) raw points must be
aggregated into so that the number of rendered points stays bounded.

The policy also records the effective interval of the last call and whether
grouping was applied, for consumers such as axis labelling.
"""

from __future__ import annotations

import math
from bisect import bisect_right
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from src.stock_grouping.intervals.interval_estimator import (estimate_interval,
                                                             format_interval)
from src.stock_grouping.intervals.interval_generator import (IntervalGenerator,
                                                             Level)
from src.stock_grouping.intervals.interval_unit import (InvalidUnitError,
                                                        IntervalUnit)
from src.stock_grouping.policy.density_policy import (DEFAULT_DENSITY,
                                                      DensityPolicy,
                                                      MaxVisiblePoints,
                                                      MinPixelsPerPoint,
                                                      max_points, min_pixels)
from src.utils.config.parameters import ParameterLoader
from src.utils.io.logger import Logger

ChangeListener = Callable[[], None]


def _default_interval() -> Level:
    return {"unit": IntervalUnit.MILLISECOND.value, "count": 1}


def _summary_value(selection: Any, name: str) -> float:
    """Read *name* from a selection summary; missing or NaN values read as 0."""
    if selection is None:
        return 0
    if isinstance(selection, Mapping):
        value = selection.get(name)
    else:
        value = getattr(selection, name, None)
    if value is None:
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return 0 if math.isnan(number) else number


class GroupingPolicy:
    """Grouping settings of a series set and the interval selection algorithm."""

    def __init__(self, on_change: Optional[ChangeListener] = None) -> None:
        """Create a policy with default settings.

        *on_change* is called every time a setter changes the configuration, so
        the owner can schedule grouping to be reapplied.
        """
        self._enabled: bool = True
        self._forced: bool = False
        self._candidates: Tuple[IntervalGenerator, ...] = ()
        self._durations: Tuple[float, ...] = ()
        self._density: DensityPolicy = DEFAULT_DENSITY
        self._current_interval: Level = _default_interval()
        self._is_grouped: bool = False
        self._listeners: List[ChangeListener] = []
        if on_change is not None:
            self._listeners.append(on_change)

    @classmethod
    def from_dict(
        cls, record: Mapping, on_change: Optional[ChangeListener] = None
    ) -> "GroupingPolicy":
        """Build a policy from a flat record (see `to_dict`)."""
        policy = cls()
        policy.apply_dict(record)
        if on_change is not None:
            policy.add_listener(on_change)
        return policy

    @classmethod
    def from_parameters(
        cls,
        params: Optional[ParameterLoader] = None,
        on_change: Optional[ChangeListener] = None,
    ) -> "GroupingPolicy":
        """Build a policy from the ``grouping_*`` configuration parameters."""
        params = params if params is not None else ParameterLoader()
        record = {
            "enabled": params.get("grouping_enabled", True),
            "forced": params.get("grouping_forced", False),
            "levels": params.get("grouping_levels", []),
            "max_visible_points": params.get("grouping_max_visible_points"),
            "min_pixels_per_point": params.get("grouping_min_pixels_per_point"),
        }
        return cls.from_dict(record, on_change)

    def add_listener(self, listener: ChangeListener) -> None:
        """Register another change listener."""
        self._listeners.append(listener)

    def _notify_needs_reapplication(self) -> None:
        for listener in list(self._listeners):
            listener()

    def get_enabled(self) -> bool:
        """Whether grouping is enabled."""
        return self._enabled

    def set_enabled(self, value: Any) -> None:
        """Enable or disable grouping."""
        value = bool(value)
        if self._enabled != value:
            self._enabled = value
            self._notify_needs_reapplication()

    def get_forced(self) -> bool:
        """Whether grouping is applied even when the data fits the density target."""
        return self._forced

    def set_forced(self, value: Any) -> None:
        """Turn forced grouping on or off."""
        value = bool(value)
        if self._forced != value:
            self._forced = value
            self._notify_needs_reapplication()

    def get_candidates(self) -> Tuple[IntervalGenerator, ...]:
        """Candidate intervals, sorted from finest to coarsest."""
        return self._candidates

    def get_levels(self) -> List[Level]:
        """Candidate intervals exported as ``{"unit", "count"}`` records."""
        return [interval.to_level() for interval in self._candidates]

    def set_levels(self, levels: Optional[Iterable[Any]]) -> None:
        """Replace the candidate intervals.

        Each entry may be a unit name, a compact string such as ``"5min"``, a
        ``{"unit", "count"}`` mapping or a ``(unit, count)`` pair. Invalid
        entries are dropped, duplicates are removed and the result is sorted.
        Listeners are always notified.
        """
        parsed: Dict[str, IntervalGenerator] = {}
        if levels is not None and not isinstance(levels, (str, Mapping)):
            for entry in levels:
                try:
                    interval = IntervalGenerator.from_level(entry)
                except (InvalidUnitError, TypeError) as exc:
                    Logger.warning(f"Dropping grouping level {entry!r}: {exc}")
                    continue
                parsed.setdefault(interval.identity_key(), interval)
        candidates = sorted(parsed.values(), key=IntervalGenerator.sort_key)
        self._candidates = tuple(candidates)
        self._durations = tuple(c.approx_duration() for c in candidates)
        self._notify_needs_reapplication()

    def get_density(self) -> DensityPolicy:
        """The active density policy."""
        return self._density

    def get_max_visible_points(self) -> Optional[float]:
        """Maximum visible points, or ``None`` in pixels-per-point mode."""
        if isinstance(self._density, MaxVisiblePoints):
            return self._density.points
        return None

    def set_max_visible_points(self, value: Any) -> None:
        """Switch to max-visible-points mode (clamped to at least 2)."""
        density = max_points(value)
        if self._density != density:
            self._density = density
            self._notify_needs_reapplication()

    def get_min_pixels_per_point(self) -> Optional[float]:
        """Minimum pixels per point, or ``None`` in max-visible-points mode."""
        if isinstance(self._density, MinPixelsPerPoint):
            return self._density.pixels
        return None

    def set_min_pixels_per_point(self, value: Any) -> None:
        """Switch to min-pixels-per-point mode (clamped to at least 0.1)."""
        density = min_pixels(value)
        if self._density != density:
            self._density = density
            self._notify_needs_reapplication()

    def get_current_data_interval(self) -> Level:
        """Effective interval computed by the last `choose_interval` call."""
        return dict(self._current_interval)

    def is_grouped(self) -> bool:
        """Whether the last `choose_interval` call picked a candidate."""
        return self._is_grouped

    def _target_point_count(self, pixel_width: Any) -> Optional[float]:
        try:
            target = float(self._density.target_point_count(pixel_width))
        except (TypeError, ValueError, ZeroDivisionError):
            return None
        return None if math.isnan(target) else target

    def _search(
        self, data_range: float, min_spacing: float, target: float
    ) -> IntervalGenerator:
        # first candidate coarser than the natural resolution of the data
        first = bisect_right(self._durations, min_spacing)
        if first >= len(self._candidates):
            first = 0
        for interval, duration in zip(
            self._candidates[first:], self._durations[first:]
        ):
            if duration * target >= data_range:
                return interval
        return self._candidates[-1]

    def choose_interval(
        self,
        start_key: float,
        end_key: float,
        pixel_width: float,
        selection: Any,
    ) -> Optional[IntervalGenerator]:
        """Choose the grouping interval for the visible range.

        *selection* is the data registry summary of ``[start_key, end_key]``
        (``point_count`` and ``min_spacing``). An object with a
        ``get_selection(start_key, end_key)`` method is queried first.

        Returns the chosen candidate, or ``None`` when raw points should be
        rendered. The effective interval and the grouped flag are recorded
        either way.
        """
        if hasattr(selection, "get_selection"):
            selection = selection.get_selection(start_key, end_key)
        point_count = _summary_value(selection, "point_count")
        min_spacing = _summary_value(selection, "min_spacing")
        data_range = end_key - start_key
        target = self._target_point_count(pixel_width)

        result: Optional[IntervalGenerator] = None
        if (
            self._enabled
            and self._candidates
            and min_spacing
            and target is not None
            and data_range > 0
            and (self._forced or point_count > target)
        ):
            result = self._search(data_range, min_spacing, target)

        if result is not None:
            self._current_interval = result.to_level()
        elif min_spacing:
            self._current_interval = estimate_interval(min_spacing)
        else:
            self._current_interval = _default_interval()
        self._is_grouped = result is not None

        Logger.debug(
            f"Grouping {'applied' if result is not None else 'skipped'}: "
            f"{format_interval(self._current_interval)} "
            f"(points={int(point_count)}, target={target}, range={data_range})"
        )
        return result

    def configure(self, value: Any) -> None:
        """Shorthand setup.

        ``True``/``False``/``None`` toggle grouping, a list enables grouping
        and replaces the levels, a mapping is applied as a record.
        """
        if value is None or isinstance(value, bool):
            self.set_enabled(bool(value))
        elif isinstance(value, Mapping):
            self.apply_dict(value)
        elif isinstance(value, (list, tuple)):
            self.set_enabled(True)
            self.set_levels(value)
        else:
            raise TypeError(f"Unsupported grouping setup: {value!r}")

    def apply_dict(self, record: Mapping) -> None:
        """Apply the keys present in *record* through the setters."""
        if "enabled" in record:
            self.set_enabled(record["enabled"])
        if "forced" in record:
            self.set_forced(record["forced"])
        if "levels" in record:
            self.set_levels(record["levels"])
        if record.get("max_visible_points") is not None:
            self.set_max_visible_points(record["max_visible_points"])
        if record.get("min_pixels_per_point") is not None:
            self.set_min_pixels_per_point(record["min_pixels_per_point"])

    def to_dict(self) -> Dict[str, Any]:
        """Flat record of the configuration; one density field is always ``None``."""
        return {
            "enabled": self._enabled,
            "forced": self._forced,
            "levels": self.get_levels(),
            "max_visible_points": self.get_max_visible_points(),
            "min_pixels_per_point": self.get_min_pixels_per_point(),
        }
