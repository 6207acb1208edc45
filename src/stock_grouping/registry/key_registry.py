"""Sorted registry of raw point keys (timestamps in milliseconds).

`KeyRegistry` plays the data-registry role for the grouping policy: given a
visible key range it reports how many raw points fall inside it and the
minimum spacing between them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Union

import numpy as np  # type: ignore
import pandas as pd  # type: ignore
from pandas.api.types import (  # type: ignore
    is_list_like, is_numeric_dtype, is_object_dtype)

from src.stock_grouping.registry.selection_summary import SelectionSummary

KeyInput = Union[
    None, pd.Series, pd.Index, np.ndarray, Iterable, datetime, int, float, str
]
_EPOCH = pd.Timestamp(0, tz="UTC")
_INT64_LIMIT = float(2**63)


class KeyRegistry:
    """Immutable, sorted and de-duplicated set of ``int64`` millisecond keys."""

    def __init__(self, keys: np.ndarray) -> None:
        self._keys: np.ndarray = np.unique(np.asarray(keys, dtype="int64"))

    @classmethod
    def from_keys(cls, values: KeyInput) -> "KeyRegistry":
        """Build a registry from numbers, datetimes, strings or pandas objects.

        Numeric entries are taken as milliseconds since the epoch, even when
        mixed with other values. Anything else is parsed with
        ``pandas.to_datetime`` (UTC). Unparseable and non-finite values are
        dropped.
        """
        return cls(KeyRegistry._to_millis(values))

    @staticmethod
    def _numeric_millis(series: pd.Series) -> np.ndarray:
        values = pd.to_numeric(series, errors="coerce").to_numpy(dtype="float64")
        values = values[np.isfinite(values) & (np.abs(values) < _INT64_LIMIT)]
        return values.astype("int64")

    @staticmethod
    def _datetime_millis(series: pd.Series) -> np.ndarray:
        if series.empty:
            return np.empty(0, dtype="int64")
        parsed = pd.to_datetime(series, utc=True, errors="coerce").dropna()
        if parsed.empty:
            return np.empty(0, dtype="int64")
        return ((parsed - _EPOCH) // pd.Timedelta(1, unit="ms")).to_numpy(dtype="int64")

    @staticmethod
    def _to_millis(values: KeyInput) -> np.ndarray:
        if values is None:
            return np.empty(0, dtype="int64")
        if not is_list_like(values) or isinstance(values, (str, bytes)):
            values = [values]
        series = values if isinstance(values, pd.Series) else pd.Series(list(values))
        if series.empty:
            return np.empty(0, dtype="int64")
        if is_numeric_dtype(series):
            return KeyRegistry._numeric_millis(series)
        if not is_object_dtype(series):
            return KeyRegistry._datetime_millis(series)
        is_number = series.map(
            lambda value: isinstance(value, (int, float, np.number))
        ).astype(bool)
        return np.concatenate(
            [
                KeyRegistry._numeric_millis(series[is_number]),
                KeyRegistry._datetime_millis(series[~is_number]),
            ]
        )

    def __len__(self) -> int:
        return int(self._keys.size)

    @property
    def keys(self) -> np.ndarray:
        """Copy of the registered keys."""
        return self._keys.copy()

    def get_selection(self, start_key: float, end_key: float) -> SelectionSummary:
        """Summarise the points with ``start_key <= key <= end_key``."""
        first = int(np.searchsorted(self._keys, start_key, side="left"))
        last = int(np.searchsorted(self._keys, end_key, side="right")) - 1
        if last < first:
            return SelectionSummary.empty()
        count = last - first + 1
        if count < 2:
            min_spacing = 0
        else:
            min_spacing = int(np.diff(self._keys[first : last + 1]).min())
        return SelectionSummary(
            point_count=count,
            min_spacing=min_spacing,
            first_index=first,
            last_index=last,
        )
