"""Summary of the raw points a data registry holds in a key range."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SelectionSummary:
    """Read-only snapshot of a registry selection.

    ``point_count`` is the number of raw points in range and ``min_spacing``
    the smallest key delta between consecutive points (0 with fewer than two
    points). Indexes are ``None`` for an empty selection.
    """

    point_count: int = 0
    min_spacing: float = 0
    first_index: Optional[int] = None
    last_index: Optional[int] = None

    @classmethod
    def empty(cls) -> "SelectionSummary":
        """Selection holding no points."""
        return cls()
