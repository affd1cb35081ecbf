from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable

import numpy as np

from qdplot.config import DEFAULT_HISTOGRAM_BINS, DEFAULT_HISTOGRAM_INFLATION
from qdplot.raster.grid import Grid


LOGGER = logging.getLogger(__name__)


def bin_edges(xmin: float, xmax: float, bin_count: int) -> np.ndarray:
    if bin_count <= 0:
        raise ValueError("bin_count must be > 0")
    size = (xmax - xmin) / bin_count
    return xmin + np.arange(bin_count + 1, dtype=np.float64) * size


@dataclass(frozen=True)
class Histogram:
    """Equal-width bin counts; ``len(counts) == len(bins) - 1``.

    Bins are half-open ``[b_i, b_i+1)`` except the last, which also holds
    its upper boundary.
    """

    bins: tuple[float, ...] = ()
    counts: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if self.bins and len(self.counts) != len(self.bins) - 1:
            raise ValueError("histogram needs exactly one count per bin")

    @classmethod
    def from_sample(
        cls,
        values: Iterable[float] | np.ndarray,
        *,
        bin_count: int = DEFAULT_HISTOGRAM_BINS,
        inflation: float = DEFAULT_HISTOGRAM_INFLATION,
    ) -> "Histogram":
        arr = np.asarray(values, dtype=np.float64).ravel()
        arr = arr[~np.isnan(arr)]
        if arr.size == 0:
            return cls()
        xmin = float(np.min(arr))
        xmax = float(np.max(arr))
        if xmin == xmax:
            xmax = xmin + 1.0
        else:
            # Keeps the largest sample strictly inside the last bin.
            xmax += inflation * (xmax - xmin)
        edges = bin_edges(xmin, xmax, bin_count)
        idx = np.clip(np.searchsorted(edges, arr, side="right") - 1, 0, bin_count - 1)
        counts = np.bincount(idx, minlength=bin_count)
        LOGGER.debug("histogram over [%s, %s) with %d bins", xmin, xmax, bin_count)
        return cls(bins=tuple(edges.tolist()), counts=tuple(int(c) for c in counts))

    @property
    def is_empty(self) -> bool:
        return not self.bins

    @property
    def span(self) -> tuple[float, float]:
        if self.is_empty:
            raise ValueError("empty histogram has no span")
        return (self.bins[0], self.bins[-1])

    @property
    def max_count(self) -> int:
        return max(self.counts, default=0)

    @property
    def total(self) -> int:
        return sum(self.counts)

    def bin_index(self, x: float) -> int | None:
        """Index of the bin holding ``x``, or None for NaN and values outside the bins."""
        if self.is_empty:
            raise ValueError("empty histogram has no bins")
        if np.isnan(x) or x < self.bins[0] or x > self.bins[-1]:
            return None
        idx = int(np.searchsorted(self.bins, x, side="right")) - 1
        # x equal to the last boundary belongs to the last bin.
        return min(idx, len(self.counts) - 1)

    def value(self, x: float) -> float | None:
        if self.is_empty:
            return None
        idx = self.bin_index(x)
        if idx is None:
            return 0.0
        return float(self.counts[idx])

    def frequency(self, x: float) -> float | None:
        value = self.value(x)
        if value is None:
            return None
        return value / self.total

    def draw_into(self, grid: Grid, marker: str) -> None:
        if self.is_empty:
            raise ValueError("cannot draw an empty histogram")
        for x in grid.sample_columns(include_end=False).tolist():
            grid.draw_value(x, self.value(x), marker)
