from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable

import numpy as np

from qdplot.raster.grid import Grid


FENCE_FACTOR = 1.5
BOX_ROWS = 3


def finite_sorted(values: Iterable[float] | np.ndarray) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64).ravel()
    return np.sort(arr[~np.isnan(arr)])


def fractional_index(quantile: float, length: int) -> float:
    return quantile * length


def value_at(sorted_values: np.ndarray, index: float) -> float:
    """Linear interpolation between the elements around a fractional index.

    The nearer element gets the larger weight. Indices at or past the last
    element return the last element.
    """
    n = sorted_values.size
    if n == 0:
        raise ValueError("cannot interpolate into an empty sample")
    if index >= n - 1:
        return float(sorted_values[-1])
    i = int(math.floor(index))
    f = index - i
    return float((1.0 - f) * sorted_values[i] + f * sorted_values[i + 1])


@dataclass(frozen=True)
class Quantiles:
    """Five-number summary with Tukey outliers.

    ``min`` and ``max`` are the whisker ends: the most extreme sample values
    strictly inside the fences ``q2 -/+ 1.5 * (q3 - q1)``.
    """

    min: float
    q1: float
    q2: float
    q3: float
    max: float
    outliers: tuple[float, ...] = ()

    @classmethod
    def from_sample(cls, values: Iterable[float] | np.ndarray) -> "Quantiles":
        x = finite_sorted(values)
        if x.size == 0:
            raise ValueError("quantiles need at least one non-NaN value")
        q1, q2, q3 = (value_at(x, fractional_index(q, x.size)) for q in (0.25, 0.5, 0.75))
        iqr = q3 - q1
        lower = q2 - FENCE_FACTOR * iqr
        upper = q2 + FENCE_FACTOR * iqr

        above = x[x > lower]
        below = x[x < upper]
        return cls(
            min=float(above[0]) if above.size else q1,
            q1=q1,
            q2=q2,
            q3=q3,
            max=float(below[-1]) if below.size else q3,
            outliers=tuple(float(v) for v in x[(x < lower) | (x > upper)]),
        )

    @property
    def summary(self) -> tuple[float, float, float, float, float]:
        return (self.min, self.q1, self.q2, self.q3, self.max)

    def draw_into(self, grid: Grid, row_offset: int) -> None:
        """Draw a horizontal box on rows ``row_offset`` to ``row_offset + 2``.

        Uses the grid's current x range; it is never set here.
        """
        if row_offset < 0 or grid.height < row_offset + BOX_ROWS:
            raise ValueError(f"boxplot needs {BOX_ROWS} rows from row {row_offset}, grid has {grid.height}")
        lo, q1, q2, q3, hi = (grid.column_for(v) for v in self.summary)
        outliers = [grid.column_for(v) for v in self.outliers]

        middle = row_offset + 1
        for c in range(lo + 1, q1):
            grid.set_cell(middle, c, "-")
        for c in range(q3 + 1, hi):
            grid.set_cell(middle, c, "-")
        for c in outliers:
            grid.set_cell(middle, c, "+")
        for c in range(q1, q3):
            grid.set_cell(row_offset, c, "-")
            grid.set_cell(row_offset + 2, c, "-")
        for c in (lo, q1, q2, q3, hi):
            grid.set_cell(middle, c, "|")
