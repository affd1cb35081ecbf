from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import numpy as np

from qdplot.raster.grid import Grid
from qdplot.stats.quantiles import finite_sorted


@dataclass(frozen=True)
class EmpiricalCDF:
    """Step function of (value, cumulative fraction) pairs with strictly increasing values."""

    steps: tuple[tuple[float, float], ...] = ()
    values: np.ndarray = field(init=False, repr=False, compare=False)
    fractions: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", np.asarray([v for v, _ in self.steps], dtype=np.float64))
        object.__setattr__(self, "fractions", np.asarray([f for _, f in self.steps], dtype=np.float64))

    @classmethod
    def from_sample(cls, values: Iterable[float] | np.ndarray) -> "EmpiricalCDF":
        x = finite_sorted(values)
        if x.size == 0:
            return cls()
        step = 1.0 / x.size
        fractions: dict[float, float] = {}
        running = 0.0
        for v in x.tolist():
            running += step
            # Repeated values overwrite, leaving the fraction through the last occurrence.
            fractions[v] = running
        return cls(steps=tuple(fractions.items()))

    def value(self, x: float) -> float:
        """Fraction of the largest stored value strictly below ``x``; 0 when there is none."""
        if not self.steps or np.isnan(x):
            return 0.0
        idx = int(np.searchsorted(self.values, x, side="left"))
        if idx == 0:
            return 0.0
        return float(self.fractions[idx - 1])

    def draw_into(self, grid: Grid, marker: str) -> None:
        for x in grid.sample_columns(include_end=True).tolist():
            grid.draw_value(x, self.value(x), marker)
