from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np

from qdplot.errors import NoDataError, OutOfRangeError


@dataclass(frozen=True)
class AxisRange:
    lower: float
    upper: float

    def __post_init__(self) -> None:
        if not self.lower < self.upper:
            raise ValueError(f"axis range requires min < max, got ({self.lower}, {self.upper})")

    @property
    def span(self) -> float:
        return self.upper - self.lower

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def as_tuple(self) -> tuple[float, float]:
        return (self.lower, self.upper)


@dataclass(frozen=True)
class DataLimits:
    xmin: float
    xmax: float
    ymin: float
    ymax: float


def map_to_cell(value: float, lower: float, upper: float, cells: int) -> int:
    """Map ``value`` in ``[lower, upper]`` to a cell index in ``[0, cells - 1]``.

    Rounds half away from zero. NaN and values outside the interval raise
    ``OutOfRangeError``.
    """
    if not upper > lower:
        raise ValueError(f"interval requires max > min, got ({lower}, {upper})")
    if not lower <= value <= upper:
        raise OutOfRangeError.for_value(value, lower, upper)
    scaled = (cells - 1) / (upper - lower) * (value - lower)
    # scaled >= 0 here; compare the fractional part so scaled + 0.5 cannot round up.
    i = math.floor(scaled)
    return int(i + (scaled - i >= 0.5))


def padded_x_range(xmin: float, xmax: float, cells: int, *, margin: float = 0.0) -> AxisRange:
    """Pad by ``margin`` of the span, then by one cell width on each side."""
    if not xmin < xmax:
        raise ValueError(f"x range requires min < max, got ({xmin}, {xmax})")
    delta = xmax - xmin
    lower = xmin - margin * delta
    upper = xmax + margin * delta
    cell = (upper - lower) / cells
    return AxisRange(lower - cell, upper + cell)


def padded_y_range(ymin: float, ymax: float, cells: int, *, margin: float = 0.0) -> AxisRange:
    """Pad by ``margin`` of the span, then by two cell heights below only.

    The extra slack below keeps room for an x-axis label row; the top keeps
    no cell padding because row 0 is never reached by ``Grid.draw_value``.
    """
    if not ymin < ymax:
        raise ValueError(f"y range requires min < max, got ({ymin}, {ymax})")
    delta = ymax - ymin
    lower = ymin - margin * delta
    upper = ymax + margin * delta
    cell = (upper - lower) / cells
    return AxisRange(lower - 2.0 * cell, upper)


def compute_limits(x: np.ndarray, y: np.ndarray) -> DataLimits:
    """Bounding box of the points where both coordinates are not NaN."""
    mask = ~(np.isnan(x) | np.isnan(y))
    if not np.any(mask):
        raise NoDataError("no finite points to compute ranges from")
    vx = x[mask]
    vy = y[mask]
    xmin, xmax = float(np.min(vx)), float(np.max(vx))
    ymin, ymax = float(np.min(vy)), float(np.max(vy))

    if xmin == xmax:
        xmin -= 1.0
        xmax += 1.0
    if ymin == ymax:
        ymin -= 1.0
        ymax += 1.0

    return DataLimits(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)


def value_extent(values: np.ndarray) -> tuple[float, float]:
    """Min and max of the non-NaN values, widened by 1.0 when they coincide."""
    finite = values[~np.isnan(values)]
    if finite.size == 0:
        raise NoDataError("no finite values")
    lo, hi = float(np.min(finite)), float(np.max(finite))
    if lo == hi:
        lo -= 1.0
        hi += 1.0
    return lo, hi
