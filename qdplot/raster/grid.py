from __future__ import annotations

import logging

import numpy as np

from qdplot.config import DEFAULT_HEIGHT, DEFAULT_MARGIN, DEFAULT_TICK_EVERY, DEFAULT_WIDTH, PlotConfig
from qdplot.errors import OutOfRangeError
from qdplot.scales import AxisRange, map_to_cell, padded_x_range, padded_y_range


LOGGER = logging.getLogger(__name__)

BLANK = " "


def new_cells(height: int, width: int, fill: str = BLANK) -> np.ndarray:
    return np.full((height, width), fill, dtype="<U1")


class Grid:
    """Fixed-size character matrix with a continuous interval on each axis.

    Row 0 is the top of the plot; increasing y moves toward row 0.
    """

    def __init__(
        self,
        height: int = DEFAULT_HEIGHT,
        width: int = DEFAULT_WIDTH,
        *,
        margin: float = DEFAULT_MARGIN,
        tick_every: int = DEFAULT_TICK_EVERY,
    ) -> None:
        if height <= 0 or width <= 0:
            raise ValueError("height and width must be > 0")
        self._height = height
        self._width = width
        self.margin = margin
        self.tick_every = tick_every
        self._cells = new_cells(height, width)
        self._x_range: AxisRange | None = None
        self._y_range: AxisRange | None = None

    @classmethod
    def from_config(cls, config: PlotConfig) -> "Grid":
        return cls(config.height, config.width, margin=config.margin, tick_every=config.tick_every)

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def cells(self) -> np.ndarray:
        return self._cells

    @property
    def x_range(self) -> AxisRange | None:
        return self._x_range

    @property
    def y_range(self) -> AxisRange | None:
        return self._y_range

    def set_x_range(self, xmin: float, xmax: float, *, margin: float | None = None) -> AxisRange:
        self._x_range = padded_x_range(xmin, xmax, self._width, margin=self.margin if margin is None else margin)
        LOGGER.debug("x range set to %s from data (%s, %s)", self._x_range.as_tuple(), xmin, xmax)
        return self._x_range

    def set_y_range(self, ymin: float, ymax: float, *, margin: float | None = None) -> AxisRange:
        self._y_range = padded_y_range(ymin, ymax, self._height, margin=self.margin if margin is None else margin)
        LOGGER.debug("y range set to %s from data (%s, %s)", self._y_range.as_tuple(), ymin, ymax)
        return self._y_range

    def force_x_range(self, xmin: float, xmax: float) -> AxisRange:
        """Use ``(xmin, xmax)`` as the x interval without any padding."""
        self._x_range = AxisRange(float(xmin), float(xmax))
        return self._x_range

    def force_y_range(self, ymin: float, ymax: float) -> AxisRange:
        """Use ``(ymin, ymax)`` as the y interval without any padding."""
        self._y_range = AxisRange(float(ymin), float(ymax))
        return self._y_range

    def clear(self) -> None:
        self._cells = new_cells(self._height, self._width)

    def get_cell(self, row: int, column: int) -> str:
        self._check_cell(row, column)
        return str(self._cells[row, column])

    def set_cell(self, row: int, column: int, value: str) -> None:
        if len(value) != 1:
            raise ValueError(f"cell value must be a single character, got {value!r}")
        self._check_cell(row, column)
        self._cells[row, column] = value

    def column_for(self, x: float) -> int:
        if self._x_range is None:
            raise OutOfRangeError("x range is not set", value=x)
        return map_to_cell(x, self._x_range.lower, self._x_range.upper, self._width)

    def offset_for(self, y: float) -> int:
        """Cell offset of ``y`` counted upward from the bottom of the y interval."""
        if self._y_range is None:
            raise OutOfRangeError("y range is not set", value=y)
        return map_to_cell(y, self._y_range.lower, self._y_range.upper, self._height)

    def draw_value(self, x: float, y: float, value: str) -> None:
        row = self._height - self.offset_for(y)
        self.set_cell(row, self.column_for(x), value)

    def sample_columns(self, *, include_end: bool) -> np.ndarray:
        """Evenly spaced x values across the x interval, one per column step."""
        if self._x_range is None:
            raise OutOfRangeError("x range is not set")
        lower, upper = self._x_range.as_tuple()
        if include_end:
            return np.linspace(lower, upper, self._width + 1)
        return np.linspace(lower, upper, self._width, endpoint=False)

    def axis_column(self) -> int:
        """Column of the y axis: where x == 0, or the nearest edge."""
        if self._x_range is None:
            raise OutOfRangeError("x range is not set", value=0.0)
        if self._x_range.contains(0.0):
            return self.column_for(0.0)
        return self._width - 1 if self._x_range.upper < 0.0 else 0

    def axis_row(self) -> int:
        """Row of the x axis: where y == 0, or the nearest edge."""
        if self._y_range is None:
            raise OutOfRangeError("y range is not set", value=0.0)
        if self._y_range.contains(0.0):
            return min(self._height - self.offset_for(0.0), self._height - 1)
        return 0 if self._y_range.upper < 0.0 else self._height - 1

    def draw_axes(self) -> None:
        column = self.axis_column()
        row = self.axis_row()
        LOGGER.debug("drawing axes at row %d, column %d", row, column)
        for c in range(self._width):
            self.set_cell(row, c, "+" if (c - column) % self.tick_every == 0 else "-")
        for r in range(self._height):
            self.set_cell(r, column, "+" if (r - row) % self.tick_every == 0 else "|")
        self.set_cell(row, column, "+")

    def lines(self) -> list[str]:
        return ["".join(row) for row in self._cells.tolist()]

    def to_text(self) -> str:
        return "\n".join(self.lines())

    def __str__(self) -> str:
        return self.to_text()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self._cells.shape == other._cells.shape
            and bool(np.array_equal(self._cells, other._cells))
            and self._x_range == other._x_range
            and self._y_range == other._y_range
        )

    __hash__ = None  # type: ignore[assignment]

    def _check_cell(self, row: int, column: int) -> None:
        if not (0 <= row < self._height and 0 <= column < self._width):
            raise OutOfRangeError.for_cell(row, column, self._height, self._width)
