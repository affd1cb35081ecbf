from __future__ import annotations


class CanvasError(Exception):
    """Raised when drawing into a grid fails."""


class DatasetError(Exception):
    """Raised when series input cannot be read."""


class OutOfRangeError(CanvasError):
    """A coordinate lookup fell outside an axis interval, or a cell write outside the grid."""

    def __init__(
        self,
        message: str,
        *,
        value: float | None = None,
        bounds: tuple[float, float] | None = None,
        cell: tuple[int, int] | None = None,
        size: tuple[int, int] | None = None,
    ) -> None:
        super().__init__(f"out of range: {message}")
        self.value = value
        self.bounds = bounds
        self.cell = cell
        self.size = size

    @classmethod
    def for_value(cls, value: float, lower: float, upper: float) -> "OutOfRangeError":
        return cls(f"{lower} < {value} < {upper}", value=value, bounds=(lower, upper))

    @classmethod
    def for_cell(cls, row: int, column: int, height: int, width: int) -> "OutOfRangeError":
        return cls(
            f"try to write in ({row}, {column}) (grid size: ({height}, {width}))",
            cell=(row, column),
            size=(height, width),
        )


class NoDataError(CanvasError, DatasetError):
    """Nothing to plot, or nothing to read."""

    def __init__(self, message: str = "no data") -> None:
        super().__init__(message)


class InvalidDataError(DatasetError):
    def __init__(self, diagnostic: str) -> None:
        super().__init__(f"invalid data: {diagnostic}")
        self.diagnostic = diagnostic
