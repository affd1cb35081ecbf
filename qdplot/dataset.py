from __future__ import annotations

import logging
from typing import Any, Iterator

import numpy as np
import pandas as pd

from qdplot.adapters.normalize import normalize_points
from qdplot.adapters.table import parse_csv, read_frame
from qdplot.config import PlotConfig
from qdplot.errors import NoDataError
from qdplot.kinds import LabeledPoints, PlotKind
from qdplot.raster.grid import Grid
from qdplot.stats import EmpiricalCDF, Quantiles


LOGGER = logging.getLogger(__name__)


class SeriesStore:
    """Labeled point series, drawn in lexicographic label order."""

    def __init__(self) -> None:
        self._series: dict[str, np.ndarray] = {}

    @classmethod
    def from_csv(cls, content: str) -> "SeriesStore":
        store = cls()
        for label, points in parse_csv(content).items():
            store.add_series(label, points)
        return store

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> "SeriesStore":
        store = cls()
        for label, points in read_frame(frame).items():
            store.add_series(label, points)
        return store

    def add_series(self, label: str, points: Any) -> None:
        """Append ``points`` to the series named ``label``, creating it if needed."""
        if not label:
            raise ValueError("series label must not be empty")
        arr = normalize_points(points)
        existing = self._series.get(label)
        self._series[label] = arr if existing is None else np.concatenate([existing, arr])

    def labels(self) -> list[str]:
        return sorted(self._series)

    def points(self, label: str) -> np.ndarray:
        return self._series[label]

    def items(self) -> Iterator[LabeledPoints]:
        for label in self.labels():
            yield label, self._series[label]

    def point_count(self) -> int:
        return sum(len(points) for points in self._series.values())

    def __len__(self) -> int:
        return len(self._series)

    def __contains__(self, label: object) -> bool:
        return label in self._series

    def draw(self, grid: Grid, kind: PlotKind = PlotKind.POINT, *, config: PlotConfig | None = None) -> None:
        if self.point_count() == 0:
            raise NoDataError("no points in any series")
        if config is None:
            config = PlotConfig(height=grid.height, width=grid.width, margin=grid.margin, tick_every=grid.tick_every)
        LOGGER.debug("drawing %d series as %s", len(self), kind)
        kind.renderer.render(list(self.items()), grid, config)

    def quantiles(self) -> dict[str, Quantiles | None]:
        """Per-series summary of y values; None for a series with no finite values."""
        out: dict[str, Quantiles | None] = {}
        for label, points in self.items():
            y = points[:, 1]
            out[label] = Quantiles.from_sample(y) if np.any(~np.isnan(y)) else None
        return out

    def cumulatives(self) -> dict[str, list[tuple[float, float]]]:
        """Per-series points where the empirical CDF of y changes."""
        return {label: list(EmpiricalCDF.from_sample(points[:, 1]).steps) for label, points in self.items()}
