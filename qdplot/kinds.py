from __future__ import annotations

from enum import Enum
import logging
from typing import Protocol, Sequence

import numpy as np

from qdplot.config import PlotConfig
from qdplot.errors import NoDataError
from qdplot.raster.grid import Grid
from qdplot.scales import compute_limits
from qdplot.stats import EmpiricalCDF, Histogram, Quantiles


LOGGER = logging.getLogger(__name__)

# Fixed so that a CDF of 0 lands one row above the bottom edge and 1 below the top.
CDF_Y_RANGE = (-0.1, 1.1)

LabeledPoints = tuple[str, np.ndarray]


def marker_for(label: str) -> str:
    if not label:
        raise ValueError("series label must not be empty")
    return label[0]


def _finite_y(points: np.ndarray) -> np.ndarray:
    y = points[:, 1]
    return y[~np.isnan(y)]


class Renderer(Protocol):
    def render(self, series: Sequence[LabeledPoints], grid: Grid, config: PlotConfig) -> None:
        ...


class PointRenderer:
    """Scatter every finite point with the first character of its label."""

    def render(self, series: Sequence[LabeledPoints], grid: Grid, config: PlotConfig) -> None:
        stacked = np.concatenate([points for _, points in series]) if series else np.empty((0, 2))
        limits = compute_limits(stacked[:, 0], stacked[:, 1])
        grid.set_x_range(limits.xmin, limits.xmax, margin=config.margin)
        grid.set_y_range(limits.ymin, limits.ymax, margin=config.margin)
        grid.draw_axes()
        for label, points in series:
            marker = marker_for(label)
            for x, y in points.tolist():
                if np.isnan(x) or np.isnan(y):
                    continue
                grid.draw_value(x, y, marker)
            LOGGER.debug("drew %d points for series %r", len(points), label)


class BoxplotRenderer:
    """Stack one horizontal box per series; the x range must already be set."""

    def render(self, series: Sequence[LabeledPoints], grid: Grid, config: PlotConfig) -> None:
        row_offset = 0
        for label, points in series:
            y = _finite_y(points)
            if y.size == 0:
                LOGGER.warning("series %r has no finite values; skipped", label)
                continue
            Quantiles.from_sample(y).draw_into(grid, row_offset)
            row_offset += config.box_row_stride


class CDFRenderer:
    def render(self, series: Sequence[LabeledPoints], grid: Grid, config: PlotConfig) -> None:
        grid.force_y_range(*CDF_Y_RANGE)
        grid.draw_axes()
        for label, points in series:
            EmpiricalCDF.from_sample(points[:, 1]).draw_into(grid, marker_for(label))


class HistogramRenderer:
    def render(self, series: Sequence[LabeledPoints], grid: Grid, config: PlotConfig) -> None:
        hists: list[tuple[str, Histogram]] = []
        for label, points in series:
            hist = Histogram.from_sample(
                points[:, 1], bin_count=config.histogram_bins, inflation=config.histogram_inflation
            )
            if hist.is_empty:
                LOGGER.warning("series %r has no finite values; skipped", label)
                continue
            hists.append((label, hist))
        if not hists:
            raise NoDataError("no finite values to bin")

        xmin = min(h.span[0] for _, h in hists)
        xmax = max(h.span[1] for _, h in hists)
        ymax = float(max(h.max_count for _, h in hists))
        # Negative lower bound keeps zero-count columns above the bottom edge.
        grid.force_x_range(xmin, xmax)
        grid.force_y_range(-ymax / 20.0, ymax)
        LOGGER.debug("histogram ranges x=(%s, %s) y=(%s, %s)", xmin, xmax, -ymax / 20.0, ymax)
        for label, hist in hists:
            hist.draw_into(grid, marker_for(label))


class PlotKind(Enum):
    POINT = "point"
    BOXPLOT = "boxplot"
    CDF = "cdf"
    HISTOGRAM = "histogram"

    @classmethod
    def default(cls) -> "PlotKind":
        return cls.POINT

    @classmethod
    def parse(cls, name: str) -> "PlotKind":
        try:
            return cls(name.strip().lower())
        except ValueError as exc:
            choices = ", ".join(k.value for k in cls)
            raise ValueError(f"unknown plot kind {name!r} (expected one of: {choices})") from exc

    @property
    def renderer(self) -> Renderer:
        return _RENDERERS[self]

    def __str__(self) -> str:
        return self.value


_RENDERERS: dict[PlotKind, Renderer] = {
    PlotKind.POINT: PointRenderer(),
    PlotKind.BOXPLOT: BoxplotRenderer(),
    PlotKind.CDF: CDFRenderer(),
    PlotKind.HISTOGRAM: HistogramRenderer(),
}
