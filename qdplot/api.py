from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np

from qdplot.config import PlotConfig
from qdplot.dataset import SeriesStore
from qdplot.errors import NoDataError
from qdplot.kinds import PlotKind
from qdplot.raster.grid import Grid
from qdplot.scales import value_extent


# Kinds whose renderers leave the x range to the caller.
_NEEDS_X_RANGE = frozenset({PlotKind.BOXPLOT, PlotKind.CDF})


def grid(height: int | None = None, width: int | None = None, *, config: PlotConfig | None = None) -> Grid:
    config = config or PlotConfig()
    return Grid(
        height if height is not None else config.height,
        width if width is not None else config.width,
        margin=config.margin,
        tick_every=config.tick_every,
    )


def set_x_range_from_values(store: SeriesStore, target: Grid, *, margin: float | None = None) -> None:
    """Set the x range of ``target`` from the extent of every finite y value in ``store``."""
    if store.point_count() == 0:
        raise NoDataError("no points in any series")
    ys = np.concatenate([points[:, 1] for _, points in store.items()])
    lo, hi = value_extent(ys)
    target.set_x_range(lo, hi, margin=margin)


def plot(
    data: SeriesStore | Mapping[str, Any],
    kind: PlotKind | str = PlotKind.POINT,
    *,
    config: PlotConfig | None = None,
    target: Grid | None = None,
) -> Grid:
    """Draw ``data`` into ``target`` (or a new grid) and return the grid.

    Box and CDF plots get an x range spanning the y values unless ``target``
    already has one.
    """
    config = config or PlotConfig()
    if isinstance(kind, str):
        kind = PlotKind.parse(kind)
    if isinstance(data, SeriesStore):
        store = data
    else:
        store = SeriesStore()
        for label, points in data.items():
            store.add_series(label, points)

    out = target if target is not None else grid(config=config)
    if kind in _NEEDS_X_RANGE and out.x_range is None:
        set_x_range_from_values(store, out, margin=config.margin)
    store.draw(out, kind, config=config)
    return out
