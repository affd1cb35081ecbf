from qdplot.api import grid, plot
from qdplot.config import PlotConfig
from qdplot.dataset import SeriesStore
from qdplot.errors import CanvasError, DatasetError, InvalidDataError, NoDataError, OutOfRangeError
from qdplot.kinds import PlotKind
from qdplot.raster import Grid
from qdplot.scales import AxisRange, map_to_cell
from qdplot.stats import EmpiricalCDF, Histogram, Quantiles

__all__ = [
    "AxisRange",
    "CanvasError",
    "DatasetError",
    "EmpiricalCDF",
    "Grid",
    "Histogram",
    "InvalidDataError",
    "NoDataError",
    "OutOfRangeError",
    "PlotConfig",
    "PlotKind",
    "Quantiles",
    "SeriesStore",
    "grid",
    "map_to_cell",
    "plot",
]
