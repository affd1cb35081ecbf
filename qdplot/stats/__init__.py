from .ecdf import EmpiricalCDF
from .histogram import Histogram
from .quantiles import Quantiles

__all__ = [
    "EmpiricalCDF",
    "Histogram",
    "Quantiles",
]
