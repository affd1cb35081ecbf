from .normalize import normalize_points, normalize_xy
from .table import parse_csv, read_frame

__all__ = [
    "normalize_points",
    "normalize_xy",
    "parse_csv",
    "read_frame",
]
