from .grid import BLANK, Grid, new_cells

__all__ = [
    "BLANK",
    "Grid",
    "new_cells",
]
