from __future__ import annotations

from qdplot import Grid, PlotKind, SeriesStore


def main() -> str:
    store = SeriesStore()
    store.add_series("1", [(0.0, 0.0), (0.0, 1.0), (-4.0, 4.0), (-3.3, -2.5)])
    store.add_series("2", [(0.0, 0.0), (1.0, 1.0), (2.0, 2.0), (3.0, 3.0)])
    store.add_series("3", [(0.0, 0.0), (-1.0, -1.0), (-2.0, -2.0), (-3.0, -3.0)])
    store.add_series("4", [(0.0, 0.0)])
    grid = Grid()
    store.draw(grid, PlotKind.POINT)
    return grid.to_text()


if __name__ == "__main__":
    print(main())
