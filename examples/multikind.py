from __future__ import annotations

from pathlib import Path

from qdplot import Grid, PlotKind, SeriesStore


SAMPLE = Path(__file__).resolve().parent / "sample.csv"


def main() -> list[str]:
    store = SeriesStore.from_csv(SAMPLE.read_text(encoding="utf-8"))
    grid = Grid()
    frames: list[str] = []

    # The point plot leaves an x range behind; the box and CDF plots reuse it.
    store.draw(grid, PlotKind.POINT)
    frames.append(grid.to_text())
    lo, hi = grid.y_range.as_tuple()
    grid.set_x_range(lo, hi)
    for kind in (PlotKind.BOXPLOT, PlotKind.CDF, PlotKind.HISTOGRAM):
        grid.clear()
        store.draw(grid, kind)
        frames.append(grid.to_text())
    return frames


if __name__ == "__main__":
    for frame in main():
        print(frame)
        print()
