from __future__ import annotations

import unittest

import numpy as np
import pandas as pd

from qdplot.dataset import SeriesStore
from qdplot.errors import InvalidDataError, NoDataError, OutOfRangeError
from qdplot.kinds import PlotKind
from qdplot.raster.grid import Grid
from qdplot.scales import AxisRange
from qdplot.stats import Quantiles


SAMPLE_CSV = """
         , A , B , "C"
        -1  , 0 , 1 , 3
        -5  , 1 , -2, 4
""".strip()


def _axes0_store() -> SeriesStore:
    store = SeriesStore()
    store.add_series("1", [(0.0, 0.0), (0.0, 1.0), (-4.0, 4.0), (-3.3, -2.5)])
    store.add_series("2", [(0.0, 0.0), (1.0, 1.0), (2.0, 2.0), (3.0, 3.0)])
    store.add_series("3", [(0.0, 0.0), (-1.0, -1.0), (-2.0, -2.0), (-3.0, -3.0)])
    store.add_series("4", [(0.0, 0.0)])
    return store


class IngestionTests(unittest.TestCase):
    def test_csv_yields_one_series_per_header(self) -> None:
        store = SeriesStore.from_csv(SAMPLE_CSV)
        self.assertEqual(store.labels(), ["A", "B", "C"])
        for label in store.labels():
            self.assertEqual(len(store.points(label)), 2)
        np.testing.assert_array_equal(store.points("A"), [[-1.0, 0.0], [-5.0, 1.0]])
        np.testing.assert_array_equal(store.points("C"), [[-1.0, 3.0], [-5.0, 4.0]])

    def test_csv_with_non_numeric_field_is_invalid(self) -> None:
        with self.assertRaises(InvalidDataError) as ctx:
            SeriesStore.from_csv(",A\n1,oops\n")
        self.assertIn("oops", ctx.exception.diagnostic)
        self.assertIsInstance(ctx.exception.__cause__, ValueError)

    def test_empty_csv_has_no_data(self) -> None:
        with self.assertRaises(NoDataError):
            SeriesStore.from_csv("")

    def test_csv_accepts_nan_fields(self) -> None:
        store = SeriesStore.from_csv(",A,B\n0,nan,1\n1,2,NaN\n")
        self.assertTrue(np.isnan(store.points("A")[0, 1]))
        self.assertTrue(np.isnan(store.points("B")[1, 1]))

    def test_frame_index_is_x(self) -> None:
        frame = pd.DataFrame({"A": [0, 1], "B": [1.0, -2.0]}, index=[-1, -5])
        store = SeriesStore.from_frame(frame)
        self.assertEqual(store.labels(), ["A", "B"])
        np.testing.assert_array_equal(store.points("A"), [[-1.0, 0.0], [-5.0, 1.0]])

    def test_empty_frame_has_no_data(self) -> None:
        with self.assertRaises(NoDataError):
            SeriesStore.from_frame(pd.DataFrame())


class SeriesStoreTests(unittest.TestCase):
    def test_add_series_appends_to_existing_label(self) -> None:
        store = SeriesStore()
        store.add_series("a", [(0.0, 0.0)])
        store.add_series("a", np.asarray([[1.0, 1.0], [2.0, 2.0]]))
        self.assertEqual(len(store), 1)
        self.assertEqual(store.point_count(), 3)
        self.assertIn("a", store)

    def test_empty_label_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            SeriesStore().add_series("", [(0.0, 0.0)])

    def test_labels_are_in_lexicographic_order(self) -> None:
        store = SeriesStore()
        for label in ("zeta", "alpha", "mu"):
            store.add_series(label, [(0.0, 0.0)])
        self.assertEqual([label for label, _ in store.items()], ["alpha", "mu", "zeta"])

    def test_drawing_an_empty_store_raises_no_data(self) -> None:
        for kind in PlotKind:
            with self.assertRaises(NoDataError):
                SeriesStore().draw(Grid(), kind)
        store = SeriesStore()
        store.add_series("a", [])
        with self.assertRaises(NoDataError):
            store.draw(Grid(), PlotKind.POINT)

    def test_point_plot_needs_a_finite_point(self) -> None:
        store = SeriesStore()
        store.add_series("a", [(np.nan, 1.0), (2.0, np.nan)])
        with self.assertRaises(NoDataError):
            store.draw(Grid(), PlotKind.POINT)

    def test_summaries_per_series(self) -> None:
        store = SeriesStore()
        store.add_series("a", [(0.0, 1.0), (1.0, 2.0)])
        store.add_series("n", [(0.0, np.nan)])
        quantiles = store.quantiles()
        self.assertIsInstance(quantiles["a"], Quantiles)
        self.assertIsNone(quantiles["n"])
        self.assertEqual(store.cumulatives(), {"a": [(1.0, 0.5), (2.0, 1.0)], "n": []})


class DrawTests(unittest.TestCase):
    def test_point_plot_sets_ranges_axes_and_markers(self) -> None:
        store = _axes0_store()
        grid = Grid()
        store.draw(grid, PlotKind.POINT)
        text = grid.to_text()
        for marker in "123":
            self.assertIn(marker, text)
        # Every series has (0, 0); the last label in order wins the cell.
        self.assertEqual(grid.get_cell(grid.axis_row(), grid.axis_column()), "4")
        self.assertAlmostEqual(grid.x_range.lower, -4.0 - 7.0 / 80)
        self.assertAlmostEqual(grid.y_range.upper, 4.0)

    def test_point_plot_skips_nan_points(self) -> None:
        store = SeriesStore()
        store.add_series("a", [(0.0, 0.0), (1.0, 1.0), (np.nan, 5.0), (3.0, np.nan)])
        grid = Grid()
        store.draw(grid)
        self.assertEqual(grid.to_text().count("a"), 2)

    def test_colliding_points_resolve_by_label_order(self) -> None:
        points = [(1.0, 1.0), (2.0, 2.0)]
        for order in (("b", "a"), ("a", "b")):
            store = SeriesStore()
            for label in order:
                store.add_series(label, points)
            grid = Grid()
            store.draw(grid, PlotKind.POINT)
            self.assertEqual(grid.to_text().count("b"), 2)
            self.assertNotIn("a", grid.to_text())

    def test_boxplot_requires_preset_x_range(self) -> None:
        store = SeriesStore.from_csv(SAMPLE_CSV)
        with self.assertRaises(OutOfRangeError):
            store.draw(Grid(), PlotKind.BOXPLOT)

    def test_boxplots_stack_every_four_rows(self) -> None:
        store = SeriesStore()
        store.add_series("A", [(float(i), float(i)) for i in range(1, 6)])
        store.add_series("B", [(0.0, 2.0), (1.0, 4.0)])
        grid = Grid()
        grid.set_x_range(0.0, 10.0)
        store.draw(grid, PlotKind.BOXPLOT)
        lines = grid.lines()
        self.assertIn("|", lines[1])
        self.assertIn("|", lines[5])
        self.assertEqual(lines[3].strip(), "")
        self.assertTrue(all(line.strip() == "" for line in lines[7:]))

    def test_cdf_forces_unit_y_range(self) -> None:
        store = SeriesStore.from_csv(SAMPLE_CSV)
        grid = Grid()
        grid.set_x_range(-3.0, 5.0)
        store.draw(grid, PlotKind.CDF)
        self.assertEqual(grid.y_range, AxisRange(-0.1, 1.1))
        # A is hidden: B and C overwrite every cell it shares with them.
        for marker in "BC":
            self.assertIn(marker, grid.to_text())

    def test_cdf_without_x_range_raises(self) -> None:
        with self.assertRaises(OutOfRangeError):
            SeriesStore.from_csv(SAMPLE_CSV).draw(Grid(), PlotKind.CDF)

    def test_histogram_ranges_cover_all_series(self) -> None:
        store = SeriesStore()
        store.add_series("A", [(float(i), float(i)) for i in range(4)])
        store.add_series("B", [(0.0, 10.0), (1.0, 10.0), (2.0, 20.0)])
        grid = Grid()
        store.draw(grid, PlotKind.HISTOGRAM)
        self.assertEqual(grid.x_range.lower, 0.0)
        self.assertAlmostEqual(grid.x_range.upper, 20.01)
        self.assertAlmostEqual(grid.y_range.lower, -0.1)
        self.assertEqual(grid.y_range.upper, 2.0)
        self.assertIn("A", grid.to_text())
        self.assertIn("B", grid.to_text())

    def test_histogram_of_only_nan_values_has_no_data(self) -> None:
        store = SeriesStore()
        store.add_series("a", [(0.0, np.nan)])
        with self.assertRaises(NoDataError):
            store.draw(Grid(), PlotKind.HISTOGRAM)

    def test_clear_then_redraw_matches_a_fresh_grid(self) -> None:
        store = _axes0_store()
        for kind in (PlotKind.POINT, PlotKind.HISTOGRAM):
            reused = Grid()
            store.draw(reused, PlotKind.POINT)
            reused.clear()
            store.draw(reused, kind)

            fresh = Grid()
            store.draw(fresh, kind)
            self.assertEqual(reused, fresh)
            self.assertEqual(reused.to_text(), fresh.to_text())

    def test_clear_then_redraw_with_preset_x_range_matches_a_fresh_grid(self) -> None:
        store = _axes0_store()
        for kind in (PlotKind.BOXPLOT, PlotKind.CDF):
            with self.subTest(kind=kind):
                reused = Grid()
                reused.set_x_range(-5.0, 5.0)
                store.draw(reused, kind)
                reused.clear()
                store.draw(reused, kind)

                fresh = Grid()
                fresh.set_x_range(-5.0, 5.0)
                store.draw(fresh, kind)
                self.assertEqual(reused, fresh)
                self.assertEqual(reused.to_text(), fresh.to_text())
                self.assertNotEqual(fresh.to_text().strip(), "")


class PlotKindTests(unittest.TestCase):
    def test_parse_and_render_names(self) -> None:
        self.assertEqual(PlotKind.parse(" CDF "), PlotKind.CDF)
        self.assertEqual(str(PlotKind.HISTOGRAM), "histogram")
        self.assertEqual(PlotKind.default(), PlotKind.POINT)
        with self.assertRaises(ValueError):
            PlotKind.parse("pie")

    def test_every_kind_has_a_renderer(self) -> None:
        for kind in PlotKind:
            self.assertTrue(callable(kind.renderer.render))


if __name__ == "__main__":
    unittest.main()
