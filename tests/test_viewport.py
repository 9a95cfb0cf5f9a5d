"""Tests for gridcalc viewport windowing."""

from __future__ import annotations

import pytest

from gridcalc import CellAddress, GridConfig, ViewportWindow, cell_rect, compute_window, content_size


class TestComputeWindow:
    def test_origin(self) -> None:
        # 20 visible rows of 30px, 8 visible columns of 100px
        window = compute_window(0, 0, 600, 800)
        assert window == ViewportWindow(row_start=0, row_end=22, col_start=0, col_end=10)

    def test_row_count_is_visible_plus_overscan(self) -> None:
        config = GridConfig(overscan_rows=3)
        window = compute_window(0, 0, 10 * config.cell_height, 500, config)
        assert window.row_start == 0
        assert window.row_end - window.row_start == 10 + 3

    def test_partial_cells_are_floored(self) -> None:
        window = compute_window(45, 150, 100, 250)
        assert (window.row_start, window.row_end) == (1, 1 + 3 + 2)
        assert (window.col_start, window.col_end) == (1, 1 + 2 + 2)

    def test_last_row(self) -> None:
        config = GridConfig()
        window = compute_window((config.total_rows - 1) * config.cell_height, 0, 600, 800)
        assert window.row_start == config.total_rows - 1
        assert window.row_end == config.total_rows

    def test_last_column(self) -> None:
        config = GridConfig()
        window = compute_window(0, (config.total_cols - 1) * config.cell_width, 600, 800)
        assert window.col_end == config.total_cols

    def test_far_beyond_content(self) -> None:
        window = compute_window(10**9, 10**9, 600, 800)
        assert window.row_start == window.row_end == 10000
        assert window.col_start == window.col_end == 10000
        assert len(window) == 0

    def test_negative_inputs_clamped(self) -> None:
        window = compute_window(-500, -20, -1, 800)
        assert window.row_start == 0
        assert window.row_end == 2
        assert window.col_start == 0

    def test_small_grid_clamped(self) -> None:
        config = GridConfig(total_rows=5, total_cols=3)
        window = compute_window(0, 0, 600, 800, config)
        assert window == ViewportWindow(0, 5, 0, 3)

    @pytest.mark.parametrize("scroll_top", [0, 1, 29, 30, 12345, 299_970, 299_999, 300_000, 10**7])
    def test_bounds_invariant(self, scroll_top: int) -> None:
        window = compute_window(scroll_top, scroll_top, 731, 1287)
        assert 0 <= window.row_start <= window.row_end <= 10000
        assert 0 <= window.col_start <= window.col_end <= 10000


class TestViewportWindow:
    def test_ranges_and_cells(self) -> None:
        window = ViewportWindow(row_start=2, row_end=4, col_start=0, col_end=2)
        assert window.rows == range(2, 4)
        assert window.cols == range(0, 2)
        assert list(window.cells()) == [
            CellAddress(2, 0), CellAddress(2, 1), CellAddress(3, 0), CellAddress(3, 1),
        ]
        assert len(window) == 4

    def test_contains(self) -> None:
        window = ViewportWindow(2, 4, 0, 2)
        assert CellAddress(3, 1) in window
        assert CellAddress(4, 1) not in window
        assert "A1" not in window


class TestGeometry:
    def test_cell_rect(self) -> None:
        assert cell_rect(CellAddress.parse("C5")) == (200, 120, 100, 30)

    def test_cell_rect_custom_config(self) -> None:
        config = GridConfig(cell_width=64, cell_height=20)
        assert cell_rect(CellAddress(1, 1), config) == (64, 20, 64, 20)

    def test_content_size(self) -> None:
        assert content_size() == (1_000_000, 300_000)
