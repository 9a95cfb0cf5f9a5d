"""Viewport windowing: which rows and columns a scrolled view must render."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from gridcalc._cell import CellAddress
from gridcalc._config import GridConfig


@dataclass(frozen=True)
class ViewportWindow:
    """Half-open row/column index ranges, always inside the grid."""

    row_start: int
    row_end: int
    col_start: int
    col_end: int

    @property
    def rows(self) -> range:
        return range(self.row_start, self.row_end)

    @property
    def cols(self) -> range:
        return range(self.col_start, self.col_end)

    def cells(self) -> Iterator[CellAddress]:
        """Addresses inside the window, row by row."""
        for row in self.rows:
            for col in self.cols:
                yield CellAddress(row, col)

    def __len__(self) -> int:
        return len(self.rows) * len(self.cols)

    def __contains__(self, address: object) -> bool:
        if not isinstance(address, CellAddress):
            return False
        return address.row in self.rows and address.col in self.cols


def _axis(offset: float, extent: float, cell_size: int, overscan: int, total: int) -> tuple[int, int]:
    start = int(max(offset, 0) // cell_size)
    visible = int(max(extent, 0) // cell_size)
    start = min(start, total)
    end = min(start + visible + overscan, total)
    return start, end


def compute_window(
    scroll_top: float,
    scroll_left: float,
    viewport_height_px: float,
    viewport_width_px: float,
    config: GridConfig | None = None,
) -> ViewportWindow:
    """Map scroll offsets and visible size to the window to materialize.

    ``row_start = floor(scroll_top / cell_height)`` and ``row_end`` adds the
    fully visible rows plus the overscan, clamped to ``total_rows``;
    columns work the same way.  Negative inputs count as zero.
    """
    config = config or GridConfig()
    row_start, row_end = _axis(
        scroll_top, viewport_height_px, config.cell_height,
        config.overscan_rows, config.total_rows,
    )
    col_start, col_end = _axis(
        scroll_left, viewport_width_px, config.cell_width,
        config.overscan_cols, config.total_cols,
    )
    return ViewportWindow(row_start, row_end, col_start, col_end)


def cell_rect(address: CellAddress, config: GridConfig | None = None) -> tuple[int, int, int, int]:
    """Pixel box ``(left, top, width, height)`` of a cell in content space."""
    config = config or GridConfig()
    return (
        address.col * config.cell_width,
        address.row * config.cell_height,
        config.cell_width,
        config.cell_height,
    )


def content_size(config: GridConfig | None = None) -> tuple[int, int]:
    """Full scrollable ``(width, height)`` of the grid body in pixels."""
    config = config or GridConfig()
    return (config.total_cols * config.cell_width, config.total_rows * config.cell_height)
