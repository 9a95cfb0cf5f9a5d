"""gridcalc - calculation and addressing core of a spreadsheet grid.

Usage::

    from gridcalc import Sheet, compute_window

    sheet = Sheet()
    sheet.set_cell("A1", "5")
    sheet.set_cell("B1", "=A1*2")
    print(sheet.get_cell("B1").computed_value)   # 10

    sheet.set_cell("A1", "7")
    print(sheet.display_value("B1"))             # "14"

    window = compute_window(scroll_top=0, scroll_left=0,
                            viewport_height_px=600, viewport_width_px=800)
    for address in window.cells():
        ...
"""

from gridcalc._cell import ERROR, CellAddress, CellRecord, FormulaError
from gridcalc._config import GridConfig
from gridcalc._selection import SelectionState
from gridcalc._sheet import Sheet
from gridcalc._utils import index_to_label, label_to_address
from gridcalc._viewport import ViewportWindow, cell_rect, compute_window, content_size
from gridcalc.calc import evaluate

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CellAddress",
    "CellRecord",
    "ERROR",
    "FormulaError",
    "GridConfig",
    "SelectionState",
    "Sheet",
    "ViewportWindow",
    "cell_rect",
    "compute_window",
    "content_size",
    "evaluate",
    "index_to_label",
    "label_to_address",
]
