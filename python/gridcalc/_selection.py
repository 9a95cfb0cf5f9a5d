"""Selection and in-cell editing state for a sheet."""

from __future__ import annotations

import logging

from gridcalc._cell import CellAddress
from gridcalc._sheet import AddressLike, Sheet, to_address

logger = logging.getLogger(__name__)


class SelectionState:
    """Idle(selected) -> Editing(selected, buffer) -> Idle(selected).

    Commit writes the buffer through :meth:`Sheet.set_cell`; cancel drops
    it without touching the sheet.
    """

    __slots__ = ("_sheet", "selected", "editing", "edit_buffer")

    def __init__(self, sheet: Sheet, selected: AddressLike = (0, 0)) -> None:
        self._sheet = sheet
        self.selected: CellAddress = to_address(selected)
        self.editing: CellAddress | None = None
        self.edit_buffer: str = ""

    @property
    def is_editing(self) -> bool:
        return self.editing is not None

    @property
    def selected_label(self) -> str:
        """Name-box text for the selection, e.g. "C5"."""
        return self.selected.label

    @property
    def formula_bar_text(self) -> str:
        record = self._sheet.get_cell(self.selected)
        return record.raw_text if record is not None else ""

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def click(self, address: AddressLike) -> None:
        """Select a cell; any edit in progress is abandoned."""
        self.selected = to_address(address)
        self.editing = None
        self.edit_buffer = ""

    def begin_edit(self) -> None:
        """Start editing the selected cell, seeded with its raw text."""
        self.editing = self.selected
        self.edit_buffer = self.formula_bar_text

    def double_click(self, address: AddressLike) -> None:
        self.click(address)
        self.begin_edit()

    def type_text(self, text: str) -> None:
        """Replace the edit buffer; ignored while idle."""
        if self.editing is not None:
            self.edit_buffer = text

    def commit(self) -> None:
        """Write the buffer to the cell being edited and return to idle."""
        if self.editing is None:
            return
        target, text = self.editing, self.edit_buffer
        self.editing = None
        self.edit_buffer = ""
        logger.debug("Committing edit of %s", target.label)
        self._sheet.set_cell(target, text)

    def cancel(self) -> None:
        self.editing = None
        self.edit_buffer = ""

    def set_selected_text(self, text: str) -> None:
        """Formula-bar input: write straight to the selected cell."""
        self._sheet.set_cell(self.selected, text)
