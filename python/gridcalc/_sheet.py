"""Sheet: sparse cell store that recalculates on every edit."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from gridcalc._cell import CellAddress, CellRecord
from gridcalc._config import GridConfig
from gridcalc.calc._engine import recalculate
from gridcalc.calc._evaluator import evaluate
from gridcalc.calc._results import RecalcResult

logger = logging.getLogger(__name__)

AddressLike = CellAddress | tuple[int, int] | str


def to_address(key: AddressLike) -> CellAddress:
    """Coerce a ``CellAddress``, ``(row, col)`` tuple or "B3" label."""
    if isinstance(key, CellAddress):
        return key
    if isinstance(key, str):
        return CellAddress.parse(key)
    if isinstance(key, tuple) and len(key) == 2:
        return CellAddress(*key)
    raise TypeError(f"Unsupported cell address: {key!r}")


class Sheet:
    """Sparse mapping of cell address -> :class:`CellRecord`.

    Usage::

        sheet = Sheet()
        sheet.set_cell("A1", "5")
        sheet.set_cell("B1", "=A1*2")
        sheet.get_cell("B1").computed_value  # 10

    Empty text removes a cell; there are no blank records.  Every write
    runs a full recalculation before returning.
    """

    __slots__ = ("_cells", "_config", "_last_recalc")

    def __init__(self, config: GridConfig | None = None) -> None:
        self._cells: dict[CellAddress, CellRecord] = {}
        self._config = config or GridConfig()
        self._last_recalc: RecalcResult | None = None

    @property
    def config(self) -> GridConfig:
        return self._config

    @property
    def last_recalc(self) -> RecalcResult | None:
        """Result of the recalculation triggered by the latest edit."""
        return self._last_recalc

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def get_cell(self, address: AddressLike) -> CellRecord | None:
        return self._cells.get(to_address(address))

    def __getitem__(self, address: AddressLike) -> CellRecord | None:
        """``sheet["B2"]`` -> record, or None for an empty cell."""
        return self.get_cell(address)

    def __contains__(self, address: object) -> bool:
        try:
            return to_address(address) in self._cells  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[CellAddress]:
        return iter(self._cells)

    def view(self) -> Mapping[CellAddress, CellRecord]:
        """Read-only live view of the store, as handed to the evaluator."""
        return MappingProxyType(self._cells)

    def display_value(self, address: AddressLike) -> str:
        """Text shown for a cell: computed value, raw text, or ""."""
        record = self.get_cell(address)
        return record.display_value if record is not None else ""

    # ------------------------------------------------------------------
    # Write access
    # ------------------------------------------------------------------

    def _write(self, address: CellAddress, raw_text: str) -> None:
        if raw_text == "":
            self._cells.pop(address, None)
            return
        record = CellRecord(raw_text=raw_text)
        if raw_text.startswith("="):
            record.formula_text = raw_text
            # Evaluated before the record is stored, so a self reference
            # still sees the previous content of this cell.
            record.computed_value = evaluate(raw_text, self.view())
        self._cells[address] = record

    def set_cell(self, address: AddressLike, raw_text: str) -> None:
        """Write *raw_text* to a cell, then recalculate the sheet."""
        addr = to_address(address)
        self._write(addr, raw_text)
        logger.debug("Set %s to %r", addr.label, raw_text)
        self.recalculate()

    def __setitem__(self, address: AddressLike, raw_text: str) -> None:
        """``sheet["A1"] = "5"`` - shorthand for :meth:`set_cell`."""
        self.set_cell(address, raw_text)

    def __delitem__(self, address: AddressLike) -> None:
        self.set_cell(address, "")

    def update(self, edits: Iterable[tuple[AddressLike, str]]) -> None:
        """Apply several writes, then recalculate once."""
        pending = [(to_address(address), raw_text) for address, raw_text in edits]
        for addr, raw_text in pending:
            self._write(addr, raw_text)
        logger.debug("Applied %d edits", len(pending))
        self.recalculate()

    def recalculate(self) -> RecalcResult:
        """Re-evaluate all formula cells until stable (bounded)."""
        self._last_recalc = recalculate(self._cells, self._config.max_passes)
        return self._last_recalc

    def __repr__(self) -> str:
        formulas = sum(1 for r in self._cells.values() if r.is_formula)
        return f"<Sheet cells={len(self._cells)} formulas={formulas}>"
