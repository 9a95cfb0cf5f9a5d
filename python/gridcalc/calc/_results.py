"""Recalculation result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass

from gridcalc._cell import CellAddress, CellValue


@dataclass(frozen=True)
class CellDelta:
    """A single cell's value change from recalculation."""

    address: CellAddress
    old_value: CellValue | None
    new_value: CellValue | None
    formula: str | None = None  # the formula that produced new_value


@dataclass(frozen=True)
class RecalcResult:
    """Outcome of one recalculation run over the whole sheet."""

    passes: int  # convergence passes executed, including the quiet one
    converged: bool  # False when the pass bound was hit
    deltas: tuple[CellDelta, ...] = ()  # net change per formula cell
    total_formula_cells: int = 0
    cyclic_cells: tuple[CellAddress, ...] = ()

    @property
    def changed_cells(self) -> int:
        return len(self.deltas)

    @property
    def propagation_ratio(self) -> float:
        if self.total_formula_cells == 0:
            return 0.0
        return self.changed_cells / self.total_formula_cells
