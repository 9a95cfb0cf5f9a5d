"""Fixed-point recalculation over every formula cell.

Each pass re-evaluates all formula cells against the current store and
writes changed values back immediately, so later cells in the same pass
see them.  Passes repeat until one changes nothing or ``max_passes`` is
reached.  Cells are visited in dependency order, which lets acyclic
sheets settle after one changing pass; cells involved in a cycle come
last, in store order, and are what the pass bound exists for.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from types import MappingProxyType

from gridcalc._cell import CellAddress, CellRecord, CellValue
from gridcalc.calc._evaluator import evaluate
from gridcalc.calc._graph import DependencyGraph
from gridcalc.calc._results import CellDelta, RecalcResult

logger = logging.getLogger(__name__)


def _values_differ(a: CellValue | None, b: CellValue | None) -> bool:
    """Strict comparison over the number / string / error union."""
    if type(a) is not type(b) and not (
        isinstance(a, (int, float)) and isinstance(b, (int, float))
    ):
        return True
    return a != b


def recalculate(
    cells: MutableMapping[CellAddress, CellRecord],
    max_passes: int = 100,
) -> RecalcResult:
    """Bring every formula cell in *cells* to a stable value.

    Mutates ``computed_value`` of the records in place.  Never raises for
    formula problems; a sheet that does not settle within *max_passes*
    keeps whatever the last pass computed.
    """
    if max_passes < 1:
        raise ValueError(f"max_passes must be >= 1, got {max_passes}")

    graph = DependencyGraph.from_cells(cells)
    order = graph.evaluation_order()
    view = MappingProxyType(cells)

    before: dict[CellAddress, CellValue | None] = {
        address: cells[address].computed_value for address in order
    }

    passes = 0
    converged = False
    while passes < max_passes:
        passes += 1
        changed = False
        for address in order:
            record = cells[address]
            value = evaluate(graph.formulas[address], view)
            if _values_differ(value, record.computed_value):
                record.computed_value = value
                changed = True
        if not changed:
            converged = True
            break

    cyclic: tuple[CellAddress, ...] = ()
    if not converged:
        cyclic = tuple(graph.cyclic_cells())
        logger.warning(
            "Recalculation did not settle after %d passes; keeping last values "
            "for %d formula cells (circular references: %s)",
            passes,
            len(order),
            ", ".join(a.label for a in cyclic) or "none",
        )

    deltas = tuple(
        CellDelta(
            address=address,
            old_value=before[address],
            new_value=cells[address].computed_value,
            formula=graph.formulas[address],
        )
        for address in order
        if _values_differ(before[address], cells[address].computed_value)
    )

    logger.debug(
        "Recalculated %d formula cells in %d passes (%d changed)",
        len(order),
        passes,
        len(deltas),
    )
    return RecalcResult(
        passes=passes,
        converged=converged,
        deltas=deltas,
        total_formula_cells=len(order),
        cyclic_cells=cyclic,
    )
