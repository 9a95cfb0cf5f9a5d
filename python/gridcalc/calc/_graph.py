"""Dependency graph for formula cells with topological ordering."""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping

from gridcalc._cell import CellAddress, CellRecord
from gridcalc.calc._parser import parse_references


class DependencyGraph:
    """Tracks formula cell dependencies for evaluation ordering.

    Formulas are kept in registration order; that order breaks ties and
    places cells the topological sort cannot resolve (cycles).
    """

    __slots__ = ("dependencies", "dependents", "formulas")

    def __init__(self) -> None:
        # cell -> set of cells it reads from
        self.dependencies: dict[CellAddress, set[CellAddress]] = {}
        # cell -> set of cells that read from it (reverse edges)
        self.dependents: dict[CellAddress, set[CellAddress]] = {}
        # cell -> formula string
        self.formulas: dict[CellAddress, str] = {}

    def add_formula(self, address: CellAddress, formula: str) -> None:
        """Register a formula cell and its dependencies."""
        self.formulas[address] = formula
        refs = parse_references(formula)

        self.dependencies[address] = set(refs)

        for ref in refs:
            if ref not in self.dependents:
                self.dependents[ref] = set()
            self.dependents[ref].add(address)

    def _kahn(self) -> tuple[list[CellAddress], list[CellAddress]]:
        formula_cells = set(self.formulas)

        # Only count deps that are themselves formula cells
        in_degree: dict[CellAddress, int] = {
            cell: len(self.dependencies.get(cell, set()) & formula_cells)
            for cell in self.formulas
        }

        queue: deque[CellAddress] = deque(
            cell for cell in self.formulas if in_degree[cell] == 0
        )

        order: list[CellAddress] = []
        while queue:
            cell = queue.popleft()
            order.append(cell)
            for dep in sorted(self.dependents.get(cell, set())):
                if dep in formula_cells:
                    in_degree[dep] -= 1
                    if in_degree[dep] == 0:
                        queue.append(dep)

        placed = set(order)
        unresolved = [cell for cell in self.formulas if cell not in placed]
        return order, unresolved

    def evaluation_order(self) -> list[CellAddress]:
        """All formula cells, dependencies first (Kahn's algorithm).

        Cells on a cycle, or downstream of one, have no valid position;
        they follow the sorted cells in registration order.
        """
        order, unresolved = self._kahn()
        return order + unresolved

    def cyclic_cells(self) -> list[CellAddress]:
        """Formula cells that sit on, or depend on, a circular reference."""
        return self._kahn()[1]

    @classmethod
    def from_cells(cls, cells: Mapping[CellAddress, CellRecord]) -> DependencyGraph:
        """Build a dependency graph from every formula cell in *cells*."""
        graph = cls()
        for address, record in cells.items():
            if record.formula_text is not None:
                graph.add_formula(address, record.formula_text)
        return graph
