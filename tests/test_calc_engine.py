"""Tests for gridcalc.calc bounded fixed-point recalculation."""

from __future__ import annotations

import logging
import math

import pytest

from gridcalc import ERROR, CellAddress, CellRecord
from gridcalc.calc._engine import _values_differ, recalculate


def _formula(text: str) -> CellRecord:
    return CellRecord(raw_text=text, formula_text=text)


def _literal(text: str) -> CellRecord:
    return CellRecord(raw_text=text)


A1 = CellAddress.parse("A1")
B1 = CellAddress.parse("B1")
C1 = CellAddress.parse("C1")
D1 = CellAddress.parse("D1")


class TestConvergence:
    def test_chain_settles(self) -> None:
        cells = {
            D1: _formula("=C1+1"),
            C1: _formula("=B1*2"),
            B1: _formula("=A1+1"),
            A1: _literal("4"),
        }
        result = recalculate(cells)
        assert result.converged
        assert cells[B1].computed_value == 5
        assert cells[C1].computed_value == 10
        assert cells[D1].computed_value == 11

    def test_acyclic_sheet_needs_two_passes(self) -> None:
        cells = {C1: _formula("=B1+1"), B1: _formula("=A1+1"), A1: _literal("1")}
        result = recalculate(cells)
        assert result.passes == 2
        assert result.cyclic_cells == ()

    def test_already_stable_sheet_single_pass(self) -> None:
        cells = {A1: CellRecord(raw_text="=2", formula_text="=2", computed_value=2)}
        result = recalculate(cells)
        assert result.passes == 1
        assert result.deltas == ()

    def test_no_formulas(self) -> None:
        result = recalculate({A1: _literal("x")})
        assert result.converged
        assert result.total_formula_cells == 0
        assert result.propagation_ratio == 0.0

    def test_deltas_report_changes(self) -> None:
        cells = {
            A1: _literal("3"),
            B1: CellRecord(raw_text="=A1*2", formula_text="=A1*2", computed_value=4),
            C1: CellRecord(raw_text="=7", formula_text="=7", computed_value=7),
        }
        result = recalculate(cells)
        assert len(result.deltas) == 1
        delta = result.deltas[0]
        assert delta.address == B1
        assert delta.old_value == 4
        assert delta.new_value == 6
        assert delta.formula == "=A1*2"
        assert result.changed_cells == 1
        assert result.propagation_ratio == pytest.approx(0.5)

    def test_error_is_cell_scoped(self) -> None:
        cells = {A1: _formula("=1/0"), B1: _formula("=2+2"), C1: _formula("=A1+1")}
        result = recalculate(cells)
        assert result.converged
        assert cells[A1].computed_value is ERROR
        assert cells[B1].computed_value == 4
        assert cells[C1].computed_value is ERROR

    def test_self_stabilizing_cycle(self) -> None:
        """A cycle with a fixed point settles like any other sheet."""
        cells = {A1: _formula("=B1*0+3"), B1: _formula("=A1")}
        result = recalculate(cells)
        assert result.converged
        assert cells[A1].computed_value == 3
        assert cells[B1].computed_value == 3


class TestPassBound:
    def test_diverging_cycle_stops_at_bound(self) -> None:
        cells = {A1: _formula("=B1+1"), B1: _formula("=A1+1")}
        result = recalculate(cells, max_passes=10)
        assert not result.converged
        assert result.passes == 10
        assert set(result.cyclic_cells) == {A1, B1}
        for address in (A1, B1):
            value = cells[address].computed_value
            assert isinstance(value, (int, float))
            assert math.isfinite(value)

    def test_self_reference_stops_at_bound(self) -> None:
        cells = {A1: _formula("=A1+1")}
        result = recalculate(cells, max_passes=5)
        assert not result.converged
        assert cells[A1].computed_value == 5

    def test_warning_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        cells = {A1: _formula("=B1+1"), B1: _formula("=A1+1")}
        with caplog.at_level(logging.WARNING, logger="gridcalc.calc._engine"):
            recalculate(cells, max_passes=3)
        assert "did not settle after 3 passes" in caplog.text
        assert "A1, B1" in caplog.text

    def test_invalid_bound(self) -> None:
        with pytest.raises(ValueError, match="max_passes"):
            recalculate({}, max_passes=0)


class TestValuesDiffer:
    def test_int_and_float_same_value(self) -> None:
        assert not _values_differ(10, 10.0)

    def test_number_vs_error(self) -> None:
        assert _values_differ(0, ERROR)

    def test_error_vs_error(self) -> None:
        assert not _values_differ(ERROR, ERROR)

    def test_none_vs_value(self) -> None:
        assert _values_differ(None, 0)
        assert not _values_differ(None, None)

    def test_error_vs_its_text(self) -> None:
        assert _values_differ(ERROR, "#ERROR")
