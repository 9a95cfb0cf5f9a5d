"""gridcalc.calc - Formula evaluation and recalculation engine."""

from gridcalc.calc._engine import recalculate
from gridcalc.calc._evaluator import evaluate, evaluate_expression
from gridcalc.calc._graph import DependencyGraph
from gridcalc.calc._parser import parse_references, substitute_references
from gridcalc.calc._results import CellDelta, RecalcResult

__all__ = [
    "CellDelta",
    "DependencyGraph",
    "RecalcResult",
    "evaluate",
    "evaluate_expression",
    "parse_references",
    "recalculate",
    "substitute_references",
]
