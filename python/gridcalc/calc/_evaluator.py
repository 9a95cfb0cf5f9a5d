"""Arithmetic formula evaluator.

References are first replaced by the numeric text of the cells they
point at, then the remaining text is evaluated by a small recursive
descent evaluator that only understands ``+ - * /``, unary signs,
parentheses and decimal literals.  Nothing else is accepted: any other
character, a division by zero or a non-finite result turns the whole
formula into :data:`~gridcalc._cell.ERROR`.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping

from gridcalc._cell import ERROR, CellAddress, CellRecord, CellValue
from gridcalc.calc._parser import strip_marker, substitute_references

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

# Results are kept as floats unless they are whole numbers small enough to
# print exactly.
_INT_LIMIT = 1e15


# ---------------------------------------------------------------------------
# Expression parsing helpers
# ---------------------------------------------------------------------------


def _find_matching_paren(expr: str, start: int) -> int:
    """Index of the ``')'`` matching the ``'('`` at *expr[start]*, or -1."""
    depth = 1
    for i in range(start + 1, len(expr)):
        ch = expr[i]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
    return -1


def _split_top_level(expr: str, ops: str) -> tuple[list[str], list[str]] | None:
    """Split *expr* at every binary operator in *ops* at paren depth 0.

    Returns ``(operands, operators)`` with one more operand than operator,
    or ``None`` when no such operator exists.  Signs in unary position and
    exponent signs (``2.5e-1``) are not operators.
    """
    operands: list[str] = []
    operators: list[str] = []
    depth = 0
    start = 0
    prev = ""  # last non-space character seen
    for i, ch in enumerate(expr):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif depth == 0 and ch in ops and prev and prev not in "(+-*/":
            exponent = (
                ch in "+-"
                and prev in "eE"
                and i >= 2
                and expr[i - 2] in "0123456789."
            )
            if not exponent:
                operands.append(expr[start:i].strip())
                operators.append(ch)
                start = i + 1
        if ch != " ":
            prev = ch
    if not operators:
        return None
    operands.append(expr[start:].strip())
    return operands, operators


def _binary_op(left: float | None, op: str, right: float | None) -> float | None:
    if left is None or right is None:
        return None
    if op == "+":
        result = left + right
    elif op == "-":
        result = left - right
    elif op == "*":
        result = left * right
    elif op == "/":
        if right == 0:
            return None
        result = left / right
    else:
        return None
    if not math.isfinite(result):
        return None
    return result


def _eval_expr(expr: str) -> float | None:
    """Recursively evaluate an arithmetic expression, None on any failure.

    Dispatch order (first match wins):

    1. Operator levels at top level, additive then multiplicative, folded
       left to right
    2. Parenthesized sub-expression ``(...)``
    3. Unary minus / plus
    4. Decimal literal
    """
    expr = expr.strip()
    if not expr:
        return None

    for ops in ("+-", "*/"):
        split = _split_top_level(expr, ops)
        if split:
            operands, operators = split
            if not all(operands):
                return None
            value = _eval_expr(operands[0])
            for op, operand in zip(operators, operands[1:]):
                value = _binary_op(value, op, _eval_expr(operand))
                if value is None:
                    return None
            return value

    if expr.startswith("("):
        if _find_matching_paren(expr, 0) == len(expr) - 1:
            return _eval_expr(expr[1:-1])
        return None

    if expr.startswith("-"):
        val = _eval_expr(expr[1:])
        return -val if val is not None else None
    if expr.startswith("+"):
        return _eval_expr(expr[1:])

    if _NUMBER_RE.fullmatch(expr):
        value = float(expr)
        return value if math.isfinite(value) else None
    return None


def _normalize(value: float) -> int | float:
    if value.is_integer() and abs(value) < _INT_LIMIT:
        return int(value)
    return value


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def evaluate_expression(expr: str) -> CellValue:
    """Evaluate reference-free arithmetic text (no leading ``=``)."""
    try:
        value = _eval_expr(expr)
    except RecursionError:
        logger.debug("Expression too deeply nested: %.40r", expr)
        return ERROR
    if value is None:
        return ERROR
    return _normalize(value)


def evaluate(formula: str, cells: Mapping[CellAddress, CellRecord]) -> CellValue:
    """Evaluate *formula* (``"=A1*2"``) against a read-only cell mapping.

    Never raises for bad input: the result is a number or ``ERROR``.
    The same formula against the same cells always gives the same value.
    """
    expr = substitute_references(strip_marker(formula), cells.get)
    result = evaluate_expression(expr)
    if result is ERROR:
        logger.debug("Cannot evaluate formula %r (as %r)", formula, expr)
    return result
