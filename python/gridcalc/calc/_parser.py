"""Formula reference handling: extraction and value substitution."""

from __future__ import annotations

import math
import re
from collections.abc import Callable

from gridcalc._cell import CellAddress, CellRecord, format_value
from gridcalc._utils import label_to_address

# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

# Unanchored: "A1+B22" yields "A1" and "B22". Case-sensitive on purpose,
# lowercase text is left alone and fails arithmetic evaluation.
_REF_RE = re.compile(r"[A-Z]+[0-9]+")

# Leading number of a literal cell's raw text; the rest is ignored, so
# "3.5 kg" reads as 3.5.
_NUMBER_RE = re.compile(r"[ \t\r\n\f\v]*[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def strip_marker(formula: str) -> str:
    """Drop the leading ``=`` of a formula, if present."""
    return formula[1:] if formula.startswith("=") else formula


# ---------------------------------------------------------------------------
# Reference extraction
# ---------------------------------------------------------------------------


def parse_references(formula: str) -> list[CellAddress]:
    """Distinct in-grid addresses a formula reads, in order of appearance.

    Tokens matching the reference shape but outside the grid (``A0``,
    ``ZZZZ1``) are skipped; they evaluate to zero.
    """
    refs: list[CellAddress] = []
    seen: set[CellAddress] = set()
    for m in _REF_RE.finditer(strip_marker(formula)):
        addr = label_to_address(m.group(0))
        if addr is not None and addr not in seen:
            refs.append(addr)
            seen.add(addr)
    return refs


# ---------------------------------------------------------------------------
# Substitution
# ---------------------------------------------------------------------------


def parse_number(text: str) -> float | None:
    """Finite float value of the number *text* starts with, or None."""
    m = _NUMBER_RE.match(text)
    if not m:
        return None
    value = float(m.group(0))
    if not math.isfinite(value):
        return None
    return value


def effective_text(record: CellRecord | None) -> str:
    """Numeric text a reference to *record* is replaced with.

    Computed values win, then a numeric raw text; anything else
    (missing cell, plain words) reads as ``"0"``.
    """
    if record is None:
        return "0"
    if record.computed_value is not None:
        return format_value(record.computed_value)
    value = parse_number(record.raw_text)
    if value is None:
        return "0"
    return format_value(value)


def substitute_references(
    expr: str,
    resolve: Callable[[CellAddress], CellRecord | None],
) -> str:
    """Replace every reference in *expr* with its effective numeric text."""

    def _replace(m: re.Match[str]) -> str:
        addr = label_to_address(m.group(0))
        if addr is None:
            return "0"
        return effective_text(resolve(addr))

    return _REF_RE.sub(_replace, expr)
