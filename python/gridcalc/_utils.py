"""A1 reference helpers: column labels and address parsing."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gridcalc._cell import CellAddress

MAX_ROWS = 10000
MAX_COLS = 10000

_LABEL_RE = re.compile(r"^([A-Z]+)([0-9]+)$")


def index_to_label(col: int) -> str:
    """Zero-based column index -> letters (0 -> "A", 25 -> "Z", 26 -> "AA").

    Bijective base-26: there is no zero digit, so each position after the
    first is offset by one.
    """
    if col < 0:
        raise ValueError(f"Column index must be non-negative, got {col}")
    label = ""
    while col >= 0:
        label = chr(ord("A") + col % 26) + label
        col = col // 26 - 1
    return label


def label_to_index(letters: str) -> int:
    """Inverse of :func:`index_to_label` ("A" -> 0, "AA" -> 26)."""
    col = 0
    for ch in letters:
        col = col * 26 + (ord(ch) - ord("A") + 1)
    return col - 1


def _split_label(text: str) -> tuple[int, int] | None:
    m = _LABEL_RE.match(text)
    if not m:
        return None
    row = int(m.group(2)) - 1
    col = label_to_index(m.group(1))
    if not (0 <= row < MAX_ROWS and 0 <= col < MAX_COLS):
        return None
    return row, col


def label_to_address(text: str) -> CellAddress | None:
    """Parse "BA12" into a zero-based :class:`CellAddress`.

    Returns None for anything that is not an in-grid reference; callers
    treat that as "not a reference", never as a failure.
    """
    if not isinstance(text, str):
        return None
    pos = _split_label(text)
    if pos is None:
        return None
    from gridcalc._cell import CellAddress

    return CellAddress(*pos)


def a1_to_rowcol(text: str) -> tuple[int, int]:
    """Strict variant of :func:`label_to_address` returning ``(row, col)``."""
    pos = _split_label(text)
    if pos is None:
        raise ValueError(f"Invalid cell reference: {text!r}")
    return pos


def rowcol_to_a1(row: int, col: int) -> str:
    """Zero-based ``(row, col)`` -> "C5"."""
    if row < 0:
        raise ValueError(f"Row index must be non-negative, got {row}")
    return f"{index_to_label(col)}{row + 1}"
