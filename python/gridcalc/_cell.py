"""Cell address and cell record value types."""

from __future__ import annotations

from dataclasses import dataclass

from gridcalc._utils import MAX_COLS, MAX_ROWS, a1_to_rowcol, rowcol_to_a1


class FormulaError:
    """Error marker cached in place of a value when a formula fails.

    Compares equal to other markers with the same code and to the code
    string itself, so ``record.computed_value == "#ERROR"`` holds.
    """

    __slots__ = ("code",)

    def __init__(self, code: str) -> None:
        self.code = code

    def __repr__(self) -> str:
        return self.code

    def __str__(self) -> str:
        return self.code

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FormulaError):
            return self.code == other.code
        if isinstance(other, str):
            return self.code == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.code)


ERROR = FormulaError("#ERROR")

CellValue = int | float | str | FormulaError


@dataclass(frozen=True, order=True)
class CellAddress:
    """Zero-based (row, col) position inside the grid."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if not (0 <= self.row < MAX_ROWS and 0 <= self.col < MAX_COLS):
            raise ValueError(
                f"Cell address out of range: row={self.row}, col={self.col}"
            )

    @classmethod
    def parse(cls, label: str) -> CellAddress:
        """``CellAddress.parse("B3")`` -> ``CellAddress(row=2, col=1)``."""
        return cls(*a1_to_rowcol(label))

    @property
    def label(self) -> str:
        return rowcol_to_a1(self.row, self.col)

    def __str__(self) -> str:
        return self.label


def format_value(value: CellValue) -> str:
    """String form used for display and for substitution into formulas."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return str(value)


@dataclass
class CellRecord:
    """Stored content of one non-empty cell.

    ``formula_text`` is set iff ``raw_text`` starts with ``=``, and only
    formula cells carry a ``computed_value``.
    """

    raw_text: str
    formula_text: str | None = None
    computed_value: CellValue | None = None

    @property
    def is_formula(self) -> bool:
        return self.formula_text is not None

    @property
    def display_value(self) -> str:
        if self.computed_value is not None:
            return format_value(self.computed_value)
        return self.raw_text
