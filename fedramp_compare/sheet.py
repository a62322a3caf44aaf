"""
Generic tabular sheet abstraction consumed by the parser.

Rows and columns are zero-based. Cells hold whatever the workbook reader
produced (str, int, float, None, bool, datetime, ...); ``cell_text`` decides
which of those carry text.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Optional, Sequence, Tuple

CellValue = Any


def cell_text(value: CellValue) -> Optional[str]:
    """Return the textual form of a cell, or None for blank/non-text cells."""

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return None


class Sheet(ABC):
    @property
    @abstractmethod
    def width(self) -> int:
        raise NotImplementedError

    @property
    @abstractmethod
    def height(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def cell(self, row: int, col: int) -> CellValue:
        raise NotImplementedError

    @abstractmethod
    def rows(self) -> Iterator[Sequence[CellValue]]:
        raise NotImplementedError

    def range(self, start: Tuple[int, int], end: Tuple[int, int]) -> Iterator[Tuple[int, int, CellValue]]:
        """Yield (row, col, value) for the inclusive rectangle start..end."""

        start_row, start_col = start
        end_row, end_col = end
        for row in range(start_row, min(end_row, self.height - 1) + 1):
            for col in range(start_col, min(end_col, self.width - 1) + 1):
                yield row, col, self.cell(row, col)


class GridSheet(Sheet):
    """Sheet backed by fully materialized rows."""

    def __init__(self, rows: Sequence[Sequence[CellValue]], name: str = "") -> None:
        self.name = name
        self._rows: List[Tuple[CellValue, ...]] = [tuple(row) for row in rows]
        self._width = max((len(row) for row in self._rows), default=0)

    @classmethod
    def from_worksheet(cls, worksheet: Any) -> "GridSheet":
        """Materialize an openpyxl worksheet (read-only mode is fine)."""

        # Read-only sheets trust the stored <dimension>, which other writers often leave stale.
        if hasattr(worksheet, "reset_dimensions"):
            worksheet.reset_dimensions()
        return cls(list(worksheet.iter_rows(values_only=True)), name=getattr(worksheet, "title", ""))

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return len(self._rows)

    def cell(self, row: int, col: int) -> CellValue:
        if row < 0 or col < 0 or row >= len(self._rows):
            return None
        values = self._rows[row]
        if col >= len(values):
            return None
        return values[col]

    def rows(self) -> Iterator[Sequence[CellValue]]:
        return iter(self._rows)
