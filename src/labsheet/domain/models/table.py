from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

Cell = Any
Row = list[Cell]


@dataclass(slots=True)
class SheetTable:
    """Snapshot of one sheet: row 0 is the header row, the rest are data rows."""

    name: str
    rows: list[Row] = field(default_factory=list)

    @property
    def header(self) -> Row:
        return self.rows[0] if self.rows else []

    @property
    def data_rows(self) -> list[Row]:
        return self.rows[1:]

    def has_header(self) -> bool:
        return bool(self.rows) and any(
            cell is not None and str(cell).strip() for cell in self.rows[0]
        )
