from __future__ import annotations

import copy
from typing import Any, Mapping, Sequence

from labsheet.domain.models.table import Row, SheetTable


class InMemoryWorkbook:
    """Dict-backed workbook. Reads and writes copy rows so callers hold snapshots."""

    def __init__(self, sheets: Mapping[str, Sequence[Sequence[Any]]] | None = None) -> None:
        self._sheets: dict[str, list[Row]] = {}
        for name, rows in (sheets or {}).items():
            self._sheets[name] = [list(row) for row in rows]

    def read_table(self, sheet_name: str) -> SheetTable | None:
        rows = self._sheets.get(sheet_name)
        if rows is None:
            return None
        return SheetTable(name=sheet_name, rows=copy.deepcopy(rows))

    def write_table(self, table: SheetTable) -> None:
        self._sheets[table.name] = copy.deepcopy(table.rows)

    def rows(self, sheet_name: str) -> list[Row]:
        return copy.deepcopy(self._sheets.get(sheet_name, []))
