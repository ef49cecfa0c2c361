from __future__ import annotations

import logging
from difflib import SequenceMatcher
from pathlib import Path
from typing import Any, Sequence

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import IllegalCharacterError
from openpyxl.worksheet.formula import ArrayFormula, DataTableFormula

from labsheet.core.errors import ConfigurationError, ValidationError
from labsheet.core.files import ensure_directory, replace_atomic, temp_sibling
from labsheet.domain.models.table import Row, SheetTable

logger = logging.getLogger(__name__)


def _is_empty(v: Any) -> bool:
    if v is None:
        return True
    if isinstance(v, str) and not v.strip():
        return True
    return False


def _is_empty_row(row: Sequence[Any]) -> bool:
    return all(_is_empty(v) for v in row)


def _trim_trailing_empty_rows(rows: list[Row]) -> list[Row]:
    end = len(rows)
    while end > 1 and _is_empty_row(rows[end - 1]):
        end -= 1
    return rows[:end]


def _row_key(row: Sequence[Any]) -> tuple[Any, ...]:
    cells = [None if _is_empty(v) else v for v in row]
    while cells and cells[-1] is None:
        cells.pop()
    return tuple(cells)


def _is_formula(v: Any) -> bool:
    if isinstance(v, (ArrayFormula, DataTableFormula)):
        return True
    return isinstance(v, str) and v.startswith("=")


def _merge_row(cached_row: Row, formula_row: Row, new_row: Row) -> Row:
    merged = list(new_row)
    for col, formula in enumerate(formula_row):
        if not _is_formula(formula):
            continue
        new_value = merged[col] if col < len(merged) else None
        old_value = cached_row[col] if col < len(cached_row) else None
        if _row_key([new_value]) != _row_key([old_value]):
            continue
        if col >= len(merged):
            merged.extend([None] * (col + 1 - len(merged)))
        merged[col] = formula
    return merged


def _keep_formulas(cached: list[Row], formulas: list[Row], rows: list[Row]) -> list[Row]:
    """Carry formulas over from rows that survive a rewrite unchanged in value."""
    out = [list(r) for r in rows]
    matcher = SequenceMatcher(
        None,
        [_row_key(r) for r in cached],
        [_row_key(r) for r in rows],
        autojunk=False,
    )
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal" or (tag == "replace" and i2 - i1 == j2 - j1):
            for offset in range(j2 - j1):
                i = i1 + offset
                if i < len(formulas):
                    out[j1 + offset] = _merge_row(cached[i], formulas[i], out[j1 + offset])
    return out


class XlsxWorkbook:
    """An .xlsx file on disk acting as the backing store, one sheet per entity kind.

    Each ``write_table`` rewrites the whole sheet and saves through a temporary
    file so a crash never leaves a half-written workbook behind.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def _load(self, *, data_only: bool) -> Workbook:
        if not self.path.exists():
            raise ConfigurationError(f"Workbook not found: {self.path}")
        return load_workbook(self.path, data_only=data_only)

    def _save(self, wb: Workbook) -> None:
        ensure_directory(self.path.parent)
        temp_path = temp_sibling(self.path)
        wb.save(temp_path)
        replace_atomic(temp_path, self.path)

    def read_table(self, sheet_name: str) -> SheetTable | None:
        wb = self._load(data_only=True)
        if sheet_name not in wb.sheetnames:
            return None
        ws = wb[sheet_name]
        rows = [list(r) for r in ws.iter_rows(values_only=True)]
        if rows and _is_empty_row(rows[0]) and len(rows) == 1:
            rows = []
        return SheetTable(name=sheet_name, rows=_trim_trailing_empty_rows(rows))

    def write_table(self, table: SheetTable) -> None:
        """Replace the sheet's rows with ``table.rows``.

        Rows are aligned with what the sheet held before; a formula cell whose
        cached value the new row repeats keeps its formula.
        """
        wb = self._load(data_only=False)
        if table.name not in wb.sheetnames:
            raise ConfigurationError(f"Sheet '{table.name}' not found. Check name (case-sensitive).")
        ws = wb[table.name]
        formulas = [list(r) for r in ws.iter_rows(values_only=True)]
        cached = [list(r) for r in self._load(data_only=True)[table.name].iter_rows(values_only=True)]
        rows = _keep_formulas(cached, formulas, table.rows)

        ws.delete_rows(1, ws.max_row)
        # `ws.append()` continues after the pre-delete max_row, so address cells directly.
        try:
            for row_idx, row in enumerate(rows, start=1):
                for col_idx, v in enumerate(row, start=1):
                    ws.cell(row=row_idx, column=col_idx).value = None if v == "" else v
        except (ValueError, IllegalCharacterError) as exc:
            raise ValidationError(f"Cannot store value in sheet '{table.name}': {exc}") from exc
        self._save(wb)
        logger.debug("Wrote %d rows to sheet '%s' in %s", len(rows), table.name, self.path)

    def ensure_sheets(self, sheets: dict[str, Sequence[str]]) -> list[str]:
        """Create the workbook and any missing sheets with their header rows; returns created sheet names."""
        if self.path.exists():
            wb = load_workbook(self.path)
            fresh = False
        else:
            wb = Workbook()
            fresh = True

        created: list[str] = []
        changed = fresh
        for sheet_name, headers in sheets.items():
            if sheet_name in wb.sheetnames:
                ws = wb[sheet_name]
                row1 = [c.value for c in ws[1]]
                if _is_empty_row(row1):
                    for col, h in enumerate(headers, start=1):
                        ws.cell(row=1, column=col).value = h
                    changed = True
                continue
            ws = wb.create_sheet(sheet_name)
            ws.append(list(headers))
            created.append(sheet_name)
            changed = True

        if fresh and "Sheet" in wb.sheetnames and len(wb.sheetnames) > 1:
            del wb["Sheet"]

        if changed:
            self._save(wb)
        return created
