from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from labsheet.core.errors import ConfigurationError
from labsheet.domain.models.table import Row

logger = logging.getLogger(__name__)

ACTION_UPDATED = "updated"
ACTION_APPENDED = "appended"


@dataclass(frozen=True, slots=True)
class UpsertOutcome:
    action: str
    row_number: int


@dataclass(frozen=True, slots=True)
class RemoveOutcome:
    removed: bool
    row_number: int | None = None


def id_text(value: Any) -> str:
    """Normalize an id cell for comparison: trimmed text, ``5.0`` reads as ``5``."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def find_row(rows: list[Row], id_column: int, record_id: Any) -> int | None:
    """Position in ``rows`` of the first data row whose id cell matches, scanning top to bottom."""
    wanted = id_text(record_id)
    for position in range(1, len(rows)):
        row = rows[position]
        cell = row[id_column] if id_column < len(row) else None
        if id_text(cell) == wanted:
            return position
    return None


def _require_id_column(id_column: int | None, sheet_name: str) -> int:
    if id_column is None or id_column < 0:
        raise ConfigurationError(f"'id' column not found in sheet '{sheet_name}'.")
    return id_column


def upsert_row(
    rows: list[Row],
    id_column: int | None,
    record_id: Any,
    encoded_row: Row,
    *,
    sheet_name: str = "",
) -> UpsertOutcome:
    """Replace the first row carrying ``record_id`` or append ``encoded_row``.

    ``rows`` includes the header row and is mutated in place. Row numbers are
    1-based sheet rows, so the first data row is row 2.
    """
    column = _require_id_column(id_column, sheet_name)
    position = find_row(rows, column, record_id)
    if position is not None:
        logger.debug("Found id %s at row %d of '%s'; updating.", record_id, position + 1, sheet_name)
        rows[position] = list(encoded_row)
        return UpsertOutcome(action=ACTION_UPDATED, row_number=position + 1)

    logger.debug("No id %s in '%s'; appending.", record_id, sheet_name)
    rows.append(list(encoded_row))
    return UpsertOutcome(action=ACTION_APPENDED, row_number=len(rows))


def remove_row(
    rows: list[Row],
    id_column: int | None,
    record_id: Any,
    *,
    sheet_name: str = "",
) -> RemoveOutcome:
    """Delete the first row carrying ``record_id``; a miss counts as already deleted."""
    column = _require_id_column(id_column, sheet_name)
    position = find_row(rows, column, record_id)
    if position is None:
        logger.debug("Id %s not present in '%s'; nothing to delete.", record_id, sheet_name)
        return RemoveOutcome(removed=False)

    del rows[position]
    return RemoveOutcome(removed=True, row_number=position + 1)
