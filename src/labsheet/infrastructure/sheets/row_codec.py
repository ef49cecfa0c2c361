from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from labsheet.domain.models.table import Row, SheetTable
from labsheet.infrastructure.sheets.classifier import ColumnRole, classify_headers
from labsheet.infrastructure.sheets.coercion import (
    ResultTyping,
    coerce_result_value,
    decode_field,
    encode_cell,
    is_blank,
)
from labsheet.infrastructure.sheets.header_index import HeaderIndex
from labsheet.infrastructure.sheets.schemas import RESULTS_FIELD, EntitySchema


class RowDecoder:
    """Turns raw sheet rows into boundary records (camel-cased dicts).

    Result cells of open-schema entities are collected into ``results`` as
    ``{"testName", "value"}`` entries in header order. Empty result cells are
    omitted, so a test that was never attempted and one recorded as blank
    decode the same way.
    """

    def __init__(
        self,
        schema: EntitySchema,
        *,
        result_typing: ResultTyping = ResultTyping.HEURISTIC,
        result_kinds: Mapping[str, str] | None = None,
    ) -> None:
        self.schema = schema
        self.result_typing = result_typing
        self.result_kinds = dict(result_kinds or {})

    def decode(self, index: HeaderIndex, row: Row) -> dict[str, Any]:
        record: dict[str, Any] = {}
        results: dict[str, Any] = {}

        for column in classify_headers(index, self.schema):
            if not column.column.text:
                continue
            raw = row[column.column.index] if column.column.index < len(row) else None

            if column.role is ColumnRole.DYNAMIC_RESULT:
                value = coerce_result_value(
                    raw,
                    self.result_kinds.get(column.test_name),
                    self.result_typing,
                )
                if value is not None:
                    results[column.test_name] = value
                continue

            record[column.field] = decode_field(raw, column.kind)

        if self.schema.open_schema:
            record[RESULTS_FIELD] = [
                {"testName": name, "value": value} for name, value in results.items()
            ]
        return record

    def decode_table(self, table: SheetTable) -> list[dict[str, Any]]:
        if len(table.rows) < 2:
            return []
        index = HeaderIndex.from_cells(table.header)
        return [
            self.decode(index, row)
            for row in table.data_rows
            if not all(is_blank(cell) for cell in row)
        ]


@dataclass(slots=True)
class EncodedRow:
    cells: Row
    dropped_results: list[str] = field(default_factory=list)


class RowEncoder:
    """Lays a record out against the headers a sheet has *now*.

    Fields without a column are not written; result entries without a column
    are reported in ``dropped_results``.
    """

    def __init__(self, schema: EntitySchema) -> None:
        self.schema = schema

    def encode(self, index: HeaderIndex, record: Mapping[str, Any]) -> EncodedRow:
        keys_by_lower = {
            str(key).lower(): key for key in record.keys() if key != RESULTS_FIELD
        }
        results = _results_by_name(record) if self.schema.open_schema else {}

        cells: Row = []
        matched: set[str] = set()
        for column in index:
            if not column.text:
                cells.append("")
                continue

            field_name = self.schema.field_name(column.key)
            key = _record_key(record, keys_by_lower, field_name)
            if key is not None:
                cells.append(encode_cell(record[key]))
                continue

            if self.schema.open_schema and column.text in results:
                matched.add(column.text)
                cells.append(encode_cell(results[column.text]))
                continue

            cells.append("")

        dropped = [name for name in results if name not in matched]
        return EncodedRow(cells=cells, dropped_results=dropped)


def _record_key(record: Mapping[str, Any], keys_by_lower: Mapping[str, Any], field_name: str) -> Any:
    if field_name != RESULTS_FIELD and field_name in record:
        return field_name
    return keys_by_lower.get(field_name.lower())


def _results_by_name(record: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for item in record.get(RESULTS_FIELD) or []:
        if not isinstance(item, Mapping):
            continue
        name = str(item.get("testName") or "").strip()
        if name and name not in out:
            out[name] = item.get("value")
    return out
