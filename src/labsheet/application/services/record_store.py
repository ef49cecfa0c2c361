from __future__ import annotations

import logging
from typing import Any, Mapping

from labsheet.core.errors import ConfigurationError, ValidationError
from labsheet.domain.models.table import SheetTable
from labsheet.infrastructure.sheets.coercion import ResultTyping, is_blank
from labsheet.infrastructure.sheets.header_index import HeaderIndex
from labsheet.infrastructure.sheets.row_codec import RowDecoder, RowEncoder
from labsheet.infrastructure.sheets.schemas import DEFAULT_SCHEMAS, EntityKind, EntitySchema
from labsheet.infrastructure.sheets.upsert import (
    RemoveOutcome,
    UpsertOutcome,
    id_text,
    remove_row,
    upsert_row,
)
from labsheet.infrastructure.workbook.base import TableBackend

logger = logging.getLogger(__name__)


class RecordStore:
    """Lists, upserts and removes records of each entity kind against a backing workbook.

    Every call works on a fresh snapshot of one sheet: headers are re-read on
    each write, so columns added since the last read are honoured. There is no
    locking between calls.
    """

    def __init__(
        self,
        backend: TableBackend,
        *,
        schemas: Mapping[EntityKind, EntitySchema] = DEFAULT_SCHEMAS,
        result_typing: ResultTyping = ResultTyping.DECLARED,
    ) -> None:
        self.backend = backend
        self.schemas = schemas
        self.result_typing = result_typing

    def schema(self, kind: EntityKind) -> EntitySchema:
        schema = self.schemas.get(kind)
        if schema is None:
            raise ConfigurationError(f"No sheet configured for entity kind: {kind.value}")
        return schema

    def list_all(self, kind: EntityKind) -> list[dict[str, Any]]:
        schema = self.schema(kind)
        table = self.backend.read_table(schema.sheet_name)
        if table is None:
            logger.warning("Sheet '%s' not found; treating it as empty.", schema.sheet_name)
            return []

        result_kinds: dict[str, str] = {}
        if schema.open_schema and self.result_typing is ResultTyping.DECLARED:
            result_kinds = self.result_kinds()

        decoder = RowDecoder(schema, result_typing=self.result_typing, result_kinds=result_kinds)
        return decoder.decode_table(table)

    def result_kinds(self) -> dict[str, str]:
        """Declared ``resultType`` per catalogued test name."""
        if EntityKind.ANALYSIS_TYPE not in self.schemas:
            return {}
        kinds: dict[str, str] = {}
        for record in self.list_all(EntityKind.ANALYSIS_TYPE):
            name = str(record.get("testName") or "").strip()
            if name:
                kinds[name] = str(record.get("resultType") or "").strip().lower()
        return kinds

    def upsert(self, kind: EntityKind, record: Mapping[str, Any]) -> UpsertOutcome:
        schema = self.schema(kind)
        record_id = record.get(schema.id_field)
        if is_blank(record_id):
            raise ValidationError(f"Upsert payload for '{schema.sheet_name}' needs '{schema.id_field}'.")

        table = self._writable_table(schema)
        index = HeaderIndex.from_cells(table.header)
        encoded = RowEncoder(schema).encode(index, record)
        if encoded.dropped_results:
            logger.warning(
                "Record %s: no column in '%s' for results %s; they were not saved.",
                id_text(record_id),
                schema.sheet_name,
                ", ".join(encoded.dropped_results),
            )

        outcome = upsert_row(
            table.rows,
            index.position(schema.id_field),
            record_id,
            encoded.cells,
            sheet_name=schema.sheet_name,
        )
        self.backend.write_table(table)
        logger.info(
            "%s %s '%s' at row %d.",
            outcome.action.capitalize(),
            schema.kind.value,
            id_text(record_id),
            outcome.row_number,
        )
        return outcome

    def remove(self, kind: EntityKind, record_id: Any) -> RemoveOutcome:
        schema = self.schema(kind)
        if is_blank(record_id):
            raise ValidationError(f"Delete from '{schema.sheet_name}' requires an '{schema.id_field}'.")

        table = self.backend.read_table(schema.sheet_name)
        if table is None:
            raise ConfigurationError(f"Sheet '{schema.sheet_name}' not found. Check name (case-sensitive).")
        index = HeaderIndex.from_cells(table.header)
        outcome = remove_row(
            table.rows,
            index.position(schema.id_field),
            record_id,
            sheet_name=schema.sheet_name,
        )
        if outcome.removed:
            self.backend.write_table(table)
            logger.info("Deleted %s '%s' from row %d.", schema.kind.value, id_text(record_id), outcome.row_number)
        return outcome

    def _writable_table(self, schema: EntitySchema) -> SheetTable:
        table = self.backend.read_table(schema.sheet_name)
        if table is None:
            raise ConfigurationError(f"Sheet '{schema.sheet_name}' not found. Check name (case-sensitive).")
        if not table.has_header():
            raise ConfigurationError(f"Cannot save to empty sheet '{schema.sheet_name}'. Add headers.")
        return table
