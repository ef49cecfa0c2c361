from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from labsheet.infrastructure.sheets.coercion import FieldKind
from labsheet.infrastructure.sheets.header_index import HeaderColumn, HeaderIndex
from labsheet.infrastructure.sheets.schemas import EntitySchema


class ColumnRole(str, Enum):
    FIXED = "fixed"
    DYNAMIC_RESULT = "dynamic_result"


@dataclass(frozen=True, slots=True)
class ClassifiedColumn:
    column: HeaderColumn
    role: ColumnRole
    field: str
    kind: FieldKind = FieldKind.TEXT

    @property
    def test_name(self) -> str:
        return self.column.text


def classify_column(column: HeaderColumn, schema: EntitySchema) -> ClassifiedColumn:
    if schema.open_schema and not schema.is_fixed(column.key):
        return ClassifiedColumn(
            column=column,
            role=ColumnRole.DYNAMIC_RESULT,
            field=column.text,
        )
    return ClassifiedColumn(
        column=column,
        role=ColumnRole.FIXED,
        field=schema.field_name(column.key),
        kind=schema.field_kind(column.key),
    )


def classify_headers(index: HeaderIndex, schema: EntitySchema) -> list[ClassifiedColumn]:
    """Tag every header as a fixed field or, for open-schema entities, a test-result column."""
    return [classify_column(column, schema) for column in index]
