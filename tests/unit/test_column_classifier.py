from labsheet.infrastructure.sheets.classifier import ColumnRole, classify_headers
from labsheet.infrastructure.sheets.coercion import FieldKind
from labsheet.infrastructure.sheets.header_index import HeaderIndex
from labsheet.infrastructure.sheets.schemas import ANALYSIS_SCHEMA, CLIENT_SCHEMA


def test_analysis_headers_split_into_fixed_and_result_columns() -> None:
    index = HeaderIndex.from_cells(["ID", "SampleName", "cost", "requestedtests", " Protein ", "Fat"])

    columns = classify_headers(index, ANALYSIS_SCHEMA)

    assert [c.role for c in columns] == [
        ColumnRole.FIXED,
        ColumnRole.FIXED,
        ColumnRole.FIXED,
        ColumnRole.FIXED,
        ColumnRole.DYNAMIC_RESULT,
        ColumnRole.DYNAMIC_RESULT,
    ]
    assert [c.field for c in columns[:4]] == ["id", "sampleName", "cost", "requestedTests"]
    assert columns[2].kind is FieldKind.NUMERIC
    assert columns[3].kind is FieldKind.LIST
    assert columns[4].test_name == "Protein"


def test_fixed_schema_has_no_result_columns() -> None:
    index = HeaderIndex.from_cells(["id", "name", "Protein"])

    columns = classify_headers(index, CLIENT_SCHEMA)

    assert all(c.role is ColumnRole.FIXED for c in columns)
    assert columns[2].field == "protein"
