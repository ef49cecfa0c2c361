from labsheet.domain.models.table import SheetTable
from labsheet.infrastructure.sheets.coercion import ResultTyping
from labsheet.infrastructure.sheets.header_index import HeaderIndex
from labsheet.infrastructure.sheets.row_codec import RowDecoder, RowEncoder
from labsheet.infrastructure.sheets.schemas import ANALYSIS_COST_SCHEMA, ANALYSIS_SCHEMA, CLIENT_SCHEMA

ANALYSIS_HEADERS = [
    "id",
    "folio",
    "receptionDate",
    "deliveryDate",
    "sampleName",
    "product",
    "subtype",
    "clientId",
    "technicianId",
    "priority",
    "status",
    "cost",
    "requestedTests",
    "Protein",
    "Fat",
]


def _analysis_row(**overrides: object) -> list[object]:
    values = {
        "id": "an1",
        "folio": "2024060001",
        "receptionDate": "2024-06-01",
        "deliveryDate": "",
        "sampleName": "Milk batch 7",
        "product": "Dairy",
        "subtype": "UHT",
        "clientId": "cli1",
        "technicianId": "tec1",
        "priority": "Normal",
        "status": "Received",
        "cost": "250",
        "requestedTests": "Protein, Fat",
        "Protein": "12.5",
        "Fat": "",
    }
    values.update(overrides)
    return [values[h] for h in ANALYSIS_HEADERS]


def test_client_row_decodes_with_camel_cased_fields() -> None:
    index = HeaderIndex.from_cells(["id", "name", "contactPerson", "email", "phone"])

    record = RowDecoder(CLIENT_SCHEMA).decode(index, ["c1", "Acme", "Jane", "j@x.com", "555"])

    assert record == {
        "id": "c1",
        "name": "Acme",
        "contactPerson": "Jane",
        "email": "j@x.com",
        "phone": "555",
    }


def test_lower_cased_headers_still_map_to_camel_cased_fields() -> None:
    index = HeaderIndex.from_cells(["ID", "Name", "CONTACTPERSON", "Email", "Phone"])

    record = RowDecoder(CLIENT_SCHEMA).decode(index, ["c1", "Acme", "Jane", "j@x.com", "555"])

    assert record["contactPerson"] == "Jane"
    assert record["id"] == "c1"


def test_cost_is_the_numeric_fixed_field() -> None:
    index = HeaderIndex.from_cells(["id", "testName", "cost", "method"])

    record = RowDecoder(ANALYSIS_COST_SCHEMA).decode(index, ["c1", "Protein", "45.50", "Kjeldahl"])
    assert record["cost"] == 45.5

    record = RowDecoder(ANALYSIS_COST_SCHEMA).decode(index, ["c2", "Fat", "tbd", "Soxhlet"])
    assert record["cost"] == "tbd"


def test_analysis_row_collects_only_non_empty_results() -> None:
    index = HeaderIndex.from_cells(ANALYSIS_HEADERS)

    record = RowDecoder(ANALYSIS_SCHEMA).decode(index, _analysis_row())

    assert record["results"] == [{"testName": "Protein", "value": 12.5}]
    assert record["requestedTests"] == ["Protein", "Fat"]
    assert record["cost"] == 250
    assert record["deliveryDate"] == ""
    assert record["sampleName"] == "Milk batch 7"
    assert "Protein" not in record


def test_requested_tests_split_and_trim() -> None:
    index = HeaderIndex.from_cells(ANALYSIS_HEADERS)

    record = RowDecoder(ANALYSIS_SCHEMA).decode(
        index, _analysis_row(requestedTests="Protein, Fat,Moisture")
    )
    assert record["requestedTests"] == ["Protein", "Fat", "Moisture"]

    record = RowDecoder(ANALYSIS_SCHEMA).decode(index, _analysis_row(requestedTests=""))
    assert record["requestedTests"] == []


def test_text_results_follow_the_typing_policy() -> None:
    index = HeaderIndex.from_cells(ANALYSIS_HEADERS + ["Lot"])
    row = _analysis_row() + ["007"]

    heuristic = RowDecoder(ANALYSIS_SCHEMA, result_typing=ResultTyping.HEURISTIC)
    declared = RowDecoder(
        ANALYSIS_SCHEMA,
        result_typing=ResultTyping.DECLARED,
        result_kinds={"Lot": "text", "Protein": "numeric"},
    )

    assert {"testName": "Lot", "value": 7} in heuristic.decode(index, row)["results"]
    assert {"testName": "Lot", "value": "007"} in declared.decode(index, row)["results"]
    assert {"testName": "Protein", "value": 12.5} in declared.decode(index, row)["results"]


def test_short_rows_are_padded_with_empty_cells() -> None:
    index = HeaderIndex.from_cells(["id", "name", "contactPerson", "email", "phone"])

    record = RowDecoder(CLIENT_SCHEMA).decode(index, ["c1", "Acme"])

    assert record["email"] == ""
    assert record["phone"] == ""


def test_tables_without_data_rows_decode_to_nothing() -> None:
    decoder = RowDecoder(CLIENT_SCHEMA)

    assert decoder.decode_table(SheetTable(name="Clients", rows=[])) == []
    assert decoder.decode_table(SheetTable(name="Clients", rows=[["id", "name"]])) == []


def test_blank_data_rows_are_skipped() -> None:
    table = SheetTable(
        name="Clients",
        rows=[["id", "name"], ["c1", "Acme"], [None, ""], ["c2", "Beta"]],
    )

    records = RowDecoder(CLIENT_SCHEMA).decode_table(table)

    assert [r["id"] for r in records] == ["c1", "c2"]


def test_encoder_follows_current_header_order() -> None:
    record = {"id": "c1", "name": "Acme", "contactPerson": "Jane", "email": "j@x.com", "phone": "555"}
    index = HeaderIndex.from_cells(["phone", "ID", "notes", "ContactPerson", "name"])

    encoded = RowEncoder(CLIENT_SCHEMA).encode(index, record)

    assert encoded.cells == ["555", "c1", "", "Jane", "Acme"]
    assert encoded.dropped_results == []


def test_fixed_schema_record_survives_encode_then_decode() -> None:
    record = {"id": "ac1", "testName": "Protein", "cost": 45.5, "method": "Kjeldahl"}
    index = HeaderIndex.from_cells(["id", "testName", "cost", "method"])

    cells = RowEncoder(ANALYSIS_COST_SCHEMA).encode(index, record).cells

    assert RowDecoder(ANALYSIS_COST_SCHEMA).decode(index, cells) == record


def test_decoded_row_encodes_back_to_the_same_cells() -> None:
    index = HeaderIndex.from_cells(ANALYSIS_HEADERS)
    row = _analysis_row(requestedTests="Protein,Fat", cost=250, Protein=12.5)

    record = RowDecoder(ANALYSIS_SCHEMA).decode(index, row)

    assert RowEncoder(ANALYSIS_SCHEMA).encode(index, record).cells == row


def test_analysis_encoding_places_results_under_matching_columns() -> None:
    index = HeaderIndex.from_cells(["id", "requestedTests", "Fat", "Moisture", "Protein"])
    record = {
        "id": "an2",
        "requestedTests": ["Protein", "Fat"],
        "results": [
            {"testName": "Protein", "value": 12.5},
            {"testName": "Fat", "value": None},
            {"testName": "Ash", "value": 0.8},
        ],
    }

    encoded = RowEncoder(ANALYSIS_SCHEMA).encode(index, record)

    assert encoded.cells == ["an2", "Protein,Fat", "", "", 12.5]
    assert encoded.dropped_results == ["Ash"]


def test_result_lookup_is_case_sensitive() -> None:
    index = HeaderIndex.from_cells(["id", "protein"])
    record = {"id": "an3", "results": [{"testName": "Protein", "value": 3}]}

    encoded = RowEncoder(ANALYSIS_SCHEMA).encode(index, record)

    assert encoded.cells == ["an3", ""]
    assert encoded.dropped_results == ["Protein"]


def test_results_key_is_never_written_as_a_cell() -> None:
    index = HeaderIndex.from_cells(["id", "results"])
    record = {"id": "an4", "results": [{"testName": "Protein", "value": 3}]}

    assert RowEncoder(ANALYSIS_SCHEMA).encode(index, record).cells == ["an4", ""]
