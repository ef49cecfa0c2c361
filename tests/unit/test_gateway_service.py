import json
from pathlib import Path

import pytest

from labsheet.application.services.gateway_service import GatewayService
from labsheet.application.services.project_service import ProjectService
from labsheet.application.services.record_store import RecordStore
from labsheet.core.config import AppPaths
from labsheet.core.errors import GatewayError
from labsheet.infrastructure.sheets.schemas import EntityKind
from labsheet.infrastructure.workbook.memory import InMemoryWorkbook
from labsheet.infrastructure.workbook.xlsx_store import XlsxWorkbook


def _gateway(workbook: InMemoryWorkbook) -> GatewayService:
    return GatewayService(RecordStore(workbook))


def test_fetch_all_returns_every_collection(workbook: InMemoryWorkbook) -> None:
    payload = _gateway(workbook).fetch_all()

    assert set(payload) == {"clients", "technicians", "analysisTypes", "analysisCosts", "analysisResults"}
    assert len(payload["clients"]) == 2
    assert payload["analysisResults"][0]["requestedTests"] == ["Protein", "Fat"]


def test_test_connection() -> None:
    response = _gateway(InMemoryWorkbook()).handle({"action": "testConnection"})

    assert response.ok
    assert response.message == "Connection successful."


def test_create_then_update_then_delete(workbook: InMemoryWorkbook) -> None:
    gateway = _gateway(workbook)
    record = {"id": "tec2", "name": "Bo", "specialty": "Micro", "hireDate": "2022-02-02"}

    created = gateway.handle({"action": "create", "targetSheet": "Technicians", "payload": record})
    updated = gateway.handle(
        {"action": "update", "targetSheet": "Technicians", "payload": {**record, "specialty": "Chemistry"}}
    )

    assert created.to_dict() == {"status": "success", "message": "Data saved successfully."}
    assert updated.ok
    assert workbook.rows("Technicians")[-1] == ["tec2", "Bo", "Chemistry", "2022-02-02"]

    deleted = gateway.handle({"action": "delete", "targetSheet": "Technicians", "payload": {"id": "tec2"}})
    again = gateway.handle({"action": "delete", "targetSheet": "Technicians", "payload": {"id": "tec2"}})

    assert deleted.message == "Row deleted successfully from Technicians"
    assert again.ok
    assert again.message == "Row already deleted or not found."


@pytest.mark.parametrize(
    "request_body",
    [
        {"action": "create", "targetSheet": "Clients"},
        {"action": "create", "payload": {"id": "x"}},
        {"action": "archive", "targetSheet": "Clients", "payload": {"id": "cli1"}},
        {"action": "create", "targetSheet": "clients", "payload": {"id": "cli1"}},
        {"action": "create", "targetSheet": "Clients", "payload": {"name": "No id"}},
        ["not", "an", "object"],
    ],
)
def test_failures_are_reported_not_raised(workbook: InMemoryWorkbook, request_body: object) -> None:
    before = workbook.rows("Clients")

    response = _gateway(workbook).handle(request_body)

    assert response.status == "error"
    assert response.message
    assert workbook.rows("Clients") == before


def test_handle_raw_parses_the_payload_string(workbook: InMemoryWorkbook) -> None:
    gateway = _gateway(workbook)
    raw = json.dumps({"action": "delete", "targetSheet": "Clients", "payload": {"id": "cli1"}})

    assert gateway.handle_raw(raw).ok
    assert gateway.handle_raw(None).status == "error"
    assert gateway.handle_raw("{not json").status == "error"
    assert [r[0] for r in workbook.rows("Clients")] == ["id", "cli2"]


def test_kind_for_sheet_is_case_sensitive(workbook: InMemoryWorkbook) -> None:
    gateway = _gateway(workbook)

    assert gateway.kind_for_sheet("AnalysisResults") is EntityKind.ANALYSIS
    with pytest.raises(GatewayError):
        gateway.kind_for_sheet("analysisresults")


def _xlsx_gateway(tmp_path: Path) -> tuple[GatewayService, XlsxWorkbook]:
    labsheet_dir = tmp_path / ".labsheet"
    paths = AppPaths(project_root=tmp_path, labsheet_dir=labsheet_dir, workbook_path=labsheet_dir / "labsheet.xlsx")
    ProjectService(paths).init_project()
    workbook = XlsxWorkbook(paths.workbook_path)
    return GatewayService(RecordStore(workbook)), workbook


def test_object_fields_are_stored_as_json_text(tmp_path: Path) -> None:
    gateway, workbook = _xlsx_gateway(tmp_path)

    response = gateway.handle(
        {"action": "create", "targetSheet": "Clients", "payload": {"id": "c1", "name": {"first": "A"}}}
    )

    assert response.ok
    assert RecordStore(workbook).list_all(EntityKind.CLIENT)[0]["name"] == '{"first": "A"}'


def test_unstorable_values_are_reported_as_errors(tmp_path: Path) -> None:
    gateway, workbook = _xlsx_gateway(tmp_path)

    response = gateway.handle(
        {"action": "create", "targetSheet": "Clients", "payload": {"id": "c1", "name": "bell\x07"}}
    )

    assert response.status == "error"
    assert RecordStore(workbook).list_all(EntityKind.CLIENT) == []
