import pytest

from labsheet.application.services.directory_service import DirectoryService
from labsheet.application.services.record_store import RecordStore
from labsheet.core.errors import ValidationError
from labsheet.infrastructure.workbook.memory import InMemoryWorkbook


def test_lists_clients_and_technicians(workbook: InMemoryWorkbook) -> None:
    service = DirectoryService(RecordStore(workbook))

    clients = service.list_clients()
    technicians = service.list_technicians()

    assert [c.name for c in clients] == ["Acme Dairy", "Beta Foods"]
    assert clients[0].contact_person == "Jane Roe"
    assert technicians[0].hire_date == "2021-03-15"


def test_add_client_assigns_prefixed_id(workbook: InMemoryWorkbook) -> None:
    service = DirectoryService(RecordStore(workbook))

    client = service.add_client(" Gamma Labs ", "Lee", "lee@gamma.test")

    assert client.id.startswith("cli")
    assert client.name == "Gamma Labs"
    assert workbook.rows("Clients")[-1] == [client.id, "Gamma Labs", "Lee", "lee@gamma.test", ""]


def test_add_technician_assigns_prefixed_id(workbook: InMemoryWorkbook) -> None:
    service = DirectoryService(RecordStore(workbook))

    technician = service.add_technician("Bo", "Microbiology", "2023-01-09")

    assert technician.id.startswith("tec")
    assert [t.name for t in service.list_technicians()] == ["Ana Lab", "Bo"]


def test_add_client_requires_contact_details(workbook: InMemoryWorkbook) -> None:
    service = DirectoryService(RecordStore(workbook))

    with pytest.raises(ValidationError):
        service.add_client("Gamma", "", "lee@gamma.test")
    assert len(workbook.rows("Clients")) == 3
