from __future__ import annotations

from labsheet.application.services.record_store import RecordStore
from labsheet.core.errors import ValidationError
from labsheet.core.ids import new_record_id
from labsheet.domain.models.directory import Client, Technician
from labsheet.infrastructure.sheets.schemas import EntityKind


class DirectoryService:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def list_clients(self) -> list[Client]:
        return [Client.from_record(r) for r in self.store.list_all(EntityKind.CLIENT)]

    def list_technicians(self) -> list[Technician]:
        return [Technician.from_record(r) for r in self.store.list_all(EntityKind.TECHNICIAN)]

    def add_client(self, name: str, contact_person: str, email: str, phone: str = "") -> Client:
        if not name.strip() or not contact_person.strip() or not email.strip():
            raise ValidationError("Client requires name, contact person and email.")
        client = Client(
            id=new_record_id("cli"),
            name=name.strip(),
            contact_person=contact_person.strip(),
            email=email.strip(),
            phone=phone.strip(),
        )
        self.store.upsert(EntityKind.CLIENT, client.to_record())
        return client

    def add_technician(self, name: str, specialty: str, hire_date: str) -> Technician:
        if not name.strip() or not specialty.strip() or not hire_date.strip():
            raise ValidationError("Technician requires name, specialty and hire date.")
        technician = Technician(
            id=new_record_id("tec"),
            name=name.strip(),
            specialty=specialty.strip(),
            hire_date=hire_date.strip(),
        )
        self.store.upsert(EntityKind.TECHNICIAN, technician.to_record())
        return technician
