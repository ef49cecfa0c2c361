from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from labsheet.core.time import as_iso_date


@dataclass(slots=True)
class Client:
    id: str
    name: str
    contact_person: str
    email: str
    phone: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Client:
        return cls(
            id=str(record.get("id") or ""),
            name=str(record.get("name") or ""),
            contact_person=str(record.get("contactPerson") or ""),
            email=str(record.get("email") or ""),
            phone=str(record.get("phone") or ""),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "contactPerson": self.contact_person,
            "email": self.email,
            "phone": self.phone,
        }


@dataclass(slots=True)
class Technician:
    id: str
    name: str
    specialty: str
    hire_date: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Technician:
        return cls(
            id=str(record.get("id") or ""),
            name=str(record.get("name") or ""),
            specialty=str(record.get("specialty") or ""),
            hire_date=as_iso_date(record.get("hireDate")),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "specialty": self.specialty,
            "hireDate": self.hire_date,
        }
