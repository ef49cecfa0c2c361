from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from labsheet.core.time import as_iso_date

PRIORITIES = ("Normal", "Urgent", "Low")
STATUSES = ("Received", "In Progress", "Completed", "Cancelled")

ResultValue = float | int | str | None


@dataclass(slots=True)
class AnalysisResultItem:
    test_name: str
    value: ResultValue

    def to_record(self) -> dict[str, Any]:
        return {"testName": self.test_name, "value": self.value}


@dataclass(slots=True)
class Analysis:
    id: str
    folio: str
    reception_date: str
    sample_name: str
    product: str
    subtype: str
    client_id: str
    technician_id: str
    priority: str
    status: str
    cost: float
    delivery_date: str | None = None
    requested_tests: list[str] = field(default_factory=list)
    results: list[AnalysisResultItem] = field(default_factory=list)

    def result_for(self, test_name: str) -> ResultValue:
        """Value recorded for ``test_name``; a missing entry reads as ``None``."""
        for item in self.results:
            if item.test_name == test_name:
                return item.value
        return None

    def aligned_results(self) -> list[AnalysisResultItem]:
        """One entry per requested test, in request order, filling gaps with ``None``."""
        return [AnalysisResultItem(test_name=name, value=self.result_for(name)) for name in self.requested_tests]

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Analysis:
        raw_cost = record.get("cost")
        cost = float(raw_cost) if isinstance(raw_cost, (int, float)) and not isinstance(raw_cost, bool) else 0.0
        delivery = as_iso_date(record.get("deliveryDate"))
        requested = record.get("requestedTests") or []
        return cls(
            id=str(record.get("id") or ""),
            folio=str(record.get("folio") or ""),
            reception_date=as_iso_date(record.get("receptionDate")),
            delivery_date=delivery or None,
            sample_name=str(record.get("sampleName") or ""),
            product=str(record.get("product") or ""),
            subtype=str(record.get("subtype") or ""),
            client_id=str(record.get("clientId") or ""),
            technician_id=str(record.get("technicianId") or ""),
            priority=str(record.get("priority") or ""),
            status=str(record.get("status") or ""),
            cost=cost,
            requested_tests=[str(name) for name in requested],
            results=[
                AnalysisResultItem(test_name=str(item.get("testName")), value=item.get("value"))
                for item in record.get("results") or []
            ],
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "folio": self.folio,
            "receptionDate": self.reception_date,
            "deliveryDate": self.delivery_date,
            "sampleName": self.sample_name,
            "product": self.product,
            "subtype": self.subtype,
            "clientId": self.client_id,
            "technicianId": self.technician_id,
            "priority": self.priority,
            "status": self.status,
            "cost": self.cost,
            "requestedTests": list(self.requested_tests),
            "results": [item.to_record() for item in self.results],
        }
