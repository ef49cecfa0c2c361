from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from labsheet.application.services.record_store import RecordStore
from labsheet.domain.models.analysis import Analysis
from labsheet.domain.models.directory import Client, Technician
from labsheet.infrastructure.sheets.schemas import EntityKind


@dataclass(slots=True)
class DashboardSummary:
    total_clients: int
    total_analyses: int
    total_revenue: float
    analyses_per_client: dict[str, int] = field(default_factory=dict)
    cost_per_technician: dict[str, float] = field(default_factory=dict)
    status_counts: dict[str, int] = field(default_factory=dict)


class DashboardService:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def summary(self) -> DashboardSummary:
        clients = [Client.from_record(r) for r in self.store.list_all(EntityKind.CLIENT)]
        technicians = [Technician.from_record(r) for r in self.store.list_all(EntityKind.TECHNICIAN)]
        analyses = [Analysis.from_record(r) for r in self.store.list_all(EntityKind.ANALYSIS)]

        per_client: dict[str, int] = {}
        for client in clients:
            count = sum(1 for a in analyses if a.client_id == client.id)
            if count > 0:
                per_client[client.name] = count

        per_technician: dict[str, float] = {}
        for technician in technicians:
            total = sum(a.cost for a in analyses if a.technician_id == technician.id)
            if total > 0:
                per_technician[technician.name] = total

        return DashboardSummary(
            total_clients=len(clients),
            total_analyses=len(analyses),
            total_revenue=sum(a.cost for a in analyses),
            analyses_per_client=per_client,
            cost_per_technician=per_technician,
            status_counts=dict(Counter(a.status for a in analyses if a.status)),
        )
