from __future__ import annotations

from labsheet.application.services.record_store import RecordStore
from labsheet.core.errors import ValidationError
from labsheet.core.ids import new_record_id
from labsheet.domain.models.catalog import AnalysisCost, AnalysisType
from labsheet.infrastructure.sheets.schemas import EntityKind


class CatalogService:
    """Analysis types (read-only reference data) and the price list built on them."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def list_analysis_types(self) -> list[AnalysisType]:
        return [AnalysisType.from_record(r) for r in self.store.list_all(EntityKind.ANALYSIS_TYPE)]

    def list_analysis_costs(self) -> list[AnalysisCost]:
        return [AnalysisCost.from_record(r) for r in self.store.list_all(EntityKind.ANALYSIS_COST)]

    def types_by_name(self) -> dict[str, AnalysisType]:
        return {t.test_name: t for t in self.list_analysis_types()}

    def costs_by_name(self) -> dict[str, AnalysisCost]:
        return {c.test_name: c for c in self.list_analysis_costs()}

    def unpriced_analysis_types(self) -> list[AnalysisType]:
        priced = set(self.costs_by_name())
        return [t for t in self.list_analysis_types() if t.test_name not in priced]

    def add_analysis_cost(self, test_name: str, cost: float, method: str) -> AnalysisCost:
        name = test_name.strip()
        if not name or not method.strip() or cost <= 0:
            raise ValidationError("Analysis cost requires a test name, a method and a cost greater than 0.")
        if name not in self.types_by_name():
            raise ValidationError(f"Unknown analysis type: {name}")
        if name in self.costs_by_name():
            raise ValidationError(f"A cost is already defined for {name}")

        entry = AnalysisCost(id=new_record_id("c"), test_name=name, cost=float(cost), method=method.strip())
        self.store.upsert(EntityKind.ANALYSIS_COST, entry.to_record())
        return entry
