from __future__ import annotations

import itertools
import logging
from datetime import datetime
from typing import Any, Iterable, Mapping

from labsheet.application.services.catalog_service import CatalogService
from labsheet.application.services.record_store import RecordStore
from labsheet.core.errors import RecordNotFoundError, ValidationError
from labsheet.core.ids import new_record_id
from labsheet.core.time import today_iso
from labsheet.domain.models.analysis import (
    PRIORITIES,
    STATUSES,
    Analysis,
    AnalysisResultItem,
    ResultValue,
)
from labsheet.domain.models.catalog import AnalysisType
from labsheet.domain.models.directory import Client
from labsheet.infrastructure.sheets.coercion import is_blank, parse_number
from labsheet.infrastructure.sheets.schemas import EntityKind
from labsheet.infrastructure.sheets.upsert import RemoveOutcome

logger = logging.getLogger(__name__)

STATUS_RECEIVED = "Received"


class AnalysisService:
    def __init__(self, store: RecordStore, catalog: CatalogService | None = None) -> None:
        self.store = store
        self.catalog = catalog or CatalogService(store)
        self._folio_sequence = itertools.count(datetime.now().microsecond // 1000)

    def generate_folio(self, now: datetime | None = None) -> str:
        """Lab ticket number: year, month and a per-process sequence, e.g. ``2024060412``."""
        stamp = now or datetime.now()
        return f"{stamp:%Y%m}{next(self._folio_sequence):04d}"

    def list_analyses(self) -> list[Analysis]:
        return [Analysis.from_record(r) for r in self.store.list_all(EntityKind.ANALYSIS)]

    def get(self, analysis_id: str) -> Analysis:
        for analysis in self.list_analyses():
            if analysis.id == analysis_id.strip():
                return analysis
        raise RecordNotFoundError(f"Analysis not found: {analysis_id}")

    def request_analysis(
        self,
        *,
        client_id: str,
        technician_id: str,
        test_names: Iterable[str],
        sample_name: str,
        product: str = "",
        subtype: str = "",
        priority: str = "Normal",
        reception_date: str | None = None,
    ) -> Analysis:
        tests = [name.strip() for name in test_names if name and name.strip()]
        if not client_id.strip() or not technician_id.strip() or not tests:
            raise ValidationError("Select a client, a technician and at least one test.")
        if priority not in PRIORITIES:
            raise ValidationError(f"Unknown priority: {priority}")

        costs = self.catalog.costs_by_name()
        unpriced = [name for name in tests if name not in costs]
        if unpriced:
            raise ValidationError(f"No cost defined for: {', '.join(unpriced)}")

        analysis = Analysis(
            id=new_record_id("an"),
            folio=self.generate_folio(),
            reception_date=reception_date or today_iso(),
            sample_name=sample_name.strip(),
            product=product.strip(),
            subtype=subtype.strip(),
            client_id=client_id.strip(),
            technician_id=technician_id.strip(),
            priority=priority,
            status=STATUS_RECEIVED,
            cost=sum(costs[name].cost for name in tests),
            requested_tests=tests,
            results=[AnalysisResultItem(test_name=name, value=None) for name in tests],
        )
        self.store.upsert(EntityKind.ANALYSIS, analysis.to_record())
        return analysis

    def record_results(
        self,
        analysis_id: str,
        values: Mapping[str, Any],
        *,
        status: str | None = None,
        delivery_date: str | None = None,
    ) -> Analysis:
        """Store measured values for requested tests.

        Tests the catalog declares numeric are parsed to ``float``; a value that
        does not parse is stored as no result.
        """
        analysis = self.get(analysis_id)
        unknown = [name for name in values if name not in analysis.requested_tests]
        if unknown:
            raise ValidationError(f"Tests not requested for folio {analysis.folio}: {', '.join(unknown)}")
        if status is not None and status not in STATUSES:
            raise ValidationError(f"Unknown status: {status}")

        types = self.catalog.types_by_name()
        results = analysis.aligned_results()
        for item in results:
            if item.test_name in values:
                item.value = _result_value(values[item.test_name], types.get(item.test_name))

        analysis.results = results + [
            item for item in analysis.results if item.test_name not in analysis.requested_tests
        ]
        if status is not None:
            analysis.status = status
        if delivery_date is not None:
            analysis.delivery_date = delivery_date or None

        self.store.upsert(EntityKind.ANALYSIS, analysis.to_record())
        return analysis

    def search(self, folio: str | None = None, client_name: str | None = None) -> list[Analysis]:
        analyses = self.list_analyses()
        if folio:
            needle = folio.lower()
            analyses = [a for a in analyses if needle in a.folio.lower()]
        if client_name:
            clients = {
                c.id: c for c in (Client.from_record(r) for r in self.store.list_all(EntityKind.CLIENT))
            }
            needle = client_name.lower()
            analyses = [
                a for a in analyses if a.client_id in clients and needle in clients[a.client_id].name.lower()
            ]
        return analyses

    def delete_analysis(self, analysis_id: str) -> RemoveOutcome:
        return self.store.remove(EntityKind.ANALYSIS, analysis_id)


def _result_value(raw: Any, analysis_type: AnalysisType | None) -> ResultValue:
    if is_blank(raw):
        return None
    if analysis_type is not None and analysis_type.is_numeric:
        parsed = parse_number(raw)
        if parsed is None:
            logger.warning("Discarding non-numeric value %r for %s", raw, analysis_type.test_name)
            return None
        return float(parsed)
    return raw if isinstance(raw, (int, float)) else str(raw)
