from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

RESULT_TYPE_NUMERIC = "numeric"
RESULT_TYPE_TEXT = "text"


@dataclass(slots=True)
class AnalysisType:
    id: str
    test_name: str
    units: str
    result_type: str

    @property
    def is_numeric(self) -> bool:
        return self.result_type == RESULT_TYPE_NUMERIC

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> AnalysisType:
        return cls(
            id=str(record.get("id") or ""),
            test_name=str(record.get("testName") or "").strip(),
            units=str(record.get("units") or ""),
            result_type=str(record.get("resultType") or RESULT_TYPE_TEXT).strip().lower(),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "testName": self.test_name,
            "units": self.units,
            "resultType": self.result_type,
        }


@dataclass(slots=True)
class AnalysisCost:
    id: str
    test_name: str
    cost: float
    method: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> AnalysisCost:
        raw_cost = record.get("cost")
        cost = float(raw_cost) if isinstance(raw_cost, (int, float)) and not isinstance(raw_cost, bool) else 0.0
        return cls(
            id=str(record.get("id") or ""),
            test_name=str(record.get("testName") or "").strip(),
            cost=cost,
            method=str(record.get("method") or ""),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "testName": self.test_name,
            "cost": self.cost,
            "method": self.method,
        }
