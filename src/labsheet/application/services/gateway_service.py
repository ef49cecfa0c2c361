from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from labsheet.application.services.record_store import RecordStore
from labsheet.core.errors import GatewayError, LabSheetError
from labsheet.infrastructure.sheets.schemas import EntityKind

logger = logging.getLogger(__name__)

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"

ACTION_TEST_CONNECTION = "testConnection"
ACTION_CREATE = "create"
ACTION_UPDATE = "update"
ACTION_DELETE = "delete"

RESPONSE_KEYS: dict[EntityKind, str] = {
    EntityKind.CLIENT: "clients",
    EntityKind.TECHNICIAN: "technicians",
    EntityKind.ANALYSIS_TYPE: "analysisTypes",
    EntityKind.ANALYSIS_COST: "analysisCosts",
    EntityKind.ANALYSIS: "analysisResults",
}


@dataclass(slots=True)
class GatewayResponse:
    status: str
    message: str

    @property
    def ok(self) -> bool:
        return self.status == STATUS_SUCCESS

    def to_dict(self) -> dict[str, str]:
        return {"status": self.status, "message": self.message}


class GatewayService:
    """Request/response contract the front end talks to.

    ``fetch_all`` returns every entity list in one payload. ``handle`` takes
    ``{"action", "targetSheet", "payload"}`` and always answers with a status
    and message; failures are reported, never raised.
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def fetch_all(self) -> dict[str, list[dict[str, Any]]]:
        return {key: self.store.list_all(kind) for kind, key in RESPONSE_KEYS.items()}

    def handle_raw(self, raw_payload: str | None) -> GatewayResponse:
        if not raw_payload:
            return self._error("Invalid POST: 'payload' missing.")
        try:
            request = json.loads(raw_payload)
        except json.JSONDecodeError as exc:
            return self._error(f"Invalid POST: payload is not JSON ({exc.msg}).")
        return self.handle(request)

    def handle(self, request: Any) -> GatewayResponse:
        try:
            return self._dispatch(request)
        except LabSheetError as exc:
            return self._error(str(exc))

    def kind_for_sheet(self, sheet_name: str) -> EntityKind:
        for kind, schema in self.store.schemas.items():
            if schema.sheet_name == sheet_name:
                return kind
        raise GatewayError(f"Sheet '{sheet_name}' not found. Check name (case-sensitive).")

    def _dispatch(self, request: Any) -> GatewayResponse:
        if not isinstance(request, Mapping):
            raise GatewayError("Request must be a JSON object.")
        action = request.get("action")
        if action == ACTION_TEST_CONNECTION:
            return GatewayResponse(status=STATUS_SUCCESS, message="Connection successful.")

        target_sheet = request.get("targetSheet")
        payload = request.get("payload")
        if not action or not target_sheet or not payload:
            raise GatewayError("Request requires 'action', 'targetSheet', 'payload'.")
        if not isinstance(payload, Mapping):
            raise GatewayError("'payload' must be a JSON object.")

        kind = self.kind_for_sheet(str(target_sheet))
        if action == ACTION_DELETE:
            outcome = self.store.remove(kind, payload.get("id"))
            if outcome.removed:
                return GatewayResponse(
                    status=STATUS_SUCCESS,
                    message=f"Row deleted successfully from {target_sheet}",
                )
            return GatewayResponse(status=STATUS_SUCCESS, message="Row already deleted or not found.")
        if action in (ACTION_CREATE, ACTION_UPDATE):
            self.store.upsert(kind, payload)
            return GatewayResponse(status=STATUS_SUCCESS, message="Data saved successfully.")
        raise GatewayError(f"Unknown action: '{action}'.")

    @staticmethod
    def _error(message: str) -> GatewayResponse:
        logger.error("Gateway request failed: %s", message)
        return GatewayResponse(status=STATUS_ERROR, message=message)
