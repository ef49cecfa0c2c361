from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from labsheet.application.services.dashboard_service import DashboardService
from labsheet.application.services.gateway_service import STATUS_ERROR, GatewayService
from labsheet.application.services.project_service import ProjectService
from labsheet.application.services.record_store import RecordStore
from labsheet.core.config import AppPaths, load_result_typing
from labsheet.core.errors import LabSheetError
from labsheet.infrastructure.sheets.coercion import ResultTyping
from labsheet.infrastructure.sheets.schemas import EntityKind
from labsheet.infrastructure.workbook.base import TableBackend
from labsheet.infrastructure.workbook.xlsx_store import XlsxWorkbook


class GatewayResponseModel(BaseModel):
    status: str
    message: str


def create_app(
    paths: AppPaths,
    *,
    backend: TableBackend | None = None,
    result_typing: ResultTyping | None = None,
) -> FastAPI:
    app = FastAPI(title="labsheet", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if backend is None:
        ProjectService(paths).init_project()
        backend = XlsxWorkbook(paths.workbook_path)

    store = RecordStore(backend, result_typing=result_typing or load_result_typing())
    gateway = GatewayService(store)

    def _kind(raw: str) -> EntityKind:
        try:
            return EntityKind.parse(raw)
        except ValueError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @app.get("/")
    def fetch_all() -> dict[str, Any]:
        try:
            return gateway.fetch_all()
        except LabSheetError as exc:
            return {"status": STATUS_ERROR, "message": f"Fetch failed: {exc}"}

    @app.post("/", response_model=GatewayResponseModel)
    async def persist(request: Request) -> dict[str, str]:
        content_type = request.headers.get("content-type", "")
        if content_type.startswith("application/json"):
            body = await request.body()
            try:
                parsed = json.loads(body or b"null")
            except json.JSONDecodeError:
                response = await run_in_threadpool(gateway.handle_raw, body.decode("utf-8", errors="replace"))
                return response.to_dict()
            if isinstance(parsed, dict) and isinstance(parsed.get("payload"), str) and "action" not in parsed:
                response = await run_in_threadpool(gateway.handle_raw, parsed["payload"])
            else:
                response = await run_in_threadpool(gateway.handle, parsed)
            return response.to_dict()

        form = await request.form()
        raw = form.get("payload")
        response = await run_in_threadpool(gateway.handle_raw, raw if isinstance(raw, str) else None)
        return response.to_dict()

    @app.get("/api/records/{kind}")
    def list_records(kind: str) -> dict[str, Any]:
        entity_kind = _kind(kind)
        try:
            records = store.list_all(entity_kind)
        except LabSheetError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"kind": entity_kind.value, "count": len(records), "records": records}

    @app.get("/api/dashboard")
    def dashboard() -> dict[str, Any]:
        try:
            return asdict(DashboardService(store).summary())
        except LabSheetError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    return app
