from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from labsheet.core.config import AppPaths
from labsheet.core.files import ensure_directory
from labsheet.infrastructure.sheets.schemas import DEFAULT_SCHEMAS, EntityKind, EntitySchema
from labsheet.infrastructure.workbook.xlsx_store import XlsxWorkbook


@dataclass(slots=True)
class InitResult:
    paths_created: list[Path]
    workbook_path: Path
    sheets_created: list[str]


class ProjectService:
    def __init__(
        self,
        paths: AppPaths,
        schemas: Mapping[EntityKind, EntitySchema] = DEFAULT_SCHEMAS,
    ) -> None:
        self.paths = paths
        self.schemas = schemas

    def workbook(self) -> XlsxWorkbook:
        return XlsxWorkbook(self.paths.workbook_path)

    def init_project(self, test_columns: list[str] | None = None) -> InitResult:
        paths_created: list[Path] = []
        if not self.paths.labsheet_dir.exists():
            paths_created.append(self.paths.labsheet_dir)
        ensure_directory(self.paths.labsheet_dir)

        sheets: dict[str, list[str]] = {}
        for schema in self.schemas.values():
            headers = schema.default_headers
            if schema.open_schema and test_columns:
                headers = headers + [name for name in test_columns if name not in headers]
            sheets[schema.sheet_name] = headers

        created = self.workbook().ensure_sheets(sheets)
        return InitResult(
            paths_created=paths_created,
            workbook_path=self.paths.workbook_path,
            sheets_created=created,
        )

    def is_initialized(self) -> bool:
        return self.paths.workbook_path.exists()
