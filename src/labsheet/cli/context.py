from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console

from labsheet.application.services.project_service import ProjectService
from labsheet.application.services.record_store import RecordStore
from labsheet.core.config import AppPaths, load_result_typing
from labsheet.core.errors import ConfigurationError
from labsheet.infrastructure.workbook.xlsx_store import XlsxWorkbook


@dataclass(slots=True)
class CLIContext:
    paths: AppPaths
    console: Console

    def record_store(self) -> RecordStore:
        if not ProjectService(self.paths).is_initialized():
            raise ConfigurationError(
                f"Workbook not found at {self.paths.workbook_path}. Run 'labsheet init' first."
            )
        return RecordStore(XlsxWorkbook(self.paths.workbook_path), result_typing=load_result_typing())
