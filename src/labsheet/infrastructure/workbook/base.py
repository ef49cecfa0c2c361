from __future__ import annotations

from typing import Protocol

from labsheet.domain.models.table import SheetTable


class TableBackend(Protocol):
    """Where sheet snapshots come from and go back to."""

    def read_table(self, sheet_name: str) -> SheetTable | None: ...

    def write_table(self, table: SheetTable) -> None: ...
