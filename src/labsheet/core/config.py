from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from labsheet.core.errors import ConfigurationError
from labsheet.infrastructure.sheets.coercion import ResultTyping


@dataclass(frozen=True)
class AppPaths:
    project_root: Path
    labsheet_dir: Path
    workbook_path: Path


DEFAULT_LABSHEET_DIRNAME = ".labsheet"
DEFAULT_WORKBOOK_FILENAME = "labsheet.xlsx"


def load_paths(project_root: Path | None = None) -> AppPaths:
    root = (project_root or Path.cwd()).expanduser().resolve()

    labsheet_home_raw = os.getenv("LABSHEET_HOME")
    if labsheet_home_raw:
        labsheet_dir = Path(labsheet_home_raw).expanduser().resolve()
    else:
        labsheet_dir = root / DEFAULT_LABSHEET_DIRNAME

    workbook_raw = os.getenv("LABSHEET_WORKBOOK")
    if workbook_raw:
        workbook_path = Path(workbook_raw).expanduser().resolve()
    else:
        workbook_path = labsheet_dir / DEFAULT_WORKBOOK_FILENAME

    return AppPaths(
        project_root=root,
        labsheet_dir=labsheet_dir,
        workbook_path=workbook_path,
    )


def load_result_typing() -> ResultTyping:
    raw = (os.getenv("LABSHEET_RESULT_TYPING") or ResultTyping.DECLARED.value).strip().lower()
    try:
        return ResultTyping(raw)
    except ValueError as exc:
        allowed = ", ".join(policy.value for policy in ResultTyping)
        raise ConfigurationError(
            f"Invalid LABSHEET_RESULT_TYPING '{raw}' (expected one of: {allowed})"
        ) from exc
