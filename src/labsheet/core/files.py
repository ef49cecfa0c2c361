from __future__ import annotations

import os
from pathlib import Path


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def temp_sibling(dst: Path) -> Path:
    return dst.parent / f".{dst.name}.tmp"


def replace_atomic(temp_path: Path, dst: Path) -> None:
    ensure_directory(dst.parent)
    os.replace(temp_path, dst)
