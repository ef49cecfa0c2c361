from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console

from labsheet.cli.commands import (
    analyses_cmd,
    costs_cmd,
    dashboard_cmd,
    directory_cmd,
    init_cmd,
    records_cmd,
    web_cmd,
)
from labsheet.cli.context import CLIContext
from labsheet.core.config import load_paths
from labsheet.core.errors import LabSheetError
from labsheet.core.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="labsheet",
        description="Laboratory sample tracking on a spreadsheet workbook",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=Path.cwd(),
        help="Project root to use for .labsheet data (default: current working directory)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)

    subparsers = parser.add_subparsers(dest="command", required=True)
    init_cmd.register(subparsers)
    records_cmd.register(subparsers)
    directory_cmd.register(subparsers)
    costs_cmd.register(subparsers)
    analyses_cmd.register(subparsers)
    dashboard_cmd.register(subparsers)
    web_cmd.register(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    paths = load_paths(args.project_root)
    ctx = CLIContext(paths=paths, console=console)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 2

    try:
        return handler(args, ctx)
    except LabSheetError as exc:
        logger.error(str(exc))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
