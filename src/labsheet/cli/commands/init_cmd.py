from __future__ import annotations

import argparse

from labsheet.application.services.project_service import ProjectService
from labsheet.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("init", help="Create the labsheet workbook with its sheets and headers")
    parser.add_argument(
        "--test-column",
        action="append",
        default=[],
        help="Result column to add to AnalysisResults (repeatable)",
    )
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    service = ProjectService(ctx.paths)
    result = service.init_project(test_columns=args.test_column)

    for path in result.paths_created:
        ctx.console.print(f"[green]Created[/green] {path}")
    if result.sheets_created:
        for sheet in result.sheets_created:
            ctx.console.print(f"[green]Created sheet[/green] {sheet}")
    else:
        ctx.console.print("[yellow]All sheets already existed[/yellow]")

    ctx.console.print(f"[green]Workbook ready[/green] {result.workbook_path}")
    return 0
