from __future__ import annotations

import argparse

from rich.table import Table

from labsheet.application.services.catalog_service import CatalogService
from labsheet.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("costs", help="Analysis price list")
    costs_subparsers = parser.add_subparsers(dest="costs_command", required=True)

    list_parser = costs_subparsers.add_parser("list", help="List analysis costs")
    list_parser.set_defaults(handler=run_list)

    add_parser = costs_subparsers.add_parser("add", help="Price an analysis type")
    add_parser.add_argument("--test", required=True, help="Test name from the AnalysisTypes sheet")
    add_parser.add_argument("--cost", required=True, type=float)
    add_parser.add_argument("--method", required=True, help="e.g. AOAC 984.13")
    add_parser.set_defaults(handler=run_add)

    unpriced_parser = costs_subparsers.add_parser("unpriced", help="Analysis types without a cost")
    unpriced_parser.set_defaults(handler=run_unpriced)


def run_list(args: argparse.Namespace, ctx: CLIContext) -> int:
    costs = CatalogService(ctx.record_store()).list_analysis_costs()

    out = Table(title=f"Analysis Costs ({len(costs)})")
    out.add_column("Test Name")
    out.add_column("Method", overflow="fold")
    out.add_column("Cost ($)", justify="right")
    for c in costs:
        out.add_row(c.test_name, c.method, f"{c.cost:.2f}")

    ctx.console.print(out)
    return 0


def run_add(args: argparse.Namespace, ctx: CLIContext) -> int:
    entry = CatalogService(ctx.record_store()).add_analysis_cost(args.test, args.cost, args.method)
    ctx.console.print(f"[green]Saved[/green] {entry.test_name} at ${entry.cost:.2f} ({entry.id})")
    return 0


def run_unpriced(args: argparse.Namespace, ctx: CLIContext) -> int:
    types = CatalogService(ctx.record_store()).unpriced_analysis_types()

    out = Table(title=f"Unpriced Analysis Types ({len(types)})")
    out.add_column("Test Name")
    out.add_column("Units")
    out.add_column("Result Type")
    for t in types:
        out.add_row(t.test_name, t.units, t.result_type)

    ctx.console.print(out)
    return 0
