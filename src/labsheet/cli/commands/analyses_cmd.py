from __future__ import annotations

import argparse

from rich.panel import Panel
from rich.table import Table

from labsheet.application.services.analysis_service import AnalysisService
from labsheet.cli.context import CLIContext
from labsheet.core.errors import ValidationError
from labsheet.domain.models.analysis import PRIORITIES, STATUSES


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("analyses", help="Analysis requests and results")
    analyses_subparsers = parser.add_subparsers(dest="analyses_command", required=True)

    request_parser = analyses_subparsers.add_parser("request", help="Register a new sample for analysis")
    request_parser.add_argument("--client", required=True, help="Client id")
    request_parser.add_argument("--technician", required=True, help="Technician id")
    request_parser.add_argument("--test", action="append", required=True, help="Test name (repeatable)")
    request_parser.add_argument("--sample", required=True, help="Sample name")
    request_parser.add_argument("--product", default="")
    request_parser.add_argument("--subtype", default="")
    request_parser.add_argument("--priority", default="Normal", choices=list(PRIORITIES))
    request_parser.add_argument("--reception-date", help="ISO date (default: today)")
    request_parser.set_defaults(handler=run_request)

    results_parser = analyses_subparsers.add_parser("results", help="Record test results")
    results_parser.add_argument("--id", required=True, help="Analysis id")
    results_parser.add_argument(
        "--value",
        action="append",
        default=[],
        metavar="TEST=VALUE",
        help="Result for one requested test (repeatable; empty value clears it)",
    )
    results_parser.add_argument("--status", choices=list(STATUSES))
    results_parser.add_argument("--delivery-date")
    results_parser.set_defaults(handler=run_results)

    search_parser = analyses_subparsers.add_parser("search", help="Search analyses")
    search_parser.add_argument("--folio")
    search_parser.add_argument("--client", help="Client name fragment")
    search_parser.set_defaults(handler=run_search)

    delete_parser = analyses_subparsers.add_parser("delete", help="Delete an analysis")
    delete_parser.add_argument("--id", required=True)
    delete_parser.set_defaults(handler=run_delete)


def _parse_values(pairs: list[str]) -> dict[str, str]:
    values: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValidationError(f"Expected TEST=VALUE, got: {pair}")
        name, value = pair.split("=", 1)
        values[name.strip()] = value.strip()
    return values


def run_request(args: argparse.Namespace, ctx: CLIContext) -> int:
    service = AnalysisService(ctx.record_store())
    analysis = service.request_analysis(
        client_id=args.client,
        technician_id=args.technician,
        test_names=args.test,
        sample_name=args.sample,
        product=args.product,
        subtype=args.subtype,
        priority=args.priority,
        reception_date=args.reception_date,
    )

    ctx.console.print(
        Panel.fit(
            "\n".join(
                [
                    f"Folio: {analysis.folio}",
                    f"Analysis ID: {analysis.id}",
                    f"Tests: {', '.join(analysis.requested_tests)}",
                    f"Total cost: ${analysis.cost:.2f}",
                ]
            ),
            title="Analysis Request",
        )
    )
    return 0


def run_results(args: argparse.Namespace, ctx: CLIContext) -> int:
    service = AnalysisService(ctx.record_store())
    analysis = service.record_results(
        args.id,
        _parse_values(args.value),
        status=args.status,
        delivery_date=args.delivery_date,
    )

    out = Table(title=f"Results for folio {analysis.folio} ({analysis.status})")
    out.add_column("Test")
    out.add_column("Value")
    for item in analysis.results:
        out.add_row(item.test_name, "" if item.value is None else str(item.value))
    ctx.console.print(out)
    return 0


def run_search(args: argparse.Namespace, ctx: CLIContext) -> int:
    analyses = AnalysisService(ctx.record_store()).search(folio=args.folio, client_name=args.client)

    out = Table(title=f"Analyses ({len(analyses)})")
    out.add_column("ID")
    out.add_column("Folio")
    out.add_column("Received")
    out.add_column("Sample", overflow="fold")
    out.add_column("Status")
    out.add_column("Cost ($)", justify="right")
    out.add_column("Tests", overflow="fold")
    for a in analyses:
        out.add_row(
            a.id,
            a.folio,
            a.reception_date,
            a.sample_name,
            a.status,
            f"{a.cost:.2f}",
            ", ".join(a.requested_tests),
        )

    ctx.console.print(out)
    return 0


def run_delete(args: argparse.Namespace, ctx: CLIContext) -> int:
    outcome = AnalysisService(ctx.record_store()).delete_analysis(args.id)
    if outcome.removed:
        ctx.console.print(f"[green]Deleted[/green] analysis {args.id}")
    else:
        ctx.console.print(f"[yellow]Already deleted or not found[/yellow] analysis {args.id}")
    return 0
