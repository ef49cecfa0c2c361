from __future__ import annotations

import argparse

from rich.panel import Panel
from rich.table import Table

from labsheet.application.services.dashboard_service import DashboardService
from labsheet.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("dashboard", help="Show client, analysis and revenue totals")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    summary = DashboardService(ctx.record_store()).summary()

    ctx.console.print(
        Panel.fit(
            "\n".join(
                [
                    f"Total clients: {summary.total_clients}",
                    f"Total analyses: {summary.total_analyses}",
                    f"Total revenue: ${summary.total_revenue:,.2f}",
                ]
            ),
            title="Dashboard",
        )
    )

    per_client = Table(title="Analyses per client")
    per_client.add_column("Client")
    per_client.add_column("Analyses", justify="right")
    for name, count in summary.analyses_per_client.items():
        per_client.add_row(name, str(count))
    ctx.console.print(per_client)

    per_tech = Table(title="Cost per technician")
    per_tech.add_column("Technician")
    per_tech.add_column("Cost ($)", justify="right")
    for name, total in summary.cost_per_technician.items():
        per_tech.add_row(name, f"{total:,.2f}")
    ctx.console.print(per_tech)

    statuses = Table(title="Status")
    statuses.add_column("Status")
    statuses.add_column("Count", justify="right")
    for status, count in summary.status_counts.items():
        statuses.add_row(status, str(count))
    ctx.console.print(statuses)
    return 0
