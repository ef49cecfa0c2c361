from __future__ import annotations

import argparse

from rich.table import Table

from labsheet.application.services.directory_service import DirectoryService
from labsheet.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    clients = subparsers.add_parser("clients", help="Client directory")
    clients_subparsers = clients.add_subparsers(dest="clients_command", required=True)

    clients_list = clients_subparsers.add_parser("list", help="List clients")
    clients_list.set_defaults(handler=run_clients_list)

    clients_add = clients_subparsers.add_parser("add", help="Add a client")
    clients_add.add_argument("--name", required=True)
    clients_add.add_argument("--contact", required=True, help="Contact person")
    clients_add.add_argument("--email", required=True)
    clients_add.add_argument("--phone", default="")
    clients_add.set_defaults(handler=run_clients_add)

    technicians = subparsers.add_parser("technicians", help="Technician directory")
    technicians_subparsers = technicians.add_subparsers(dest="technicians_command", required=True)

    technicians_list = technicians_subparsers.add_parser("list", help="List technicians")
    technicians_list.set_defaults(handler=run_technicians_list)

    technicians_add = technicians_subparsers.add_parser("add", help="Add a technician")
    technicians_add.add_argument("--name", required=True)
    technicians_add.add_argument("--specialty", required=True)
    technicians_add.add_argument("--hire-date", required=True, help="ISO date")
    technicians_add.set_defaults(handler=run_technicians_add)


def run_clients_list(args: argparse.Namespace, ctx: CLIContext) -> int:
    clients = DirectoryService(ctx.record_store()).list_clients()

    out = Table(title=f"Clients ({len(clients)})")
    out.add_column("ID")
    out.add_column("Name")
    out.add_column("Contact")
    out.add_column("Email")
    out.add_column("Phone")
    for c in clients:
        out.add_row(c.id, c.name, c.contact_person, c.email, c.phone)

    ctx.console.print(out)
    return 0


def run_clients_add(args: argparse.Namespace, ctx: CLIContext) -> int:
    client = DirectoryService(ctx.record_store()).add_client(args.name, args.contact, args.email, args.phone)
    ctx.console.print(f"[green]Added client[/green] {client.name} ({client.id})")
    return 0


def run_technicians_list(args: argparse.Namespace, ctx: CLIContext) -> int:
    technicians = DirectoryService(ctx.record_store()).list_technicians()

    out = Table(title=f"Technicians ({len(technicians)})")
    out.add_column("ID")
    out.add_column("Name")
    out.add_column("Specialty")
    out.add_column("Hire Date")
    for t in technicians:
        out.add_row(t.id, t.name, t.specialty, t.hire_date)

    ctx.console.print(out)
    return 0


def run_technicians_add(args: argparse.Namespace, ctx: CLIContext) -> int:
    technician = DirectoryService(ctx.record_store()).add_technician(args.name, args.specialty, args.hire_date)
    ctx.console.print(f"[green]Added technician[/green] {technician.name} ({technician.id})")
    return 0
