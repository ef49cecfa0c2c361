from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from rich.table import Table

from labsheet.cli.context import CLIContext
from labsheet.core.errors import ValidationError
from labsheet.infrastructure.sheets.schemas import RESULTS_FIELD, EntityKind

KIND_CHOICES = [kind.value for kind in EntityKind]


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("records", help="List, upsert and delete records of any entity kind")
    records_subparsers = parser.add_subparsers(dest="records_command", required=True)

    list_parser = records_subparsers.add_parser("list", help="List records")
    list_parser.add_argument("kind", choices=KIND_CHOICES)
    list_parser.add_argument("--json", action="store_true", help="Print records as JSON")
    list_parser.set_defaults(handler=run_list)

    upsert_parser = records_subparsers.add_parser("upsert", help="Create or replace a record by id")
    upsert_parser.add_argument("kind", choices=KIND_CHOICES)
    source = upsert_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--json", dest="record_json", help="Record as a JSON object")
    source.add_argument("--file", help="Path to a JSON file holding the record")
    upsert_parser.set_defaults(handler=run_upsert)

    delete_parser = records_subparsers.add_parser("delete", help="Delete a record by id")
    delete_parser.add_argument("kind", choices=KIND_CHOICES)
    delete_parser.add_argument("--id", required=True)
    delete_parser.set_defaults(handler=run_delete)


def _cell_text(key: str, value: Any) -> str:
    if key == RESULTS_FIELD and isinstance(value, list):
        return "; ".join(f"{item.get('testName')}={item.get('value')}" for item in value)
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return "" if value is None else str(value)


def run_list(args: argparse.Namespace, ctx: CLIContext) -> int:
    kind = EntityKind(args.kind)
    records = ctx.record_store().list_all(kind)

    if args.json:
        ctx.console.print_json(json.dumps(records, default=str))
        return 0

    columns: list[str] = []
    for record in records:
        for key in record:
            if key not in columns:
                columns.append(key)

    out = Table(title=f"{kind.value} ({len(records)})")
    for column in columns:
        out.add_column(column, overflow="fold")
    for record in records:
        out.add_row(*[_cell_text(column, record.get(column)) for column in columns])

    ctx.console.print(out)
    return 0


def _load_record(args: argparse.Namespace) -> dict[str, Any]:
    if args.file:
        try:
            raw = Path(args.file).read_text(encoding="utf-8")
        except OSError as exc:
            raise ValidationError(f"Cannot read record file {args.file}: {exc.strerror}") from exc
    else:
        raw = args.record_json
    try:
        record = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Record is not valid JSON: {exc.msg}") from exc
    if not isinstance(record, dict):
        raise ValidationError("Record must be a JSON object.")
    return record


def run_upsert(args: argparse.Namespace, ctx: CLIContext) -> int:
    kind = EntityKind(args.kind)
    outcome = ctx.record_store().upsert(kind, _load_record(args))
    ctx.console.print(f"[green]{outcome.action.capitalize()}[/green] {kind.value} at row {outcome.row_number}")
    return 0


def run_delete(args: argparse.Namespace, ctx: CLIContext) -> int:
    kind = EntityKind(args.kind)
    outcome = ctx.record_store().remove(kind, args.id)
    if outcome.removed:
        ctx.console.print(f"[green]Deleted[/green] {kind.value} {args.id} (row {outcome.row_number})")
    else:
        ctx.console.print(f"[yellow]Already deleted or not found[/yellow] {kind.value} {args.id}")
    return 0
