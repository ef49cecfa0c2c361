from __future__ import annotations

from datetime import date, datetime


def today_iso() -> str:
    return date.today().isoformat()


def as_iso_date(value: object) -> str:
    """Render a cell value as ISO text; spreadsheet libraries hand back datetimes for date cells."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)
