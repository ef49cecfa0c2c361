"""Cell coercion rules shared by the row decoder and encoder.

Fixed columns and sparse result cells treat emptiness differently: an empty
fixed column decodes to ``""`` (no data for this field) while an empty result
cell decodes to ``None`` (no result recorded). Coercion never raises; a cell
that does not parse as its declared kind keeps its raw value.
"""

from __future__ import annotations

import json
import math
import re
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")


class FieldKind(str, Enum):
    TEXT = "text"
    NUMERIC = "numeric"
    LIST = "list"


class ResultTyping(str, Enum):
    """How sparse result cells are typed on decode.

    ``HEURISTIC`` turns any numeric-looking cell into a number. ``DECLARED``
    keeps cells of tests the catalog declares as ``text`` verbatim and applies
    the heuristic to numeric or uncatalogued tests.
    """

    HEURISTIC = "heuristic"
    DECLARED = "declared"


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def parse_number(value: Any) -> int | float | None:
    """Return ``value`` as a number when it looks like a plain decimal literal, else ``None``."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not _NUMBER_RE.match(text):
        return None
    try:
        if _INTEGER_RE.match(text):
            return int(text)
        parsed = float(text)
    except ValueError:
        # int() refuses digit strings past sys.get_int_max_str_digits()
        return None
    return parsed if math.isfinite(parsed) else None


def coerce_numeric(value: Any) -> Any:
    if is_blank(value):
        return value
    parsed = parse_number(value)
    return value if parsed is None else parsed


def split_list(value: Any) -> list[str]:
    if is_blank(value):
        return []
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value]
    return [item.strip() for item in str(value).split(",")]


def decode_text(value: Any) -> Any:
    return "" if value is None else value


def decode_field(value: Any, kind: FieldKind) -> Any:
    if kind is FieldKind.NUMERIC:
        return coerce_numeric(decode_text(value))
    if kind is FieldKind.LIST:
        return split_list(value)
    return decode_text(value)


def encode_cell(value: Any) -> Any:
    """Cell value for ``value``: lists join with commas, objects become JSON text."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else str(item) for item in value)
    if isinstance(value, Mapping):
        return json.dumps(value, default=str)
    if isinstance(value, (str, int, float, Decimal, date, time)):
        return value
    return str(value)


def coerce_result_value(
    value: Any,
    declared_kind: str | None = None,
    typing: ResultTyping = ResultTyping.HEURISTIC,
) -> Any:
    if is_blank(value):
        return None
    if typing is ResultTyping.DECLARED and declared_kind == FieldKind.TEXT.value:
        return value
    parsed = parse_number(value)
    return value if parsed is None else parsed
