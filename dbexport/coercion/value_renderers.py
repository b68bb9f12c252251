"""
Value Renderers
===============

Classifies raw backend values into cells and renders cells as
CSV fields, JSON values and SQL literals.

Every function here is pure: no I/O, no side effects.
"""

import base64
import json
from typing import Any

from dbexport.models import (
    Cell,
    CellKind,
    NullCell,
    TextCell,
    IntegerCell,
    RealCell,
    BooleanCell,
    BinaryCell,
    NULL,
    INT64_MIN,
    INT64_MAX,
)


# =============================================================================
# CONSTANTS
# =============================================================================

# Representation of NULL values in CSV
CSV_NULL = "NULL"
SQL_NULL = "NULL"
BASE64_PREFIX = "base64:"

# Characters that force a CSV field to be quoted
CSV_SPECIAL_CHARS = (",", '"', "\n")

_CELL_TYPES = (NullCell, TextCell, IntegerCell, RealCell, BooleanCell, BinaryCell)


# =============================================================================
# CLASSIFICATION
# =============================================================================

def to_cell(value: Any) -> Cell:
    """
    Classify a raw backend value into a cell.

    Anything that is not null, bool, 64-bit int, float, bytes or str
    is stringified and becomes text.
    """
    if isinstance(value, _CELL_TYPES):
        return value
    if value is None:
        return NULL
    # bool is a subclass of int, test it first
    if isinstance(value, bool):
        return BooleanCell(value=value)
    if isinstance(value, int):
        if INT64_MIN <= value <= INT64_MAX:
            return IntegerCell(value=value)
        return TextCell(value=str(value))
    if isinstance(value, float):
        return RealCell(value=value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BinaryCell(value=bytes(value))
    if isinstance(value, str):
        return TextCell(value=value)
    return TextCell(value=str(value))


def classify(value: Any) -> CellKind:
    """Return the kind of a cell, classifying raw values first."""
    return CellKind(to_cell(value).kind)


# =============================================================================
# SHARED HELPERS
# =============================================================================

def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _decode_json_text(data: bytes) -> str | None:
    """Return `data` as text if it is UTF-8 encoded JSON, else None."""
    try:
        text = data.decode("utf-8")
        json.loads(text, parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError):
        return None
    return text


def _pretty_json(data: bytes) -> str | None:
    """Re-encode JSON bytes as indented text, or None if not JSON."""
    text = _decode_json_text(data)
    if text is None:
        return None
    try:
        return json.dumps(json.loads(text), indent=2, ensure_ascii=False, allow_nan=False)
    except ValueError:
        # Out-of-range numbers such as 1e400 parse as infinity
        return None


def _base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def quoted_identifier(name: str) -> str:
    """Quote an SQL identifier, doubling embedded double quotes."""
    return '"' + name.replace('"', '""') + '"'


# =============================================================================
# CSV
# =============================================================================

def csv_escaped(value: str) -> str:
    """Quote a field if it contains a comma, a double quote or a newline."""
    if any(char in value for char in CSV_SPECIAL_CHARS):
        return '"' + value.replace('"', '""') + '"'
    return value


def csv_text(cell: Cell) -> str:
    """Unescaped CSV representation of a cell."""
    cell = to_cell(cell)
    if isinstance(cell, NullCell):
        return CSV_NULL
    if isinstance(cell, BinaryCell):
        text = _decode_json_text(cell.value)
        if text is not None:
            return text
        return BASE64_PREFIX + _base64(cell.value)
    if isinstance(cell, BooleanCell):
        return "true" if cell.value else "false"
    if isinstance(cell, RealCell):
        return repr(cell.value)
    return str(cell.value)


def to_csv_field(cell: Cell) -> str:
    """Render a cell as an escaped CSV field."""
    return csv_escaped(csv_text(cell))


# =============================================================================
# JSON
# =============================================================================

def to_json_value(cell: Cell) -> Any:
    """
    Render a cell as a JSON-compatible Python value.

    Blobs holding JSON text become the pretty-printed JSON string;
    other blobs become {"type": "blob", "size": n, "base64": ...}.
    """
    cell = to_cell(cell)
    if isinstance(cell, NullCell):
        return None
    if isinstance(cell, BinaryCell):
        pretty = _pretty_json(cell.value)
        if pretty is not None:
            return pretty
        return {
            "type": "blob",
            "size": len(cell.value),
            "base64": _base64(cell.value),
        }
    return cell.value


# =============================================================================
# SQL
# =============================================================================

def to_sql_literal(cell: Cell) -> str:
    """Render a cell as an SQLite literal."""
    cell = to_cell(cell)
    if isinstance(cell, NullCell):
        return SQL_NULL
    if isinstance(cell, BooleanCell):
        return "1" if cell.value else "0"
    if isinstance(cell, IntegerCell):
        return str(cell.value)
    if isinstance(cell, RealCell):
        return repr(cell.value)
    if isinstance(cell, BinaryCell):
        return "X'" + cell.value.hex().upper() + "'"
    return "'" + cell.value.replace("'", "''") + "'"
