"""
Export Validators
=================

Validates exported documents for correctness.
Performs sanity checks on JSON, CSV, and SQL outputs before they
are written out.
"""

import csv
import io
import json
import re

from dbexport.models import ExportFormat
from dbexport.errors import ExportValidationError


# =============================================================================
# CONSTANTS
# =============================================================================

JSON_ROOT_KEYS = frozenset({"database", "databaseType", "exportedAt", "tables"})
JSON_TABLE_KEYS = frozenset({"name", "columns", "rowCount", "rows"})

# Tokens of an SQL script. A lone quote only matches when its literal
# is never closed.
_SQL_TOKEN = re.compile(r"""'(?:[^']|'')*'|"(?:[^"]|"")*"|--[^\n]*|;|[^'";-]+|-|['"]""")


# =============================================================================
# SHARED HELPERS
# =============================================================================

def _decode(content: bytes, label: str) -> str:
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ExportValidationError(f"{label} export is not valid UTF-8: {e}") from e


# =============================================================================
# JSON VALIDATION
# =============================================================================

def validate_json_export(content: bytes, expected_tables: int | None = None) -> bool:
    """
    Validate a JSON export is parseable and has the expected shape.

    Args:
        content: Document bytes.
        expected_tables: Optional number of tables the document must hold.

    Returns:
        True if the document is valid.

    Raises:
        ExportValidationError: If validation fails.
    """
    try:
        document = json.loads(_decode(content, "JSON"))
    except json.JSONDecodeError as e:
        raise ExportValidationError(f"Invalid JSON: {e}") from e

    if not isinstance(document, dict) or set(document) != JSON_ROOT_KEYS:
        raise ExportValidationError(
            f"JSON root must have exactly the keys {sorted(JSON_ROOT_KEYS)}"
        )

    tables = document["tables"]
    if expected_tables is not None and len(tables) != expected_tables:
        raise ExportValidationError(
            f"JSON has {len(tables)} tables, expected {expected_tables}"
        )

    for table in tables:
        if not isinstance(table, dict) or set(table) != JSON_TABLE_KEYS:
            raise ExportValidationError(
                f"JSON table must have exactly the keys {sorted(JSON_TABLE_KEYS)}"
            )
        if table["rowCount"] != len(table["rows"]):
            raise ExportValidationError(
                f"JSON table {table['name']} has {len(table['rows'])} rows, "
                f"rowCount says {table['rowCount']}"
            )

    return True


# =============================================================================
# CSV VALIDATION
# =============================================================================

def validate_csv_export(content: bytes, expected_tables: int | None = None) -> bool:
    """
    Validate a CSV export parses and has a comment for every section.

    A single table with no columns and no rows encodes as the empty
    document, which is valid.

    Raises:
        ExportValidationError: If validation fails.
    """
    text = _decode(content, "CSV")

    try:
        list(csv.reader(io.StringIO(text, newline=""), strict=True))
    except csv.Error as e:
        raise ExportValidationError(f"Failed to parse CSV: {e}") from e

    if expected_tables is not None and expected_tables > 1:
        comment_count = sum(
            1 for line in text.split("\n")
            if line.startswith("# Table: ")
        )
        if comment_count < expected_tables:
            raise ExportValidationError(
                f"CSV has {comment_count} table comments, expected {expected_tables}"
            )

    return True


# =============================================================================
# SQL VALIDATION
# =============================================================================

def _split_statements(text: str) -> list[str]:
    """
    Split an SQL script into statements.

    Semicolons inside string literals and quoted identifiers do not end a
    statement, and `--` comments are dropped.

    Raises:
        ExportValidationError: On an unterminated literal or trailing text.
    """
    statements = []
    current = []
    for match in _SQL_TOKEN.finditer(text):
        token = match.group(0)
        if token.startswith("--"):
            continue
        if token in ("'", '"'):
            raise ExportValidationError("SQL dump has an unterminated quoted literal")
        if token == ";":
            statements.append("".join(current).strip())
            current = []
        else:
            current.append(token)

    if "".join(current).strip():
        raise ExportValidationError("SQL dump has text after the last statement")
    return statements


def validate_sql_export(content: bytes, expected_tables: int | None = None) -> bool:
    """
    Validate an SQL dump has basic structure.

    Performs lightweight checks on the statements of the dump:
    - Opens with PRAGMA foreign_keys=OFF and BEGIN TRANSACTION
    - Ends with COMMIT
    - One DROP TABLE per CREATE TABLE

    Raises:
        ExportValidationError: If validation fails.
    """
    statements = _split_statements(_decode(content, "SQL"))

    if statements[:2] != ["PRAGMA foreign_keys=OFF", "BEGIN TRANSACTION"]:
        raise ExportValidationError(
            "SQL dump must open with PRAGMA foreign_keys=OFF; and BEGIN TRANSACTION;"
        )

    if statements[-1] != "COMMIT":
        raise ExportValidationError("SQL dump does not end with COMMIT;")

    drops = sum(1 for statement in statements if statement.startswith("DROP TABLE IF EXISTS "))
    creates = sum(1 for statement in statements if statement.startswith("CREATE TABLE "))
    if drops != creates:
        raise ExportValidationError(
            f"SQL dump has {drops} DROP TABLE and {creates} CREATE TABLE statements"
        )

    if expected_tables is not None and creates != expected_tables:
        raise ExportValidationError(
            f"SQL dump has {creates} tables, expected {expected_tables}"
        )

    return True


# =============================================================================
# DISPATCH
# =============================================================================

VALIDATORS = {
    ExportFormat.CSV: validate_csv_export,
    ExportFormat.JSON: validate_json_export,
    ExportFormat.SQL: validate_sql_export,
}


def validate_export(format: ExportFormat, content: bytes, expected_tables: int | None = None) -> bool:
    """Validate `content` with the validator for `format`."""
    return VALIDATORS[format](content, expected_tables)
