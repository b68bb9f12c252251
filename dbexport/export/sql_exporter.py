"""
SQL Exporter
============

Encodes fetched tables as an SQLite dump:

    -- header comments
    PRAGMA foreign_keys=OFF;
    BEGIN TRANSACTION;
    per table: DROP TABLE IF EXISTS, CREATE TABLE, INSERT INTO ...
    COMMIT;

No other statement types are emitted.
"""

from typing import Sequence

from dbexport.models import ColumnSchema, ExportMetadata, RowSet, Table
from dbexport.coercion import quoted_identifier, to_sql_literal
from dbexport.errors import NoTablesError, EncodingFailedError
from .json_exporter import iso_timestamp


# =============================================================================
# CONSTANTS
# =============================================================================

TOOL_NAME = "dbexport"
COLUMN_INDENT = "    "


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def export_to_sql(
    metadata: ExportMetadata,
    tables: Sequence[tuple[Table, RowSet]]
) -> bytes:
    """
    Encode tables as a transactional SQL dump.

    Column definitions come from each table's schema; a table without
    schema gets TEXT, nullable, non-key columns named after the fetched
    columns.

    Raises:
        NoTablesError: If `tables` is empty.
        EncodingFailedError: If the text cannot be encoded as UTF-8.
    """
    if not tables:
        raise NoTablesError()

    lines = [
        f"-- {TOOL_NAME} SQL Export",
        f"-- Database: {_comment_text(metadata.database_name)}",
        f"-- Generated: {iso_timestamp(metadata.exported_at)}",
        "PRAGMA foreign_keys=OFF;",
        "BEGIN TRANSACTION;",
        "",
    ]

    for table, row_set in tables:
        lines.extend(_table_statements(table, row_set))
        lines.append("")

    lines.append("COMMIT;")

    try:
        return "\n".join(lines).encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingFailedError(str(e)) from e


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

def _comment_text(value: str) -> str:
    # A line break would end the comment and leak the rest into the script
    return value.replace("\r", " ").replace("\n", " ")


def _schema_columns(table: Table, row_set: RowSet) -> list[ColumnSchema]:
    if table.columns:
        return table.columns
    return [
        ColumnSchema(name=name, declared_type="TEXT", is_primary_key=False, is_nullable=True)
        for name in row_set.columns
    ]


def _column_definition(column: ColumnSchema) -> str:
    parts = [quoted_identifier(column.name), column.effective_type]
    if not column.is_nullable:
        parts.append("NOT NULL")
    if column.is_primary_key:
        parts.append("PRIMARY KEY")
    return COLUMN_INDENT + " ".join(parts)


def _table_statements(table: Table, row_set: RowSet) -> list[str]:
    table_identifier = quoted_identifier(table.name)
    definitions = [_column_definition(column) for column in _schema_columns(table, row_set)]

    lines = [
        f"-- Table: {_comment_text(table.name)}",
        f"DROP TABLE IF EXISTS {table_identifier};",
        f"CREATE TABLE {table_identifier} (",
        ",\n".join(definitions),
        ");",
    ]

    if not row_set.columns:
        return lines

    column_list = ", ".join(quoted_identifier(column) for column in row_set.columns)
    for row in row_set.rows:
        values = ", ".join(to_sql_literal(cell) for cell in row_set.aligned(row))
        lines.append(f"INSERT INTO {table_identifier} ({column_list}) VALUES ({values});")

    return lines
