"""
CSV Exporter
============

Encodes fetched tables as one CSV document.
One section per table with a header row; sections are separated by
a blank line and, when more than one table is exported, introduced
by a `# Table: <name>` comment line.
"""

from typing import Sequence

from dbexport.models import ExportMetadata, RowSet, Table
from dbexport.coercion import csv_escaped, to_csv_field
from dbexport.errors import NoTablesError, EncodingFailedError


# =============================================================================
# CONSTANTS
# =============================================================================

LINE_SEPARATOR = "\n"
SECTION_SEPARATOR = "\n\n"
FIELD_SEPARATOR = ","
TABLE_COMMENT_PREFIX = "# Table: "


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def export_to_csv(
    metadata: ExportMetadata,
    tables: Sequence[tuple[Table, RowSet]]
) -> bytes:
    """
    Encode tables as a UTF-8 CSV document.

    Args:
        metadata: Database-level facts (unused by CSV, kept for a uniform signature).
        tables: (table, fetched rows) pairs in export order.

    Returns:
        The document bytes.

    Raises:
        NoTablesError: If `tables` is empty.
        EncodingFailedError: If the text cannot be encoded as UTF-8.
    """
    if not tables:
        raise NoTablesError()

    include_table_headers = len(tables) > 1
    sections = [
        _render_section(table, row_set, include_table_headers)
        for table, row_set in tables
    ]

    try:
        return SECTION_SEPARATOR.join(sections).encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingFailedError(str(e)) from e


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

def _render_section(table: Table, row_set: RowSet, include_table_header: bool) -> str:
    lines = []
    if include_table_header:
        lines.append(f"{TABLE_COMMENT_PREFIX}{table.name}")

    lines.append(FIELD_SEPARATOR.join(csv_escaped(column) for column in row_set.columns))
    for row in row_set.rows:
        lines.append(FIELD_SEPARATOR.join(to_csv_field(cell) for cell in row_set.aligned(row)))

    return LINE_SEPARATOR.join(lines)
