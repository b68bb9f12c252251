"""
JSON Exporter
=============

Encodes fetched tables as one JSON document.
Deterministic output with consistent key ordering.
"""

import json
from datetime import datetime, timezone
from typing import Any, Sequence

from dbexport.models import ExportMetadata, RowSet, Table
from dbexport.coercion import to_json_value
from dbexport.errors import NoTablesError, EncodingFailedError


# =============================================================================
# CONSTANTS
# =============================================================================

ISO_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def export_to_json(
    metadata: ExportMetadata,
    tables: Sequence[tuple[Table, RowSet]]
) -> bytes:
    """
    Encode tables as a pretty-printed, key-sorted JSON document.

    Root keys: database, databaseType, exportedAt, tables.
    Each table: name, columns, rowCount, rows.

    Raises:
        NoTablesError: If `tables` is empty.
        EncodingFailedError: If the payload has no valid JSON rendering
            (non-finite floats) or cannot be encoded as UTF-8.
    """
    if not tables:
        raise NoTablesError()

    payload = {
        "database": metadata.database_name,
        "databaseType": metadata.database_type_label,
        "exportedAt": iso_timestamp(metadata.exported_at),
        "tables": [_table_payload(table, row_set) for table, row_set in tables],
    }

    try:
        text = json.dumps(
            payload,
            indent=2,
            ensure_ascii=False,
            sort_keys=True,  # Deterministic key order
            allow_nan=False
        )
        return text.encode("utf-8")
    except (ValueError, TypeError) as e:
        raise EncodingFailedError(str(e)) from e


def iso_timestamp(moment: datetime) -> str:
    """Format a datetime as UTC ISO-8601 without fractional seconds."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment.astimezone(timezone.utc).strftime(ISO_TIMESTAMP_FORMAT)


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

def _table_payload(table: Table, row_set: RowSet) -> dict[str, Any]:
    rows = [_row_object(row_set, row) for row in row_set.rows]
    return {
        "name": table.name,
        "columns": list(row_set.columns),
        "rowCount": len(rows),
        "rows": rows,
    }


def _row_object(row_set: RowSet, row: list) -> dict[str, Any]:
    """Key cells by column name; a later duplicate column overwrites an earlier one."""
    row_object: dict[str, Any] = {}
    for column, cell in zip(row_set.columns, row_set.aligned(row)):
        row_object[column] = to_json_value(cell)
    return row_object
