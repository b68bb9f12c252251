"""
Export Orchestrator
===================

Drives one export start to finish:

    select tables -> fetch every table -> encode -> (validate) -> write

Everything runs sequentially so table order in the document is the
selection order. The first failure aborts the whole export and is
raised unchanged; nothing is written unless every step succeeded.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Protocol, Sequence

from dbexport.models import (
    DatabaseFile,
    ExportFormat,
    ExportMetadata,
    ExportRequest,
    RowSet,
    Table,
)
from dbexport.errors import NoTablesError
from dbexport.fetch import TableDataFetcher
from .artifact_writer import make_export_file_name, write_artifact
from .csv_exporter import export_to_csv
from .json_exporter import export_to_json
from .sql_exporter import export_to_sql
from .export_validators import validate_export


# =============================================================================
# DATA STRUCTURES
# =============================================================================

class RowFetcher(Protocol):
    def fetch(self, table: Table) -> RowSet: ...


Encoder = Callable[[ExportMetadata, Sequence[tuple[Table, RowSet]]], bytes]


@dataclass
class ExportResult:
    """Outcome of a successful export."""
    path: str
    file_name: str
    format: ExportFormat
    table_count: int
    byte_count: int


# =============================================================================
# CONSTANTS
# =============================================================================

ENCODERS: dict[ExportFormat, Encoder] = {
    ExportFormat.CSV: export_to_csv,
    ExportFormat.JSON: export_to_json,
    ExportFormat.SQL: export_to_sql,
}


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def select_tables(tables: list[Table], table_name: str | None = None) -> list[Table]:
    """
    Resolve the user's selection: every table, or the one named.

    Raises:
        NoTablesError: If nothing is selected.
    """
    if not tables:
        raise NoTablesError()
    if table_name is None:
        return list(tables)

    selected = [table for table in tables if table.name == table_name]
    if not selected:
        raise NoTablesError(f"Table '{table_name}' was not found to export.")
    return selected[:1]


def encode_tables(
    format: ExportFormat,
    metadata: ExportMetadata,
    tables: Sequence[tuple[Table, RowSet]]
) -> bytes:
    """Encode already-fetched tables with the encoder for `format`."""
    return ENCODERS[format](metadata, tables)


def run_export(
    request: ExportRequest,
    fetcher: RowFetcher,
    output_dir: str,
    now: datetime | None = None,
    validate: bool = False
) -> ExportResult:
    """
    Execute an export request and write the artifact.

    Args:
        request: Format and the tables to export, in order.
        fetcher: Source of row data for each table.
        output_dir: Directory the artifact is written to.
        now: Export time; defaults to the current local time.
        validate: Run the export validators before writing.

    Returns:
        ExportResult describing the written artifact.

    Raises:
        NoTablesError, QueryFailedError, UnexpectedResultError,
        EncodingFailedError, ExportValidationError, ArtifactWriteError.
    """
    if not request.tables:
        raise NoTablesError()

    exported_at = now or datetime.now().astimezone()

    fetched = [(table, fetcher.fetch(table)) for table in request.tables]
    content = encode_tables(request.format, request.metadata(exported_at), fetched)

    if validate:
        validate_export(request.format, content, expected_tables=len(fetched))

    file_name = make_export_file_name(
        request.database_name,
        request.format,
        request.tables,
        exported_at
    )
    path = write_artifact(output_dir, file_name, content)

    return ExportResult(
        path=str(path),
        file_name=file_name,
        format=request.format,
        table_count=len(fetched),
        byte_count=len(content),
    )


def export_database(
    database: DatabaseFile,
    format: ExportFormat,
    output_dir: str,
    table_name: str | None = None,
    fetcher: TableDataFetcher | None = None,
    now: datetime | None = None,
    validate: bool = False
) -> ExportResult:
    """
    List the database's tables, select all or one, and export them.

    Raises:
        TableListingError: If the database's tables cannot be listed.
        Any error of run_export().
    """
    fetcher = fetcher or TableDataFetcher(database)
    selected = select_tables(fetcher.list_tables(), table_name)
    request = ExportRequest.for_database(database, format, selected)
    return run_export(request, fetcher, output_dir, now=now, validate=validate)
