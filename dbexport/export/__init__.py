"""
Export Module
=============

Encodes fetched tables to CSV, JSON, and SQL documents and drives
whole exports from table selection to the written artifact.

This is a deterministic export layer: same tables, same timestamp,
same bytes.
"""

from .csv_exporter import export_to_csv
from .json_exporter import export_to_json, iso_timestamp
from .sql_exporter import export_to_sql

from .export_validators import (
    validate_json_export,
    validate_csv_export,
    validate_sql_export,
    validate_export,
)

from .artifact_writer import (
    sanitized_file_component,
    make_export_file_name,
    write_artifact,
)

from .orchestrator import (
    ExportResult,
    ENCODERS,
    select_tables,
    encode_tables,
    run_export,
    export_database,
)

__all__ = [
    # Encoders
    "export_to_csv",
    "export_to_json",
    "export_to_sql",
    "iso_timestamp",

    # Validation
    "validate_json_export",
    "validate_csv_export",
    "validate_sql_export",
    "validate_export",

    # Artifacts
    "sanitized_file_component",
    "make_export_file_name",
    "write_artifact",

    # Orchestration
    "ExportResult",
    "ENCODERS",
    "select_tables",
    "encode_tables",
    "run_export",
    "export_database",
]
