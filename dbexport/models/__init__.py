"""
Models Module
=============

Pydantic models for the value model, table schemas and export requests.
"""

from .cells import (
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

from .tables import (
    DatabaseType,
    DatabaseFile,
    ExportFormat,
    ColumnSchema,
    Table,
    RowSet,
    ExportMetadata,
    ExportRequest,
    DEFAULT_COLUMN_TYPE,
)

__all__ = [
    # Cells
    "Cell",
    "CellKind",
    "NullCell",
    "TextCell",
    "IntegerCell",
    "RealCell",
    "BooleanCell",
    "BinaryCell",
    "NULL",
    "INT64_MIN",
    "INT64_MAX",

    # Tables
    "DatabaseType",
    "DatabaseFile",
    "ExportFormat",
    "ColumnSchema",
    "Table",
    "RowSet",
    "ExportMetadata",
    "ExportRequest",
    "DEFAULT_COLUMN_TYPE",
]
