"""
Table Models (Pydantic)
=======================

Tables, column schemas, fetched row sets and export requests.
"""

from datetime import datetime
from enum import Enum
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .cells import Cell, NULL


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_COLUMN_TYPE = "TEXT"


# =============================================================================
# DATABASE DESCRIPTION
# =============================================================================

class DatabaseType(str, Enum):
    """Storage engines a database file can belong to."""
    SQLITE = "sqlite"
    CORE_DATA = "core_data"
    DOCUMENT = "document"

    @property
    def display_name(self) -> str:
        return {
            DatabaseType.SQLITE: "SQLite",
            DatabaseType.CORE_DATA: "Core Data",
            DatabaseType.DOCUMENT: "Document Store",
        }[self]

    @property
    def is_sql(self) -> bool:
        """Core Data stores are SQLite files underneath."""
        return self in (DatabaseType.SQLITE, DatabaseType.CORE_DATA)


class DatabaseFile(BaseModel):
    """A database on disk, as picked by the user."""
    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    type: DatabaseType = DatabaseType.SQLITE

    @classmethod
    def from_path(cls, path: str, type: DatabaseType = DatabaseType.SQLITE, name: str | None = None):
        return cls(name=name or Path(path).stem, path=path, type=type)


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"
    SQL = "sql"

    @property
    def file_extension(self) -> str:
        return self.value


# =============================================================================
# SCHEMA
# =============================================================================

class ColumnSchema(BaseModel):
    """Declared shape of one column."""
    model_config = ConfigDict(frozen=True)

    name: str
    declared_type: str = ""
    is_primary_key: bool = False
    is_nullable: bool = True

    @property
    def effective_type(self) -> str:
        return self.declared_type or DEFAULT_COLUMN_TYPE


class Table(BaseModel):
    """A named relation. `columns` is empty when introspection is unavailable."""
    model_config = ConfigDict(frozen=True)

    name: str
    columns: list[ColumnSchema] = Field(default_factory=list)


# =============================================================================
# FETCHED DATA
# =============================================================================

class RowSet(BaseModel):
    """
    Column names and rows realized for one table at export time.

    Rows are positionally aligned to `columns`. A row may be shorter
    than `columns` (missing positions read as NULL), never longer.
    """
    model_config = ConfigDict(frozen=True)

    columns: list[str] = Field(default_factory=list)
    rows: list[list[Cell]] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_row_widths(self):
        width = len(self.columns)
        for index, row in enumerate(self.rows):
            if len(row) > width:
                raise ValueError(
                    f"Row {index} has {len(row)} cells but only {width} columns"
                )
        return self

    def aligned(self, row: list[Cell]) -> list[Cell]:
        """Return `row` padded with NULL up to the column count."""
        missing = len(self.columns) - len(row)
        return list(row) + [NULL] * missing if missing > 0 else list(row)

    @property
    def row_count(self) -> int:
        return len(self.rows)


# =============================================================================
# EXPORT REQUEST
# =============================================================================

class ExportMetadata(BaseModel):
    """Database-level facts every encoder receives."""
    model_config = ConfigDict(frozen=True)

    database_name: str
    database_type_label: str
    exported_at: datetime


class ExportRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    database_name: str
    database_type_label: str
    format: ExportFormat
    tables: list[Table] = Field(default_factory=list)

    @classmethod
    def for_database(cls, database: DatabaseFile, format: ExportFormat, tables: list[Table]):
        return cls(
            database_name=database.name,
            database_type_label=database.type.display_name,
            format=format,
            tables=tables,
        )

    def metadata(self, exported_at: datetime) -> ExportMetadata:
        return ExportMetadata(
            database_name=self.database_name,
            database_type_label=self.database_type_label,
            exported_at=exported_at,
        )
