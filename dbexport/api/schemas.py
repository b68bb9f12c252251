"""
API Request/Response Schemas
============================

Pydantic models for API request and response validation.
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field

from dbexport.models import DatabaseFile, DatabaseType, ExportFormat


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class DatabaseRef(BaseModel):
    """A database file on the server's file system."""

    path: str = Field(
        ...,
        min_length=1,
        description="Path to the database file"
    )
    type: DatabaseType = Field(
        default=DatabaseType.SQLITE,
        description="Storage engine of the file"
    )
    name: Optional[str] = Field(
        default=None,
        description="Display name; defaults to the file name without extension"
    )

    def to_database_file(self) -> DatabaseFile:
        return DatabaseFile.from_path(self.path, type=self.type, name=self.name)


class TablesRequest(BaseModel):
    """Request body for POST /tables endpoint."""

    database: DatabaseRef


class ExportRequestBody(BaseModel):
    """Request body for POST /export endpoint."""

    database: DatabaseRef
    format: ExportFormat = Field(
        ...,
        description="Output format: csv, json or sql"
    )
    table: Optional[str] = Field(
        default=None,
        description="Export only this table; all tables when omitted"
    )


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class ColumnInfo(BaseModel):
    name: str
    declared_type: str
    is_primary_key: bool
    is_nullable: bool


class TableInfo(BaseModel):
    name: str
    columns: list[ColumnInfo] = Field(default_factory=list)


class TablesResponse(BaseModel):
    """Response for POST /tables."""

    database: str
    database_type: str
    tables: list[TableInfo] = Field(default_factory=list)


class ExportResponse(BaseModel):
    """Response for POST /export."""

    status: Literal["success"] = "success"
    file_name: str
    path: str
    format: ExportFormat
    table_count: int
    byte_count: int


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    status: str = "ok"


class VersionResponse(BaseModel):
    """Response for GET /version endpoint."""

    version: str
    name: str = "Database Exporter"


class ErrorResponse(BaseModel):
    """Standard error response."""

    status: str = "error"
    message: str
    detail: Optional[str] = None
