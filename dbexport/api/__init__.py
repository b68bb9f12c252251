"""
API Module
==========

API routes and schemas.
"""

from .schemas import (
    DatabaseRef,
    TablesRequest,
    TablesResponse,
    TableInfo,
    ColumnInfo,
    ExportRequestBody,
    ExportResponse,
    HealthResponse,
    VersionResponse,
    ErrorResponse,
)

__all__ = [
    "DatabaseRef",
    "TablesRequest",
    "TablesResponse",
    "TableInfo",
    "ColumnInfo",
    "ExportRequestBody",
    "ExportResponse",
    "HealthResponse",
    "VersionResponse",
    "ErrorResponse",
]
