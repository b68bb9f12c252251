"""
API Routes
==========

Endpoint definitions for the Database Exporter API:
  1. POST /tables - List the tables of a database
  2. POST /export - Export all tables or one table to a file

This module wires requests to the export pipeline without adding
business logic.
"""

import logging

from fastapi import APIRouter

from .schemas import (
    TablesRequest,
    TablesResponse,
    TableInfo,
    ColumnInfo,
    ExportRequestBody,
    ExportResponse,
    HealthResponse,
    VersionResponse,
)

from dbexport.errors import ExportError
from dbexport.export import export_database
from dbexport.fetch import TableDataFetcher

from dbexport.app import config as app_config
from dbexport.app import exceptions as app_exceptions


logger = logging.getLogger(__name__)


# =============================================================================
# ROUTER
# =============================================================================

router = APIRouter()


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/tables", response_model=TablesResponse)
def list_tables(request: TablesRequest) -> TablesResponse:
    """List tables and their declared columns."""
    database = request.database.to_database_file()
    try:
        tables = TableDataFetcher(database).list_tables()
    except ExportError as e:
        logger.warning("Listing tables of %s failed: %s", database.path, e)
        raise app_exceptions.get_http_exception(e)

    return TablesResponse(
        database=database.name,
        database_type=database.type.display_name,
        tables=[
            TableInfo(
                name=table.name,
                columns=[ColumnInfo(**column.model_dump()) for column in table.columns],
            )
            for table in tables
        ],
    )


@router.post("/export", response_model=ExportResponse)
def export(request: ExportRequestBody) -> ExportResponse:
    """
    Export a database to one file in the output directory.

    Any failure aborts the export; no file is left behind.
    """
    database = request.database.to_database_file()
    target = request.table or "all tables"
    logger.info("Exporting %s (%s) of %s", target, request.format.value, database.path)

    try:
        result = export_database(
            database,
            request.format,
            app_config.get_output_dir(),
            table_name=request.table,
            validate=app_config.VALIDATE_EXPORTS,
        )
    except ExportError as e:
        logger.warning("Export of %s failed: %s", database.path, e)
        raise app_exceptions.get_http_exception(e)

    logger.info("Wrote %s (%d bytes)", result.path, result.byte_count)
    return ExportResponse(
        file_name=result.file_name,
        path=result.path,
        format=result.format,
        table_count=result.table_count,
        byte_count=result.byte_count,
    )


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok")


@router.get("/version", response_model=VersionResponse)
def get_version() -> VersionResponse:
    """Get API version."""
    return VersionResponse(version=app_config.VERSION, name=app_config.APP_NAME)
