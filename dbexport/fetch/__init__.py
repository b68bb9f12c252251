"""
Fetch Module
============

Backend adapters and the table data fetcher built on them.
"""

from .backends import (
    SQLiteBackend,
    DocumentStoreBackend,
    QueryResult,
    SelectResult,
    UpdateResult,
    ErrorResult,
)

from .table_fetcher import TableDataFetcher

__all__ = [
    # Backends
    "SQLiteBackend",
    "DocumentStoreBackend",

    # Query results
    "QueryResult",
    "SelectResult",
    "UpdateResult",
    "ErrorResult",

    # Fetcher
    "TableDataFetcher",
]
