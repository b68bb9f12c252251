"""
Backend Adapters
================

The two storage engines tables can be read from:

- SQLiteBackend: SQLite files (plain SQLite and Core Data stores),
  queried through SQLAlchemy Core.
- DocumentStoreBackend: JSON document stores, one array of documents
  per collection, binary values as {"$binary": "<base64>"}.

Backends never raise on query failure; they return an ErrorResult
and leave the decision to the caller.
"""

import base64
import binascii
import json
from dataclasses import dataclass, field
from typing import Any, Union
from urllib.parse import quote

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from dbexport.models import ColumnSchema, Table
from dbexport.coercion import quoted_identifier


# =============================================================================
# QUERY RESULTS
# =============================================================================

@dataclass(frozen=True)
class SelectResult:
    """Rows returned by a read query."""
    columns: list[str]
    rows: list[list[Any]] = field(default_factory=list)


@dataclass(frozen=True)
class UpdateResult:
    """Acknowledgement of a statement that returned no rows."""
    affected_rows: int


@dataclass(frozen=True)
class ErrorResult:
    message: str


QueryResult = Union[SelectResult, UpdateResult, ErrorResult]


# =============================================================================
# SQLITE
# =============================================================================

class SQLiteBackend:
    """Reads SQLite database files."""

    def _engine(self, database_path: str) -> Engine:
        # mode=rw refuses to create a missing database file
        return create_engine(f"sqlite:///file:{quote(database_path)}?mode=rw&uri=true")

    def get_tables(self, database_path: str) -> list[Table]:
        """
        List user tables with their declared columns.

        Raises:
            SQLAlchemyError: If the file cannot be opened or read.
        """
        engine = self._engine(database_path)
        try:
            names = inspect(engine).get_table_names()
            with engine.connect() as conn:
                return [Table(name=name, columns=self._columns(conn, name)) for name in names]
        finally:
            engine.dispose()

    def _columns(self, conn, table_name: str) -> list[ColumnSchema]:
        """Read columns in declaration order via PRAGMA table_info."""
        result = conn.exec_driver_sql(f"PRAGMA table_info({quoted_identifier(table_name)})")
        columns = []
        for cid, name, declared_type, notnull, default, pk in result:
            columns.append(ColumnSchema(
                name=name,
                declared_type=declared_type or "",
                is_primary_key=bool(pk),
                is_nullable=not notnull,
            ))
        return columns

    def execute_query(self, database_path: str, query: str) -> QueryResult:
        """Run `query`, returning rows, an update count or an error message."""
        engine = self._engine(database_path)
        try:
            with engine.connect() as conn:
                # Raw driver SQL: ':' in quoted identifiers must not become bind params
                result = conn.exec_driver_sql(query)
                if not result.returns_rows:
                    affected = result.rowcount
                    conn.commit()
                    return UpdateResult(affected_rows=affected)
                columns = list(result.keys())
                rows = [list(row) for row in result]
                return SelectResult(columns=columns, rows=rows)
        except SQLAlchemyError as e:
            return ErrorResult(message=str(getattr(e, "orig", None) or e))
        finally:
            engine.dispose()


# =============================================================================
# DOCUMENT STORE
# =============================================================================

# Declared types reported for document fields, by first non-null value
_DOCUMENT_TYPE_NAMES = (
    (bool, "BOOLEAN"),
    (int, "INTEGER"),
    (float, "REAL"),
    (bytes, "BLOB"),
    (str, "TEXT"),
)

PRIMARY_KEY_FIELD = "_id"
BINARY_KEY = "$binary"


class DocumentStoreBackend:
    """Reads JSON document store files."""

    def _load(self, database_path: str) -> dict[str, list[dict]]:
        with open(database_path, "r", encoding="utf-8") as f:
            store = json.load(f)
        if not isinstance(store, dict):
            raise ValueError("Document store root must be an object of collections.")
        return store

    def get_tables(self, database_path: str) -> list[Table]:
        """
        List collections with the fields observed in their documents.

        Raises:
            OSError, ValueError: If the store cannot be read.
        """
        store = self._load(database_path)
        tables = []
        for name, documents in store.items():
            if not isinstance(documents, list):
                raise ValueError(f"collection '{name}' is not an array of documents")
            columns, rows = _flatten(documents)
            tables.append(Table(
                name=name,
                columns=[
                    ColumnSchema(
                        name=column,
                        declared_type=_declared_type(rows, index),
                        is_primary_key=column == PRIMARY_KEY_FIELD,
                        is_nullable=column != PRIMARY_KEY_FIELD,
                    )
                    for index, column in enumerate(columns)
                ],
            ))
        return tables

    def get_table_data(
        self,
        database_path: str,
        table: str,
        limit: int | None = None,
        offset: int = 0
    ) -> QueryResult:
        """
        Return the documents of one collection as rows.

        `limit=None` returns every document from `offset` on.
        """
        try:
            store = self._load(database_path)
        except (OSError, ValueError) as e:
            return ErrorResult(message=str(e))

        if table not in store:
            return ErrorResult(message=f"no such collection: {table}")
        documents = store[table]
        if not isinstance(documents, list):
            return ErrorResult(message=f"collection '{table}' is not an array of documents")

        try:
            columns, rows = _flatten(documents)
        except ValueError as e:
            return ErrorResult(message=str(e))

        end = None if limit is None else offset + limit
        return SelectResult(columns=columns, rows=rows[offset:end])


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

def _flatten(documents: list[dict]) -> tuple[list[str], list[list[Any]]]:
    """Turn documents into columns (first-observed order) and aligned rows."""
    columns: list[str] = []
    seen: set[str] = set()
    for document in documents:
        if not isinstance(document, dict):
            raise ValueError(f"Expected a document object, got {type(document).__name__}")
        for key in document:
            if key not in seen:
                seen.add(key)
                columns.append(key)

    rows = [
        [_decode_value(document.get(column)) for column in columns]
        for document in documents
    ]
    return columns, rows


def _decode_value(value: Any) -> Any:
    """Decode extended-JSON binary values; nested arrays and objects become JSON text."""
    if isinstance(value, dict) and set(value) == {BINARY_KEY}:
        try:
            return base64.b64decode(value[BINARY_KEY], validate=True)
        except (binascii.Error, TypeError) as e:
            raise ValueError(f"Invalid {BINARY_KEY} value: {e}") from e
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return value


def _declared_type(rows: list[list[Any]], index: int) -> str:
    for row in rows:
        value = row[index]
        if value is None:
            continue
        for python_type, type_name in _DOCUMENT_TYPE_NAMES:
            if isinstance(value, python_type):
                return type_name
        return ""
    return ""
