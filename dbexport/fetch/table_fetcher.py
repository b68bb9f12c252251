"""
Table Data Fetcher
==================

Produces a uniform RowSet per table, whichever backend serves the
database. Backend errors become typed export errors; a failed fetch
never yields a partial RowSet.
"""

from sqlalchemy.exc import SQLAlchemyError

from dbexport.models import DatabaseFile, RowSet, Table
from dbexport.coercion import to_cell, quoted_identifier
from dbexport.errors import (
    QueryFailedError,
    UnexpectedResultError,
    TableListingError,
)
from .backends import (
    SQLiteBackend,
    DocumentStoreBackend,
    QueryResult,
    SelectResult,
    UpdateResult,
    ErrorResult,
)


class TableDataFetcher:
    """Reads tables of one database through the backend its type selects."""

    def __init__(
        self,
        database: DatabaseFile,
        sql_backend: SQLiteBackend | None = None,
        document_backend: DocumentStoreBackend | None = None
    ):
        self.database = database
        self.sql_backend = sql_backend or SQLiteBackend()
        self.document_backend = document_backend or DocumentStoreBackend()

    def list_tables(self) -> list[Table]:
        """
        List the tables of the database.

        Raises:
            TableListingError: If the backend cannot read the database.
        """
        try:
            if self.database.type.is_sql:
                return self.sql_backend.get_tables(self.database.path)
            return self.document_backend.get_tables(self.database.path)
        except (SQLAlchemyError, OSError, ValueError) as e:
            raise TableListingError(
                f"Failed to list tables of '{self.database.name}': {e}"
            ) from e

    def fetch(self, table: Table) -> RowSet:
        """
        Fetch every row of `table`.

        Raises:
            QueryFailedError: If the backend reports an error.
            UnexpectedResultError: If the backend answers with a non-tabular result.
        """
        if self.database.type.is_sql:
            query = f"SELECT * FROM {quoted_identifier(table.name)}"
            result = self.sql_backend.execute_query(self.database.path, query)
        else:
            result = self.document_backend.get_table_data(
                self.database.path,
                table.name,
                limit=None,
                offset=0
            )
        return _to_row_set(table.name, result)


def _to_row_set(table_name: str, result: QueryResult) -> RowSet:
    if isinstance(result, ErrorResult):
        raise QueryFailedError(table_name, result.message)
    if isinstance(result, UpdateResult):
        raise UnexpectedResultError(table_name)
    if not isinstance(result, SelectResult):
        raise UnexpectedResultError(table_name)

    try:
        return RowSet(
            columns=list(result.columns),
            rows=[[to_cell(value) for value in row] for row in result.rows],
        )
    except ValueError as e:
        # Rows wider than the column list
        raise QueryFailedError(table_name, str(e)) from e
