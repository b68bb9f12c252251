"""
Test script for backend adapters and the table data fetcher.
"""
import base64
import json
import os
import sqlite3
import tempfile

from dbexport.errors import QueryFailedError, UnexpectedResultError, TableListingError
from dbexport.fetch import (
    DocumentStoreBackend,
    SQLiteBackend,
    TableDataFetcher,
    SelectResult,
    UpdateResult,
    ErrorResult,
)
from dbexport.models import (
    DatabaseFile,
    DatabaseType,
    Table,
    NullCell,
    TextCell,
    IntegerCell,
    RealCell,
    BinaryCell,
)


def _make_sqlite(path: str) -> None:
    conn = sqlite3.connect(path)
    conn.executescript(
        """
        CREATE TABLE "user data" (
            id INTEGER PRIMARY KEY,
            name VARCHAR(40) NOT NULL,
            score REAL,
            avatar BLOB,
            misc
        );
        CREATE TABLE empty (x TEXT);
        """
    )
    conn.execute(
        'INSERT INTO "user data" (id, name, score, avatar, misc) VALUES (?, ?, ?, ?, ?)',
        (1, "Ann", 9.5, b"\x00\xff", None),
    )
    conn.execute(
        'INSERT INTO "user data" (id, name, score, avatar, misc) VALUES (?, ?, ?, ?, ?)',
        (2, "Bob", None, None, "x"),
    )
    conn.commit()
    conn.close()


def _make_document_store(path: str) -> None:
    store = {
        "people": [
            {"_id": 1, "name": "Ann", "photo": {"$binary": base64.b64encode(b"\x01\x02").decode()}},
            {"_id": 2, "name": "Bob", "age": 40},
        ],
        "tags": [],
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(store, f)


def test_sqlite_tables():
    print('=== TEST 1: SQLite Table Listing ===')
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "app.db")
        _make_sqlite(path)
        fetcher = TableDataFetcher(DatabaseFile.from_path(path))
        tables = fetcher.list_tables()

        assert [t.name for t in tables] == ["empty", "user data"]
        columns = tables[1].columns
        assert [c.name for c in columns] == ["id", "name", "score", "avatar", "misc"]
        assert columns[0].is_primary_key
        assert columns[1].declared_type == "VARCHAR(40)"
        assert not columns[1].is_nullable
        assert columns[4].declared_type == ""
        assert columns[4].effective_type == "TEXT"
    print('✓ SQLite schema introspection is correct')


def test_sqlite_fetch():
    print('\n=== TEST 2: SQLite Fetch ===')
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "app.db")
        _make_sqlite(path)
        fetcher = TableDataFetcher(DatabaseFile.from_path(path))
        row_set = fetcher.fetch(Table(name="user data"))

        assert row_set.columns == ["id", "name", "score", "avatar", "misc"]
        assert row_set.row_count == 2
        first = row_set.rows[0]
        assert first[0] == IntegerCell(value=1)
        assert first[1] == TextCell(value="Ann")
        assert first[2] == RealCell(value=9.5)
        assert first[3] == BinaryCell(value=b"\x00\xff")
        assert isinstance(first[4], NullCell)
    print('✓ SQLite rows fetched in column order')


def test_sqlite_missing_table():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "app.db")
        _make_sqlite(path)
        fetcher = TableDataFetcher(DatabaseFile.from_path(path))
        try:
            fetcher.fetch(Table(name="nope"))
        except QueryFailedError as e:
            assert e.table == "nope"
            assert "no such table" in e.message
            return
        raise AssertionError("missing table fetched")


def test_sqlite_missing_file():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "absent.db")
        fetcher = TableDataFetcher(DatabaseFile.from_path(path))
        try:
            fetcher.list_tables()
        except TableListingError:
            assert not os.path.exists(path)
            return
        raise AssertionError("missing database listed")


def test_sqlite_update_result():
    """Statements that return no rows are reported as updates."""
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "app.db")
        _make_sqlite(path)
        result = SQLiteBackend().execute_query(path, "DELETE FROM empty")
        assert isinstance(result, UpdateResult)


class UpdatingBackend(SQLiteBackend):
    def execute_query(self, database_path, query):
        return UpdateResult(affected_rows=3)


class FailingBackend(SQLiteBackend):
    def execute_query(self, database_path, query):
        return ErrorResult(message="disk I/O error")


def test_fetch_failures():
    print('\n=== TEST 3: Fetch Failures ===')
    database = DatabaseFile(name="db", path="unused.db", type=DatabaseType.SQLITE)

    try:
        TableDataFetcher(database, sql_backend=UpdatingBackend()).fetch(Table(name="t"))
    except UnexpectedResultError as e:
        assert e.table == "t"
    else:
        raise AssertionError("update result accepted")

    try:
        TableDataFetcher(database, sql_backend=FailingBackend()).fetch(Table(name="t"))
    except QueryFailedError as e:
        assert e.message == "disk I/O error"
        assert "'t'" in str(e)
    else:
        raise AssertionError("error result accepted")
    print('✓ Failures are typed')


def test_document_store():
    print('\n=== TEST 4: Document Store ===')
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "store.json")
        _make_document_store(path)
        database = DatabaseFile.from_path(path, type=DatabaseType.DOCUMENT)
        fetcher = TableDataFetcher(database)

        tables = fetcher.list_tables()
        assert [t.name for t in tables] == ["people", "tags"]
        people = tables[0]
        assert [c.name for c in people.columns] == ["_id", "name", "photo", "age"]
        assert people.columns[0].is_primary_key
        assert people.columns[2].declared_type == "BLOB"
        assert people.columns[3].declared_type == "INTEGER"

        row_set = fetcher.fetch(people)
        assert row_set.columns == ["_id", "name", "photo", "age"]
        assert row_set.rows[0][2] == BinaryCell(value=b"\x01\x02")
        assert isinstance(row_set.rows[0][3], NullCell)
        assert row_set.rows[1][3] == IntegerCell(value=40)

        assert fetcher.fetch(tables[1]).rows == []
    print('✓ Document store is read in first-observed order')


def test_document_store_pagination():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "store.json")
        _make_document_store(path)
        backend = DocumentStoreBackend()
        page = backend.get_table_data(path, "people", limit=1, offset=1)
        assert isinstance(page, SelectResult)
        assert len(page.rows) == 1
        everything = backend.get_table_data(path, "people")
        assert len(everything.rows) == 2


def test_document_store_missing_collection():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "store.json")
        _make_document_store(path)
        fetcher = TableDataFetcher(DatabaseFile.from_path(path, type=DatabaseType.DOCUMENT))
        try:
            fetcher.fetch(Table(name="ghosts"))
        except QueryFailedError as e:
            assert e.table == "ghosts"
            return
        raise AssertionError("missing collection fetched")


def test_document_store_nested_values():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "store.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"c": [{"tags": ["a", "ü"], "meta": {"k": None, "n": 1.5}}]}, f)

        fetcher = TableDataFetcher(DatabaseFile.from_path(path, type=DatabaseType.DOCUMENT))
        table = fetcher.list_tables()[0]
        assert [c.declared_type for c in table.columns] == ["TEXT", "TEXT"]

        row = fetcher.fetch(table).rows[0]
        assert row[0] == TextCell(value='["a", "ü"]')
        assert row[1] == TextCell(value='{"k": null, "n": 1.5}')
        assert json.loads(row[1].value) == {"k": None, "n": 1.5}


if __name__ == '__main__':
    test_sqlite_tables()
    test_sqlite_fetch()
    test_sqlite_missing_table()
    test_sqlite_missing_file()
    test_sqlite_update_result()
    test_fetch_failures()
    test_document_store()
    test_document_store_pagination()
    test_document_store_missing_collection()
    test_document_store_nested_values()
    print('\n=== ALL TESTS PASSED ===')
