"""
Test script for the value coercion layer.
"""
import base64
import csv
import io
import json

from dbexport.coercion import (
    to_cell,
    classify,
    csv_escaped,
    to_csv_field,
    to_json_value,
    to_sql_literal,
    quoted_identifier,
)
from dbexport.models import (
    CellKind,
    NullCell,
    TextCell,
    IntegerCell,
    RealCell,
    BooleanCell,
    BinaryCell,
)


class Opaque:
    def __str__(self):
        return "opaque!"


def test_classification():
    """Raw backend values map onto the closed cell union."""
    print('=== TEST 1: Classification ===')
    assert classify(None) == CellKind.NULL
    assert classify(True) == CellKind.BOOLEAN
    assert classify(0) == CellKind.INTEGER
    assert classify(2.5) == CellKind.REAL
    assert classify(b"\x00") == CellKind.BINARY
    assert classify(bytearray(b"ab")) == CellKind.BINARY
    assert classify("x") == CellKind.TEXT
    assert classify(TextCell(value="x")) == CellKind.TEXT

    # Anything else falls back to its string form
    cell = to_cell(Opaque())
    assert isinstance(cell, TextCell)
    assert cell.value == "opaque!"

    # Integers outside 64 bits are not integers
    big = to_cell(2 ** 70)
    assert isinstance(big, TextCell)
    assert big.value == str(2 ** 70)

    assert isinstance(to_cell(False), BooleanCell)
    print('✓ Classification is correct')


def test_csv_escaping():
    """Comma, quote and newline force quoting with doubled quotes."""
    print('\n=== TEST 2: CSV Escaping ===')
    value = 'a,"b\nc'
    field = to_csv_field(TextCell(value=value))
    assert field == '"a,""b\nc"', field

    parsed = next(csv.reader(io.StringIO(field, newline="")))
    assert parsed == [value]

    assert csv_escaped("plain") == "plain"
    assert csv_escaped("") == ""
    assert csv_escaped("tab\there") == "tab\there"
    print('✓ CSV escaping is correct')


def test_csv_fields():
    print('\n=== TEST 3: CSV Fields ===')
    assert to_csv_field(NullCell()) == "NULL"
    assert to_csv_field(IntegerCell(value=-42)) == "-42"
    assert to_csv_field(RealCell(value=1.5)) == "1.5"
    assert to_csv_field(BooleanCell(value=True)) == "true"

    # JSON-bearing blob is emitted as its text (escaped because of the comma)
    blob = BinaryCell(value=b'{"a": 1, "b": 2}')
    assert to_csv_field(blob) == '"{""a"": 1, ""b"": 2}"'

    raw = b"\xff\x00\x10"
    assert to_csv_field(BinaryCell(value=raw)) == "base64:" + base64.b64encode(raw).decode()
    print('✓ CSV fields are correct')


def test_json_values():
    print('\n=== TEST 4: JSON Values ===')
    assert to_json_value(NullCell()) is None
    assert to_json_value(IntegerCell(value=7)) == 7
    assert to_json_value(RealCell(value=0.25)) == 0.25
    assert to_json_value(BooleanCell(value=False)) is False
    assert to_json_value(TextCell(value="hé")) == "hé"

    pretty = to_json_value(BinaryCell(value=b'{"k":[1,2]}'))
    assert isinstance(pretty, str)
    assert json.loads(pretty) == {"k": [1, 2]}
    assert "\n" in pretty

    raw = bytes(range(256))
    blob = to_json_value(BinaryCell(value=raw))
    assert blob["type"] == "blob"
    assert blob["size"] == 256
    assert base64.b64decode(blob["base64"]) == raw

    # NaN is not JSON
    nan_blob = to_json_value(BinaryCell(value=b"NaN"))
    assert nan_blob["type"] == "blob"

    # Parses, but overflows to infinity
    huge_blob = to_json_value(BinaryCell(value=b"[1e400]"))
    assert huge_blob["type"] == "blob"
    assert huge_blob["size"] == 7
    print('✓ JSON values are correct')


def test_sql_literals():
    print('\n=== TEST 5: SQL Literals ===')
    assert to_sql_literal(NullCell()) == "NULL"
    assert to_sql_literal(BooleanCell(value=True)) == "1"
    assert to_sql_literal(BooleanCell(value=False)) == "0"
    assert to_sql_literal(TextCell(value="it's")) == "'it''s'"
    assert to_sql_literal(IntegerCell(value=12)) == "12"
    assert to_sql_literal(RealCell(value=3.0)) == "3.0"
    assert to_sql_literal(BinaryCell(value=b"\x01\xab")) == "X'01AB'"
    assert to_sql_literal(None) == "NULL"
    print('✓ SQL literals are correct')


def test_quoted_identifier():
    assert quoted_identifier("users") == '"users"'
    assert quoted_identifier('we"ird') == '"we""ird"'


if __name__ == '__main__':
    test_classification()
    test_csv_escaping()
    test_csv_fields()
    test_json_values()
    test_sql_literals()
    test_quoted_identifier()
    print('\n=== ALL TESTS PASSED ===')
