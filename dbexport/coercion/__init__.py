"""
Coercion Module
===============

Value classification and per-format literal rendering.
Shared by the CSV, JSON and SQL exporters so they never disagree
on how a value is interpreted.
"""

from .value_renderers import (
    to_cell,
    classify,
    csv_escaped,
    csv_text,
    to_csv_field,
    to_json_value,
    to_sql_literal,
    quoted_identifier,
    CSV_NULL,
    SQL_NULL,
    BASE64_PREFIX,
)

__all__ = [
    "to_cell",
    "classify",
    "csv_escaped",
    "csv_text",
    "to_csv_field",
    "to_json_value",
    "to_sql_literal",
    "quoted_identifier",
    "CSV_NULL",
    "SQL_NULL",
    "BASE64_PREFIX",
]
