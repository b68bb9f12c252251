"""
dbexport
========

Exports SQLite and document-store databases to CSV, JSON or SQL dumps.

Pipeline:
    fetch (dbexport.fetch) -> coerce (dbexport.coercion)
    -> encode (dbexport.export) -> atomic write (dbexport.export.artifact_writer)
"""

__version__ = "1.0.0"
