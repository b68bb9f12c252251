"""
Artifact Writer
================

Names export artifacts and writes them to the output directory.
Writes are atomic: bytes go to a temporary file in the destination
directory which is then renamed over the final name, so a reader
never observes a partially written export. The artifact gets the
same permissions a plain write would give it.
"""

import os
import re
import tempfile
from datetime import datetime
from pathlib import Path

from dbexport.models import ExportFormat, Table
from dbexport.errors import ArtifactWriteError


# =============================================================================
# CONFIGURATION
# =============================================================================

FILE_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
ALL_TABLES_MARKER = "all_tables"
PLACEHOLDER_COMPONENT = "export"

_UNSAFE_RUN = re.compile(r"[^A-Za-z0-9_-]+")


# =============================================================================
# NAMING
# =============================================================================

def sanitized_file_component(value: str) -> str:
    """Replace each run of unsafe characters with one underscore."""
    cleaned = _UNSAFE_RUN.sub("_", value)
    return cleaned or PLACEHOLDER_COMPONENT


def make_export_file_name(
    database_name: str,
    format: ExportFormat,
    selected_tables: list[Table],
    timestamp: datetime
) -> str:
    """
    Build `<db>_<table-or-all_tables>_<YYYYMMDD_HHMMSS>.<ext>`.

    The table part names the table only when exactly one is selected.
    """
    database_part = sanitized_file_component(database_name)
    if len(selected_tables) == 1:
        table_part = sanitized_file_component(selected_tables[0].name)
    else:
        table_part = ALL_TABLES_MARKER

    return f"{database_part}_{table_part}_{timestamp.strftime(FILE_TIMESTAMP_FORMAT)}.{format.file_extension}"


def _default_file_mode() -> int:
    """Mode a plain open() would create a file with under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def write_artifact(output_dir: str, file_name: str, content: bytes) -> Path:
    """
    Atomically write an artifact file.

    Args:
        output_dir: Directory to write to (created if missing).
        file_name: Name of the artifact file.
        content: Bytes to write.

    Returns:
        Path to the written file.

    Raises:
        ArtifactWriteError: If the file cannot be written.
    """
    output_path = Path(output_dir)
    file_path = output_path / file_name
    temp_name = None

    try:
        output_path.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=output_path,
            prefix=f".{file_name}.",
            suffix=".tmp",
            delete=False
        ) as f:
            temp_name = f.name
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(temp_name, _default_file_mode())
        os.replace(temp_name, file_path)
    except OSError as e:
        if temp_name is not None and os.path.exists(temp_name):
            os.unlink(temp_name)
        raise ArtifactWriteError(str(file_path), str(e)) from e

    return file_path
