"""
Export Errors
=============

Every failure an export can end with. All are terminal for the
current export attempt; none are retried.
"""


# =============================================================================
# EXCEPTIONS
# =============================================================================

class ExportError(Exception):
    """Base exception for export failures."""
    pass


class NoTablesError(ExportError):
    """Raised when the table selection resolves to zero tables."""

    def __init__(self, message: str = "No tables were found to export."):
        super().__init__(message)


class QueryFailedError(ExportError):
    """Raised when a backend reports an error fetching a table."""

    def __init__(self, table: str, message: str):
        self.table = table
        self.message = message
        super().__init__(f"Failed to fetch data for table '{table}': {message}")


class UnexpectedResultError(ExportError):
    """Raised when a read query returns a non-tabular result."""

    def __init__(self, table: str):
        self.table = table
        super().__init__(
            f"Failed to fetch data for table '{table}': Unexpected non-SELECT result."
        )


class EncodingFailedError(ExportError):
    """Raised when the assembled document cannot be turned into bytes."""

    def __init__(self, reason: str = ""):
        self.reason = reason
        message = "Unable to encode export content."
        super().__init__(f"{message} {reason}".strip())


class ArtifactWriteError(ExportError):
    """Raised when the export file cannot be written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write {path}: {reason}")


class TableListingError(ExportError):
    """Raised when a backend cannot list the tables of a database."""
    pass


class ExportValidationError(ExportError):
    """Raised when an exported document fails validation."""
    pass
