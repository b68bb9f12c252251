"""
Application Exceptions
======================

Maps export exceptions to HTTP status codes.
"""

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse


# =============================================================================
# EXCEPTION MAPPING
# =============================================================================

# Maps exception class names to (status_code, user_message)
EXCEPTION_MAP = {
    # Selection
    "NoTablesError": (404, "No tables were found to export."),

    # Fetch
    "TableListingError": (502, "Could not read the tables of the database."),
    "QueryFailedError": (502, "Failed to fetch table data."),
    "UnexpectedResultError": (502, "The database returned an unexpected result."),

    # Encode
    "EncodingFailedError": (500, "Unable to encode export content."),
    "ExportValidationError": (500, "Exported document failed validation."),

    # Persist
    "ArtifactWriteError": (500, "Failed to write the export file."),
}


def _status_and_message(exc: Exception) -> tuple[int, str]:
    exc_name = type(exc).__name__
    if exc_name in EXCEPTION_MAP:
        return EXCEPTION_MAP[exc_name]
    return 500, "Internal system error."


def get_http_exception(exc: Exception) -> HTTPException:
    """
    Convert an internal exception to an HTTPException.

    Args:
        exc: The caught exception.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    status_code, user_message = _status_and_message(exc)
    return HTTPException(
        status_code=status_code,
        detail={
            "status": "error",
            "message": user_message,
            "detail": str(exc)
        }
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for FastAPI.

    Catches all unhandled exceptions and returns structured error response.
    """
    status_code, user_message = _status_and_message(exc)
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "error",
            "message": user_message,
            "detail": str(exc)
        }
    )
