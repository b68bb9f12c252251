"""
Application Configuration
=========================

Central configuration for the exporter service.
Every setting can be overridden via environment variable.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables FIRST, before any setting is read
load_dotenv()


# =============================================================================
# VERSION
# =============================================================================

VERSION = "1.0.0"
APP_NAME = "Database Exporter"


# =============================================================================
# OUTPUT DIRECTORY
# =============================================================================

# Default output directory (can be overridden via environment variable)
OUTPUT_DIR = os.environ.get(
    "DBX_OUTPUT_DIR",
    str(Path(__file__).parent.parent.parent / "output")
)


def get_output_dir() -> str:
    """
    Get the output directory path, creating it if it doesn't exist.

    Returns:
        Absolute path to output directory.
    """
    output_path = Path(OUTPUT_DIR)
    output_path.mkdir(parents=True, exist_ok=True)
    return str(output_path.resolve())


# =============================================================================
# EXPORT BEHAVIOUR
# =============================================================================

# Run the export validators on every document before writing it
VALIDATE_EXPORTS = os.environ.get("DBX_VALIDATE_EXPORTS", "true").lower() in ("1", "true", "yes")


# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("DBX_LOG_LEVEL", "INFO").upper()
LOG_DIR = os.environ.get("DBX_LOG_DIR", "logs")
