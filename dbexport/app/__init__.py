"""
App Module
==========

Configuration, logging and error mapping for the exporter service.
"""

from .config import VERSION, APP_NAME, OUTPUT_DIR, get_output_dir
from .exceptions import get_http_exception, global_exception_handler

__all__ = [
    "VERSION",
    "APP_NAME",
    "OUTPUT_DIR",
    "get_output_dir",
    "get_http_exception",
    "global_exception_handler",
]
