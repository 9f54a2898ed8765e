"""
Logging setup for gql_fetch.

Structured or colored console output, rotating file output, and masking of
credentials carried in request headers.
"""

from .filters import SensitiveDataFilter
from .formatters import ColoredFormatter, StructuredFormatter
from .manager import LoggingManager, get_logging_manager, setup_logging

__all__ = [
    "LoggingManager",
    "setup_logging",
    "get_logging_manager",
    "StructuredFormatter",
    "ColoredFormatter",
    "SensitiveDataFilter",
]
