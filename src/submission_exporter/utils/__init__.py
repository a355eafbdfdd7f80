"""
Utility functions and helpers.
"""

from .filenames import safe_file_stem
from .logging import (
    ExportLogger,
    FetchError,
    ExportStats,
    ErrorSeverity
)

__all__ = [
    "ExportLogger",
    "FetchError",
    "ExportStats",
    "ErrorSeverity",
    "safe_file_stem"
]
