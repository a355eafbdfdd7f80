"""
Data models and structures.
"""
from .core import (
    Submission,
    Form,
    Client,
    SyncResult,
    NameParts,
    SubmissionSchema,
    parse_timestamp,
)

__all__ = [
    "Submission",
    "Form",
    "Client",
    "SyncResult",
    "NameParts",
    "SubmissionSchema",
    "parse_timestamp",
]
