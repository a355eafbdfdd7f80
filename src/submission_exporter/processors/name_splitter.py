"""
Splitting of compound "Name" fields into first/last parts.
"""
from typing import Optional

from ..models.core import NameParts


def split_name(full_name: Optional[str]) -> NameParts:
    """
    Split a full name into first and last parts.

    The first whitespace-separated token is the first name; everything after it,
    rejoined with single spaces, is the last name.

    Args:
        full_name: Full name string, possibly empty or None

    Returns:
        NameParts with empty strings for missing parts
    """
    parts = str(full_name or "").split()
    if not parts:
        return NameParts("", "")
    if len(parts) == 1:
        return NameParts(parts[0], "")
    return NameParts(parts[0], " ".join(parts[1:]))
