"""
File name helpers for exported artifacts.
"""
import re


ILLEGAL_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def safe_file_stem(name: str, default: str) -> str:
    """
    Make a user-entered name usable as a single path component.

    Path separators and characters rejected by common file systems become
    hyphens. Names that end up empty, or as '.'/'..', fall back to ``default``.
    """
    stem = ILLEGAL_FILENAME_CHARS.sub("-", name or "").strip()
    if stem in ("", ".", ".."):
        return default
    return stem
