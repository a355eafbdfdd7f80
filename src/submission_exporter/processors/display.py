"""
Formatting helpers for presenting submissions in tables and summaries.
"""
from datetime import datetime
from typing import Optional

from ..models.core import SyncResult


def plugin_label(plugin: Optional[str]) -> str:
    """Display label for a form plugin identifier."""
    if not plugin:
        return ""
    lower = plugin.lower()
    if "gravity" in lower:
        return "Gravity Forms"
    if "elementor" in lower:
        return "Elementor"
    if "cf7" in lower or "contact-form-7" in lower or "contact form 7" in lower:
        return "Contact Form 7"
    return plugin


def _clock_time(ts: datetime) -> str:
    hour = ts.hour % 12 or 12
    return f"{hour}:{ts.minute:02d} {'AM' if ts.hour < 12 else 'PM'}"


def format_relative_date(ts: Optional[datetime], now: Optional[datetime] = None) -> str:
    """
    Short relative timestamp: 'Today, 3:05 PM', 'Yesterday, 9:00 AM' or
    'Mar 10, 3:05 PM'.
    """
    if ts is None:
        return ""
    now = now or datetime.now()
    diff_days = (now - ts).days

    if diff_days == 0:
        return f"Today, {_clock_time(ts)}"
    if diff_days == 1:
        return f"Yesterday, {_clock_time(ts)}"
    return f"{ts.strftime('%b')} {ts.day}, {_clock_time(ts)}"


def preview_value(value: Optional[str], limit: int = 100, preview: int = 80) -> str:
    """Shorten long cell values to a preview followed by an ellipsis."""
    text = str(value or "")
    if len(text) > limit:
        return text[:preview] + "…"
    return text


def format_sync_result(result: Optional[SyncResult]) -> str:
    if result is None:
        return ""
    if result.is_error:
        return f"Sync failed: {result.error}"
    noun = "submission" if result.synced == 1 else "submissions"
    message = f"{result.synced} new {noun} added"
    if result.skipped:
        message += f" ({result.skipped} already synced)"
    return message
